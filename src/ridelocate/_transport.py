"""HTTP transport with timeout and error normalization for geocoding providers."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from ridelocate._redact import redact_for_log
from ridelocate.exceptions import ProviderError, ProviderErrorKind

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by provider modules.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(
        self,
        url: str,
        *,
        params: Mapping[str, str],
        timeout: float,
        provider: str,
    ) -> Any:
        ...


class HttpTransport:
    """aiohttp-backed transport returning decoded JSON.

    Every failure is mapped onto :class:`ProviderError`:

    * per-request timeout exceeded -> ``TIMEOUT``
    * connection or protocol failure -> ``UNREACHABLE``
    * non-2xx status or a body that is not JSON -> ``BAD_RESPONSE``
    """

    def __init__(self, http_session: aiohttp.ClientSession, *, user_agent: str) -> None:
        self._http = http_session
        self._headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": user_agent,
        }

    async def get_json(
        self,
        url: str,
        *,
        params: Mapping[str, str],
        timeout: float,
        provider: str,
    ) -> Any:
        """GET *url* and decode the JSON body within *timeout* seconds."""
        _logger.debug("GET %s params=%s", url, redact_for_log(dict(params)))

        try:
            async with self._http.get(
                url,
                params=dict(params),
                headers=self._headers,
                timeout=aiohttp.ClientTimeout(total=timeout),
            ) as resp:
                text = await resp.text()
                if not 200 <= resp.status < 300:
                    raise ProviderError(
                        f"HTTP {resp.status} from {provider}: {text[:200]}",
                        kind=ProviderErrorKind.BAD_RESPONSE,
                        provider=provider,
                        status_code=resp.status,
                    )
        except ProviderError:
            raise
        except TimeoutError as exc:
            # aiohttp timeouts subclass both TimeoutError and ClientError.
            raise ProviderError(
                f"{provider} did not answer within {timeout:g}s",
                kind=ProviderErrorKind.TIMEOUT,
                provider=provider,
            ) from exc
        except UnicodeDecodeError as exc:
            raise ProviderError(
                f"Undecodable body from {provider}",
                kind=ProviderErrorKind.BAD_RESPONSE,
                provider=provider,
            ) from exc
        except aiohttp.ClientError as exc:
            raise ProviderError(
                f"Request to {provider} failed: {exc}",
                kind=ProviderErrorKind.UNREACHABLE,
                provider=provider,
            ) from exc

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ProviderError(
                f"Invalid JSON from {provider}: {text[:200]}",
                kind=ProviderErrorKind.BAD_RESPONSE,
                provider=provider,
            ) from exc

        _logger.debug("%s response: %s", provider, redact_for_log(body, max_string=256))
        return body
