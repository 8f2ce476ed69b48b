from __future__ import annotations

import asyncio

import aiohttp
import pytest
from aiohttp import web
from aiohttp import test_utils

from ridelocate._transport import HttpTransport
from ridelocate.exceptions import ProviderError, ProviderErrorKind


async def _ok(request: web.Request) -> web.Response:
    return web.json_response(
        {
            "display_name": "Stortorget, Malmö",
            "lat": request.query["lat"],
            "ua": request.headers.get("User-Agent"),
        }
    )


async def _slow(_request: web.Request) -> web.Response:
    await asyncio.sleep(1.0)
    return web.json_response({})


async def _server_error(_request: web.Request) -> web.Response:
    return web.Response(status=503, text="rate limited")


async def _not_json(_request: web.Request) -> web.Response:
    return web.Response(text="<html>maintenance</html>", content_type="text/html")


def _app() -> web.Application:
    app = web.Application()
    app.router.add_get("/ok", _ok)
    app.router.add_get("/slow", _slow)
    app.router.add_get("/error", _server_error)
    app.router.add_get("/html", _not_json)
    return app


@pytest.mark.asyncio
async def test_get_json_sends_params_and_user_agent() -> None:
    async with test_utils.TestServer(_app()) as server, aiohttp.ClientSession() as http:
        transport = HttpTransport(http, user_agent="ridelocate-tests/1.0")
        body = await transport.get_json(
            str(server.make_url("/ok")),
            params={"lat": "55.605"},
            timeout=2.0,
            provider="fake",
        )

    assert body == {"display_name": "Stortorget, Malmö", "lat": "55.605", "ua": "ridelocate-tests/1.0"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("path", "kind", "status"),
    [
        ("/slow", ProviderErrorKind.TIMEOUT, None),
        ("/error", ProviderErrorKind.BAD_RESPONSE, 503),
        ("/html", ProviderErrorKind.BAD_RESPONSE, None),
    ],
)
async def test_get_json_normalizes_failures(path: str, kind: ProviderErrorKind, status: int | None) -> None:
    async with test_utils.TestServer(_app()) as server, aiohttp.ClientSession() as http:
        transport = HttpTransport(http, user_agent="ridelocate-tests/1.0")
        with pytest.raises(ProviderError) as exc_info:
            await transport.get_json(str(server.make_url(path)), params={}, timeout=0.2, provider="fake")

    assert exc_info.value.kind == kind
    assert exc_info.value.status_code == status
    assert exc_info.value.provider == "fake"


@pytest.mark.asyncio
async def test_get_json_maps_connection_failure_to_unreachable() -> None:
    server = test_utils.TestServer(_app())
    await server.start_server()
    url = str(server.make_url("/ok"))
    await server.close()

    async with aiohttp.ClientSession() as http:
        transport = HttpTransport(http, user_agent="ridelocate-tests/1.0")
        with pytest.raises(ProviderError) as exc_info:
            await transport.get_json(url, params={"lat": "0"}, timeout=2.0, provider="fake")

    assert exc_info.value.kind == ProviderErrorKind.UNREACHABLE
