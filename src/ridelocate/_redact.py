"""Scrubbing of provider traffic before it reaches DEBUG logs.

The configured ``User-Agent`` normally embeds a contact e-mail (Nominatim
policy), and booking payloads may carry passenger contact details.
"""

from __future__ import annotations

import re
from typing import Any

REDACTED = "<redacted>"

_CONTACT_KEYS = frozenset(
    {"email", "passengeremail", "phone", "passengerphone", "passengername", "authorization", "cookie", "key", "apikey"}
)
_EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+\.[\w.-]+")


def redact_email(text: str) -> str:
    """Replace e-mail addresses embedded in *text*."""
    return _EMAIL_RE.sub(REDACTED, text)


def _is_contact_key(key: object) -> bool:
    return str(key).lower().replace("-", "").replace("_", "") in _CONTACT_KEYS


def redact_for_log(value: Any, *, max_string: int = 512) -> Any:
    """Return a log-safe copy of a JSON-like *value*.

    Contact fields are masked, e-mails inside strings are replaced and long
    strings are cut to *max_string* characters.
    """
    if isinstance(value, str):
        text = redact_email(value)
        return text if len(text) <= max_string else f"{text[:max_string]}…<truncated>"
    if isinstance(value, dict):
        return {
            str(k): REDACTED if _is_contact_key(k) else redact_for_log(v, max_string=max_string)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [redact_for_log(item, max_string=max_string) for item in value]
    return value
