"""Helpers for safe debug logging.

Requests to the table API carry the project key in the ``apikey`` and
``authorization`` headers.  Header dumps go through :func:`redact_headers`
before reaching DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping

_SENSITIVE_HEADERS: frozenset[str] = frozenset({"apikey", "authorization", "cookie", "set-cookie"})


def redact_headers(headers: Mapping[str, str], *, keep: int = 4) -> dict[str, str]:
    """Return a copy of *headers* with credentials masked.

    The last *keep* characters of each secret are left visible so two
    different keys can still be told apart in a log.
    """
    redacted: dict[str, str] = {}
    for name, value in headers.items():
        if name.lower() not in _SENSITIVE_HEADERS:
            redacted[name] = value
            continue
        tail = value[-keep:] if keep > 0 and len(value) > keep * 2 else ""
        redacted[name] = f"<redacted>{tail}"
    return redacted
