"""Secret / payload redaction for safe debug output.

:func:`redact` must be applied before any request or response is written to
logs or *stderr*.  It enforces the following rules:

* Values under **sensitive keys** (``authorization``, ``token``, ...) are
  masked.
* ``Bearer <token>`` strings are masked wherever they appear.
* Every explicitly supplied **secret** (the API token, the private account
  ID) is scrubbed from every string in the tree, including URLs.
* **Binary values** (``bytes`` and file objects) are replaced with a size
  marker such as ``<binary:1024_bytes>``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

# If any of these appear in a key name (case-insensitive), the value is
# redacted.
_SENSITIVE_KEY_PATTERNS: frozenset[str] = frozenset({
    "token",
    "secret",
    "password",
    "credential",
    "authorization",
    "cookie",
    "api_key",
    "api-key",
    "account_id",
})

_BEARER_RE = re.compile(r"(Bearer\s+)\S+")


def _placeholder(secret: str) -> str:
    suffix = secret[-4:] if len(secret) >= 4 else "****"
    placeholder = f"<redacted:...{suffix}>"
    if secret in placeholder:
        placeholder = "<redacted>"
    return placeholder


def _mask_string(value: str, secrets: tuple[str, ...]) -> str:
    for secret in secrets:
        if secret in value:
            value = value.replace(secret, _placeholder(secret))
    return _BEARER_RE.sub(lambda m: f"{m.group(1)}<redacted>", value)


def _redact_value(value: Any, secrets: tuple[str, ...]) -> Any:
    if isinstance(value, dict):
        return _redact_dict(value, secrets)
    if isinstance(value, (list, tuple)):
        return [_redact_value(item, secrets) for item in value]
    if isinstance(value, str):
        return _mask_string(value, secrets)
    if isinstance(value, (bytes, bytearray)):
        return f"<binary:{len(value)}_bytes>"
    if hasattr(value, "read"):
        return "<binary:stream>"
    return value


def _redact_dict(d: dict, secrets: tuple[str, ...]) -> dict:
    result: dict = {}
    for key, value in d.items():
        key_lower = key.lower() if isinstance(key, str) else ""
        if any(pat in key_lower for pat in _SENSITIVE_KEY_PATTERNS):
            if isinstance(value, str):
                masked = _mask_string(value, secrets)
                result[key] = masked if masked != value else "<redacted>"
            else:
                result[key] = "<redacted>"
        else:
            result[key] = _redact_value(value, secrets)
    return result


def redact(payload: dict, secrets: Iterable[str | None] = ()) -> dict:
    """Return a copy of *payload* with sensitive data redacted.

    Parameters
    ----------
    payload:
        The dictionary to sanitize (request description, headers, response
        body).
    secrets:
        Exact strings to scrub wherever they occur, typically the API token
        and the account ID.  Empty and ``None`` entries are ignored.

    Returns
    -------
    dict
        A new dictionary built from fresh containers.  The original
        *payload* is never mutated.

    Examples
    --------
    >>> redact({"Authorization": "Bearer cf_abc123"})
    {'Authorization': 'Bearer <redacted>'}

    >>> redact({"url": "/accounts/acc123/images/v1"}, secrets=["acc123"])
    {'url': '/accounts/<redacted:...c123>/images/v1'}
    """
    active = tuple(s for s in secrets if s)
    return _redact_dict(payload, active)
