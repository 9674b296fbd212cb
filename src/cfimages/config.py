"""SDK configuration for cfimages.

:class:`CFImagesConfig` is a dataclass that captures every tuneable knob
exposed by the SDK.  :class:`SecurityConfig` groups the construction-time
guards evaluated by :func:`cfimages.security.validate_configuration`.

Credentials are deliberately *not* validated here: an empty token or
account ID is reported by the security validator as a
:class:`~cfimages.errors.ConfigurationSecurityError`, not as a
``ValueError``.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from cfimages.security import is_running_in_browser

DEFAULT_API_BASE_URL = "https://api.cloudflare.com/client/v4"

DEFAULT_DELIVERY_BASE_URL = "https://imagedelivery.net"

_MASKED_FIELDS = frozenset({"token", "account_id"})

_LOCAL_HOSTS = ("localhost", "127.0.0.1", "::1")


def _mask(value: str) -> str:
    return f"...{value[-4:]}" if len(value) >= 4 else "****"


@dataclass(frozen=True)
class SecurityConfig:
    """Construction-time security guards.

    Parameters
    ----------
    prevent_browser_usage:
        Refuse to build a client when *environment_probe* reports a
        browser-like runtime.
    environment_probe:
        Zero-argument callable returning ``True`` for browser-like runtimes.
        Defaults to :func:`cfimages.security.is_running_in_browser`.
    """

    prevent_browser_usage: bool = True

    environment_probe: Callable[[], bool] = is_running_in_browser


@dataclass
class CFImagesConfig:
    """Complete configuration for a cfimages client.

    Parameters
    ----------
    token:
        Cloudflare API token with Images write permission.  **Required.**
        Never logged.
    account_id:
        Private Cloudflare account ID used in API paths.  **Required.**
        Never logged.
    account_hash:
        Public account hash used only for delivery URLs.  It is a different
        value from *account_id* and is never derived from it.  Optional;
        only :meth:`CFImagesClient.get_image_url
        <cfimages.client.CFImagesClient.get_image_url>` needs it.
    security:
        Construction-time guards, see :class:`SecurityConfig`.
    api_base_url:
        API root URL.  Override for proxy or testing environments.
    delivery_base_url:
        Root of the image delivery network.
    timeout_seconds:
        HTTP timeout in seconds, or ``None`` for no timeout.
    http_proxy:
        Optional HTTP/HTTPS proxy URL.
    metrics:
        Optional :class:`~cfimages.observability.MetricsHook` backend.
    debug_dump_payload:
        Write a redacted request/response dump to *stderr*.
    """

    # ── Credentials ─────────────────────────────────────────────────────
    token: str = ""

    account_id: str = ""

    account_hash: str | None = None

    # ── Security ────────────────────────────────────────────────────────
    security: SecurityConfig = field(default_factory=SecurityConfig)

    # ── HTTP ────────────────────────────────────────────────────────────
    api_base_url: str = DEFAULT_API_BASE_URL

    delivery_base_url: str = DEFAULT_DELIVERY_BASE_URL

    timeout_seconds: float | None = None

    http_proxy: str | None = None

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_payload: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        from urllib.parse import urlparse

        if self.security is None:
            self.security = SecurityConfig()

        for name in ("api_base_url", "delivery_base_url"):
            parsed = urlparse(getattr(self, name))
            if parsed.scheme == "http" and parsed.hostname not in _LOCAL_HOSTS:
                raise ValueError(
                    f"{name} uses insecure HTTP for non-local host '{parsed.hostname}'. "
                    "Use HTTPS to protect your API token, or target localhost for testing."
                )

        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")

    @property
    def upload_path(self) -> str:
        """API path of the upload endpoint, relative to *api_base_url*."""
        return f"/accounts/{self.account_id}/images/v1"

    def __repr__(self) -> str:
        """Mask credentials to prevent accidental leakage."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name in _MASKED_FIELDS:
                parts.append(f"{f.name}='{_mask(val or '')}'")
            else:
                parts.append(f"{f.name}={val!r}")
        return f"CFImagesConfig({', '.join(parts)})"
