"""cfimages: async client for Cloudflare Images.

Public re-exports
-----------------

* **Client:** :class:`CFImagesClient`
* **Configuration:** :class:`CFImagesConfig`, :class:`SecurityConfig`
* **Errors:** Every :class:`CFImagesError` subclass and :class:`ErrorCode`
* **Models:** Request dataclasses and response ``TypedDict`` types

Usage::

    from cfimages import CFImagesClient

    client = CFImagesClient(token="...", account_id="...", account_hash="...")
    result = await client.upload_image(url="https://example.com/a.jpg")
    client.get_image_url(result["result"]["id"], "public")
"""

from __future__ import annotations

# ── Client ─────────────────────────────────────────────────────────────
from cfimages.client import CFImagesClient

# ── Configuration ───────────────────────────────────────────────────────
from cfimages.config import (
    DEFAULT_API_BASE_URL,
    DEFAULT_DELIVERY_BASE_URL,
    CFImagesConfig,
    SecurityConfig,
)

# ── Errors ──────────────────────────────────────────────────────────────
from cfimages.errors import (
    CFImagesError,
    ConfigurationSecurityError,
    ErrorCode,
    InvalidInputError,
    RemoteAPIError,
    UploadFailedError,
)

# ── Models ──────────────────────────────────────────────────────────────
from cfimages.models import (
    ImageMetadata,
    ImageOperationResult,
    ImageReference,
    ImageUploadOptions,
    ImageURL,
    UploadedImage,
)

# ── Security ────────────────────────────────────────────────────────────
from cfimages.security import is_running_in_browser, validate_configuration

__all__ = [
    "DEFAULT_API_BASE_URL",
    "DEFAULT_DELIVERY_BASE_URL",
    "CFImagesClient",
    "CFImagesConfig",
    "CFImagesError",
    "ConfigurationSecurityError",
    "ErrorCode",
    "ImageMetadata",
    "ImageOperationResult",
    "ImageReference",
    "ImageURL",
    "ImageUploadOptions",
    "InvalidInputError",
    "RemoteAPIError",
    "SecurityConfig",
    "UploadFailedError",
    "UploadedImage",
    "is_running_in_browser",
    "validate_configuration",
]

__version__ = "0.1.0"
