"""cfimages.images_api -- Cloudflare Images transport and endpoint wrappers.

This sub-package provides:

* :mod:`.transport` -- Async HTTP transport with bearer authentication.
* :mod:`.upload` -- Image upload service.
* :mod:`.delivery` -- Delivery URL resolution (no network).
"""

from __future__ import annotations

from .delivery import ImageService
from .transport import AsyncImagesTransport
from .upload import UploadService, build_upload_form

__all__ = [
    "AsyncImagesTransport",
    "ImageService",
    "UploadService",
    "build_upload_form",
]
