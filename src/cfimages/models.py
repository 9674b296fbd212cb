"""Public data models for the cfimages SDK.

Request-side types are plain dataclasses.  Response-side types are
``TypedDict`` declarations: the SDK hands back Cloudflare's JSON exactly
as received, so they describe its shape without wrapping or validating it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import BinaryIO, TypedDict, Union

MetadataValue = Union[str, int, float, bool]
"""A single custom-metadata value.  Cloudflare stores it as JSON."""

ImageMetadata = dict[str, MetadataValue]

FileContent = Union[bytes, BinaryIO]
"""Raw image bytes, or a binary file object opened by the caller."""


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

@dataclass
class ImageUploadOptions:
    """One image upload request.

    Exactly one of *url* and *file* must be set.  See the supported formats,
    dimensions and sizes at
    https://developers.cloudflare.com/images/upload-images/#supported-image-formats
    """

    url: str | None = None
    """Public URL Cloudflare should fetch the image from."""

    file: FileContent | None = None
    """Image bytes to upload directly."""

    filename: str | None = None
    """Name sent with the ``file`` part.  Falls back to the file object's
    ``name`` attribute, then to ``"image"``."""

    metadata: ImageMetadata = field(default_factory=dict)
    """Custom key/value metadata stored alongside the image."""

    require_signed_urls: bool = False
    """Serve the image only through signed URL tokens.  See
    https://developers.cloudflare.com/images/manage-images/serve-images/serve-private-images/
    """


@dataclass(frozen=True)
class ImageReference:
    """Identifies one variant of an uploaded image."""

    image_id: str
    variant_name: str


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class UploadedImage(TypedDict):
    id: str
    filename: str
    metadata: ImageMetadata
    uploaded: str
    requireSignedURLs: bool
    variants: list[str]


class ImageOperationResult(TypedDict):
    """Envelope returned by the upload endpoint."""

    result: UploadedImage
    success: bool
    errors: list[str]
    messages: list[str]


class ImageURL(TypedDict):
    """A resolved delivery URL."""

    url: str
