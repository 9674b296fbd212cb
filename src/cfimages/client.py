"""Asynchronous Cloudflare Images client.

:class:`CFImagesClient` is the single public entry point.  Construction
runs the security validator first and fails before any HTTP client is
created; afterwards every call is delegated to an upload service (network)
or an image service (string building only).

Usage::

    import asyncio
    import os

    from cfimages import CFImagesClient

    async def main():
        async with CFImagesClient(
            token=os.environ["CF_IMAGES_TOKEN"],
            account_id=os.environ["CF_ACCOUNT_ID"],
            account_hash=os.environ["CF_IMAGES_ACCOUNT_HASH"],
        ) as client:
            uploaded = await client.upload_image(
                url="https://example.com/image.jpg",
                metadata={"key": "value"},
            )
            image_id = uploaded["result"]["id"]
            print(client.get_image_url(image_id, "public")["url"])

    asyncio.run(main())
"""

from __future__ import annotations

from typing import Any

from cfimages.config import CFImagesConfig, SecurityConfig
from cfimages.images_api.delivery import ImageService
from cfimages.images_api.transport import AsyncImagesTransport
from cfimages.images_api.upload import UploadService
from cfimages.models import (
    FileContent,
    ImageMetadata,
    ImageOperationResult,
    ImageReference,
    ImageUploadOptions,
    ImageURL,
)
from cfimages.security import validate_configuration


class CFImagesClient:
    """Asynchronous Cloudflare Images client for one account.

    Parameters
    ----------
    token:
        Cloudflare API token.  **Required.**  Never expose it in client-side
        code.
    account_id:
        Cloudflare account ID.  **Required.**
    account_hash:
        Public account hash used for delivery URLs.  Only needed by
        :meth:`get_image_url`.
    security:
        Construction-time guards.  Defaults to :class:`SecurityConfig()`,
        which refuses to run in a browser-like runtime.
    **kwargs:
        All remaining keyword arguments are forwarded to
        :class:`CFImagesConfig`.

    Raises
    ------
    ConfigurationSecurityError
        If the security validator rejects the configuration.
    """

    def __init__(
        self,
        token: str,
        account_id: str,
        account_hash: str | None = None,
        security: SecurityConfig | None = None,
        **kwargs: Any,
    ) -> None:
        self._config = CFImagesConfig(
            token=token,
            account_id=account_id,
            account_hash=account_hash,
            security=security or SecurityConfig(),
            **kwargs,
        )
        validate_configuration(self._config)

        self._transport = AsyncImagesTransport(self._config)
        self._uploads = UploadService(self._transport, self._config)
        self._images = ImageService(self._config)

    # ------------------------------------------------------------------
    # Upload
    # ------------------------------------------------------------------

    async def upload_image(
        self,
        *,
        url: str | None = None,
        file: FileContent | None = None,
        filename: str | None = None,
        metadata: ImageMetadata | None = None,
        require_signed_urls: bool = False,
    ) -> ImageOperationResult:
        """Upload an image from a URL or from bytes.

        Parameters
        ----------
        url:
            Public URL for Cloudflare to fetch.  Mutually exclusive with
            *file*.
        file:
            Image bytes or a binary file object.  Mutually exclusive with
            *url*.
        filename:
            Name sent with *file*.
        metadata:
            Custom metadata stored with the image.
        require_signed_urls:
            Serve the image only through signed URLs.

        Returns
        -------
        ImageOperationResult
            Cloudflare's response body, unmodified.

        Raises
        ------
        InvalidInputError
            If neither or both of *url* and *file* are given, or *metadata*
            cannot be encoded as JSON.
        UploadFailedError
            If the request fails; ``cause`` holds the underlying error.
        """
        options = ImageUploadOptions(
            url=url,
            file=file,
            filename=filename,
            metadata=dict(metadata) if metadata else {},
            require_signed_urls=require_signed_urls,
        )
        return await self._uploads.upload_image(options)

    # ------------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------------

    def get_image_url(self, image_id: str, variant_name: str) -> ImageURL:
        """Return the delivery URL of one variant of an uploaded image.

        No request is made; the image and the variant are not checked for
        existence.

        Raises
        ------
        InvalidInputError
            If *image_id* or *variant_name* is empty, or the client was
            created without an ``account_hash``.
        """
        return self._images.get_image(
            ImageReference(image_id=image_id, variant_name=variant_name)
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._transport.close()

    async def __aenter__(self) -> CFImagesClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"CFImagesClient(config={self._config!r})"
