"""Delivery URL resolution.

Builds ``https://imagedelivery.net/<account_hash>/<image_id>/<variant_name>``
without any network call.  Path segments are interpolated verbatim: IDs or
variant names containing ``/``, ``?`` or ``#`` produce a URL that points
somewhere else, so pass values exactly as Cloudflare issued them.
"""

from __future__ import annotations

from cfimages.config import CFImagesConfig
from cfimages.errors import InvalidInputError
from cfimages.models import ImageReference, ImageURL


class ImageService:
    """Resolves delivery URLs for previously uploaded images.

    Parameters
    ----------
    config:
        The client configuration; supplies ``account_hash`` and
        ``delivery_base_url``.
    """

    def __init__(self, config: CFImagesConfig) -> None:
        self._account_hash = config.account_hash
        self._base_url = config.delivery_base_url.rstrip("/")

    def get_image(self, reference: ImageReference) -> ImageURL:
        """Return the delivery URL for *reference*.

        Raises
        ------
        InvalidInputError
            If ``image_id`` or ``variant_name`` is empty, or if the client
            was built without an ``account_hash``.
        """
        if not reference.image_id:
            raise InvalidInputError(
                "image_id is required",
                context={"field": "image_id"},
            )
        if not reference.variant_name:
            raise InvalidInputError(
                "variant_name is required",
                context={"field": "variant_name"},
            )
        if not self._account_hash:
            raise InvalidInputError(
                "account_hash is required to build delivery URLs. "
                "It is shown on the Images dashboard and differs from the account ID.",
                context={"field": "account_hash"},
            )

        return {
            "url": f"{self._base_url}/{self._account_hash}/"
                   f"{reference.image_id}/{reference.variant_name}",
        }
