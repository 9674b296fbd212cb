"""Image upload against ``POST /accounts/{account_id}/images/v1``.

:class:`UploadService` checks the request shape, builds the multipart form
and sends it through :class:`~cfimages.images_api.transport.AsyncImagesTransport`.
Any failure after validation is re-raised as
:class:`~cfimages.errors.UploadFailedError` with the original exception
attached as its cause.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, cast

from cfimages.config import CFImagesConfig
from cfimages.errors import InvalidInputError, UploadFailedError
from cfimages.models import ImageOperationResult, ImageUploadOptions
from cfimages.observability import NoopMetricsHook, get_logger

from .transport import AsyncImagesTransport

log = get_logger("cfimages.upload")

_DEFAULT_FILENAME = "image"

FormField = tuple[str, tuple[Any, Any]]


def _encode_metadata(metadata: dict[str, Any]) -> str:
    return json.dumps(metadata, separators=(",", ":"), allow_nan=False)


def _validate_upload_options(options: ImageUploadOptions) -> None:
    """Enforce that exactly one of ``url`` and ``file`` is given.

    An empty URL string counts as absent; a file counts as present whenever
    it is not ``None``.  ``metadata`` must encode as strict JSON, so ``NaN``
    and infinite floats are rejected.
    """
    has_url = bool(options.url)
    has_file = options.file is not None

    if not has_url and not has_file:
        raise InvalidInputError(
            "Either url or file must be provided",
            context={"field": "url|file"},
        )
    if has_url and has_file:
        raise InvalidInputError(
            "Cannot provide both url and file",
            context={"field": "url|file"},
        )

    try:
        _encode_metadata(options.metadata)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(
            f"metadata is not valid JSON: {exc}",
            context={"field": "metadata"},
            cause=exc,
        ) from exc


def _filename_for(options: ImageUploadOptions) -> str:
    if options.filename:
        return options.filename
    name = getattr(options.file, "name", None)
    if isinstance(name, str) and name:
        return Path(name).name
    return _DEFAULT_FILENAME


def build_upload_form(options: ImageUploadOptions) -> list[FormField]:
    """Return the multipart fields for *options*, in wire order.

    Text fields use a ``None`` filename so they are sent as plain form
    values.  ``metadata`` is compact JSON and ``requireSignedURLs`` is the
    literal ``"true"`` or ``"false"``.
    """
    fields: list[FormField] = []
    if options.url:
        fields.append(("url", (None, options.url)))
    else:
        fields.append(("file", (_filename_for(options), options.file)))

    fields.append(
        ("metadata", (None, _encode_metadata(options.metadata)))
    )
    fields.append(
        ("requireSignedURLs", (None, "true" if options.require_signed_urls else "false"))
    )
    return fields


class UploadService:
    """Uploads images for a single account.

    Parameters
    ----------
    transport:
        A configured :class:`AsyncImagesTransport`.
    config:
        The client configuration; supplies the account-scoped upload path
        and the metrics backend.
    """

    def __init__(self, transport: AsyncImagesTransport, config: CFImagesConfig) -> None:
        self._transport = transport
        self._path = config.upload_path
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()

    async def upload_image(self, options: ImageUploadOptions) -> ImageOperationResult:
        """Upload one image.

        Parameters
        ----------
        options:
            The upload request.  Exactly one of ``url`` / ``file`` must be set.

        Returns
        -------
        ImageOperationResult
            Cloudflare's response body, unmodified.

        Raises
        ------
        InvalidInputError
            If neither or both of ``url`` and ``file`` are given, or if
            ``metadata`` is not JSON-encodable.  Raised before any network I/O.
        UploadFailedError
            If the round trip fails for any reason.  ``cause`` holds the
            original exception (a :class:`~cfimages.errors.RemoteAPIError`,
            an ``httpx.TransportError``, a JSON decoding error, ...).
        """
        _validate_upload_options(options)

        source = "url" if options.url else "file"
        form = build_upload_form(options)

        try:
            data = await self._transport.request("POST", self._path, files=form)
        except Exception as exc:
            self._metrics.increment(
                "cfimages.upload_failure_total",
                tags={"source": source, "error": type(exc).__name__},
            )
            log.warning(
                "Image upload failed",
                extra={
                    "extra_fields": {
                        "op": "upload_image",
                        "source": source,
                        "error_type": type(exc).__name__,
                    }
                },
            )
            raise UploadFailedError(
                f"Failed to upload image: {exc}",
                context={"cause_type": type(exc).__name__},
                cause=exc,
            ) from exc

        uploaded = data.get("result") if isinstance(data, dict) else None
        self._metrics.increment(
            "cfimages.upload_success_total",
            tags={"source": source},
        )
        log.info(
            "Image upload complete",
            extra={
                "extra_fields": {
                    "op": "upload_image",
                    "source": source,
                    "image_id": uploaded.get("id") if isinstance(uploaded, dict) else None,
                }
            },
        )
        return cast(ImageOperationResult, data)
