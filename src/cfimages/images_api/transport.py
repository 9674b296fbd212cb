"""Async HTTP transport for the Cloudflare Images API.

Each call to :meth:`AsyncImagesTransport.request` is exactly one round trip:

1. Send the HTTP request with the bearer authorization header.
2. On ``2xx`` -- return the parsed JSON response.  An empty or non-JSON
   body raises ``ValueError``.
3. On any other status -- raise :class:`RemoteAPIError` carrying the first
   message from the response's ``errors`` list, or the HTTP reason phrase.

Network failures (``httpx.TransportError``) are logged and re-raised
unchanged.  There are no retries, no rate limiting, and the default timeout
is unlimited.
"""

from __future__ import annotations

import json as _json
import sys
import time
from typing import Any

import httpx

from cfimages.config import CFImagesConfig
from cfimages.errors import RemoteAPIError
from cfimages.observability import NoopMetricsHook, get_logger

log = get_logger("cfimages.transport")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _error_from_response(response: httpx.Response) -> RemoteAPIError:
    """Build the :class:`RemoteAPIError` for a non-2xx *response*."""
    status = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = {}

    errors = body.get("errors") if isinstance(body, dict) else None
    if not isinstance(errors, list):
        errors = []

    message = None
    if errors and isinstance(errors[0], dict):
        message = errors[0].get("message")

    return RemoteAPIError(
        message=f"Cloudflare API error: {message or response.reason_phrase}",
        context={"status_code": status, "errors": errors},
    )


def _describe_form(files: Any) -> list[dict[str, Any]]:
    """Summarise multipart *files* for the debug dump, one dict per field."""
    fields: list[dict[str, Any]] = []
    for name, (filename, value) in files or []:
        entry: dict[str, Any] = {"name": name, "value": value}
        if filename is not None:
            entry["filename"] = filename
        fields.append(entry)
    return fields


def _dump_payload(
    method: str,
    url: str,
    form: list[dict[str, Any]] | None,
    response_status: int | None,
    response_body: Any | None,
    secrets: tuple[str | None, ...] = (),
) -> None:
    """Write a redacted debug dump of the request/response to stderr."""
    from cfimages.utils.redact import redact

    dump: dict[str, Any] = {
        "method": method,
        "url": url,
    }
    if form:
        dump["request_form"] = form
    if response_status is not None:
        dump["response_status"] = response_status
    if response_body is not None:
        dump["response_body"] = response_body
    safe_dump = redact(dump, secrets)
    print(
        _json.dumps(safe_dump, indent=2, default=str),
        file=sys.stderr,
    )


def _emit_debug_dump(
    config: CFImagesConfig,
    method: str,
    response: httpx.Response,
    files: Any,
) -> None:
    """Emit a redacted debug dump of request/response if enabled."""
    if not config.debug_dump_payload:
        return
    try:
        resp_body = response.json()
    except ValueError:
        resp_body = response.text[:1000]
    _dump_payload(
        method, str(response.url), _describe_form(files),
        response.status_code, resp_body,
        secrets=(config.token, config.account_id),
    )


# ---------------------------------------------------------------------------
# Async transport
# ---------------------------------------------------------------------------

class AsyncImagesTransport:
    """Asynchronous HTTP transport with bearer authentication.

    Parameters
    ----------
    config:
        A :class:`CFImagesConfig` instance controlling transport behaviour.
    """

    def __init__(self, config: CFImagesConfig) -> None:
        self._config = config
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()

        proxy: httpx.URL | str | None = config.http_proxy
        self._client = httpx.AsyncClient(
            base_url=config.api_base_url,
            headers={"Authorization": f"Bearer {config.token}"},
            timeout=httpx.Timeout(config.timeout_seconds),
            proxy=proxy,
        )

    # -- public API --------------------------------------------------------

    async def request(self, method: str, path: str, **kwargs: Any) -> dict:
        """Execute one HTTP request against the Cloudflare API.

        Parameters
        ----------
        method:
            HTTP method.
        path:
            API path relative to ``api_base_url``
            (e.g. ``/accounts/<id>/images/v1``).
        **kwargs:
            Forwarded to :meth:`httpx.AsyncClient.request`.  Use ``files=``
            for multipart bodies.

        Returns
        -------
        dict
            Parsed JSON response body.

        Raises
        ------
        RemoteAPIError
            On any non-2xx response.
        httpx.TransportError
            On connection, DNS or timeout failures.
        ValueError
            If a 2xx body is empty or not valid JSON.
        """
        t0 = time.monotonic()
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TransportError as exc:
            self._metrics.increment(
                "cfimages.requests_total",
                tags={"method": method, "status": "error"},
            )
            log.warning(
                "Request network error",
                extra={
                    "extra_fields": {
                        "op": "request",
                        "method": method,
                        "error": type(exc).__name__,
                    }
                },
            )
            raise
        elapsed_ms = (time.monotonic() - t0) * 1000

        self._metrics.increment(
            "cfimages.requests_total",
            tags={"method": method, "status": str(response.status_code)},
        )
        self._metrics.timing(
            "cfimages.request_duration_ms",
            elapsed_ms,
            tags={"method": method, "status": str(response.status_code)},
        )

        _emit_debug_dump(self._config, method, response, kwargs.get("files"))

        if 200 <= response.status_code < 300:
            result: dict = response.json()
            return result

        raise _error_from_response(response)

    async def close(self) -> None:
        """Close the underlying async HTTP client and release resources."""
        await self._client.aclose()

    async def __aenter__(self) -> AsyncImagesTransport:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
