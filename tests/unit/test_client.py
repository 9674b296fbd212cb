"""Tests for CFImagesClient.

All Cloudflare API calls are mocked so that these tests run entirely offline.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from cfimages.client import CFImagesClient
from cfimages.config import SecurityConfig
from cfimages.errors import (
    ConfigurationSecurityError,
    InvalidInputError,
    RemoteAPIError,
    UploadFailedError,
)
from cfimages.images_api.upload import UploadService
from cfimages.models import ImageUploadOptions

TOKEN = "cf_client_token_9876"
ACCOUNT_ID = "acc_client_0001"
ACCOUNT_HASH = "hash_public_42"


def _make_client(**kwargs) -> CFImagesClient:
    params = {"token": TOKEN, "account_id": ACCOUNT_ID, "account_hash": ACCOUNT_HASH}
    params.update(kwargs)
    return CFImagesClient(**params)


# ===========================================================================
# Construction
# ===========================================================================


class TestCFImagesClientInit:
    async def test_creates_all_components(self):
        client = _make_client()
        assert client._config.token == TOKEN
        assert client._config.account_id == ACCOUNT_ID
        assert client._transport is not None
        assert client._uploads is not None
        assert client._images is not None
        await client.close()

    async def test_forwards_kwargs_to_config(self):
        client = _make_client(timeout_seconds=5.0, api_base_url="http://localhost:8787")
        assert client._config.timeout_seconds == 5.0
        assert client._config.api_base_url == "http://localhost:8787"
        await client.close()

    async def test_default_security_config(self):
        client = _make_client()
        assert client._config.security.prevent_browser_usage is True
        await client.close()

    @pytest.mark.parametrize(
        ("token", "account_id"),
        [("", ACCOUNT_ID), (TOKEN, ""), ("", ""), (None, ACCOUNT_ID), (TOKEN, None), (None, None)],
    )
    def test_missing_credentials_raise(self, token, account_id):
        with pytest.raises(ConfigurationSecurityError, match="token and account_id"):
            CFImagesClient(token=token, account_id=account_id)

    def test_no_services_created_on_failure(self):
        with (
            patch("cfimages.client.AsyncImagesTransport") as transport_cls,
            patch("cfimages.client.UploadService") as upload_cls,
            patch("cfimages.client.ImageService") as image_cls,
            pytest.raises(ConfigurationSecurityError),
        ):
            CFImagesClient(token="", account_id=ACCOUNT_ID)
        transport_cls.assert_not_called()
        upload_cls.assert_not_called()
        image_cls.assert_not_called()

    def test_browser_environment_rejected_by_default(self):
        security = SecurityConfig(environment_probe=lambda: True)
        with pytest.raises(ConfigurationSecurityError, match="browser") as info:
            _make_client(security=security)
        assert info.value.context["reason"] == "browser_environment"

    async def test_browser_guard_can_be_disabled(self):
        security = SecurityConfig(prevent_browser_usage=False, environment_probe=lambda: True)
        client = _make_client(security=security)
        assert client._images is not None
        await client.close()

    def test_browser_check_runs_before_credential_check(self):
        security = SecurityConfig(environment_probe=lambda: True)
        with pytest.raises(ConfigurationSecurityError) as info:
            CFImagesClient(token="", account_id="", security=security)
        assert info.value.context["reason"] == "browser_environment"

    async def test_repr_hides_credentials(self):
        client = _make_client()
        text = repr(client)
        assert TOKEN not in text
        assert ACCOUNT_ID not in text
        assert ACCOUNT_HASH in text
        await client.close()


# ===========================================================================
# upload_image
# ===========================================================================


class TestUploadImage:
    async def test_delegates_to_upload_service(self, success_body):
        client = _make_client()
        body = success_body()
        client._uploads.upload_image = AsyncMock(return_value=body)

        result = await client.upload_image(
            url="https://example.com/a.jpg",
            metadata={"key": "k", "value": "v"},
            require_signed_urls=False,
        )

        assert result is body
        (options,), _ = client._uploads.upload_image.call_args
        assert options == ImageUploadOptions(
            url="https://example.com/a.jpg",
            metadata={"key": "k", "value": "v"},
            require_signed_urls=False,
        )
        await client.close()

    async def test_metadata_defaults_to_empty_dict(self):
        client = _make_client()
        client._uploads.upload_image = AsyncMock(return_value={})
        await client.upload_image(file=b"bytes", filename="a.png")
        (options,), _ = client._uploads.upload_image.call_args
        assert options.metadata == {}
        assert options.filename == "a.png"
        await client.close()

    async def test_metadata_is_copied(self):
        client = _make_client()
        client._uploads.upload_image = AsyncMock(return_value={})
        metadata = {"key": "k"}
        await client.upload_image(url="https://example.com/a.jpg", metadata=metadata)
        (options,), _ = client._uploads.upload_image.call_args
        assert options.metadata == metadata
        assert options.metadata is not metadata
        await client.close()

    async def test_neither_url_nor_file(self):
        client = _make_client()
        with pytest.raises(InvalidInputError):
            await client.upload_image()
        await client.close()

    async def test_both_url_and_file(self):
        client = _make_client()
        with pytest.raises(InvalidInputError):
            await client.upload_image(url="https://example.com/a.jpg", file=b"bytes")
        await client.close()

    async def test_http_200_returns_body_unmodified(self, make_response, success_body):
        client = _make_client()
        resp = make_response(200, body=success_body())
        with patch.object(client._transport._client, "request", new=AsyncMock(return_value=resp)):
            result = await client.upload_image(
                url="https://example.com/a.jpg",
                metadata={"key": "k", "value": "v"},
                require_signed_urls=False,
            )
        assert result == success_body()
        await client.close()

    async def test_http_400_surfaces_remote_message(self, make_response):
        client = _make_client()
        resp = make_response(400, body={"errors": [{"message": "bad token"}]})
        with (
            patch.object(client._transport._client, "request", new=AsyncMock(return_value=resp)),
            pytest.raises(UploadFailedError, match="bad token") as info,
        ):
            await client.upload_image(
                url="https://example.com/a.jpg",
                metadata={"key": "k", "value": "v"},
            )
        assert isinstance(info.value.cause, RemoteAPIError)
        assert info.value.cause.status_code == 400
        await client.close()

    async def test_network_failure_surfaces_cause(self):
        client = _make_client()
        mock = AsyncMock(side_effect=httpx.ConnectError("dns failure"))
        with (
            patch.object(client._transport._client, "request", new=mock),
            pytest.raises(UploadFailedError, match="dns failure") as info,
        ):
            await client.upload_image(file=b"bytes")
        assert isinstance(info.value.cause, httpx.ConnectError)
        await client.close()

    async def test_empty_success_body_is_an_upload_failure(self):
        client = _make_client()
        await client._transport._client.aclose()
        client._transport._client = httpx.AsyncClient(
            base_url=client._config.api_base_url,
            transport=httpx.MockTransport(lambda request: httpx.Response(200, content=b"")),
        )
        with pytest.raises(UploadFailedError, match="Failed to upload image") as info:
            await client.upload_image(url="https://example.com/a.jpg")
        assert isinstance(info.value.cause, ValueError)
        await client.close()

    async def test_concurrent_uploads_are_independent(self, make_response, success_body):
        import asyncio

        client = _make_client()

        async def respond(method, path, **kwargs):
            url = dict(kwargs["files"])["url"][1]
            await asyncio.sleep(0)
            return make_response(200, body=success_body(image_id=url.rsplit("/", 1)[-1]))

        with patch.object(client._transport._client, "request", new=AsyncMock(side_effect=respond)):
            results = await asyncio.gather(*(
                client.upload_image(url=f"https://example.com/{n}") for n in ("a", "b", "c")
            ))
        assert [r["result"]["id"] for r in results] == ["a", "b", "c"]
        await client.close()


# ===========================================================================
# get_image_url
# ===========================================================================


class TestGetImageURL:
    async def test_returns_delivery_url_without_network(self):
        client = _make_client()
        mock = AsyncMock()
        with patch.object(client._transport._client, "request", new=mock):
            result = client.get_image_url("abc123", "public")
        assert result == {"url": f"https://imagedelivery.net/{ACCOUNT_HASH}/abc123/public"}
        mock.assert_not_called()
        mock.assert_not_awaited()
        await client.close()

    async def test_empty_image_id(self):
        client = _make_client()
        with pytest.raises(InvalidInputError):
            client.get_image_url("", "public")
        await client.close()

    async def test_empty_variant_name(self):
        client = _make_client()
        with pytest.raises(InvalidInputError):
            client.get_image_url("abc123", "")
        await client.close()

    async def test_without_account_hash(self):
        client = _make_client(account_hash=None)
        with pytest.raises(InvalidInputError, match="account_hash"):
            client.get_image_url("abc123", "public")
        await client.close()


# ===========================================================================
# Lifecycle
# ===========================================================================


class TestClientLifecycle:
    async def test_async_context_manager(self):
        async with _make_client() as client:
            assert isinstance(client, CFImagesClient)
            assert isinstance(client._uploads, UploadService)
        assert client._transport._client.is_closed

    async def test_close_closes_transport(self):
        client = _make_client()
        await client.close()
        assert client._transport._client.is_closed
