"""Shared test fixtures for the cfimages test suite."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from cfimages.config import CFImagesConfig

TEST_TOKEN = "cf_test_token_abcd1234"
TEST_ACCOUNT_ID = "acc_0123456789abcdef"
TEST_ACCOUNT_HASH = "Vi7wi5KSItxGFsWRG2Us6Q"


def _make_response(
    status_code: int = 200,
    body: Any | None = None,
    headers: dict | None = None,
) -> httpx.Response:
    """Build a minimal httpx.Response with a request attached."""
    content = json.dumps(body).encode() if body is not None else b""
    resp = httpx.Response(status_code, content=content, headers=headers or {})
    resp.request = httpx.Request(
        "POST",
        f"https://api.cloudflare.com/client/v4/accounts/{TEST_ACCOUNT_ID}/images/v1",
    )
    return resp


def _success_body(image_id: str = "083eb7b2-5392-4565-b69e-aff66acddd00") -> dict:
    return {
        "result": {
            "id": image_id,
            "filename": "a.jpg",
            "metadata": {"key": "k", "value": "v"},
            "uploaded": "2022-01-31T16:39:28.458Z",
            "requireSignedURLs": False,
            "variants": [
                f"https://imagedelivery.net/{TEST_ACCOUNT_HASH}/{image_id}/public",
                f"https://imagedelivery.net/{TEST_ACCOUNT_HASH}/{image_id}/thumbnail",
            ],
        },
        "success": True,
        "errors": [],
        "messages": [],
    }


class RecordingMetricsHook:
    """A metrics backend that records all calls for assertion."""

    def __init__(self) -> None:
        self.increments: list[dict[str, Any]] = []
        self.timings: list[dict[str, Any]] = []

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None) -> None:
        self.increments.append({"name": name, "value": value, "tags": tags})

    def timing(self, name: str, ms: float, tags: dict[str, str] | None = None) -> None:
        self.timings.append({"name": name, "ms": ms, "tags": tags})

    def names(self) -> list[str]:
        return [entry["name"] for entry in self.increments]


@pytest.fixture
def make_response():
    """Factory for canned httpx responses."""
    return _make_response


@pytest.fixture
def success_body():
    """Factory for a well-formed upload response body."""
    return _success_body


@pytest.fixture
def config() -> CFImagesConfig:
    """Default test configuration with dummy credentials."""
    return CFImagesConfig(
        token=TEST_TOKEN,
        account_id=TEST_ACCOUNT_ID,
        account_hash=TEST_ACCOUNT_HASH,
    )


@pytest.fixture
def metrics() -> RecordingMetricsHook:
    return RecordingMetricsHook()
