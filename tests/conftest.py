"""
Global test configuration for the photo editor test suite.
"""

from collections.abc import Mapping
from contextlib import suppress
import os
from typing import Any

import pytest

from gemini_photo_editor.config import EditorConfig
from gemini_photo_editor.core.types import EditRequest

# PNG signature followed by filler; the pipeline never decodes pixels
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-in escape hatch: mark a test with @pytest.mark.allow_dotenv
    to permit .env loading for that specific test.
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_credential_env(request, monkeypatch):
    """Ensure no real credential leaks into a test.

    Escape hatch: @pytest.mark.allow_env_pollution keeps the environment.
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return
    for key in list(os.environ.keys()):
        if key.startswith("GEMINI_") or key == "API_KEY":
            monkeypatch.delenv(key, raising=False)


def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "integration: Component integration tests with mocked APIs",
        "allow_dotenv: Permit .env loading",
        "allow_env_pollution: Keep GEMINI_* variables from the real environment",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)


# --- Core Fixtures ---


@pytest.fixture
def mock_api_key():
    """Provide a consistent, fake API key for tests."""
    return "test_api_key_12345_67890_abcdef_ghijkl"


@pytest.fixture
def config(mock_api_key):
    return EditorConfig(api_key=mock_api_key)


@pytest.fixture
def unconfigured():
    return EditorConfig(api_key=None)


@pytest.fixture
def png_bytes():
    """A small PNG-looking payload."""
    return PNG_SIGNATURE + b"\x00" * 64


def make_png(size: int) -> bytes:
    return PNG_SIGNATURE + b"\x00" * (size - len(PNG_SIGNATURE))


@pytest.fixture
def png_of_size():
    """Factory for PNG-looking payloads of an exact size."""
    return make_png


# --- Wire responses ---


def image_response(
    data: str = "ZWRpdGVk", mime_type: str = "image/png", finish_reason: str = "STOP"
) -> dict[str, Any]:
    return {
        "candidates": [
            {
                "content": {"parts": [{"inlineData": {"data": data, "mimeType": mime_type}}]},
                "finishReason": finish_reason,
            }
        ]
    }


def blocked_response() -> dict[str, Any]:
    return {"candidates": [{"content": {"parts": []}, "finishReason": "SAFETY"}]}


def text_only_response(text: str = "I can't edit that.") -> dict[str, Any]:
    return {
        "candidates": [{"content": {"parts": [{"text": text}]}, "finishReason": "STOP"}]
    }


@pytest.fixture
def responses():
    """Builders for service responses in wire shape."""

    class _Responses:
        image = staticmethod(image_response)
        blocked = staticmethod(blocked_response)
        text_only = staticmethod(text_only_response)

    return _Responses


# --- Fake provider ---


class FakeAdapter:
    """Records every request and answers with a canned response or error."""

    def __init__(self, response: Any = None, error: BaseException | None = None):
        self.response = response if response is not None else image_response()
        self.error = error
        self.requests: list[EditRequest] = []

    async def generate(self, request: EditRequest) -> Mapping[str, Any]:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def fake_adapter():
    """Factory for fake adapters: ``fake_adapter(response=..., error=...)``."""
    return FakeAdapter
