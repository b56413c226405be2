import base64
from unittest.mock import AsyncMock, MagicMock, patch

from google.genai import types
import pytest

from gemini_photo_editor.constants import DEFAULT_MODEL
from gemini_photo_editor.core.types import EditRequest, Failure, Success
from gemini_photo_editor.exceptions import (
    ErrorKind,
    FileReadError,
    NoImageReturnedError,
    SafetyBlockedError,
)
from gemini_photo_editor.pipeline.adapters import GenerationAdapter
from gemini_photo_editor.pipeline.adapters.gemini import (
    GeminiImageAdapter,
    response_to_wire,
)
from gemini_photo_editor.pipeline.interpreter import interpret


def _sdk_response(parts, finish_reason=types.FinishReason.STOP):
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(role="model", parts=parts),
                finish_reason=finish_reason,
            )
        ]
    )


@pytest.fixture
def mock_genai_client():
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock()
    return client


@pytest.fixture
def request_():
    return EditRequest.build(base64.b64encode(b"source").decode(), "image/png", "add a hat")


def test_satisfies_protocol(mock_genai_client):
    assert isinstance(GeminiImageAdapter("k", client=mock_genai_client), GenerationAdapter)


def test_builds_client_from_api_key():
    with patch("gemini_photo_editor.pipeline.adapters.gemini.genai.Client") as client_cls:
        adapter = GeminiImageAdapter("secret-key", model="gemini-x")
    client_cls.assert_called_once_with(api_key="secret-key")
    assert adapter.model == "gemini-x"


def test_contents_carry_image_then_prompt(mock_genai_client, request_):
    adapter = GeminiImageAdapter("k", client=mock_genai_client)
    contents = adapter.build_contents(request_)
    image_part, text_part = contents.parts
    assert image_part.inline_data.data == b"source"
    assert image_part.inline_data.mime_type == "image/png"
    assert text_part.text == "add a hat"


@pytest.mark.asyncio
async def test_generate_makes_one_image_modality_call(mock_genai_client, request_):
    mock_genai_client.aio.models.generate_content.return_value = _sdk_response(
        [types.Part(inline_data=types.Blob(data=b"edited", mime_type="image/png"))]
    )
    adapter = GeminiImageAdapter("k", client=mock_genai_client)

    raw = await adapter.generate(request_)

    mock_genai_client.aio.models.generate_content.assert_awaited_once()
    kwargs = mock_genai_client.aio.models.generate_content.await_args.kwargs
    assert kwargs["model"] == DEFAULT_MODEL
    assert [getattr(m, "value", m) for m in kwargs["config"].response_modalities] == ["IMAGE"]
    assert raw["candidates"][0]["content"]["parts"][0]["inlineData"] == {
        "data": base64.b64encode(b"edited").decode("ascii"),
        "mimeType": "image/png",
    }
    assert raw["candidates"][0]["finishReason"] == "STOP"


def test_wire_shape_feeds_interpreter():
    response = _sdk_response([], finish_reason=types.FinishReason.SAFETY)
    raw = response_to_wire(response)
    assert raw == {"candidates": [{"content": {"parts": []}, "finishReason": "SAFETY"}]}
    assert interpret(raw).error.kind.value == "safety_blocked"


def test_wire_shape_keeps_text_parts():
    raw = response_to_wire(_sdk_response([types.Part(text="no")]))
    assert raw["candidates"][0]["content"]["parts"] == [{"text": "no"}]


def test_wire_shape_without_candidates():
    assert response_to_wire(types.GenerateContentResponse()) == {"candidates": []}


def test_base64_is_standard_alphabet():
    raw = response_to_wire(
        _sdk_response([types.Part(inline_data=types.Blob(data=b"\xfb\xff", mime_type="image/png"))])
    )
    assert raw["candidates"][0]["content"]["parts"][0]["inlineData"]["data"] == "+/8="


class TestInterpretsSdkDump:
    """``model_dump()`` of an SDK response is the snake_case shape."""

    def test_image_bytes_become_standard_base64(self):
        dumped = _sdk_response(
            [types.Part(inline_data=types.Blob(data=b"\xfb\xffout", mime_type="image/png"))]
        ).model_dump()
        result = interpret(dumped)
        assert isinstance(result, Success)
        assert result.value.image_data == base64.b64encode(b"\xfb\xffout").decode("ascii")
        assert result.value.mime_type == "image/png"
        assert result.value.to_bytes() == b"\xfb\xffout"

    def test_safety_enum_is_safety_block(self):
        dumped = _sdk_response([], finish_reason=types.FinishReason.SAFETY).model_dump()
        result = interpret(dumped)
        assert isinstance(result, Failure)
        assert isinstance(result.error, SafetyBlockedError)

    def test_text_only_with_stop_enum_is_no_image(self):
        dumped = _sdk_response([types.Part(text="no")]).model_dump()
        assert isinstance(interpret(dumped).error, NoImageReturnedError)

    def test_image_wins_over_safety_enum(self):
        dumped = _sdk_response(
            [types.Part(inline_data=types.Blob(data=b"out", mime_type="image/webp"))],
            finish_reason=types.FinishReason.SAFETY,
        ).model_dump()
        result = interpret(dumped)
        assert isinstance(result, Success)
        assert result.value.image_data == "b3V0"


@pytest.mark.parametrize("payload", ["not base64!", "QUJ", "QU JD"])
def test_invalid_base64_is_local_read_failure(mock_genai_client, payload):
    adapter = GeminiImageAdapter("k", client=mock_genai_client)
    with pytest.raises(FileReadError) as exc_info:
        adapter.build_contents(EditRequest.build(payload, "image/png", "add a hat"))
    assert exc_info.value.kind is ErrorKind.READ_FAILURE
    assert exc_info.value.__cause__ is not None


@pytest.mark.asyncio
async def test_invalid_base64_never_reaches_the_service(mock_genai_client):
    adapter = GeminiImageAdapter("k", client=mock_genai_client)
    with pytest.raises(FileReadError):
        await adapter.generate(EditRequest.build("@@@@", "image/png", "add a hat"))
    mock_genai_client.aio.models.generate_content.assert_not_awaited()
