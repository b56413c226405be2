"""Google Gen AI SDK adapter for image editing."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any

from google import genai
from google.genai import types

from gemini_photo_editor.constants import DEFAULT_MODEL, RESPONSE_MODALITY_IMAGE
from gemini_photo_editor.core.types import EditRequest
from gemini_photo_editor.exceptions import FileReadError

log = logging.getLogger(__name__)


class GeminiImageAdapter:
    """Sends an inline image plus prompt and requests an image back."""

    def __init__(
        self,
        api_key: str,
        *,
        model: str = DEFAULT_MODEL,
        client: genai.Client | None = None,
    ) -> None:
        self._model = model
        self._client = client or genai.Client(api_key=api_key)

    @property
    def model(self) -> str:
        return self._model

    def build_contents(self, request: EditRequest) -> types.Content:
        """Single user turn: the inline image first, then the instruction.

        Raises:
            FileReadError: If the image payload is not valid base64.
        """
        try:
            image_bytes = base64.b64decode(request.image_data, validate=True)
        except binascii.Error as e:
            raise FileReadError(
                "Failed to read image file. Its encoded content is invalid."
            ) from e
        return types.Content(
            role="user",
            parts=[
                types.Part(
                    inline_data=types.Blob(
                        data=image_bytes,
                        mime_type=request.media_type,
                    )
                ),
                types.Part(text=request.prompt),
            ],
        )

    async def generate(self, request: EditRequest) -> dict[str, Any]:
        log.debug(
            "Calling %s with %s image (%d base64 chars)",
            self._model,
            request.media_type,
            len(request.image_data),
        )
        response = await self._client.aio.models.generate_content(
            model=self._model,
            contents=self.build_contents(request),
            config=types.GenerateContentConfig(
                response_modalities=[RESPONSE_MODALITY_IMAGE],
            ),
        )
        return response_to_wire(response)


def response_to_wire(response: Any) -> dict[str, Any]:
    """Normalise an SDK response into the camelCase wire mapping.

    Inline bytes are re-encoded as standard base64 text so they can be
    embedded in a data URI unchanged.
    """
    candidates: list[dict[str, Any]] = []
    for candidate in getattr(response, "candidates", None) or ():
        parts: list[dict[str, Any]] = []
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or ():
            parts.append(_part_to_wire(part))
        entry: dict[str, Any] = {"content": {"parts": parts}}
        finish_reason = getattr(candidate, "finish_reason", None)
        if finish_reason is not None:
            entry["finishReason"] = getattr(finish_reason, "value", str(finish_reason))
        candidates.append(entry)
    return {"candidates": candidates}


def _part_to_wire(part: Any) -> dict[str, Any]:
    inline = getattr(part, "inline_data", None)
    if inline is not None and inline.data:
        data = inline.data
        if isinstance(data, bytes):
            data = base64.b64encode(data).decode("ascii")
        return {"inlineData": {"data": data, "mimeType": inline.mime_type}}
    text = getattr(part, "text", None)
    if text is not None:
        return {"text": text}
    return {}
