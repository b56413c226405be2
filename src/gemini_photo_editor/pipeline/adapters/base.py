"""Provider adapter protocol.

Adapters perform exactly one outbound call per request and hand back the
service response as a plain mapping in the wire shape::

    {"candidates": [{"content": {"parts": [{"inlineData": {"data": ..., "mimeType": ...}}]},
                     "finishReason": "STOP"}]}

Keeping SDK objects out of the pipeline lets the interpreter be tested
with literal dictionaries.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from gemini_photo_editor.core.types import EditRequest


@runtime_checkable
class GenerationAdapter(Protocol):
    """Performs the single image-edit call against a provider."""

    async def generate(self, request: EditRequest) -> Mapping[str, Any]: ...
