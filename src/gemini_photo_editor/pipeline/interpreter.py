"""Interpretation of the service response.

Checks run in a fixed order and the first match wins:

1. An image payload in the first candidate's first part is a success,
   whatever else the response says.
2. Otherwise a ``SAFETY`` finish reason on the first candidate is reported
   as a safety block.
3. Otherwise the service produced nothing usable.

Swapping 2 and 3, or letting metadata override real image data, changes
the message a user sees for the same response.
"""

from __future__ import annotations

import base64
from collections.abc import Mapping, Sequence
import logging
from typing import Any

from gemini_photo_editor.constants import SAFETY_FINISH_REASON
from gemini_photo_editor.core.types import EditedImage, Failure, Result, Success
from gemini_photo_editor.exceptions import (
    GenerationError,
    NoImageReturnedError,
    SafetyBlockedError,
)

log = logging.getLogger(__name__)


def _field(obj: Any, camel: str, snake: str) -> Any:
    """Read a key in either wire (camelCase) or SDK (snake_case) spelling."""
    if not isinstance(obj, Mapping):
        return None
    value = obj.get(camel)
    return value if value is not None else obj.get(snake)


def _first(seq: Any) -> Any:
    if isinstance(seq, Sequence) and not isinstance(seq, str | bytes) and seq:
        return seq[0]
    return None


def _first_candidate(response: Mapping[str, Any]) -> Any:
    return _first(response.get("candidates"))


def _inline_image(candidate: Any) -> EditedImage | None:
    content = _field(candidate, "content", "content")
    first_part = _first(_field(content, "parts", "parts"))
    inline = _field(first_part, "inlineData", "inline_data")
    if inline is None:
        return None
    data = _field(inline, "data", "data")
    mime_type = _field(inline, "mimeType", "mime_type")
    if not data or not mime_type:
        return None
    if isinstance(data, bytes):
        # SDK dumps carry raw bytes; the wire shape carries base64 text
        data = base64.b64encode(data).decode("ascii")
    return EditedImage(image_data=str(data), mime_type=str(mime_type))


def _is_safety_block(candidate: Any) -> bool:
    reason = _field(candidate, "finishReason", "finish_reason")
    if reason is None:
        return False
    return str(getattr(reason, "value", reason)).upper() == SAFETY_FINISH_REASON


def interpret(response: Mapping[str, Any]) -> Result[EditedImage, GenerationError]:
    """Resolve a raw service response into an image or a classified failure."""
    candidate = _first_candidate(response)

    image = _inline_image(candidate)
    if image is not None:
        return Success(image)

    if _is_safety_block(candidate):
        log.debug("Response blocked for safety reasons")
        return Failure(SafetyBlockedError())

    log.debug("Response carried no image and no safety signal")
    return Failure(NoImageReturnedError())
