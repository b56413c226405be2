"""Base64 encoding of upload candidates for inline transport."""

from __future__ import annotations

import asyncio
import base64
import logging

from gemini_photo_editor.core.types import Failure, Result, Success, UploadCandidate
from gemini_photo_editor.exceptions import FileReadError

log = logging.getLogger(__name__)


def encode_bytes(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def decode_text(encoded: str) -> bytes:
    return base64.b64decode(encoded)


async def encode(candidate: UploadCandidate) -> Result[str, FileReadError]:
    """Read the candidate's full content and return it as base64 text.

    Disk reads run in a worker thread so the event loop is not blocked.
    A read failure is a local failure and is reported as ``FileReadError``,
    never as a transport error.
    """
    try:
        data = await asyncio.to_thread(candidate.read_bytes)
    except OSError as e:
        log.debug("Could not read %s: %s", candidate.name, e)
        error = FileReadError()
        error.__cause__ = e
        return Failure(error)
    return Success(encode_bytes(data))
