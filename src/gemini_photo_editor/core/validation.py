"""Upload validation and the file selection boundary."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path

from gemini_photo_editor.constants import (
    EXTENSION_TO_MIME,
    MAX_UPLOAD_SIZE,
    SUPPORTED_MIME_TYPES,
    UNKNOWN_MIME_TYPE,
)
from gemini_photo_editor.core.types import Failure, Result, Success, UploadCandidate
from gemini_photo_editor.exceptions import (
    FileReadError,
    FileTooLargeError,
    UnsupportedTypeError,
    ValidationError,
)

log = logging.getLogger(__name__)


def guess_mime_type(path: Path) -> str:
    """Declared media type for a path, preferring our own extension table."""
    extension = path.suffix.lower()
    if extension in EXTENSION_TO_MIME:
        return EXTENSION_TO_MIME[extension]
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type or UNKNOWN_MIME_TYPE


def candidate_from_path(file_path: str | Path) -> UploadCandidate:
    """Describe a file on disk as an upload candidate without reading it.

    Raises:
        FileReadError: If the file's metadata cannot be read.
    """
    path = Path(file_path)
    try:
        if not path.is_file():
            raise FileNotFoundError(f"Path is not a file: {path}")
        size = path.stat().st_size
    except OSError as e:
        raise FileReadError() from e
    return UploadCandidate(
        name=path.name,
        mime_type=guess_mime_type(path),
        size=size,
        source=path,
    )


def candidate_from_bytes(
    data: bytes, mime_type: str, name: str = "upload"
) -> UploadCandidate:
    """Wrap in-memory content, e.g. the body of an HTTP upload."""
    return UploadCandidate(name=name, mime_type=mime_type, size=len(data), source=data)


def validate(candidate: UploadCandidate) -> Result[UploadCandidate, ValidationError]:
    """Check a candidate against the size and type constraints.

    Size is checked first, so an oversized file is reported as too large
    regardless of its media type. Only metadata already on the candidate is
    inspected; the content is never read here.

    Args:
        candidate: The file offered for editing.

    Returns:
        ``Success`` holding the unchanged candidate, or ``Failure`` holding a
        ``FileTooLargeError`` or ``UnsupportedTypeError``.
    """
    if candidate.size > MAX_UPLOAD_SIZE:
        log.debug(
            "Rejecting %s: %d bytes exceeds %d",
            candidate.name,
            candidate.size,
            MAX_UPLOAD_SIZE,
        )
        return Failure(FileTooLargeError())
    if candidate.mime_type not in SUPPORTED_MIME_TYPES:
        log.debug(
            "Rejecting %s: unsupported type %s", candidate.name, candidate.mime_type
        )
        return Failure(UnsupportedTypeError())
    return Success(candidate)
