"""Pipeline values, validation and encoding."""

from gemini_photo_editor.core.encoding import decode_text, encode, encode_bytes
from gemini_photo_editor.core.types import (
    DisplayableImage,
    DownloadFile,
    EditedImage,
    EditRequest,
    Failure,
    Result,
    Success,
    UploadCandidate,
)
from gemini_photo_editor.core.validation import (
    candidate_from_bytes,
    candidate_from_path,
    validate,
)

__all__ = [  # noqa: RUF022
    "Success",
    "Failure",
    "Result",
    "UploadCandidate",
    "EditRequest",
    "EditedImage",
    "DisplayableImage",
    "DownloadFile",
    "validate",
    "candidate_from_path",
    "candidate_from_bytes",
    "encode",
    "encode_bytes",
    "decode_text",
]
