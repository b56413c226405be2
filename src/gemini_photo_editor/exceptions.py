"""Error taxonomy for the photo editing pipeline.

Every failure the pipeline can report is a ``PhotoEditorError`` subclass
tagged with an ``ErrorKind``. Core components return these inside
``Failure`` values instead of raising them, so callers can branch on
``error.kind`` and show ``error.user_message`` directly.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Stable classification of pipeline failures."""

    NOT_CONFIGURED = "not_configured"
    MISSING_INPUT = "missing_input"
    TOO_LARGE = "too_large"
    UNSUPPORTED_TYPE = "unsupported_type"
    READ_FAILURE = "read_failure"
    TRANSPORT_FAILURE = "transport_failure"
    SAFETY_BLOCKED = "safety_blocked"
    NO_IMAGE_RETURNED = "no_image_returned"
    BUSY = "busy"


class PhotoEditorError(Exception):
    """Base exception for photo editor errors"""

    kind: ErrorKind
    default_message = "An unknown error occurred."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def user_message(self) -> str:
        return str(self)


class ConfigurationError(PhotoEditorError):
    """Raised when the service credential is missing"""

    kind = ErrorKind.NOT_CONFIGURED
    default_message = (
        "GEMINI_API_KEY environment variable not set. "
        "Please configure it to use the AI features."
    )


class ValidationError(PhotoEditorError):
    """Base class for local input validation failures"""


class MissingInputError(ValidationError):
    kind = ErrorKind.MISSING_INPUT
    default_message = "Please upload an image and enter a prompt."


class FileTooLargeError(ValidationError):
    kind = ErrorKind.TOO_LARGE
    default_message = "Image size exceeds 4MB. Please choose a smaller file."


class UnsupportedTypeError(ValidationError):
    kind = ErrorKind.UNSUPPORTED_TYPE
    default_message = "Invalid file type. Please upload a PNG, JPG, or WEBP image."


class FileReadError(PhotoEditorError):
    """Raised when the candidate's content cannot be read"""

    kind = ErrorKind.READ_FAILURE
    default_message = (
        "Failed to read image file. It may be corrupted or in an unsupported format."
    )


class APIError(PhotoEditorError):
    """Wraps network and service-level failures of the outbound call"""

    kind = ErrorKind.TRANSPORT_FAILURE
    default_message = (
        "An unknown error occurred while communicating with the AI service."
    )

    @classmethod
    def from_cause(cls, cause: BaseException) -> APIError:
        """Build an APIError that surfaces the cause's message when it has one."""
        message = str(cause).strip()
        error = cls(message or None)
        error.__cause__ = cause
        return error


class GenerationError(PhotoEditorError):
    """The service answered but produced no usable image"""


class SafetyBlockedError(GenerationError):
    kind = ErrorKind.SAFETY_BLOCKED
    default_message = (
        "The request was blocked for safety reasons. "
        "Please adjust your prompt and try again."
    )


class NoImageReturnedError(GenerationError):
    kind = ErrorKind.NO_IMAGE_RETURNED
    default_message = "The AI did not return an image. Please try a different prompt."


class SessionBusyError(PhotoEditorError):
    """Raised when an operation is attempted while an edit is in flight"""

    kind = ErrorKind.BUSY
    default_message = "An edit is already in progress. Please wait for it to finish."
