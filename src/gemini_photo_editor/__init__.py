"""AI photo editing with Google Gemini.

Validate an uploaded image, send it with an editing instruction to the
Gemini image model, and get back an image ready to display or download.
"""

import importlib.metadata
import logging

from gemini_photo_editor.config import EditorConfig, resolve_config
from gemini_photo_editor.core.encoding import encode
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
from gemini_photo_editor.exceptions import (
    APIError,
    ConfigurationError,
    ErrorKind,
    FileReadError,
    FileTooLargeError,
    GenerationError,
    MissingInputError,
    NoImageReturnedError,
    PhotoEditorError,
    SafetyBlockedError,
    SessionBusyError,
    UnsupportedTypeError,
    ValidationError,
)
from gemini_photo_editor.pipeline.interpreter import interpret
from gemini_photo_editor.pipeline.orchestrator import EditOrchestrator, edit_image
from gemini_photo_editor.presentation import save_download, to_displayable, to_download
from gemini_photo_editor.session import EditorState, EditSession
from gemini_photo_editor.telemetry import TelemetryContext, TelemetryReporter

try:
    __version__ = importlib.metadata.version("gemini-photo-editor")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Library logging stays silent unless the host application configures it.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [  # noqa: RUF022
    # Session
    "EditSession",
    "EditorState",
    # Pipeline stages
    "validate",
    "candidate_from_path",
    "candidate_from_bytes",
    "encode",
    "EditOrchestrator",
    "edit_image",
    "interpret",
    "to_displayable",
    "to_download",
    "save_download",
    # Configuration
    "EditorConfig",
    "resolve_config",
    # Telemetry
    "TelemetryContext",
    "TelemetryReporter",
    # Data types
    "Success",
    "Failure",
    "Result",
    "UploadCandidate",
    "EditRequest",
    "EditedImage",
    "DisplayableImage",
    "DownloadFile",
    # Exceptions
    "ErrorKind",
    "PhotoEditorError",
    "ConfigurationError",
    "ValidationError",
    "MissingInputError",
    "FileTooLargeError",
    "UnsupportedTypeError",
    "FileReadError",
    "APIError",
    "GenerationError",
    "SafetyBlockedError",
    "NoImageReturnedError",
    "SessionBusyError",
]
