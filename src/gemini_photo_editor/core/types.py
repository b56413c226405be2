"""Core data types that flow through the editing pipeline.

Each stage receives an immutable value and produces a new one, so an
upload candidate, the outbound request and the final image can never be
half-populated or mutated behind a caller's back.
"""

from __future__ import annotations

import base64
import binascii
import dataclasses
from pathlib import Path
import re
import typing

from gemini_photo_editor.constants import FALLBACK_EXTENSION

# --- Minimal guard helpers ---


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[Exception] = ValueError,
    field_name: str | None = None,
) -> None:
    """Centralized validation with optional field context for clearer errors."""
    if not condition:
        if field_name:
            raise exc(f"{field_name}: {message}")
        raise exc(message)


# --- Result type ---
# Failures are ordinary values; stages never need broad try/except blocks
# to find out whether the previous stage worked.

TSuccess = typing.TypeVar("TSuccess")
TFailure = typing.TypeVar("TFailure", bound=Exception)


@dataclasses.dataclass(frozen=True, slots=True)
class Success[TSuccess]:
    """A successful result in the pipeline."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[TFailure]:
    """A failure in the pipeline, containing the error."""

    error: TFailure


Result = Success[TSuccess] | Failure[TFailure]


# --- Pipeline values ---


@dataclasses.dataclass(frozen=True, slots=True)
class UploadCandidate:
    """A file offered for editing, before it has been accepted.

    ``source`` is either in-memory content or a path read lazily by the
    encoder. ``size`` is the declared size in bytes and is what the
    validator inspects, so a candidate can be rejected without reading it.
    """

    name: str
    mime_type: str
    size: int
    source: bytes | Path

    def __post_init__(self) -> None:
        _require(
            condition=isinstance(self.size, int) and self.size >= 0,
            message="must be a non-negative int",
            field_name="size",
            exc=TypeError,
        )
        _require(
            condition=isinstance(self.source, bytes | Path),
            message="must be bytes or Path",
            field_name="source",
            exc=TypeError,
        )

    def read_bytes(self) -> bytes:
        """Return the full binary content, reading from disk when needed."""
        if isinstance(self.source, bytes):
            return self.source
        return self.source.read_bytes()


@dataclasses.dataclass(frozen=True, slots=True)
class EditRequest:
    """Everything the service needs for one edit: image, media type, prompt."""

    image_data: str
    media_type: str
    prompt: str

    def __post_init__(self) -> None:
        _require(
            condition=bool(self.image_data),
            message="must be non-empty",
            field_name="image_data",
        )
        _require(
            condition=bool(self.media_type),
            message="must be non-empty",
            field_name="media_type",
        )
        _require(
            condition=bool(self.prompt) and self.prompt == self.prompt.strip(),
            message="must be non-empty and trimmed",
            field_name="prompt",
        )

    @classmethod
    def build(cls, image_data: str, media_type: str, prompt: str) -> EditRequest:
        """Construct a request, trimming the prompt first."""
        return cls(image_data=image_data, media_type=media_type, prompt=prompt.strip())


@dataclasses.dataclass(frozen=True, slots=True)
class EditedImage:
    """Image payload returned by the service, base64 text plus media type."""

    image_data: str
    mime_type: str

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.image_data)


_DATA_URI_MIME = re.compile(r"data:([a-zA-Z0-9]+/[a-zA-Z0-9\-.+]+).*,.*")


@dataclasses.dataclass(frozen=True, slots=True)
class DisplayableImage:
    """A URI the caller can render directly (a ``data:`` URI)."""

    uri: str

    @property
    def media_type(self) -> str | None:
        """Media type embedded in the URI, or None when it cannot be parsed."""
        match = _DATA_URI_MIME.match(self.uri)
        return match.group(1) if match else None

    @property
    def extension(self) -> str:
        media_type = self.media_type
        if not media_type:
            return FALLBACK_EXTENSION
        return media_type.split("/", 1)[1]

    def payload_bytes(self) -> bytes:
        """Decode the base64 payload after the comma.

        Raises:
            ValueError: If the URI carries no decodable base64 payload.
        """
        header, sep, payload = self.uri.partition(",")
        if not sep or not header.endswith(";base64"):
            raise ValueError("URI does not carry a base64 payload")
        try:
            return base64.b64decode(payload, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Invalid base64 payload: {e}") from e


@dataclasses.dataclass(frozen=True, slots=True)
class DownloadFile:
    """A named byte payload ready for a platform-specific save mechanism."""

    filename: str
    data: bytes
    mime_type: str | None = None
