"""Frozen configuration consumed by the editing pipeline."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gemini_photo_editor.constants import DEFAULT_DOWNLOAD_PREFIX, DEFAULT_MODEL


class EditorConfig(BaseModel):
    """Immutable configuration, resolved once and then passed around.

    ``api_key`` may be None; components check ``is_configured`` and report
    a configuration error instead of failing later on a network call.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_key: str | None = Field(default=None, repr=False)
    model: str = Field(default=DEFAULT_MODEL, min_length=1)
    request_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Optional upper bound in seconds for the single outbound call",
    )
    download_prefix: str = Field(default=DEFAULT_DOWNLOAD_PREFIX, min_length=1)

    @field_validator("api_key", mode="before")
    @classmethod
    def blank_is_missing(cls, v: Any) -> str | None:
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @property
    def is_configured(self) -> bool:
        return self.api_key is not None

    def redacted(self) -> dict[str, Any]:
        """Summary safe for logs, with the key redacted."""
        return {
            "api_key": "<redacted>" if self.api_key else None,
            "model": self.model,
            "request_timeout": self.request_timeout,
            "download_prefix": self.download_prefix,
        }
