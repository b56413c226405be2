"""Credential settings schema using Pydantic.

Only the service credential is read from the environment. Everything else
is configured programmatically through ``EditorConfig``.
"""

from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CredentialSettings(BaseSettings):
    """Pydantic settings holding the API key.

    ``GEMINI_API_KEY`` is preferred; a bare ``API_KEY`` is accepted as a
    fallback name for hosting environments that inject it that way.
    """

    model_config = SettingsConfigDict(
        env_file=None,  # Only used when explicitly requested
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY"),
        description="Google Gemini API key",
    )

    @field_validator("api_key", mode="before")
    @classmethod
    def blank_is_missing(cls, v: Any) -> str | None:
        """Treat empty or whitespace-only keys as absent."""
        if v is None:
            return None
        v = str(v).strip()
        return v or None
