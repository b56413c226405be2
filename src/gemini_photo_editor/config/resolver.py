"""Configuration resolution.

Precedence: programmatic > environment (or requested .env file) > defaults.
"""

import logging
from pathlib import Path
from typing import Any

from .schema import CredentialSettings
from .types import EditorConfig

log = logging.getLogger(__name__)


def resolve_config(
    *, env_file: str | Path | None = None, **overrides: Any
) -> EditorConfig:
    """Resolve the editor configuration once and freeze it.

    Args:
        env_file: Optional .env file to read the credential from. Process
            environment variables still take precedence over its values.
        **overrides: Programmatic values for ``EditorConfig`` fields.

    Returns:
        A frozen ``EditorConfig``. A missing credential is not an error here;
        it is reported when the pipeline is used.

    Raises:
        FileNotFoundError: If ``env_file`` is given but does not exist.
        pydantic.ValidationError: If an override has an invalid value.
    """
    if env_file is not None and not Path(env_file).exists():
        raise FileNotFoundError(f"Environment file not found: {env_file}")

    values: dict[str, Any] = {}
    if "api_key" not in overrides:
        settings = CredentialSettings(_env_file=env_file)
        values["api_key"] = settings.api_key
    values.update(overrides)

    config = EditorConfig(**values)
    log.debug("Resolved editor config: %s", config.redacted())
    return config
