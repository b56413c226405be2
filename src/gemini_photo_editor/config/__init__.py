"""Configuration for the photo editor.

Resolve once with ``resolve_config()``, then pass the frozen
``EditorConfig`` to the pipeline.
"""

from .resolver import resolve_config
from .schema import CredentialSettings
from .types import EditorConfig

__all__ = ["CredentialSettings", "EditorConfig", "resolve_config"]
