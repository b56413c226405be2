"""Provider adapters for the outbound edit call."""

from .base import GenerationAdapter
from .gemini import GeminiImageAdapter, response_to_wire

__all__ = ["GeminiImageAdapter", "GenerationAdapter", "response_to_wire"]
