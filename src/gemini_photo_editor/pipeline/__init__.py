"""Request orchestration and response interpretation."""

from gemini_photo_editor.pipeline.interpreter import interpret
from gemini_photo_editor.pipeline.orchestrator import EditOrchestrator, edit_image

__all__ = ["EditOrchestrator", "edit_image", "interpret"]
