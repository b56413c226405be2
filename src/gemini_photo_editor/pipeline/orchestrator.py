"""Edit request orchestration.

Combines an encoded image, its media type and a prompt into one request,
performs exactly one provider call, and resolves the outcome into an
``EditedImage`` or a classified error. No retries, no streaming, and no
per-request state outside the returned value.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
import logging
from typing import TYPE_CHECKING, Any

from gemini_photo_editor.core.types import (
    EditedImage,
    EditRequest,
    Failure,
    Result,
    Success,
)
from gemini_photo_editor.exceptions import (
    APIError,
    ConfigurationError,
    MissingInputError,
    PhotoEditorError,
)
from gemini_photo_editor.pipeline.interpreter import interpret
from gemini_photo_editor.telemetry import TelemetryContext

if TYPE_CHECKING:
    from collections.abc import Callable

    from gemini_photo_editor.config import EditorConfig
    from gemini_photo_editor.pipeline.adapters.base import GenerationAdapter
    from gemini_photo_editor.telemetry import TelemetryContextProtocol

log = logging.getLogger(__name__)

# --- Telemetry scopes ---
T_EDIT_SUBMIT = "edit.submit"
T_EDIT_GENERATE = "edit.generate"
T_EDIT_FAILURE = "edit.failure"


def _default_adapter_factory(config: EditorConfig) -> GenerationAdapter:
    from gemini_photo_editor.pipeline.adapters.gemini import GeminiImageAdapter

    return GeminiImageAdapter(str(config.api_key), model=config.model)


class EditOrchestrator:
    """Runs one image edit against the configured provider.

    The provider adapter is injected explicitly via ``adapter`` or built
    lazily by ``adapter_factory`` (the Google Gen AI adapter by default),
    and only once a credential is known to be present. A built adapter is
    kept for later submits so its client connection is reused; it carries
    no per-request data, and each submit still yields exactly one result.
    """

    def __init__(
        self,
        config: EditorConfig,
        *,
        adapter: GenerationAdapter | None = None,
        adapter_factory: Callable[[EditorConfig], GenerationAdapter] | None = None,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> None:
        self._config = config
        self._adapter = adapter
        self._adapter_factory = adapter_factory or _default_adapter_factory
        self._telemetry: TelemetryContextProtocol = telemetry or TelemetryContext()

    @property
    def config(self) -> EditorConfig:
        return self._config

    async def submit(
        self, encoded_image: str, media_type: str, prompt: str
    ) -> Result[EditedImage, PhotoEditorError]:
        """Submit one edit and await its single outcome.

        A missing credential is checked before anything else and fails
        without touching the network.

        Args:
            encoded_image: Base64 text of the source image.
            media_type: Declared media type of the source image.
            prompt: Editing instruction; surrounding whitespace is trimmed.

        Returns:
            ``Success`` with the edited image, or ``Failure`` with a
            ``ConfigurationError``, ``MissingInputError``, ``APIError``,
            ``SafetyBlockedError`` or ``NoImageReturnedError``. A payload that
            is not valid base64 fails locally with ``FileReadError``.
        """
        result = await self._submit(encoded_image, media_type, prompt)
        if isinstance(result, Failure):
            self._telemetry.count(T_EDIT_FAILURE, kind=result.error.kind.value)
        return result

    async def _submit(
        self, encoded_image: str, media_type: str, prompt: str
    ) -> Result[EditedImage, PhotoEditorError]:
        if not self._config.is_configured:
            return Failure(ConfigurationError())
        if not encoded_image or not media_type or not prompt.strip():
            return Failure(MissingInputError())

        request = EditRequest.build(encoded_image, media_type, prompt)
        with self._telemetry(T_EDIT_SUBMIT, model=self._config.model):
            try:
                adapter = self._select_adapter()
                with self._telemetry(T_EDIT_GENERATE):
                    raw = await self._call_once(adapter, request)
            except PhotoEditorError as e:
                return Failure(e)
            except Exception as e:
                log.debug("Provider call failed: %s", e)
                return Failure(APIError.from_cause(e))

            if not isinstance(raw, Mapping):
                return Failure(
                    APIError(
                        f"Malformed response from the AI service: "
                        f"expected a mapping, got {type(raw).__name__}"
                    )
                )
            return interpret(raw)

    # --- Internal helpers ---

    def _select_adapter(self) -> GenerationAdapter:
        if self._adapter is None:
            self._adapter = self._adapter_factory(self._config)
        return self._adapter

    async def _call_once(
        self, adapter: GenerationAdapter, request: EditRequest
    ) -> Mapping[str, Any]:
        timeout = self._config.request_timeout
        if timeout is None:
            return await adapter.generate(request)
        try:
            return await asyncio.wait_for(adapter.generate(request), timeout)
        except TimeoutError as e:
            raise APIError(
                f"The AI service did not respond within {timeout:g} seconds."
            ) from e


async def edit_image(
    config: EditorConfig,
    encoded_image: str,
    media_type: str,
    prompt: str,
    *,
    adapter: GenerationAdapter | None = None,
) -> Result[EditedImage, PhotoEditorError]:
    """One-shot convenience wrapper around ``EditOrchestrator.submit``."""
    orchestrator = EditOrchestrator(config, adapter=adapter)
    return await orchestrator.submit(encoded_image, media_type, prompt)
