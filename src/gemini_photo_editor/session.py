"""Editing session state machine.

A session owns everything a UI needs to render one editor: the accepted
file, the prompt, the last result or error, and a single ``state`` value.
States and transitions::

    IDLE       -> VALIDATING, FAILED
    VALIDATING -> READY, FAILED
    READY      -> VALIDATING, SUBMITTING, FAILED
    SUBMITTING -> SUCCEEDED, FAILED, READY
    SUCCEEDED  -> VALIDATING, SUBMITTING, FAILED
    FAILED     -> VALIDATING, SUBMITTING, FAILED

A session without a credential starts in ``FAILED`` with a configuration
error and never leaves it. While ``SUBMITTING``, new files and new
submissions are rejected with ``SessionBusyError`` and the state is left
alone. A submission cancelled by its caller returns the session to
``READY`` with the same file and prompt.

The session is the boundary where failures are logged; the pipeline
components underneath only return them.
"""

from __future__ import annotations

from enum import Enum
import logging
from typing import TYPE_CHECKING

from gemini_photo_editor.core.encoding import encode
from gemini_photo_editor.core.types import (
    DisplayableImage,
    DownloadFile,
    Failure,
    Result,
    Success,
    UploadCandidate,
)
from gemini_photo_editor.core.validation import validate
from gemini_photo_editor.exceptions import (
    ConfigurationError,
    ErrorKind,
    MissingInputError,
    PhotoEditorError,
    SessionBusyError,
)
from gemini_photo_editor.pipeline.orchestrator import EditOrchestrator
from gemini_photo_editor.presentation import to_displayable, to_download

if TYPE_CHECKING:
    from gemini_photo_editor.config import EditorConfig
    from gemini_photo_editor.pipeline.adapters.base import GenerationAdapter

log = logging.getLogger(__name__)


class EditorState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    READY = "ready"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


_TRANSITIONS: dict[EditorState, frozenset[EditorState]] = {
    EditorState.IDLE: frozenset({EditorState.VALIDATING, EditorState.FAILED}),
    EditorState.VALIDATING: frozenset({EditorState.READY, EditorState.FAILED}),
    EditorState.READY: frozenset(
        {EditorState.VALIDATING, EditorState.SUBMITTING, EditorState.FAILED}
    ),
    EditorState.SUBMITTING: frozenset(
        {EditorState.SUCCEEDED, EditorState.FAILED, EditorState.READY}
    ),
    EditorState.SUCCEEDED: frozenset(
        {EditorState.VALIDATING, EditorState.SUBMITTING, EditorState.FAILED}
    ),
    EditorState.FAILED: frozenset(
        {EditorState.VALIDATING, EditorState.SUBMITTING, EditorState.FAILED}
    ),
}

# Failures worth an error-level log line at the boundary
_LOGGED_AS_ERROR = frozenset({ErrorKind.READ_FAILURE, ErrorKind.TRANSPORT_FAILURE})


class EditSession:
    """One user's editing flow, with single-flight submissions."""

    def __init__(
        self,
        config: EditorConfig,
        *,
        orchestrator: EditOrchestrator | None = None,
        adapter: GenerationAdapter | None = None,
    ) -> None:
        self._config = config
        self._orchestrator = orchestrator or EditOrchestrator(config, adapter=adapter)
        self._state = EditorState.IDLE
        self._candidate: UploadCandidate | None = None
        self._prompt = ""
        self._result: DisplayableImage | None = None
        self._error: PhotoEditorError | None = None

        if not config.is_configured:
            self._fail(ConfigurationError())

    # --- Read-only view for rendering ---

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def error(self) -> PhotoEditorError | None:
        return self._error

    @property
    def failure_kind(self) -> ErrorKind | None:
        return self._error.kind if self._error is not None else None

    @property
    def candidate(self) -> UploadCandidate | None:
        return self._candidate

    @property
    def prompt(self) -> str:
        return self._prompt

    @property
    def result(self) -> DisplayableImage | None:
        return self._result

    @property
    def available(self) -> bool:
        """False when the feature is unusable until configuration is fixed."""
        return self.failure_kind is not ErrorKind.NOT_CONFIGURED

    @property
    def is_busy(self) -> bool:
        return self._state in (EditorState.VALIDATING, EditorState.SUBMITTING)

    @property
    def can_submit(self) -> bool:
        return (
            self.available
            and not self.is_busy
            and self._candidate is not None
            and bool(self._prompt.strip())
        )

    # --- Operations ---

    def set_prompt(self, prompt: str) -> None:
        self._prompt = prompt

    def select_file(
        self, candidate: UploadCandidate
    ) -> Result[UploadCandidate, PhotoEditorError]:
        """Replace the current file, clearing any previous result or error."""
        blocked = self._blocked()
        if blocked is not None:
            return Failure(blocked)

        self._transition(EditorState.VALIDATING)
        self._candidate = None
        self._result = None
        self._error = None

        outcome = validate(candidate)
        if isinstance(outcome, Failure):
            self._fail(outcome.error)
            return outcome

        self._candidate = outcome.value
        self._transition(EditorState.READY)
        log.info(
            "Accepted %s (%s, %d bytes)",
            candidate.name,
            candidate.mime_type,
            candidate.size,
        )
        return outcome

    async def submit(self) -> Result[DisplayableImage, PhotoEditorError]:
        """Encode the current file, send it with the prompt, record the outcome."""
        blocked = self._blocked()
        if blocked is not None:
            return Failure(blocked)

        candidate = self._candidate
        if candidate is None or not self._prompt.strip():
            error = MissingInputError()
            self._fail(error)
            return Failure(error)

        self._transition(EditorState.SUBMITTING)
        self._result = None
        self._error = None

        try:
            encoded = await encode(candidate)
            if isinstance(encoded, Failure):
                self._fail(encoded.error)
                return encoded

            outcome = await self._orchestrator.submit(
                encoded.value, candidate.mime_type, self._prompt
            )
        except BaseException:
            # Cancelled or crashed mid-flight: release the slot, keep the file
            if self._state is EditorState.SUBMITTING:
                log.info("Edit abandoned before completion")
                self._transition(EditorState.READY)
            raise

        if isinstance(outcome, Failure):
            self._fail(outcome.error)
            return outcome

        self._result = to_displayable(outcome.value)
        self._transition(EditorState.SUCCEEDED)
        log.info("Edit succeeded (%s)", outcome.value.mime_type)
        return Success(self._result)

    def download(self) -> DownloadFile:
        """The current result as a named file.

        Raises:
            RuntimeError: If there is no successful result to download.
        """
        if self._state is not EditorState.SUCCEEDED or self._result is None:
            raise RuntimeError("No edited image available to download")
        return to_download(self._result, prefix=self._config.download_prefix)

    # --- Internal helpers ---

    def _blocked(self) -> PhotoEditorError | None:
        if not self.available:
            return self._error
        if self.is_busy:
            return SessionBusyError()
        return None

    def _transition(self, target: EditorState) -> None:
        if target not in _TRANSITIONS[self._state]:
            raise RuntimeError(
                f"Illegal transition {self._state.value} -> {target.value}"
            )
        log.debug("Session %s -> %s", self._state.value, target.value)
        self._state = target

    def _fail(self, error: PhotoEditorError) -> None:
        self._transition(EditorState.FAILED)
        self._error = error
        if error.kind in _LOGGED_AS_ERROR:
            log.error(
                "Edit failed (%s): %s",
                error.kind.value,
                error,
                exc_info=error.__cause__,
            )
        elif error.kind is ErrorKind.NOT_CONFIGURED:
            log.warning("Photo editing unavailable: %s", error)
        else:
            log.info("Edit not completed (%s): %s", error.kind.value, error)
