"""
Session intent routing.

SessionController turns user intents into calls on the capture session, the
transcript buffer and the summarization orchestrator. User-facing conditions come
back as an Advisory rather than an exception.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from core.capture import EngineFactory, SpeechCaptureSession
from core.errors import TranscriptionError
from core.summarization import SummarizationOrchestrator
from core.transcript import TranscriptBuffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Advisory:
    code: str
    message: str

    @classmethod
    def from_error(cls, error: TranscriptionError) -> "Advisory":
        return cls(code=error.code, message=error.message)


@dataclass
class SessionState:
    """Everything one session owns. Created empty; dropped when the session ends."""

    buffer: TranscriptBuffer
    capture: SpeechCaptureSession
    summarizer: SummarizationOrchestrator

    @classmethod
    def create(
        cls,
        engine_factory: EngineFactory,
        summarizer: SummarizationOrchestrator,
        metrics: Optional[Any] = None,
    ) -> "SessionState":
        buffer = TranscriptBuffer()
        capture = SpeechCaptureSession(buffer, engine_factory, metrics=metrics)
        return cls(buffer=buffer, capture=capture, summarizer=summarizer)


class SessionController:
    def __init__(self, state: SessionState, clipboard: Optional[Any] = None):
        """
        Args:
            state: Session-owned buffer, capture session and orchestrator.
            clipboard: Collaborator with write_text(text); copy is a no-op without one.
        """
        self.state = state
        self._clipboard = clipboard

    # ----- Capture -----

    def start_capture(self) -> Optional[Advisory]:
        try:
            self.state.capture.start()
        except TranscriptionError as e:
            return Advisory.from_error(e)
        return None

    def stop_capture(self) -> Optional[Advisory]:
        try:
            self.state.capture.stop()
        except TranscriptionError as e:
            return Advisory.from_error(e)
        return None

    def shutdown(self) -> None:
        self.state.capture.teardown()

    # ----- Transcript -----

    def toggle_edit(self) -> bool:
        buffer = self.state.buffer
        buffer.set_edit_mode(not buffer.editing)
        return buffer.editing

    def edit_text(self, text: str) -> bool:
        return self.state.buffer.replace(text)

    def clear_all(self) -> None:
        self.state.buffer.clear()
        self.state.buffer.set_edit_mode(False)
        self.state.summarizer.reset()
        logger.info("Transcript and summary cleared")

    def copy_transcript(self) -> bool:
        """Hand the transcript to the clipboard. Failures are logged, never raised."""
        text = self.state.buffer.text
        if not text or self._clipboard is None:
            return False
        try:
            self._clipboard.write_text(text)
        except Exception as e:
            logger.error("Failed to copy transcription: %s", e)
            return False
        return True

    # ----- Summary -----

    async def request_summary(self) -> Optional[Advisory]:
        summarizer = self.state.summarizer
        transcript = self.state.buffer.text
        try:
            generation = summarizer.submit(transcript)
        except TranscriptionError as e:
            return Advisory.from_error(e)
        await summarizer.fetch(generation, transcript)
        return None

    def snapshot(self) -> Dict[str, Any]:
        """JSON-serializable view of the session for the display layer."""
        result = self.state.summarizer.result
        return {
            "transcript": self.state.buffer.text,
            "capture_state": self.state.capture.state.value,
            "editing": self.state.buffer.editing,
            "summary_status": result.status.value,
            "summary": result.text,
            "loading": self.state.summarizer.is_loading,
        }
