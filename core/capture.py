"""
Continuous speech capture lifecycle.

SpeechCaptureSession owns one recognition engine instance supplied by the host,
appends its results to a TranscriptBuffer in delivery order, and restarts the
same engine when it reports that no speech was detected.

States:
    idle       no engine running (initial, and after stop)
    listening  engine active and producing results
    stopped    terminal; engine released at session end
"""

import logging
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from core.errors import (
    CaptureAlreadyRunning,
    CaptureErrorKind,
    CaptureInitFailed,
    CaptureNotRunning,
    CaptureStopped,
    CaptureUnavailable,
)
from core.transcript import TranscriptBuffer

logger = logging.getLogger(__name__)


class CaptureState(str, Enum):
    IDLE = "idle"
    LISTENING = "listening"
    STOPPED = "stopped"


# Returns a recognition engine, or None when the host has no recognition capability.
EngineFactory = Callable[[], Optional[Any]]


class SpeechCaptureSession:
    """
    Lifecycle manager for one continuous-recognition engine.

    The engine is any object with `start()`, `stop()`, writable `continuous` and
    `interim_results` attributes, and `on_result` / `on_error` callback slots. It is
    acquired on the first start and reused across stop/start cycles.
    """

    def __init__(
        self,
        buffer: TranscriptBuffer,
        engine_factory: EngineFactory,
        metrics: Optional[Any] = None,
    ):
        """
        Args:
            buffer: Transcript that recognized text is appended to.
            engine_factory: Host hook returning a recognition engine (or None if unsupported).
            metrics: Optional module with record_no_speech_restart / record_capture_error.
        """
        self._buffer = buffer
        self._engine_factory = engine_factory
        self._metrics = metrics
        self._engine: Optional[Any] = None
        self._state = CaptureState.IDLE

    @property
    def state(self) -> CaptureState:
        return self._state

    @property
    def is_listening(self) -> bool:
        return self._state is CaptureState.LISTENING

    def _acquire_engine(self) -> Any:
        try:
            engine = self._engine_factory()
        except Exception as e:
            logger.error("Speech recognition engine could not be created: %s", e)
            raise CaptureInitFailed(detail=str(e)) from e
        if engine is None:
            raise CaptureUnavailable()
        engine.continuous = True
        engine.interim_results = False
        engine.on_result = self.handle_result
        engine.on_error = self.handle_error
        return engine

    def start(self) -> None:
        """Idle -> listening. Raises on unavailable/failed engine; state stays idle."""
        if self._state is CaptureState.STOPPED:
            raise CaptureStopped()
        if self._state is CaptureState.LISTENING:
            raise CaptureAlreadyRunning()

        if self._engine is None:
            self._engine = self._acquire_engine()
        try:
            self._engine.start()
        except Exception as e:
            logger.error("Speech recognition failed to start: %s", e)
            raise CaptureInitFailed(detail=str(e)) from e
        self._state = CaptureState.LISTENING
        logger.info("Speech capture started")

    def stop(self) -> None:
        """Listening -> idle. The engine is kept for the next start."""
        if self._state is CaptureState.STOPPED:
            raise CaptureStopped()
        if self._state is not CaptureState.LISTENING:
            raise CaptureNotRunning()
        self._engine.stop()
        self._state = CaptureState.IDLE
        logger.info("Speech capture stopped")

    def teardown(self) -> None:
        """Force the terminal state from anywhere and release the engine."""
        if self._state is CaptureState.STOPPED:
            return
        engine, self._engine = self._engine, None
        if engine is not None:
            try:
                engine.stop()
            except Exception as e:
                logger.warning("Error stopping recognition engine during teardown: %s", e)
            engine.on_result = None
            engine.on_error = None
        self._state = CaptureState.STOPPED
        logger.info("Speech capture torn down")

    def handle_result(self, fragments: Iterable[str]) -> str:
        """
        Append one result event to the transcript.

        The fragments are joined in the order given. Returns the appended text
        (empty if the event was ignored).
        """
        if self._state is not CaptureState.LISTENING:
            logger.debug("Ignoring recognition result while %s", self._state.value)
            return ""
        text = "".join(fragments or [])
        self._buffer.append(text)
        return text

    def handle_error(self, error: str) -> CaptureErrorKind:
        """React to an engine error: restart on no-speech, log anything else."""
        kind = CaptureErrorKind.classify(error)
        if self._state is not CaptureState.LISTENING:
            logger.debug("Ignoring recognition error %r while %s", error, self._state.value)
            return kind

        if kind is CaptureErrorKind.NO_SPEECH:
            logger.warning("No speech detected. Restarting recognition...")
            if self._metrics and hasattr(self._metrics, "record_no_speech_restart"):
                self._metrics.record_no_speech_restart()
            try:
                self._engine.start()
            except Exception as e:
                logger.error("Restart after no-speech failed: %s", e)
            return kind

        # Unclassified errors leave capture running.
        logger.error("Speech Recognition Error: %s", error)
        if self._metrics and hasattr(self._metrics, "record_capture_error"):
            self._metrics.record_capture_error()
        return kind
