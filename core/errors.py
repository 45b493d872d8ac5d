"""
Error taxonomy for capture and summarization.

Every user-facing condition carries a stable `code` and a `message` suitable for
display; the session controller turns these into advisories instead of letting
them escape to the transport layer.
"""

from enum import Enum


class CaptureErrorKind(str, Enum):
    """Classification of errors reported by the recognition engine."""

    NO_SPEECH = "no-speech"
    UNCLASSIFIED = "unclassified"

    @classmethod
    def classify(cls, raw: str) -> "CaptureErrorKind":
        """Map an engine error code (Web Speech API naming) to a kind."""
        if (raw or "").strip().lower() == cls.NO_SPEECH.value:
            return cls.NO_SPEECH
        return cls.UNCLASSIFIED


class TranscriptionError(Exception):
    """Base class for all capture/summarization errors."""

    code = "transcription_error"
    message = "Something went wrong."

    def __init__(self, message: str = "", detail: str = ""):
        super().__init__(message or self.message)
        if message:
            self.message = message
        self.detail = detail


# ----- Capture -----

class CaptureUnavailable(TranscriptionError):
    code = "capture_unavailable"
    message = "Speech Recognition is not supported in this browser."


class CaptureInitFailed(TranscriptionError):
    code = "capture_init_failed"
    message = "Speech recognition is not initialized properly."


class CaptureAlreadyRunning(TranscriptionError):
    code = "capture_already_running"
    message = "Already listening."


class CaptureNotRunning(TranscriptionError):
    code = "capture_not_running"
    message = "Not currently listening."


class CaptureStopped(TranscriptionError):
    code = "capture_stopped"
    message = "The capture session has ended."


class TransientCaptureError(TranscriptionError):
    """No speech detected; recovered by restarting the engine."""

    code = "transient_capture_error"
    message = "No speech detected."


class UnclassifiedCaptureError(TranscriptionError):
    code = "unclassified_capture_error"
    message = "Speech recognition error."


# ----- Summarization -----

class EmptyTranscript(TranscriptionError):
    code = "empty_transcript"
    message = "No transcription available to summarize."


class AlreadyInFlight(TranscriptionError):
    code = "already_in_flight"
    message = "A summary is already being generated."


class UpstreamSummarizationFailure(TranscriptionError):
    """Endpoint answered, but not with a usable summary."""

    code = "upstream_summarization_failure"
    message = "Failed to summarize transcription"


class NetworkFailure(TranscriptionError):
    code = "network_failure"
    message = "Could not reach the summarization service."
