"""
Observability for live transcription sessions.
"""

from metrics.session_metrics import (
    get_snapshot,
    record_capture_error,
    record_no_speech_restart,
    record_session_close,
    record_session_open,
    record_summary_requested,
    record_summary_result,
)

__all__ = [
    "get_snapshot",
    "record_capture_error",
    "record_no_speech_restart",
    "record_session_close",
    "record_session_open",
    "record_summary_requested",
    "record_summary_result",
]
