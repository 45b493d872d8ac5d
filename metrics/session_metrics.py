"""
Session observability metrics.

Thread-safe counters and summary latency samples for /ws/session.
Exposed via GET /metrics/session (JSON snapshot).
"""

import threading
from collections import deque
from typing import Any, Dict

# ----- Shared state (module-level for singleton behavior) -----
_lock = threading.Lock()
_active_sessions = 0
_no_speech_restarts = 0
_capture_errors = 0
_summaries_requested = 0
_summaries_succeeded = 0
_summaries_failed = 0
_summary_latency_samples: deque = deque(maxlen=1000)


def record_session_open() -> None:
    """Call when a WebSocket session is accepted."""
    with _lock:
        global _active_sessions
        _active_sessions += 1


def record_session_close() -> None:
    """Call when a WebSocket session closes."""
    with _lock:
        global _active_sessions
        _active_sessions = max(0, _active_sessions - 1)


def record_no_speech_restart() -> None:
    with _lock:
        global _no_speech_restarts
        _no_speech_restarts += 1


def record_capture_error() -> None:
    """Unclassified engine error (capture keeps running)."""
    with _lock:
        global _capture_errors
        _capture_errors += 1


def record_summary_requested() -> None:
    with _lock:
        global _summaries_requested
        _summaries_requested += 1


def record_summary_result(success: bool, latency_ms: float) -> None:
    """Record the outcome and end-to-end latency of one summarization request."""
    with _lock:
        global _summaries_succeeded, _summaries_failed
        if success:
            _summaries_succeeded += 1
        else:
            _summaries_failed += 1
        _summary_latency_samples.append(latency_ms)


def reset() -> None:
    """Zero all counters (tests)."""
    with _lock:
        global _active_sessions, _no_speech_restarts, _capture_errors
        global _summaries_requested, _summaries_succeeded, _summaries_failed
        _active_sessions = 0
        _no_speech_restarts = 0
        _capture_errors = 0
        _summaries_requested = 0
        _summaries_succeeded = 0
        _summaries_failed = 0
        _summary_latency_samples.clear()


def get_snapshot() -> Dict[str, Any]:
    """
    Return a JSON-serializable snapshot of session metrics.
    Used by GET /metrics/session.
    """
    with _lock:
        samples = list(_summary_latency_samples)
        snapshot = {
            "active_sessions": _active_sessions,
            "no_speech_restarts": _no_speech_restarts,
            "capture_errors": _capture_errors,
            "summaries_requested": _summaries_requested,
            "summaries_succeeded": _summaries_succeeded,
            "summaries_failed": _summaries_failed,
        }
    n = len(samples)
    if n == 0:
        avg_latency_ms = None
        p95_latency_ms = None
    else:
        avg_latency_ms = round(sum(samples) / n, 2)
        sorted_s = sorted(samples)
        idx = max(0, int(0.95 * n) - 1)
        p95_latency_ms = round(sorted_s[idx], 2)
    snapshot.update({
        "avg_summary_latency_ms": avg_latency_ms,
        "p95_summary_latency_ms": p95_latency_ms,
        "summary_latency_sample_count": n,
    })
    return snapshot
