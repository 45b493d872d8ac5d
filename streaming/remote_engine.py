"""
Host-side collaborators reached over the session WebSocket.

The browser runs the actual continuous recognizer and owns the clipboard. These
adapters queue outgoing commands in an outbox that the WebSocket handler flushes
after every inbound message, and feed inbound events back to the capture session.
"""

import logging
from collections import deque
from typing import Any, Callable, Deque, Dict, Iterable, Optional

logger = logging.getLogger(__name__)

Outbox = Deque[Dict[str, Any]]


def new_outbox() -> Outbox:
    return deque()


class RemoteRecognitionEngine:
    """Recognition engine proxy: start/stop become `engine` commands for the client."""

    def __init__(self, outbox: Outbox):
        self._outbox = outbox
        self.continuous = True
        self.interim_results = False
        self.on_result: Optional[Callable[[Iterable[str]], Any]] = None
        self.on_error: Optional[Callable[[str], Any]] = None

    def _command(self, command: str) -> None:
        self._outbox.append({
            "type": "engine",
            "command": command,
            "continuous": self.continuous,
            "interim_results": self.interim_results,
        })

    def start(self) -> None:
        self._command("start")

    def stop(self) -> None:
        self._command("stop")

    def deliver_result(self, fragments: Iterable[str]) -> None:
        if self.on_result is not None:
            self.on_result(list(fragments))

    def deliver_error(self, error: str) -> None:
        if self.on_error is not None:
            self.on_error(error)


class RemoteClipboard:
    """Clipboard proxy; the client performs the actual write and logs its outcome."""

    def __init__(self, outbox: Outbox):
        self._outbox = outbox

    def write_text(self, text: str) -> None:
        self._outbox.append({"type": "clipboard", "text": text})


class RemoteEngineProvider:
    """
    Engine factory for SpeechCaptureSession.

    Returns None once the client has reported that it has no recognition support,
    which the capture session surfaces as CaptureUnavailable.
    """

    def __init__(self, outbox: Outbox):
        self._outbox = outbox
        self.recognition_supported = True
        self.engine: Optional[RemoteRecognitionEngine] = None

    def __call__(self) -> Optional[RemoteRecognitionEngine]:
        if not self.recognition_supported:
            return None
        self.engine = RemoteRecognitionEngine(self._outbox)
        return self.engine

    def deliver_result(self, fragments: Iterable[str]) -> None:
        if self.engine is None:
            logger.debug("Recognition result before any engine was started; ignored")
            return
        self.engine.deliver_result(fragments)

    def deliver_error(self, error: str) -> None:
        if self.engine is None:
            logger.debug("Recognition error %r before any engine was started; ignored", error)
            return
        self.engine.deliver_error(error)
