"""
Real-time session layer.

- remote_engine: Recognition engine and clipboard proxies for the browser host.
- websocket_server: WebSocket handler for /ws/session (import separately to avoid pulling FastAPI).
"""

from streaming.remote_engine import (
    RemoteClipboard,
    RemoteEngineProvider,
    RemoteRecognitionEngine,
    new_outbox,
)

__all__ = [
    "RemoteClipboard",
    "RemoteEngineProvider",
    "RemoteRecognitionEngine",
    "new_outbox",
]
