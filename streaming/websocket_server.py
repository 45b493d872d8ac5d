"""
WebSocket server for /ws/session.

One connection is one transcription session:
- The client runs the continuous recognizer; the server tells it when to start/stop
  and receives its result/error events.
- User intents (start, stop, summarize, clear, toggle_edit, edit, copy) arrive as
  JSON messages and are routed through SessionController.
- After every message the server pushes the session snapshot ("state"), plus any
  queued engine/clipboard commands and advisories.
- Summaries run as a background task so recognition results keep flowing while the
  request is pending.
- Disconnect ends the session and tears capture down.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

from fastapi import WebSocket, WebSocketDisconnect

from core.controller import Advisory, SessionController, SessionState
from core.summarization import SummarizationOrchestrator
from streaming.remote_engine import RemoteClipboard, RemoteEngineProvider, new_outbox

logger = logging.getLogger(__name__)


def build_ws_session_handler(
    make_orchestrator: Callable[[], SummarizationOrchestrator],
    get_metrics: Optional[Any] = None,
    idle_timeout: float = 3600.0,
) -> Callable:
    """
    Build the async WebSocket handler for /ws/session.

    Args:
        make_orchestrator: Callable returning a fresh SummarizationOrchestrator per session.
        get_metrics: Optional module with record_session_open/close and the capture/summary recorders.
        idle_timeout: Seconds without any client message before the session is closed.

    Returns:
        Async function (websocket: WebSocket) -> None for use with FastAPI.
    """
    metrics = get_metrics

    async def handle_ws_session(websocket: WebSocket) -> None:
        await websocket.accept()
        if metrics and hasattr(metrics, "record_session_open"):
            metrics.record_session_open()

        outbox = new_outbox()
        engines = RemoteEngineProvider(outbox)
        state = SessionState.create(engines, make_orchestrator(), metrics=metrics)
        controller = SessionController(state, clipboard=RemoteClipboard(outbox))
        send_lock = asyncio.Lock()
        summary_tasks: List[asyncio.Task] = []

        async def flush(advisory: Optional[Advisory] = None) -> None:
            async with send_lock:
                while outbox:
                    await websocket.send_json(outbox.popleft())
                if advisory is not None:
                    await websocket.send_json({
                        "type": "advisory",
                        "code": advisory.code,
                        "message": advisory.message,
                    })
                await websocket.send_json({"type": "state", **controller.snapshot()})

        async def run_summary() -> None:
            advisory = await controller.request_summary()
            try:
                await flush(advisory)
            except (WebSocketDisconnect, RuntimeError):
                pass

        async def dispatch(message: Dict[str, Any]) -> Optional[Advisory]:
            kind = message.get("type")
            if kind == "result":
                engines.deliver_result([str(f) for f in message.get("fragments") or []])
            elif kind == "error":
                engines.deliver_error(str(message.get("error") or ""))
            elif kind == "capabilities":
                engines.recognition_supported = bool(message.get("recognition", True))
            elif kind == "start":
                return controller.start_capture()
            elif kind == "stop":
                return controller.stop_capture()
            elif kind == "summarize":
                summary_tasks[:] = [t for t in summary_tasks if not t.done()]
                summary_tasks.append(asyncio.create_task(run_summary()))
                # Let the task claim the request slot so the snapshot below shows loading.
                await asyncio.sleep(0)
            elif kind == "clear":
                controller.clear_all()
            elif kind == "toggle_edit":
                controller.toggle_edit()
            elif kind == "edit":
                controller.edit_text(str(message.get("text") or ""))
            elif kind == "copy":
                controller.copy_transcript()
            else:
                logger.debug("Unknown session message type: %r", kind)
                return Advisory(code="unknown_message", message=f"Unknown message type: {kind}")
            return None

        try:
            await flush()
            while True:
                try:
                    message = await asyncio.wait_for(websocket.receive_json(), timeout=idle_timeout)
                except asyncio.TimeoutError:
                    break
                except (ValueError, KeyError):
                    await flush(Advisory(code="invalid_message", message="Messages must be JSON objects."))
                    continue
                if not isinstance(message, dict):
                    await flush(Advisory(code="invalid_message", message="Messages must be JSON objects."))
                    continue
                advisory = await dispatch(message)
                await flush(advisory)
        except WebSocketDisconnect:
            pass
        finally:
            controller.shutdown()
            for task in summary_tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*summary_tasks, return_exceptions=True)
            if metrics and hasattr(metrics, "record_session_close"):
                metrics.record_session_close()

    return handle_ws_session
