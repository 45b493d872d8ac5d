"""
Live meeting transcription API.

- POST /api/summarizer: four-section meeting summary from transcript text.
- WS /ws/session: one live transcription session (capture lifecycle, transcript, summary).
- GET /metrics/session: session observability snapshot.
"""
import logging

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
import metrics.session_metrics as session_metrics
from core.summarization import SummarizationOrchestrator
from streaming.websocket_server import build_ws_session_handler
from summarizer.service import MeetingSummarizer

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

MISSING_TEXT_ERROR = "Meeting text is required in the request body."
UNKNOWN_ERROR = "An unknown error occurred while generating the meeting summary."

app = FastAPI(title="Live Meeting Transcription API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_summarizer = MeetingSummarizer(
    api_key=config.GEMINI_API_KEY,
    base_url=config.SUMMARIZER_BASE_URL,
    model=config.SUMMARIZER_MODEL,
    temperature=config.SUMMARIZER_TEMPERATURE,
)


def get_summarizer() -> MeetingSummarizer:
    return _summarizer


@app.get("/")
def health_check():
    return {
        "status": "ok",
        "message": "Live Meeting Transcription API is running",
        "summarizer_configured": bool(config.GEMINI_API_KEY),
        "model": config.SUMMARIZER_MODEL,
    }


@app.post("/api/summarizer")
async def summarize_meeting(request: Request, summarizer: MeetingSummarizer = Depends(get_summarizer)):
    try:
        body = await request.json()
        meeting_text = body.get("meetingText") if isinstance(body, dict) else None
        if not meeting_text:
            return JSONResponse({"error": MISSING_TEXT_ERROR}, status_code=400)
        summary = await summarizer.summarize(meeting_text)
        return {"summary": summary}
    except Exception as e:
        logger.exception("API Error: %s", e)
        return JSONResponse({"error": str(e) or UNKNOWN_ERROR}, status_code=500)


def _make_orchestrator() -> SummarizationOrchestrator:
    return SummarizationOrchestrator(
        endpoint_url=config.SUMMARIZER_ENDPOINT_URL,
        timeout=config.get_request_timeout(),
        metrics=session_metrics,
    )


app.websocket("/ws/session")(
    build_ws_session_handler(
        make_orchestrator=_make_orchestrator,
        get_metrics=session_metrics,
    )
)


@app.get("/metrics/session", include_in_schema=False)
def metrics_session():
    """JSON snapshot: active_sessions, no-speech restarts, capture errors, summary counts and latency."""
    return session_metrics.get_snapshot()


if __name__ == "__main__":
    uvicorn.run(app, host=config.HOST, port=config.PORT)
