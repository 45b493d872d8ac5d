"""
Configuration via environment variables.
Load with python-dotenv; no hardcoded secrets.
"""
import os
from typing import Optional

from dotenv import load_dotenv

# Load .env if present (in production the env is usually set by the orchestrator)
load_dotenv()

# ----- Server -----
PORT = int(os.environ.get("PORT", "8000"))
HOST = os.environ.get("HOST", "0.0.0.0")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# ----- Summarization provider (OpenAI-compatible chat completions) -----
# Gemini via its OpenAI endpoint by default; any compatible base URL works.
GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY", "")
SUMMARIZER_BASE_URL = os.environ.get(
    "SUMMARIZER_BASE_URL",
    "https://generativelanguage.googleapis.com/v1beta/openai/",
)
SUMMARIZER_MODEL = os.environ.get("SUMMARIZER_MODEL", "gemini-2.0-flash")
SUMMARIZER_TEMPERATURE = float(os.environ.get("SUMMARIZER_TEMPERATURE", "0.6"))

# ----- Session -> summarizer endpoint -----
# Where live sessions POST their transcript. Defaults to this server's own /api/summarizer.
SUMMARIZER_ENDPOINT_URL = os.environ.get(
    "SUMMARIZER_ENDPOINT_URL",
    f"http://127.0.0.1:{PORT}/api/summarizer",
)
# Unset = no timeout on the session side
_timeout_raw = os.environ.get("SUMMARIZER_REQUEST_TIMEOUT", "").strip()


def get_request_timeout() -> Optional[float]:
    """Seconds, or None when SUMMARIZER_REQUEST_TIMEOUT is unset/empty."""
    if not _timeout_raw:
        return None
    return float(_timeout_raw)


# ----- CORS (production: set to specific origins) -----
CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")
def get_cors_origins() -> list:
    """Return list of allowed CORS origins from env."""
    if CORS_ORIGINS == "*":
        return ["*"]
    return [o.strip() for o in CORS_ORIGINS.split(",") if o.strip()]
