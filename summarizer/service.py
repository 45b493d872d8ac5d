"""
Meeting summarizer backed by an OpenAI-compatible chat-completions provider.

Serves POST /api/summarizer. The provider (Gemini through its OpenAI endpoint by
default) is configured from the environment; see config.py.
"""
import logging
from typing import Any, Optional

from openai import AsyncOpenAI

from summarizer.prompt import build_messages

logger = logging.getLogger(__name__)

NO_SUMMARY_MESSAGE = "No summary generated."


class SummarizerNotConfigured(RuntimeError):
    """Raised when no provider API key is available."""


class MeetingSummarizer:
    def __init__(
        self,
        api_key: str,
        base_url: str,
        model: str,
        temperature: float = 0.6,
        client: Optional[Any] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.model = model
        self.temperature = temperature
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            if not self.api_key:
                raise SummarizerNotConfigured("GEMINI_API_KEY is not defined in the environment variables")
            self._client = AsyncOpenAI(api_key=self.api_key, base_url=self.base_url)
        return self._client

    async def summarize(self, meeting_text: str) -> str:
        """Return the four-section summary for `meeting_text`."""
        client = self._get_client()
        response = await client.chat.completions.create(
            model=self.model,
            messages=build_messages(meeting_text),
            temperature=self.temperature,
        )
        content = None
        if response.choices:
            content = response.choices[0].message.content
        if not content:
            logger.warning("Provider returned no summary content (model=%s)", self.model)
            return NO_SUMMARY_MESSAGE
        return content
