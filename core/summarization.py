"""
Single-flight summarization requests.

The orchestrator POSTs the transcript to the summarizer endpoint and maps the
outcome to a SummaryResult. Any failure (bad status, missing summary, transport
error) collapses to FALLBACK_MESSAGE; the details only go to the log.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import httpx

from core.errors import AlreadyInFlight, EmptyTranscript, NetworkFailure, UpstreamSummarizationFailure

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Failed to summarize transcription."


class SummaryStatus(str, Enum):
    EMPTY = "empty"
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class SummaryResult:
    status: SummaryStatus
    text: str = ""

    @classmethod
    def empty(cls) -> "SummaryResult":
        return cls(SummaryStatus.EMPTY)

    @classmethod
    def pending(cls) -> "SummaryResult":
        return cls(SummaryStatus.PENDING)

    @classmethod
    def ready(cls, text: str) -> "SummaryResult":
        return cls(SummaryStatus.READY, text)

    @classmethod
    def failed(cls, message: str = FALLBACK_MESSAGE) -> "SummaryResult":
        return cls(SummaryStatus.FAILED, message)


class SummarizationOrchestrator:
    """
    Coordinates at most one outstanding summarization request.

    `submit()` claims the single slot synchronously (so a second caller is rejected
    before anything is awaited); `fetch()` performs the request for that claim.
    `request_summary()` does both.
    """

    def __init__(
        self,
        endpoint_url: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
        metrics: Optional[Any] = None,
    ):
        """
        Args:
            endpoint_url: Full URL of POST /api/summarizer.
            client: Shared httpx client; a short-lived one is created per request if None.
            timeout: Transport timeout in seconds (None = no timeout).
            metrics: Optional module with record_summary_requested / record_summary_result.
        """
        self.endpoint_url = endpoint_url
        self._client = client
        self._timeout = timeout
        self._metrics = metrics
        self._result = SummaryResult.empty()
        # Bumped on every claim and reset; a response for an older generation is dropped.
        self._generation = 0
        # Set from submit() until fetch() settles, independent of the displayed result.
        self._in_flight = False

    @property
    def result(self) -> SummaryResult:
        return self._result

    @property
    def is_loading(self) -> bool:
        return self._in_flight

    def reset(self) -> None:
        """
        Back to Empty. An outstanding request is not cancelled and still holds the
        slot until it settles; its result is discarded.
        """
        self._generation += 1
        self._result = SummaryResult.empty()

    def submit(self, transcript: str) -> int:
        """Claim the request slot. Returns the claim's generation."""
        if not transcript or not transcript.strip():
            raise EmptyTranscript()
        if self._in_flight:
            raise AlreadyInFlight()
        self._in_flight = True
        self._generation += 1
        self._result = SummaryResult.pending()
        if self._metrics and hasattr(self._metrics, "record_summary_requested"):
            self._metrics.record_summary_requested()
        return self._generation

    async def fetch(self, generation: int, transcript: str) -> SummaryResult:
        """Run the request claimed by `submit` and settle the result."""
        t0 = time.perf_counter()
        outcome = SummaryResult.failed()
        try:
            summary = await self._post(transcript)
            outcome = SummaryResult.ready(summary)
        except (UpstreamSummarizationFailure, NetworkFailure) as e:
            logger.error("Error summarizing transcription: %s (%s)", e.message, e.detail)
        except Exception:
            logger.exception("Unexpected error summarizing transcription")
        finally:
            self._in_flight = False
            # Cancellation settles as Failed too.
            if generation == self._generation:
                self._result = outcome

        latency_ms = round((time.perf_counter() - t0) * 1000)
        if self._metrics and hasattr(self._metrics, "record_summary_result"):
            self._metrics.record_summary_result(outcome.status is SummaryStatus.READY, latency_ms)

        if generation != self._generation:
            logger.info("Discarding summary for a cleared transcript")
        return outcome

    async def request_summary(self, transcript: str) -> SummaryResult:
        generation = self.submit(transcript)
        return await self.fetch(generation, transcript)

    async def _post(self, transcript: str) -> str:
        payload = {"meetingText": transcript}
        try:
            if self._client is not None:
                response = await self._client.post(self.endpoint_url, json=payload)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(self.endpoint_url, json=payload)
        except httpx.HTTPError as e:
            raise NetworkFailure(detail=f"{type(e).__name__}: {e}") from e

        if not response.is_success:
            raise UpstreamSummarizationFailure(
                detail=f"HTTP {response.status_code}: {response.text[:500]}"
            )
        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamSummarizationFailure(detail=f"Invalid JSON body: {e}") from e

        summary = data.get("summary") if isinstance(data, dict) else None
        if not isinstance(summary, str) or not summary.strip():
            raise UpstreamSummarizationFailure(detail="Response has no summary field")
        return summary
