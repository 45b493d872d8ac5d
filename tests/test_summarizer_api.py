"""
Tests for POST /api/summarizer and the MeetingSummarizer provider wrapper.
The provider is mocked; no API key or network required.
Run: python3 -m unittest tests.test_summarizer_api -v
"""
import unittest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient

import main
from summarizer.prompt import SUMMARY_SECTIONS, SYSTEM_PROMPT, build_messages
from summarizer.service import NO_SUMMARY_MESSAGE, MeetingSummarizer, SummarizerNotConfigured


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class TestSummarizerEndpoint(unittest.TestCase):
    def setUp(self):
        self.fake = MagicMock()
        self.fake.summarize = AsyncMock(return_value="## Key Points\n- Ship Friday")
        main.app.dependency_overrides[main.get_summarizer] = lambda: self.fake
        self.client = TestClient(main.app)

    def tearDown(self):
        main.app.dependency_overrides.clear()

    def test_success(self):
        r = self.client.post("/api/summarizer", json={"meetingText": "We agreed to ship Friday."})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {"summary": "## Key Points\n- Ship Friday"})
        self.fake.summarize.assert_awaited_once_with("We agreed to ship Friday.")

    def test_missing_meeting_text(self):
        for body in ({}, {"meetingText": ""}, {"meetingText": None}):
            r = self.client.post("/api/summarizer", json=body)
            self.assertEqual(r.status_code, 400)
            self.assertEqual(r.json(), {"error": "Meeting text is required in the request body."})
        self.fake.summarize.assert_not_awaited()

    def test_upstream_failure_is_500_with_message(self):
        self.fake.summarize = AsyncMock(side_effect=RuntimeError("upstream timeout"))
        r = self.client.post("/api/summarizer", json={"meetingText": "text"})
        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.json(), {"error": "upstream timeout"})

    def test_invalid_json_is_500(self):
        r = self.client.post(
            "/api/summarizer",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )
        self.assertEqual(r.status_code, 500)
        self.assertIn("error", r.json())

    def test_health_and_metrics(self):
        r = self.client.get("/")
        self.assertEqual(r.json()["status"], "ok")
        snap = self.client.get("/metrics/session").json()
        for key in ("active_sessions", "no_speech_restarts", "capture_errors",
                    "summaries_requested", "summaries_failed", "p95_summary_latency_ms"):
            self.assertIn(key, snap)


class TestMeetingSummarizer(unittest.IsolatedAsyncioTestCase):
    def _summarizer(self, create):
        client = MagicMock()
        client.chat.completions.create = create
        return MeetingSummarizer(api_key="", base_url="http://x", model="m", temperature=0.6, client=client)

    async def test_returns_provider_content(self):
        create = AsyncMock(return_value=_completion("## Key Points\n..."))
        summarizer = self._summarizer(create)
        self.assertEqual(await summarizer.summarize("notes"), "## Key Points\n...")
        kwargs = create.call_args.kwargs
        self.assertEqual(kwargs["model"], "m")
        self.assertEqual(kwargs["temperature"], 0.6)
        self.assertEqual(kwargs["messages"], build_messages("notes"))

    async def test_empty_content_falls_back(self):
        summarizer = self._summarizer(AsyncMock(return_value=_completion(None)))
        self.assertEqual(await summarizer.summarize("notes"), NO_SUMMARY_MESSAGE)
        summarizer = self._summarizer(AsyncMock(return_value=SimpleNamespace(choices=[])))
        self.assertEqual(await summarizer.summarize("notes"), NO_SUMMARY_MESSAGE)

    async def test_missing_api_key(self):
        summarizer = MeetingSummarizer(api_key="", base_url="http://x", model="m")
        with self.assertRaises(SummarizerNotConfigured):
            await summarizer.summarize("notes")


class TestPrompt(unittest.TestCase):
    def test_prompt_names_all_sections(self):
        for section in SUMMARY_SECTIONS:
            self.assertIn(section, SYSTEM_PROMPT)
        self.assertIn("ONLY USE THE DATA PROVIDED", SYSTEM_PROMPT)

    def test_messages_embed_meeting_text(self):
        messages = build_messages("Alice owns QA.")
        self.assertEqual([m["role"] for m in messages], ["system", "user"])
        self.assertIn("Alice owns QA.", messages[1]["content"])


if __name__ == "__main__":
    unittest.main()
