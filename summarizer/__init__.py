"""
Server side of POST /api/summarizer: prompt template and provider client.
"""

from summarizer.prompt import SUMMARY_SECTIONS, SYSTEM_PROMPT, build_messages
from summarizer.service import NO_SUMMARY_MESSAGE, MeetingSummarizer, SummarizerNotConfigured

__all__ = [
    "SUMMARY_SECTIONS",
    "SYSTEM_PROMPT",
    "build_messages",
    "NO_SUMMARY_MESSAGE",
    "MeetingSummarizer",
    "SummarizerNotConfigured",
]
