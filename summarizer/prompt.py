"""
Fixed instruction template for meeting summaries.
"""
from typing import Dict, List

SYSTEM_PROMPT = (
    "You are a professional meeting summarization assistant. Your primary role is to read, "
    "analyze, and create a clear, concise, and comprehensive summary of the meeting transcript. "
    "Ensure that the summary covers the following four key sections: 1) Key Points, "
    "2) Decisions Made, 3) Action Items, and 4) Follow-Up Tasks. Avoid redundancy and repetition "
    "across these sections, ensuring each point is listed only once in the most relevant section. "
    "Focus on clarity, brevity, and precision, ensuring no critical information is omitted. "
    "Always list action items with specific deadlines and the names of responsible persons if "
    "mentioned. ONLY USE THE DATA PROVIDED IN THE MEETING TEXT. DO NOT ADD NEW INFORMATION, "
    "INTERPRET, OR MAKE ASSUMPTIONS. The summary should be written in professional language that "
    "is clear, direct, and easy for all stakeholders to understand."
)

SUMMARY_SECTIONS = ("Key Points", "Decisions Made", "Action Items", "Follow-Up Tasks")


def build_messages(meeting_text: str) -> List[Dict[str, str]]:
    """Chat messages for one summarization call."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {
            "role": "user",
            "content": (
                f"Here is the meeting text for you to summarize: {meeting_text}. "
                "Please provide a summary following the structure outlined above."
            ),
        },
    ]
