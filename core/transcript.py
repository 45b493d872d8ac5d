"""
Transcript accumulator.

Recognized text is appended in delivery order; while edit mode is on the user
may overwrite the whole buffer. Nothing here touches a computed summary.
"""


class TranscriptBuffer:
    """Mutable text accumulator with an edit mode."""

    def __init__(self, text: str = ""):
        self._text = text
        self._editing = False

    @property
    def text(self) -> str:
        return self._text

    @property
    def editing(self) -> bool:
        return self._editing

    def is_empty(self) -> bool:
        return not self._text

    def append(self, text: str) -> None:
        """Append recognized text verbatim. Empty text is ignored."""
        if not text:
            return
        self._text += text

    def set_edit_mode(self, enabled: bool) -> None:
        self._editing = bool(enabled)

    def replace(self, text: str) -> bool:
        """
        Overwrite the buffer with user-edited text.

        Only effective while edit mode is on. Returns True if the replacement was applied.
        """
        if not self._editing:
            return False
        self._text = text or ""
        return True

    def clear(self) -> None:
        self._text = ""

    def __len__(self) -> int:
        return len(self._text)
