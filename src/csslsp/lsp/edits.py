"""Text edits anchored to the current word."""

from __future__ import annotations

from typing import NamedTuple

from csslsp.lsp.types import TokenSpan


class TextEdit(NamedTuple):
    """Replace ``[start, end)`` of the document with ``new_text``."""

    start: int
    end: int
    new_text: str

    @property
    def is_insertion(self) -> bool:
        return self.start == self.end


def build_edit(word: TokenSpan, insert_text: str) -> TextEdit:
    """
    Build the edit that applies a candidate.

    Args:
        word: Current word; an empty span makes the edit a pure insertion.
        insert_text: Text the candidate inserts.

    Returns:
        TextEdit spanning exactly the word range.
    """
    return TextEdit(start=word.start, end=word.end, new_text=insert_text)


def apply_edit(text: str, edit: TextEdit) -> str:
    """Return ``text`` with ``edit`` applied."""
    return text[: edit.start] + edit.new_text + text[edit.end :]
