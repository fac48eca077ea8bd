# tagwalk/core/EditorBuffer.py
"""EditorBuffer Module
====================
The editor surface the action layer talks to, and an in-memory implementation.

`EditorSurface` lists the only editor capabilities the engine relies on:
reading text, selection and caret, reading the current line, and replacing a
span. Any host editor can be adapted to it. `BufferEditor` keeps the document
in a plain string and is what the command-line runner and the tests use.
"""

import logging
from typing import Optional, Protocol

from tagwalk.core.Types import Range


class EditorSurface(Protocol):
    """Editor capabilities consumed by `MarkupActions`."""

    def get_content(self) -> str:
        ...

    def get_selection_range(self) -> Range:
        ...

    def create_selection(self, start: int, end: int) -> None:
        ...

    def get_caret_pos(self) -> int:
        ...

    def set_caret_pos(self, offset: int) -> None:
        ...

    def get_current_line_range(self) -> Range:
        ...

    def get_current_line(self) -> str:
        ...

    def replace_content(self, text: str, start: int, end: Optional[int] = None) -> None:
        ...

    def get_syntax(self) -> str:
        ...

    def get_profile_name(self) -> str:
        ...


## ================= BufferEditor Class ====================
class BufferEditor:
    """String-backed editor surface.

    The caret is the active end of the selection: `create_selection` puts it at
    ``end``, `set_caret_pos` collapses the selection onto it.

    Attributes:
        content: Current document text.
        syntax: Syntax name reported to the actions (``html``, ``xml``, ...).
        profile: Output profile name reported to the abbreviation engine.
        modified: True once the text has been replaced at least once.
    """

    def __init__(
        self,
        content: str = "",
        caret: int = 0,
        syntax: str = "html",
        profile: str = "xhtml",
    ) -> None:
        self.content = content
        self.syntax = syntax
        self.profile = profile
        self.modified = False
        self._selection = Range.caret(self._clamp(caret))

    def _clamp(self, offset: int) -> int:
        return max(0, min(int(offset), len(self.content)))

    # ---- text ----
    def get_content(self) -> str:
        return self.content

    def replace_content(self, text: str, start: int, end: Optional[int] = None) -> None:
        """Replaces ``start..end`` with ``text`` (inserts when ``end`` is omitted).

        The caret is left at the end of the inserted text.
        """
        start = self._clamp(start)
        end = start if end is None else self._clamp(end)
        if end < start:
            start, end = end, start
        self.content = self.content[:start] + text + self.content[end:]
        self.modified = True
        self._selection = Range.caret(start + len(text))
        logging.debug("BufferEditor: replaced %d..%d with %d chars.", start, end, len(text))

    # ---- caret & selection ----
    def get_selection_range(self) -> Range:
        return self._selection

    def create_selection(self, start: int, end: int) -> None:
        self._selection = Range(self._clamp(start), self._clamp(end))

    def get_caret_pos(self) -> int:
        return self._selection.end

    def set_caret_pos(self, offset: int) -> None:
        self._selection = Range.caret(self._clamp(offset))

    # ---- lines ----
    def get_current_line_range(self) -> Range:
        """Returns the span of the caret's line, without its line terminator."""
        caret = self.get_caret_pos()
        text = self.content
        start = caret
        while start > 0 and text[start - 1] not in "\r\n":
            start -= 1
        end = caret
        while end < len(text) and text[end] not in "\r\n":
            end += 1
        return Range(start, end)

    def get_current_line(self) -> str:
        return self.get_current_line_range().slice(self.content)

    # ---- metadata ----
    def get_syntax(self) -> str:
        return self.syntax

    def get_profile_name(self) -> str:
        return self.profile
