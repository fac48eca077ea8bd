# tagwalk/core/EditPointScanner.py
"""EditPointScanner Module
========================
Locates "edit points": caret positions worth jumping to while editing markup.

Three kinds of landing sites are recognised:

- inside an empty attribute value: ``title="|"``
- between two adjacent tags: ``<td>|</td>``
- on a blank (empty or whitespace-only) line

The scanner walks one character at a time from the caret in the requested
direction and stops at the first landing site or at the document boundary.
"""

import logging
from typing import Optional

from tagwalk.core.Types import ScanDirection


QUOTES = ('"', "'")
LINE_TERMINATORS = ("\n", "\r")


def find_edit_point(
    document: str,
    from_offset: int,
    direction: ScanDirection = ScanDirection.FORWARD,
    offset_shift: int = 0,
) -> Optional[int]:
    """Finds the nearest edit point from ``from_offset`` in ``direction``.

    The scan origin is ``from_offset + offset_shift``. The character at the
    origin itself is never classified: each step first moves one character and
    then inspects the character at the new position.

    Args:
        document: The document text.
        from_offset: Caret offset the scan starts from.
        direction: `ScanDirection.FORWARD` or `ScanDirection.BACKWARD`.
        offset_shift: Extra displacement of the origin, used to step off an
            edit point the caret is already standing on.

    Returns:
        The edit point offset (within ``[0, len(document)]``), or ``None``.
    """
    step = int(direction)
    length = len(document)
    pos = from_offset + offset_shift

    while True:
        pos += step
        if pos < 0 or pos >= length:
            return None

        ch = document[pos]
        if ch in QUOTES:
            if pos > 0 and document[pos - 1] == "=" and pos + 1 < length and document[pos + 1] == ch:
                return pos + 1
        elif ch == ">":
            if pos + 1 < length and document[pos + 1] == "<":
                return pos + 1
        elif ch in LINE_TERMINATORS:
            if ch == "\n" and pos > 0 and document[pos - 1] == "\r":
                continue
            if _is_blank_line_before(document, pos):
                return pos


def prev_edit_point(document: str, caret: int) -> Optional[int]:
    """Returns the edit point before ``caret``.

    If the nearest point is the caret itself (the caret already stands on it),
    the search is repeated two characters further back.
    """
    point = find_edit_point(document, caret, ScanDirection.BACKWARD)
    if point == caret:
        logging.debug("prev_edit_point: already at %d, searching further back.", caret)
        point = find_edit_point(document, caret, ScanDirection.BACKWARD, -2)
    return point


def next_edit_point(document: str, caret: int) -> Optional[int]:
    """Returns the edit point after ``caret``."""
    return find_edit_point(document, caret, ScanDirection.FORWARD)


def _is_blank_line_before(document: str, terminator_ix: int) -> bool:
    """True if the line ending at ``terminator_ix`` holds only whitespace."""
    ix = terminator_ix - 1
    while ix >= 0:
        ch = document[ix]
        if ch in LINE_TERMINATORS:
            return True
        if not ch.isspace():
            return False
        ix -= 1
    return True
