# tagwalk/core/TextTransforms.py
"""TextTransforms Module
=====================
Low-level text utilities shared by the navigation and toggling operations.

Functions:
----------
- `split_by_lines`: Splits text on any newline convention.
- `get_line_padding`: Returns the leading whitespace run of a line.
- `unindent`: Strips a fixed padding from every line that starts with it.
- `pad_string`: Re-applies a padding after every line break.
- `merge_lines`: Collapses a multi-line span (or the tag pair at the caret) into one line.
- `extract_abbreviation`: Hands the text before the caret to the abbreviation scanner.
- `narrow_to_non_space`: Shrinks a span past its surrounding whitespace.
- `split_caret_placeholder`: Removes the caret marker from generated text.

None of these functions touch an editor; they take a document snapshot and
return new text or offsets.
"""

import logging
import re
from typing import TYPE_CHECKING, Optional, Union

from tagwalk.core.TagPairNavigator import TagPairNavigator
from tagwalk.core.Types import LineMerge, Range


if TYPE_CHECKING:
    from tagwalk.core.AbbreviationEngine import AbbreviationEngine


_NEWLINE_RE = re.compile(r"\r\n|\r|\n")
_PADDING_RE = re.compile(r"^\s+")
_WHITESPACE_RUN_RE = re.compile(r"\s{2,}")


def split_by_lines(text: str) -> list[str]:
    """Splits ``text`` into lines on ``\\r\\n``, ``\\r`` or ``\\n``.

    ``\\n\\r`` is two line breaks, the same as for the edit-point scanner and
    `BufferEditor.get_current_line_range`.

    Unlike ``str.splitlines`` a trailing newline yields a final empty line, so
    joining the result back always restores the same number of line breaks.
    """
    return _NEWLINE_RE.split(text or "")


def get_line_padding(line: str) -> str:
    """Returns the leading whitespace of ``line``, or an empty string."""
    m = _PADDING_RE.match(line or "")
    return m.group(0) if m else ""


def unindent(text: str, padding: str, newline: str = "\n") -> str:
    """Removes ``padding`` from the start of every line that begins with it.

    Args:
        text: The block to unindent.
        padding: Padding of the editor's current line (see `get_line_padding`).
        newline: String used to join the lines back together.

    Returns:
        The unindented text; the number of lines is unchanged.
    """
    lines = split_by_lines(text)
    if padding:
        lines = [line[len(padding):] if line.startswith(padding) else line for line in lines]
    return newline.join(lines)


def pad_string(text: str, padding: str, newline: str = "\n") -> str:
    """Inserts ``padding`` after every line break of ``text``."""
    if not padding:
        return text
    lines = split_by_lines(text)
    return (newline + padding).join(lines)


def merge_lines(
    document: str,
    selection: Union[Range, int],
    navigator: Optional[TagPairNavigator] = None,
) -> Optional[LineMerge]:
    """Merges the lines of a span into one.

    An empty selection is replaced by the tag pair around the caret (outward
    match, which refreshes the navigator's cached match). Continuation lines
    lose their leading whitespace, all lines are concatenated without a
    separator and the first run of two or more whitespace characters becomes a
    single space.

    Returns:
        A `LineMerge` describing the replacement, or ``None`` when there is no
        span to merge.
    """
    span = selection if isinstance(selection, Range) else Range.caret(selection)
    if span.is_empty:
        navigator = navigator or TagPairNavigator()
        pair_range = navigator.match_pair(document, span.start)
        if pair_range is None:
            logging.debug("merge_lines: no tag pair around offset %d.", span.start)
            return None
        span = pair_range

    if span.is_empty:
        return None

    lines = split_by_lines(span.slice(document))
    merged = lines[0] + "".join(line.lstrip() for line in lines[1:])
    # Only the first run is collapsed.
    merged = _WHITESPACE_RUN_RE.sub(" ", merged, count=1)
    return LineMerge(content=merged, range=span)


def extract_abbreviation(
    document: str, line_start: int, caret: int, engine: "AbbreviationEngine"
) -> str:
    """Returns the abbreviation token that ends at ``caret``, or ``""``.

    Only the text between the start of the caret's line and the caret is
    inspected; recognising the token is the abbreviation engine's job.
    """
    if caret <= line_start:
        return ""
    return engine.extract_abbreviation(document[line_start:caret]) or ""


def narrow_to_non_space(document: str, span: Range) -> Range:
    """Moves the bounds of ``span`` inward until they touch non-space characters."""
    start, end = span.start, span.end
    while start < end and document[start].isspace():
        start += 1
    while end > start and document[end - 1].isspace():
        end -= 1
    return Range(start, end)


def split_caret_placeholder(text: str, placeholder: str = "|") -> tuple[str, Optional[int]]:
    """Removes the first ``placeholder`` from ``text``.

    Returns:
        ``(clean_text, index)`` where ``index`` is the placeholder's position in
        the clean text, or ``None`` if the text had no placeholder.
    """
    if not placeholder:
        return text, None
    ix = text.find(placeholder)
    if ix == -1:
        return text, None
    return text[:ix] + text[ix + len(placeholder):], ix
