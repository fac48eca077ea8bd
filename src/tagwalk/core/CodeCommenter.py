# tagwalk/core/CodeCommenter.py
"""CodeCommenter Module
====================
Toggles markup comments (``<!-- ... -->``) around a selection or around the
tag pair at the caret.

Key Features:
-------------
- Implicit selection: with nothing selected, the tag (or tag pair) under the
  caret becomes the target.
- Containment detection: a tag that already lives inside a comment is
  uncommented as a whole instead of receiving a nested comment.
- No nested markers: comment markers already inside a selection are dropped
  before the selection is wrapped.
- Stable indentation: the replacement is unindented by the current line's
  padding, so toggling repeatedly does not accumulate leading whitespace.

Only tag-structured syntaxes (html, xhtml, xml) are handled; for any other
syntax the toggle is a no-op.

Functions / Classes:
--------------------
- `toggle_comment`: Pure computation of the replacement for one toggle.
- `CodeCommenter`: Applies `toggle_comment` results to an editor surface.
"""

import logging
import re
from typing import TYPE_CHECKING, Optional, Union

from tagwalk.core.TagPairNavigator import TagPairNavigator
from tagwalk.core.TextTransforms import get_line_padding, unindent
from tagwalk.core.Types import CommentEdit, Range


if TYPE_CHECKING:
    from tagwalk.core.EditorBuffer import EditorSurface


COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"
COMMENTABLE_SYNTAXES = frozenset(["html", "xhtml", "xml"])

_LEADING_MARKER_RE = re.compile(r"^<!--\s*")
_TRAILING_MARKER_RE = re.compile(r"\s*-->$")
_INNER_MARKERS_RE = re.compile(r"<!--\s+|\s+-->")


def toggle_comment(
    document: str,
    selection: Union[Range, int],
    caret: int,
    padding: str = "",
    newline: str = "\n",
    navigator: Optional[TagPairNavigator] = None,
    syntax: str = "html",
) -> Optional[CommentEdit]:
    """Computes the edit that comments or uncomments a span.

    Args:
        document: The document text.
        selection: Selected range; an empty range (or bare offset) means
            "use the tag at the caret".
        caret: Current caret offset, shifted along with the inserted or
            removed leading marker.
        padding: Padding of the caret's line, removed from the replacement.
        newline: Line separator for the replacement.
        navigator: Navigator used for the implicit-selection lookup.
        syntax: Document syntax; anything but html/xhtml/xml is a no-op.

    Returns:
        The `CommentEdit` to apply, or ``None`` when nothing can be toggled.
    """
    if syntax not in COMMENTABLE_SYNTAXES:
        logging.debug("toggle_comment: syntax '%s' is not handled.", syntax)
        return None

    span = selection if isinstance(selection, Range) else Range.caret(selection)
    if span.is_empty:
        navigator = navigator or TagPairNavigator()
        opening, closing = navigator.tags_at(document, caret)
        if opening is None:
            logging.debug("toggle_comment: no tag at offset %d.", caret)
            return None
        span = Range(opening.start, (closing or opening).end)
        if span.is_empty:
            return None

    if document.startswith(COMMENT_OPEN, span.start):
        content, caret = _remove_comment(span.slice(document), caret)
    else:
        comment = _find_enclosing_comment(document, span)
        if comment is not None:
            # The span is inside a comment: uncomment the whole comment.
            span = comment
            content, caret = _remove_comment(span.slice(document), caret)
        else:
            inner = _INNER_MARKERS_RE.sub("", span.slice(document))
            content = f"{COMMENT_OPEN} {inner} {COMMENT_CLOSE}"
            caret += len(COMMENT_OPEN) + 1

    return CommentEdit(content=unindent(content, padding, newline), range=span, caret=caret)


def _remove_comment(text: str, caret: int) -> tuple[str, int]:
    """Strips the comment markers of ``text``; the caret follows the leading one."""
    m = _LEADING_MARKER_RE.match(text)
    if m:
        caret -= len(m.group(0))
        text = text[m.end():]
    return _TRAILING_MARKER_RE.sub("", text), caret


def _find_enclosing_comment(document: str, span: Range) -> Optional[Range]:
    """Returns the comment that strictly contains ``span``, if any.

    Scans backward from the span start for a comment opener that has not been
    closed yet (meeting a closer first means the span is outside any comment),
    then forward from that opener for its closer.
    """
    comment_start = -1
    ix = span.start - 1
    while ix >= 0:
        if document.startswith(COMMENT_OPEN, ix):
            comment_start = ix
            break
        if document.startswith(COMMENT_CLOSE, ix) and ix + len(COMMENT_CLOSE) <= span.start:
            return None
        ix -= 1
    if comment_start == -1:
        return None

    close_ix = document.find(COMMENT_CLOSE, comment_start + len(COMMENT_OPEN))
    if close_ix == -1:
        logging.debug("toggle_comment: comment at %d is never closed.", comment_start)
        return None

    comment = Range(comment_start, close_ix + len(COMMENT_CLOSE))
    return comment if comment.contains(span) else None


## ================= CodeCommenter Class ====================
class CodeCommenter:
    """Applies comment toggles to an editor surface.

    Attributes:
        editor: The editor surface providing text, selection and caret.
        navigator: Tag-pair navigator shared with the other actions, so the
            implicit-selection lookup sees the same document model.
        newline: Line separator used when rebuilding the replacement.
    """

    def __init__(
        self,
        editor: "EditorSurface",
        navigator: Optional[TagPairNavigator] = None,
        newline: str = "\n",
    ) -> None:
        self.editor = editor
        self.navigator = navigator if navigator is not None else TagPairNavigator()
        self.newline = newline

    def perform_toggle(self) -> bool:
        """Toggles a comment on the current selection or the tag at the caret.

        Returns:
            True if the document was changed, False for a no-op.
        """
        content = self.editor.get_content()
        edit = toggle_comment(
            content,
            self.editor.get_selection_range(),
            self.editor.get_caret_pos(),
            padding=get_line_padding(self.editor.get_current_line()),
            newline=self.newline,
            navigator=self.navigator,
            syntax=self.editor.get_syntax(),
        )
        if edit is None:
            return False

        self.editor.set_caret_pos(edit.range.start)
        self.editor.replace_content(edit.content, edit.range.start, edit.range.end)
        self.editor.set_caret_pos(edit.caret)
        logging.debug("CodeCommenter: replaced %s, caret now %d.", edit.range.to_tuple(), edit.caret)
        return True
