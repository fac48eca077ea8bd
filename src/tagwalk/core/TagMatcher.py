# tagwalk/core/TagMatcher.py
"""TagMatcher Module
==================
Scanning tag-pair matcher for tag-structured markup (HTML, XHTML, XML).

Given a document and an offset, `TagMatcher` finds the innermost element
enclosing the offset (or the comment that contains it) by walking backward
for the nearest unclosed opening tag and forward for its closing partner. No
tree is built: both walks are linear scans with a small stack of tag names,
bounded by the document length, so malformed or half-typed markup simply
yields no match.

The matcher is stateless. Remembering the last match is the job of
`TagPairNavigator`.
"""

import logging
import re
from typing import Optional

from tagwalk.core.Types import Range, TagInfo, TagPairMatch


COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"

START_TAG_RE = re.compile(
    r"<([\w:\-]+)((?:\s+[\w\-:]+(?:\s*=\s*(?:(?:\"[^\"]*\")|(?:'[^']*')|[^>\s]+))?)*)\s*(/?)>"
)
END_TAG_RE = re.compile(r"</([\w:\-]+)[^>]*>")

VOID_ELEMENTS = frozenset(
    [
        "area", "base", "basefont", "br", "col", "frame", "hr", "img",
        "input", "isindex", "link", "meta", "param", "embed",
    ]
)


class TagMatcher:
    """Locates enclosing tag pairs and comments in markup text.

    Methods:
        match: Returns the `TagPairMatch` around an offset, with the selected range.
        get_tags: Returns the raw ``(opening, closing)`` tags around an offset.
        parse_tag: Parses the tag starting at a given ``<``.
    """

    def __init__(self, void_elements: Optional[frozenset[str]] = None) -> None:
        self.void_elements = void_elements if void_elements is not None else VOID_ELEMENTS

    # ---- public API ----
    def match(self, document: str, offset: int) -> Optional[TagPairMatch]:
        """Finds the element or comment around ``offset``.

        The selected range is the whole element when ``offset`` is strictly
        inside the opening tag or inside the closing tag
        (``closing.start <= offset < closing.end``), the element content
        otherwise. Unary tags and comments always select their own span.

        Returns:
            The match, or ``None`` if no enclosing tag was found.
        """
        opening, closing = self.get_tags(document, offset)
        if opening is None:
            return None
        return TagPairMatch(opening=opening, closing=closing, range=self._make_range(opening, closing, offset))

    def get_tags(self, document: str, offset: int) -> tuple[Optional[TagInfo], Optional[TagInfo]]:
        """Returns the opening and closing tag around ``offset``.

        Either element may be ``None``: ``(None, None)`` when nothing encloses
        the offset, ``(tag, None)`` for unary tags, comments and opening tags
        whose closing partner is missing.
        """
        if not document:
            return None, None
        offset = max(0, min(offset, len(document)))

        opening, closing, found = self._scan_backward(document, offset)
        if found:
            return opening, closing
        if opening is None:
            logging.debug("TagMatcher: no opening tag before offset %d.", offset)
            return None, None
        return self._scan_forward(document, offset, opening)

    def parse_tag(self, document: str, ix: int) -> Optional[TagInfo]:
        """Parses the opening or closing tag whose ``<`` is at ``ix``."""
        m = END_TAG_RE.match(document, ix)
        if m:
            return TagInfo(
                type="tag", start=ix, end=m.end(), name=m.group(1).lower(), full_tag=m.group(0)
            )
        m = START_TAG_RE.match(document, ix)
        if m:
            name = m.group(1).lower()
            return TagInfo(
                type="tag",
                start=ix,
                end=m.end(),
                name=name,
                unary=name in self.void_elements or m.group(3) == "/",
                full_tag=m.group(0),
            )
        return None

    # ---- scanning ----
    def _scan_backward(
        self, document: str, offset: int
    ) -> tuple[Optional[TagInfo], Optional[TagInfo], bool]:
        """Walks left from ``offset`` looking for the nearest unclosed opening tag.

        Returns:
            ``(opening, closing, final)``; ``final`` is True when the result is
            complete (a comment or a unary tag around the offset, or a closing
            tag around the offset together with its partner).
        """
        closed_names: list[str] = []
        closing: Optional[TagInfo] = None
        ix = offset - 1
        while ix >= 0:
            ch = document[ix]
            if ch == "-" and document.startswith(COMMENT_CLOSE, ix) and ix + len(COMMENT_CLOSE) <= offset:
                # Complete comment on the left: jump over it.
                comment_start = document.rfind(COMMENT_OPEN, 0, ix)
                if comment_start != -1:
                    ix = comment_start - 1
                    continue
            elif ch == "<":
                if document.startswith(COMMENT_OPEN, ix):
                    comment_end = self._comment_end(document, ix)
                    if comment_end == -1:
                        # Unterminated comment: the offset has no enclosing structure.
                        logging.debug("TagMatcher: comment at %d is never closed.", ix)
                        return None, None, True
                    if comment_end > offset:
                        return self._comment(document, ix, comment_end), None, True
                else:
                    tag = self.parse_tag(document, ix)
                    if tag is not None:
                        if document[ix + 1] == "/":
                            if closing is None and not closed_names and tag.start < offset < tag.end:
                                closing = tag
                            closed_names.append(tag.name or "")
                        elif tag.unary:
                            if tag.start < offset < tag.end:
                                return tag, None, True
                        elif closed_names and closed_names[-1] == tag.name:
                            closed_names.pop()
                            if closing is not None and not closed_names:
                                return tag, closing, True
                        elif closing is None:
                            return tag, None, False
            ix -= 1
        return None, None, False

    def _scan_forward(
        self, document: str, offset: int, opening: TagInfo
    ) -> tuple[Optional[TagInfo], Optional[TagInfo]]:
        """Walks right from ``offset`` looking for the partner of ``opening``."""
        open_names: list[str] = []
        length = len(document)
        ix = offset
        while ix < length:
            ch = document[ix]
            if ch == "<":
                if document.startswith(COMMENT_OPEN, ix):
                    comment_end = self._comment_end(document, ix)
                    if comment_end == -1:
                        break
                    ix = comment_end
                    continue
                tag = self.parse_tag(document, ix)
                if tag is not None:
                    if document[ix + 1] == "/":
                        if open_names and open_names[-1] == tag.name:
                            open_names.pop()
                        elif tag.name == opening.name:
                            return opening, tag
                    elif not tag.unary:
                        open_names.append(tag.name or "")
                    ix = tag.end
                    continue
            elif ch == "-" and document.startswith(COMMENT_CLOSE, ix):
                # Offset was inside a comment that opened before the opening tag.
                comment_start = document.rfind(COMMENT_OPEN, 0, ix)
                if comment_start != -1 and comment_start < offset:
                    return self._comment(document, comment_start, ix + len(COMMENT_CLOSE)), None
            ix += 1
        logging.debug("TagMatcher: no closing tag for <%s> at %d.", opening.name, opening.start)
        return opening, None

    # ---- helpers ----
    @staticmethod
    def _comment_end(document: str, start: int) -> int:
        end = document.find(COMMENT_CLOSE, start + len(COMMENT_OPEN))
        return -1 if end == -1 else end + len(COMMENT_CLOSE)

    @staticmethod
    def _comment(document: str, start: int, end: int) -> TagInfo:
        return TagInfo(type="comment", start=start, end=end, full_tag=document[start:end])

    @staticmethod
    def _make_range(opening: TagInfo, closing: Optional[TagInfo], offset: int) -> Range:
        if closing is None:
            return Range(opening.start, opening.end)
        if opening.start < offset < opening.end or closing.start <= offset < closing.end:
            return Range(opening.start, closing.end)
        return Range(opening.end, closing.start)
