# tagwalk/core/TagPairNavigator.py
"""TagPairNavigator Module
========================
Directional tag-pair selection on top of `TagMatcher`.

`TagPairNavigator` adds two things to the raw matcher:

- Direction. Matching "out" selects the element (or element content) around
  the caret; repeated outward calls climb towards the document root. Matching
  "in" drills from a previously selected element into its content and then
  into its first child element.
- Memory. The most recent successful match is kept in `last_match`. Inward
  movement reads it to learn which element the user selected last. The cache
  belongs to the navigator instance, so each editing session owns its own.

The navigator never edits the document; it only returns ranges and offsets.
"""

import logging
from typing import Optional, Union

from tagwalk.core.TagMatcher import TagMatcher
from tagwalk.core.Types import MatchDirection, Range, TagInfo, TagPairMatch


## ================= TagPairNavigator Class ====================
class TagPairNavigator:
    """Moves a selection between nested tag pairs.

    Attributes:
        matcher: The tag matcher used for every lookup.
        last_match: The latest successful match, or ``None``. Advisory only: if
            it no longer covers the current selection an inward request falls
            back to an outward match.
    """

    def __init__(self, matcher: Optional[TagMatcher] = None) -> None:
        self.matcher = matcher if matcher is not None else TagMatcher()
        self.last_match: Optional[TagPairMatch] = None

    def reset(self) -> None:
        """Forgets the cached match."""
        self.last_match = None

    def match_pair(
        self,
        document: str,
        selection: Union[Range, int],
        direction: Union[MatchDirection, str, None] = MatchDirection.OUT,
    ) -> Optional[Range]:
        """Returns the next tag-pair range for ``selection`` in ``direction``.

        Args:
            document: The document text.
            selection: Current selection, or a bare caret offset.
            direction: ``"out"`` (default) or ``"in"``.

        Returns:
            The range to select, or ``None`` if there is nothing to select.
        """
        span = selection if isinstance(selection, Range) else Range.caret(selection)
        if MatchDirection.parse(direction) is MatchDirection.IN and not span.is_empty:
            cached = self.last_match
            if cached is not None and cached.outer.covers(span):
                return self._match_inward(document, span, cached)
            logging.debug("TagPairNavigator: cached match does not cover %s, matching outward.", span)
        return self._match(document, span.end)

    def go_to_matching_pair(self, document: str, caret: int) -> Optional[int]:
        """Returns the caret offset at the other tag of the pair around ``caret``.

        A caret sitting right before ``<`` is treated as being inside that tag.
        Returns ``None`` for unary tags, comments, or a caret outside both tags.
        """
        probe = caret
        if 0 <= probe < len(document) and document[probe] == "<":
            probe += 1

        if self._match(document, probe) is None or self.last_match is None:
            return None

        opening, closing = self.last_match.opening, self.last_match.closing
        if closing is None:
            return None
        if opening.start <= probe <= opening.end:
            return closing.start
        if closing.start <= probe <= closing.end:
            return opening.start
        return None

    def tags_at(self, document: str, offset: int) -> tuple[Optional[TagInfo], Optional[TagInfo]]:
        """Returns the raw ``(opening, closing)`` tags at ``offset`` without caching."""
        return self.matcher.get_tags(document, offset)

    # ---- internals ----
    def _match(self, document: str, offset: int) -> Optional[Range]:
        """Runs the matcher and caches a successful result."""
        result = self.matcher.match(document, offset)
        if result is None:
            return None
        self.last_match = result
        logging.debug(
            "TagPairNavigator: matched <%s> at %d, selecting %s.",
            result.opening.name or result.opening.type,
            result.opening.start,
            result.range.to_tuple(),
        )
        return result.range

    def _match_inward(self, document: str, span: Range, cached: TagPairMatch) -> Optional[Range]:
        opening, closing = cached.opening, cached.closing
        if closing is None:
            logging.debug("TagPairNavigator: unary <%s> has no content to enter.", opening.name)
            return None

        content = Range(opening.end, closing.start)
        if span.start == opening.start:
            if opening.end < len(document) and document[opening.end] == "<":
                probe = self.matcher.match(document, opening.end + 1)
                if probe is not None and probe.range == content:
                    return self._match(document, opening.end + 1)
            return content

        child_ix = document.find("<", opening.end, closing.start)
        search_pos = child_ix + 1 if child_ix != -1 else opening.end
        return self._match(document, search_pos)
