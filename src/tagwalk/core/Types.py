# tagwalk/core/Types.py
"""Types Module
=============
Value types shared by the tagwalk engine: offset ranges, tag metadata, tag-pair
matches and the results produced by the comment and line-merge operations.

All offsets are 0-based indexes into the document string. Every "not found"
outcome in the engine is expressed as ``None`` rather than a magic number, so
callers only need an ``is None`` check before touching the document.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional


class ScanDirection(int, Enum):
    """Step applied to the scan position by the edit-point scanner."""

    FORWARD = 1
    BACKWARD = -1


class MatchDirection(str, Enum):
    """Direction of tag-pair matching: towards the parent or into a child."""

    OUT = "out"
    IN = "in"

    @classmethod
    def parse(cls, value: "Optional[str | MatchDirection]") -> "MatchDirection":
        """Returns the direction for ``value``; unknown values mean ``OUT``."""
        if isinstance(value, MatchDirection):
            return value
        if not value:
            return cls.OUT
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.OUT


@dataclass(frozen=True)
class Range:
    """Half-open ``[start, end)`` span of a document.

    Reversed bounds are swapped and negative bounds clamped to zero, so a
    constructed range always satisfies ``0 <= start <= end``.
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        start = self._coerce(self.start, "start")
        end = self._coerce(self.end, "end")
        if end < start:
            start, end = end, start
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @staticmethod
    def _coerce(value: int, label: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Range {label} must be an integer, got {value!r}")
        return max(0, value)

    @classmethod
    def caret(cls, offset: int) -> "Range":
        """Returns an empty range sitting at ``offset``."""
        return cls(offset, offset)

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def contains(self, other: "Range") -> bool:
        """True if ``other`` lies strictly inside this range on both sides."""
        return self.start < other.start and self.end > other.end

    def covers(self, other: "Range") -> bool:
        """True if ``other`` lies inside this range, bounds included."""
        return self.start <= other.start and other.end <= self.end

    def slice(self, text: str) -> str:
        return text[self.start:self.end]

    def to_tuple(self) -> tuple[int, int]:
        return (self.start, self.end)

    def __iter__(self) -> Iterator[int]:
        yield self.start
        yield self.end


@dataclass(frozen=True)
class TagInfo:
    """One tag or comment occurrence located by the tag matcher.

    Attributes:
        type: ``"tag"`` for markup tags, ``"comment"`` for ``<!-- -->`` blocks.
        start: Offset of the opening ``<``.
        end: Offset just past the closing ``>``.
        name: Lower-cased tag name; ``None`` for comments.
        unary: True for void elements and self-closed tags.
        full_tag: Source text of the tag.
    """

    type: str
    start: int
    end: int
    name: Optional[str] = None
    unary: bool = False
    full_tag: str = ""

    @property
    def span(self) -> Range:
        return Range(self.start, self.end)

    @property
    def is_comment(self) -> bool:
        return self.type == "comment"


@dataclass(frozen=True)
class TagPairMatch:
    """Result of a tag-pair lookup.

    ``closing`` is ``None`` for unary tags and comments. ``range`` is the span
    the matcher selected for the probed offset: the whole element when the
    offset sat on one of its tags, the element content otherwise.
    """

    opening: TagInfo
    closing: Optional[TagInfo]
    range: Range

    @property
    def is_unary(self) -> bool:
        return self.closing is None

    @property
    def outer(self) -> Range:
        """Span from the opening tag's start to the closing tag's end."""
        last = self.closing if self.closing is not None else self.opening
        return Range(self.opening.start, last.end)

    @property
    def inner(self) -> Optional[Range]:
        """Span between the tags, ``None`` for unary tags."""
        if self.closing is None:
            return None
        return Range(self.opening.end, self.closing.start)


@dataclass(frozen=True)
class CommentEdit:
    """Replacement computed by the comment toggle: put ``content`` over ``range``
    and move the caret to ``caret``."""

    content: str
    range: Range
    caret: int


@dataclass(frozen=True)
class LineMerge:
    """Collapsed text that replaces ``range``; the result gets re-selected."""

    content: str
    range: Range

    @property
    def selection(self) -> Range:
        return Range(self.range.start, self.range.start + len(self.content))
