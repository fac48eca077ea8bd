# src/tagwalk/core/__init__.py
"""Public facade for tagwalk.core: re-export main classes from CamelCase modules.

Keeps Java-like file names (TagMatcher.py, TagPairNavigator.py, ...),
but provides flat imports for convenience and stability.
"""

# Re-export classes/symbols from CamelCase modules
from .AbbreviationEngine import AbbreviationEngine, SnippetAbbreviationEngine  # noqa: F401
from .Actions import ACTIONS, MarkupActions  # noqa: F401
from .CodeCommenter import CodeCommenter, toggle_comment  # noqa: F401
from .EditorBuffer import BufferEditor, EditorSurface  # noqa: F401
from .EditPointScanner import find_edit_point, next_edit_point, prev_edit_point  # noqa: F401
from .TagMatcher import TagMatcher  # noqa: F401
from .TagPairNavigator import TagPairNavigator  # noqa: F401
from .TextTransforms import merge_lines, unindent  # noqa: F401
from .Types import (  # noqa: F401
    CommentEdit,
    LineMerge,
    MatchDirection,
    Range,
    ScanDirection,
    TagInfo,
    TagPairMatch,
)


__all__ = [
    "ACTIONS",
    "AbbreviationEngine",
    "BufferEditor",
    "CodeCommenter",
    "CommentEdit",
    "EditorSurface",
    "LineMerge",
    "MarkupActions",
    "MatchDirection",
    "Range",
    "ScanDirection",
    "SnippetAbbreviationEngine",
    "TagInfo",
    "TagMatcher",
    "TagPairMatch",
    "TagPairNavigator",
    "find_edit_point",
    "merge_lines",
    "next_edit_point",
    "prev_edit_point",
    "toggle_comment",
    "unindent",
]
