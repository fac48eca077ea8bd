# tests/conftest.py
"""Pytest configuration with shared fixtures for the tagwalk tests.

Documents in tests are usually written with a ``|`` marking the caret, e.g.
``"<p>|</p>"``; the `make_editor` fixture strips the marker and places the
caret there. A second marker turns the span between them into a selection.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable

import pytest

from tagwalk.core.Actions import MarkupActions
from tagwalk.core.EditorBuffer import BufferEditor
from tagwalk.core.TagPairNavigator import TagPairNavigator
from tagwalk.utils.utils import DEFAULT_CONFIG


def parse_caret(marked: str, marker: str = "|") -> tuple[str, int, int]:
    """Removes caret markers from ``marked``.

    Returns:
        ``(text, start, end)``; ``start == end`` when only one marker is present.
    """
    first = marked.index(marker)
    text = marked[:first] + marked[first + 1 :]
    second = text.find(marker)
    if second == -1:
        return text, first, first
    return text[:second] + text[second + 1 :], first, second


@pytest.fixture
def restore_logging():
    """Undo `setup_logging` side effects on the root and action loggers."""
    root = logging.getLogger()
    action_logger = logging.getLogger("tagwalk.actions")
    saved_root = (list(root.handlers), root.level)
    saved_action = (list(action_logger.handlers), action_logger.level, action_logger.propagate, action_logger.disabled)
    yield
    for handler in root.handlers + action_logger.handlers:
        if handler not in saved_root[0] and handler not in saved_action[0]:
            handler.close()
    root.handlers, root.level = saved_root
    action_logger.handlers, action_logger.level, action_logger.propagate, action_logger.disabled = saved_action


@pytest.fixture
def config() -> dict[str, Any]:
    """Provide a private copy of the default configuration.

    Returns:
        dict[str, Any]: Configuration dictionary safe to mutate in a test.
    """
    return copy.deepcopy(DEFAULT_CONFIG)


@pytest.fixture
def make_editor() -> Callable[..., BufferEditor]:
    """Factory building a `BufferEditor` from caret-marked text.

    Returns:
        Callable: ``make_editor(marked, syntax="html", profile="xhtml")``.
    """

    def _make(marked: str, syntax: str = "html", profile: str = "xhtml") -> BufferEditor:
        text, start, end = parse_caret(marked)
        editor = BufferEditor(text, caret=end, syntax=syntax, profile=profile)
        if start != end:
            editor.create_selection(start, end)
        return editor

    return _make


@pytest.fixture
def navigator() -> TagPairNavigator:
    """Fresh navigator with an empty match cache."""
    return TagPairNavigator()


@pytest.fixture
def make_actions(make_editor, config) -> Callable[..., MarkupActions]:
    """Factory building `MarkupActions` around a caret-marked document."""

    def _make(marked: str, syntax: str = "html", profile: str = "xhtml", engine=None) -> MarkupActions:
        return MarkupActions(make_editor(marked, syntax, profile), engine=engine, config=config)

    return _make
