# tagwalk/core/Actions.py
"""Actions Module
==============
Named editor actions built from the tagwalk engine.

`MarkupActions` binds one editor surface, one abbreviation engine and one
tag-pair navigator (and so one cached last match) together. Every action
reads the document and selection from the editor, runs the pure engine
functions, and issues a single replace / re-caret / re-select back to the
editor. Actions return True when they changed the document, caret or
selection, and False when there was nothing to do.

Actions are registered under the camelCase names editor integrations bind to
keys (``matchPair``, ``toggleComment``, ...) and can be dispatched by name
through `MarkupActions.run`.
"""

import logging
from typing import Any, Callable, Optional, Union

from tagwalk.core.AbbreviationEngine import MARKUP_SYNTAXES, AbbreviationEngine, SnippetAbbreviationEngine
from tagwalk.core.CodeCommenter import CodeCommenter
from tagwalk.core.EditorBuffer import EditorSurface
from tagwalk.core.EditPointScanner import next_edit_point, prev_edit_point
from tagwalk.core.TagPairNavigator import TagPairNavigator
from tagwalk.core.TextTransforms import (
    extract_abbreviation,
    get_line_padding,
    merge_lines,
    narrow_to_non_space,
    pad_string,
    split_caret_placeholder,
    unindent,
)
from tagwalk.core.Types import MatchDirection


ACTION_LOGGER = logging.getLogger("tagwalk.actions")

# Registry name -> MarkupActions method name.
ACTIONS: dict[str, str] = {
    "expandAbbreviation": "expand_abbreviation",
    "expandAbbreviationWithTab": "expand_abbreviation_with_tab",
    "matchPair": "match_pair",
    "matchPairInward": "match_pair_inward",
    "matchPairOutward": "match_pair_outward",
    "wrapWithAbbreviation": "wrap_with_abbreviation",
    "prevEditPoint": "prev_edit_point",
    "nextEditPoint": "next_edit_point",
    "insertFormattedNewline": "insert_formatted_newline",
    "selectLine": "select_line",
    "goToMatchingPair": "go_to_matching_pair",
    "mergeLines": "merge_lines",
    "toggleComment": "toggle_comment",
}


## ==================== MarkupActions Class ====================
class MarkupActions:
    """Runs markup navigation and editing actions against an editor.

    Attributes:
        editor: Editor surface the actions read from and write to.
        engine: Abbreviation engine for expansion and wrapping.
        navigator: Tag-pair navigator holding the session's last match.
        commenter: Comment toggler sharing the same navigator.
        config: Application configuration.
        caret_placeholder: Caret marker expected in engine output.
    """

    def __init__(
        self,
        editor: EditorSurface,
        engine: Optional[AbbreviationEngine] = None,
        navigator: Optional[TagPairNavigator] = None,
        config: Optional[dict[str, Any]] = None,
    ) -> None:
        self.editor = editor
        self.config = config or {}
        self.engine: AbbreviationEngine = engine if engine is not None else SnippetAbbreviationEngine(self.config)
        self.navigator = navigator if navigator is not None else TagPairNavigator()
        self.commenter = CodeCommenter(editor, self.navigator, newline=self.engine.get_newline())
        self.caret_placeholder: str = self.config.get("editor", {}).get("caret_placeholder", "|")
        self.action_map = self._setup_action_map()

    def _setup_action_map(self) -> dict[str, Callable[..., bool]]:
        """Maps registry names and method names to bound action methods."""
        action_map: dict[str, Callable[..., bool]] = {}
        for action_name, method_name in ACTIONS.items():
            method = getattr(self, method_name)
            action_map[action_name] = method
            action_map[method_name] = method
        return action_map

    def run(self, name: str, *args: Any, **kwargs: Any) -> bool:
        """Runs the action registered as ``name``.

        Returns:
            The action's result, or False if ``name`` is not a known action.
        """
        action = self.action_map.get(name)
        if action is None:
            logging.warning("MarkupActions: unknown action '%s'.", name)
            return False
        result = bool(action(*args, **kwargs))
        ACTION_LOGGER.debug(
            "%s -> %s (caret=%d, selection=%s)",
            name,
            result,
            self.editor.get_caret_pos(),
            self.editor.get_selection_range().to_tuple(),
        )
        return result

    # ---- helpers ----
    def _syntax(self, syntax: Optional[str]) -> str:
        return syntax or self.editor.get_syntax()

    def _profile(self, profile_name: Optional[str]) -> str:
        return profile_name or self.editor.get_profile_name()

    def _padding(self) -> str:
        return get_line_padding(self.editor.get_current_line())

    def _insert_generated(self, text: str, start: int, end: int) -> None:
        """Replaces ``start..end`` with engine output and honours its caret marker."""
        newline = self.engine.get_newline()
        text = pad_string(text, self._padding(), newline)
        clean, caret_ix = split_caret_placeholder(text, self.caret_placeholder)
        self.editor.replace_content(clean, start, end)
        if caret_ix is not None:
            self.editor.set_caret_pos(start + caret_ix)

    # ---- abbreviations ----
    def find_abbreviation(self) -> str:
        """Returns the selected text, or the abbreviation right before the caret."""
        selection = self.editor.get_selection_range()
        content = self.editor.get_content()
        if not selection.is_empty:
            return selection.slice(content)
        line = self.editor.get_current_line_range()
        return extract_abbreviation(content, line.start, selection.start, self.engine)

    def expand_abbreviation(self, syntax: Optional[str] = None, profile_name: Optional[str] = None) -> bool:
        """Expands the abbreviation before the caret (or the selected one)."""
        syntax = self._syntax(syntax)
        profile_name = self._profile(profile_name)
        caret = self.editor.get_selection_range().end

        abbr = self.find_abbreviation()
        if not abbr:
            return False
        expanded = self.engine.expand_abbreviation(abbr, syntax, profile_name)
        if not expanded:
            logging.debug("expand_abbreviation: '%s' did not expand.", abbr)
            return False
        self._insert_generated(expanded, caret - len(abbr), caret)
        return True

    def expand_abbreviation_with_tab(
        self, syntax: Optional[str] = None, profile_name: Optional[str] = None
    ) -> bool:
        """Expands the abbreviation, or inserts one indentation unit instead."""
        if self.expand_abbreviation(syntax, profile_name):
            return True
        indentation = self.engine.get_variable("indentation")
        if not indentation:
            return False
        self.editor.replace_content(indentation, self.editor.get_caret_pos())
        return True

    def wrap_with_abbreviation(
        self, abbr: str, syntax: Optional[str] = None, profile_name: Optional[str] = None
    ) -> bool:
        """Wraps the selection, or the tag pair at the caret, with ``abbr``."""
        if not abbr:
            return False
        syntax = self._syntax(syntax)
        profile_name = self._profile(profile_name)
        content = self.editor.get_content()
        span = self.editor.get_selection_range()

        if span.is_empty:
            pair_range = self.navigator.match_pair(content, span.start)
            if pair_range is None:
                logging.debug("wrap_with_abbreviation: nothing to wrap at %d.", span.start)
                return False
            span = narrow_to_non_space(content, pair_range)

        newline = self.engine.get_newline()
        text = unindent(span.slice(content), self._padding(), newline)
        result = self.engine.wrap_with_abbreviation(abbr, text, syntax, profile_name)
        if not result:
            return False
        self.editor.set_caret_pos(span.end)
        self._insert_generated(result, span.start, span.end)
        return True

    # ---- tag pairs ----
    def match_pair(self, direction: Union[MatchDirection, str, None] = MatchDirection.OUT) -> bool:
        """Selects the next tag pair in ``direction`` (``"out"`` or ``"in"``)."""
        found = self.navigator.match_pair(
            self.editor.get_content(), self.editor.get_selection_range(), direction
        )
        if found is None:
            return False
        self.editor.create_selection(found.start, found.end)
        return True

    def match_pair_inward(self) -> bool:
        return self.match_pair(MatchDirection.IN)

    def match_pair_outward(self) -> bool:
        return self.match_pair(MatchDirection.OUT)

    def go_to_matching_pair(self) -> bool:
        """Moves the caret to the other tag of the pair it stands on."""
        target = self.navigator.go_to_matching_pair(self.editor.get_content(), self.editor.get_caret_pos())
        if target is None:
            return False
        self.editor.set_caret_pos(target)
        return True

    # ---- caret movement ----
    def prev_edit_point(self) -> bool:
        point = prev_edit_point(self.editor.get_content(), self.editor.get_caret_pos())
        if point is None:
            return False
        self.editor.set_caret_pos(point)
        return True

    def next_edit_point(self) -> bool:
        point = next_edit_point(self.editor.get_content(), self.editor.get_caret_pos())
        if point is None:
            return False
        self.editor.set_caret_pos(point)
        return True

    def select_line(self) -> bool:
        line = self.editor.get_current_line_range()
        self.editor.create_selection(line.start, line.end)
        return True

    # ---- editing ----
    def insert_formatted_newline(self, mode: Optional[str] = None) -> bool:
        """Inserts a newline; between a freshly typed tag pair, opens an indented line."""
        mode = mode or self.editor.get_syntax()
        caret = self.editor.get_caret_pos()
        newline = self.engine.get_newline()

        if mode in MARKUP_SYNTAXES:
            opening, closing = self.navigator.tags_at(self.editor.get_content(), caret)
            if (
                opening is not None
                and closing is not None
                and opening.type == "tag"
                and opening.end == caret
                and closing.start == caret
            ):
                indentation = self.engine.get_variable("indentation")
                self._insert_generated(
                    newline + indentation + self.caret_placeholder + newline, caret, caret
                )
                return True

        self.editor.replace_content(newline, caret)
        return True

    def merge_lines(self) -> bool:
        """Joins the selected lines, or the lines of the tag pair at the caret."""
        merged = merge_lines(self.editor.get_content(), self.editor.get_selection_range(), self.navigator)
        if merged is None:
            return False
        self.editor.replace_content(merged.content, merged.range.start, merged.range.end)
        selection = merged.selection
        self.editor.create_selection(selection.start, selection.end)
        return True

    def toggle_comment(self) -> bool:
        """Comments or uncomments the selection or the tag at the caret."""
        return self.commenter.perform_toggle()
