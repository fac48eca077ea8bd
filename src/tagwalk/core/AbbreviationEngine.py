# tagwalk/core/AbbreviationEngine.py
"""AbbreviationEngine Module
==========================
Contract of the abbreviation engine used by the action layer, plus a small
configuration-driven implementation.

The action layer only needs to find an abbreviation before the caret and turn
it into markup. Full abbreviation grammars (nesting, siblings, multiplication)
belong to dedicated engines plugged in through the `AbbreviationEngine`
protocol. `SnippetAbbreviationEngine` covers the common cases on its own:

- snippets declared per syntax in the ``[snippets]`` config section;
- a single element with an optional id and classes, e.g. ``ul#nav.menu``.

Anything it cannot expand yields an empty string, which callers treat as
"no expansion possible".
"""

import logging
import re
from typing import Any, Optional, Protocol

from tagwalk.core.TagMatcher import VOID_ELEMENTS
from tagwalk.core.TextTransforms import pad_string, split_by_lines


ABBREVIATION_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789#.>+*:$-_!@"
)
MARKUP_SYNTAXES = frozenset(["html", "xhtml", "xml"])

_ENDS_WITH_TAG_RE = re.compile(
    r"<\/?[\w:\-]+(?:\s+[\w\-:]+(?:\s*=\s*(?:(?:\"[^\"]*\")|(?:'[^']*')|[^>\s]+))?)*\s*(\/?)>$"
)
_ELEMENT_RE = re.compile(r"^([a-zA-Z][\w:\-]*)((?:[#.][\w\-]+)*)$")
_ID_CLASS_RE = re.compile(r"([#.])([\w\-]+)")


class AbbreviationEngine(Protocol):
    """Capabilities the action layer needs from an abbreviation engine."""

    def extract_abbreviation(self, text: str) -> str:
        ...

    def expand_abbreviation(self, abbr: str, syntax: str, profile: str) -> str:
        ...

    def wrap_with_abbreviation(self, abbr: str, text: str, syntax: str, profile: str) -> str:
        ...

    def split_by_lines(self, text: str) -> list[str]:
        ...

    def get_newline(self) -> str:
        ...

    def get_variable(self, name: str) -> str:
        ...


## ================= SnippetAbbreviationEngine Class ====================
class SnippetAbbreviationEngine:
    """Expands snippets and single-element abbreviations from configuration.

    Attributes:
        config: Application configuration; the ``editor``, ``variables``,
            ``profiles`` and ``snippets`` sections are consulted.
        caret_placeholder: Marker left in generated text where the caret goes.
    """

    def __init__(self, config: Optional[dict[str, Any]] = None) -> None:
        self.config = config or {}
        editor_cfg = self.config.get("editor", {})
        self.caret_placeholder: str = editor_cfg.get("caret_placeholder", "|")

    # ---- text helpers ----
    def split_by_lines(self, text: str) -> list[str]:
        return split_by_lines(text)

    def get_newline(self) -> str:
        return self.config.get("editor", {}).get("newline", "\n")

    def get_variable(self, name: str) -> str:
        value = self.config.get("variables", {}).get(name)
        if value is None:
            logging.debug("SnippetAbbreviationEngine: variable '%s' is not defined.", name)
            return ""
        return str(value)

    # ---- abbreviation scanner ----
    def extract_abbreviation(self, text: str) -> str:
        """Returns the trailing abbreviation token of ``text``.

        Scans backward while characters may belong to an abbreviation and
        stops at the first character that may not, or at a ``>`` that closes a
        complete tag (so ``<div>ul`` yields ``ul`` and not ``>ul``).
        """
        ix = len(text) - 1
        while ix >= 0:
            ch = text[ix]
            if ch not in ABBREVIATION_CHARS:
                break
            if ch == ">" and _ENDS_WITH_TAG_RE.search(text[: ix + 1]):
                break
            ix -= 1
        return text[ix + 1:]

    # ---- expansion ----
    def expand_abbreviation(self, abbr: str, syntax: str, profile: str) -> str:
        """Expands ``abbr`` for ``syntax``; returns ``""`` if it cannot."""
        if not abbr:
            return ""
        snippet = self._lookup_snippet(abbr, syntax)
        if snippet is not None:
            return snippet
        if syntax in MARKUP_SYNTAXES:
            return self._expand_element(abbr, profile)
        logging.debug("SnippetAbbreviationEngine: no expansion for '%s' (%s).", abbr, syntax)
        return ""

    def wrap_with_abbreviation(self, abbr: str, text: str, syntax: str, profile: str) -> str:
        """Expands ``abbr`` and places ``text`` where the caret marker was."""
        expanded = self.expand_abbreviation(abbr, syntax, profile)
        if not expanded:
            return ""
        marker = self.caret_placeholder
        if marker not in expanded:
            return expanded + text

        newline = self.get_newline()
        lines = split_by_lines(text)
        if len(lines) > 1:
            indentation = self.get_variable("indentation")
            inner = newline + indentation + pad_string(newline.join(lines), indentation, newline) + newline
        else:
            inner = text
        return expanded.replace(marker, inner + marker, 1)

    def _lookup_snippet(self, abbr: str, syntax: str) -> Optional[str]:
        snippets = self.config.get("snippets", {})
        table = snippets.get(syntax, {})
        if abbr in table:
            return str(table[abbr])
        return None

    def _expand_element(self, abbr: str, profile: str) -> str:
        m = _ELEMENT_RE.match(abbr)
        if not m:
            return ""
        name = m.group(1)
        element_id = ""
        classes: list[str] = []
        for prefix, value in _ID_CLASS_RE.findall(m.group(2)):
            if prefix == "#":
                element_id = value
            else:
                classes.append(value)

        attrs = ""
        if element_id:
            attrs += f' id="{element_id}"'
        if classes:
            attrs += f' class="{" ".join(classes)}"'

        if name.lower() in VOID_ELEMENTS:
            closer = self.config.get("profiles", {}).get(profile, {}).get("self_closing_tag", "")
            return f"<{name}{attrs}{closer}>{self.caret_placeholder}"
        return f"<{name}{attrs}>{self.caret_placeholder}</{name}>"
