# tagwalk/utils/utils.py
"""
tagwalk.utils.utils.py
======================

Core utility functions for tagwalk.

Key functionalities include:
- Configuration: a hardcoded default configuration recursively merged with the
  user's ``~/.config/tagwalk/config.toml`` (or an explicit TOML file).
- Syntax detection: resolves the markup syntax of a file from the configured
  extension table, then from Pygments lexers, then from the configured default.
- File reading: decodes documents with a chardet-guided list of encodings.
- Caret reporting: converts an offset into a 1-based line and display column.

The application always runs on the embedded defaults, even if the user
configuration file is missing or corrupted.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import chardet
import toml
from pygments.lexers import get_lexer_for_filename, guess_lexer
from pygments.util import ClassNotFound
from wcwidth import wcswidth

logger = logging.getLogger("tagwalk")

USER_CONFIG_PATH = Path.home() / ".config" / "tagwalk" / "config.toml"

# Direct, hardcoded representation of the shipped `config.toml`.
DEFAULT_CONFIG: Dict[str, Any] = {
    "editor": {
        "syntax": "html",
        "profile": "xhtml",
        "newline": "\n",
        "caret_placeholder": "|",
    },
    "variables": {"indentation": "\t"},
    "profiles": {
        "html": {"self_closing_tag": ""},
        "xhtml": {"self_closing_tag": " /"},
        "xml": {"self_closing_tag": "/"},
    },
    "snippets": {
        "html": {
            "cc:ie": "<!--[if IE]>\n\t|\n<![endif]-->",
            "cc:noie": "<!--[if !IE]><!-->\n\t|\n<!--<![endif]-->",
            "html:5": "<!DOCTYPE html>\n<html lang=\"en\">\n<head>\n\t<meta charset=\"UTF-8\">\n"
                      "\t<title></title>\n</head>\n<body>\n\t|\n</body>\n</html>",
        },
        "xhtml": {
            "cc:ie": "<!--[if IE]>\n\t|\n<![endif]-->",
        },
        "xml": {
            "xml:decl": "<?xml version=\"1.0\" encoding=\"UTF-8\"?>|",
        },
    },
    "supported_formats": {
        "html": ["html", "htm", "shtml"],
        "xhtml": ["xhtml", "xht"],
        "xml": ["xml", "xsd", "xsl", "xslt", "svg", "rss", "atom", "plist"],
        "css": ["css"],
    },
    "logging": {
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": True,
        "separate_error_log": False,
    },
}


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Loads the embedded defaults and merges a TOML file over them.

    Args:
        config_path: TOML file to merge; defaults to ``~/.config/tagwalk/config.toml``.

    Returns:
        The merged configuration. Unreadable or invalid files are logged and
        ignored.
    """
    final_config = deep_merge({}, DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    path = Path(config_path).expanduser() if config_path else USER_CONFIG_PATH
    if path.is_file():
        try:
            user_config = toml.load(path)
            final_config = deep_merge(final_config, user_config)
            logger.info(f"Successfully loaded and merged user config from {path}")
        except (OSError, toml.TomlDecodeError) as e:
            logger.error(f"Could not parse user config '{path}': {e}. Using defaults.")
    elif config_path:
        logger.warning(f"Config file '{path}' does not exist. Using defaults.")

    return final_config


def detect_syntax(filename: Optional[str], content: str, config: Dict[str, Any]) -> str:
    """
    Returns the syntax name used by the actions for a document.

    Detection order:
    1.  **Extension table**: exact, case-insensitive match of the file name or its
        extension against the ``supported_formats`` lists.
    2.  **Pygments**: the aliases of the lexer Pygments picks for the file name,
        then of the lexer it guesses from the content, matched against the
        ``supported_formats`` keys.
    3.  **Default**: ``editor.syntax``.
    """
    supported_formats = config.get("supported_formats", {})
    default_syntax = config.get("editor", {}).get("syntax", "html")

    if filename:
        base_name_lower = os.path.basename(filename.lower())
        _, extension = os.path.splitext(base_name_lower)
        ext_without_dot = extension[1:]
        for syntax, names in supported_formats.items():
            if not isinstance(names, list):
                continue
            lower_names = [str(name).lower() for name in names]
            if base_name_lower in lower_names or (ext_without_dot and ext_without_dot in lower_names):
                return syntax

        try:
            lexer = get_lexer_for_filename(filename)
            logger.debug(f"Pygments: Detected '{lexer.name}' by filename.")
            for alias in lexer.aliases:
                if alias in supported_formats:
                    return alias
        except ClassNotFound:
            logger.debug(f"Pygments: No lexer for filename '{filename}'.")

    sample = content[:10000]
    if sample.strip():
        try:
            lexer = guess_lexer(sample)
            logger.debug(f"Pygments: Guessed '{lexer.name}' by content.")
            for alias in lexer.aliases:
                if alias in supported_formats:
                    return alias
        except ClassNotFound:
            logger.debug("Pygments: Content guess failed.")

    return default_syntax


def read_text_file(path: Union[str, Path]) -> tuple[str, str]:
    """
    Reads a text file, detecting its encoding.

    The chardet guess is tried first when its confidence is at least 0.75,
    followed by UTF-8, Latin-1 and finally UTF-8 with replacement characters.

    Returns:
        ``(text, encoding)``.

    Raises:
        OSError: If the file cannot be read.
    """
    raw = Path(path).read_bytes()
    if not raw:
        return "", "utf-8"

    guess = chardet.detect(raw[: 1024 * 20])
    encoding_guess = guess.get("encoding")
    confidence = guess.get("confidence") or 0.0
    logger.debug(f"Chardet detected encoding '{encoding_guess}' with confidence {confidence:.2f} for '{path}'.")

    candidates: list[str] = []
    if encoding_guess and confidence >= 0.75:
        candidates.append(encoding_guess)
    for fallback in ("utf-8", "latin-1"):
        if fallback not in candidates:
            candidates.append(fallback)

    for encoding in candidates:
        try:
            return raw.decode(encoding), encoding
        except (UnicodeDecodeError, LookupError):
            logger.debug(f"Decoding '{path}' as {encoding} failed.")
    return raw.decode("utf-8", errors="replace"), "utf-8"


def caret_line_col(content: str, offset: int) -> tuple[int, int]:
    """
    Converts ``offset`` into a 1-based ``(line, column)`` pair.

    The column counts terminal display cells (wide characters take two), so it
    matches what a terminal editor shows in its status bar.
    """
    offset = max(0, min(offset, len(content)))
    before = content[:offset]
    line_start = max(before.rfind("\n"), before.rfind("\r")) + 1
    line_no = before.count("\n") + before.count("\r") - before.count("\r\n") + 1
    width = wcswidth(before[line_start:])
    if width < 0:
        # Non-printable characters on the line: fall back to code points.
        width = offset - line_start
    return line_no, width + 1
