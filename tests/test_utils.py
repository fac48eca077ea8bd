# tests/test_utils.py
"""Unit tests for utility functions in the `tagwalk.utils` module."""

import logging

import pytest

from tagwalk.utils import utils


def test_deep_merge() -> None:
    """Verify that `deep_merge` correctly merges nested dictionaries.

    This test ensures:
    - Existing values are preserved if not overridden.
    - Nested dictionaries are merged recursively.
    - Conflicting keys are overridden by values from the second dictionary.
    - The base dictionary is left untouched.
    """
    base = {"a": 1, "b": {"x": 10, "y": 20}}
    override = {"b": {"y": 99, "z": 100}, "c": 3}
    result = utils.deep_merge(base, override)
    expected = {"a": 1, "b": {"x": 10, "y": 99, "z": 100}, "c": 3}
    assert result == expected
    assert base == {"a": 1, "b": {"x": 10, "y": 20}}


class TestLoadConfig:
    """`load_config` merges TOML files over the embedded defaults."""

    def test_user_file_is_merged(self, tmp_path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[editor]\nprofile = "html"\n\n[variables]\nindentation = "  "\n', encoding="utf-8")

        config = utils.load_config(path)

        assert config["editor"]["profile"] == "html"
        assert config["editor"]["syntax"] == "html"
        assert config["variables"]["indentation"] == "  "
        assert config["profiles"] == utils.DEFAULT_CONFIG["profiles"]
        assert utils.DEFAULT_CONFIG["editor"]["profile"] == "xhtml"

    def test_invalid_toml_falls_back_to_defaults(self, tmp_path, caplog) -> None:
        path = tmp_path / "broken.toml"
        path.write_text("[editor\nprofile = ", encoding="utf-8")

        with caplog.at_level(logging.ERROR, logger="tagwalk"):
            config = utils.load_config(path)

        assert config == utils.DEFAULT_CONFIG
        assert "Could not parse user config" in caplog.text

    def test_missing_explicit_file_warns(self, tmp_path, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="tagwalk"):
            config = utils.load_config(tmp_path / "absent.toml")

        assert config == utils.DEFAULT_CONFIG
        assert "does not exist" in caplog.text

    def test_default_location(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setattr(utils, "USER_CONFIG_PATH", tmp_path / "config.toml")
        assert utils.load_config() == utils.DEFAULT_CONFIG

        (tmp_path / "config.toml").write_text('[editor]\nsyntax = "xml"\n', encoding="utf-8")
        assert utils.load_config()["editor"]["syntax"] == "xml"


class TestDetectSyntax:
    @pytest.mark.parametrize(
        "filename,syntax",
        [("page.HTML", "html"), ("feed.rss", "xml"), ("doc.xhtml", "xhtml"), ("site/style.css", "css")],
    )
    def test_extension_table(self, config, filename, syntax) -> None:
        assert utils.detect_syntax(filename, "", config) == syntax

    def test_pygments_lexer_aliases(self) -> None:
        """A file missing from the table is resolved through its Pygments lexer."""
        config = {"editor": {"syntax": "xml"}, "supported_formats": {"html": []}}
        assert utils.detect_syntax("index.html", "", config) == "html"

    def test_default_syntax(self) -> None:
        config = {"editor": {"syntax": "xml"}, "supported_formats": {}}
        assert utils.detect_syntax("notes.zzz-unknown", "", config) == "xml"
        assert utils.detect_syntax(None, "   ", config) == "xml"


class TestReadTextFile:
    def test_utf8(self, tmp_path) -> None:
        text = "<p>héllo wörld, ñandú, çà va</p>\n"
        path = tmp_path / "page.html"
        path.write_bytes(text.encode("utf-8"))

        content, encoding = utils.read_text_file(path)

        assert content == text
        assert encoding.lower().replace("_", "-") == "utf-8"

    def test_empty_file(self, tmp_path) -> None:
        path = tmp_path / "empty.html"
        path.write_bytes(b"")
        assert utils.read_text_file(path) == ("", "utf-8")

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(OSError):
            utils.read_text_file(tmp_path / "nope.html")


@pytest.mark.parametrize(
    "content,offset,expected",
    [
        ("ab\ncd", 4, (2, 2)),
        ("a\r\nb", 4, (2, 2)),
        ("日本x", 2, (1, 5)),
        ("\tx", 1, (1, 2)),
        ("ab", 99, (1, 3)),
        ("", 0, (1, 1)),
    ],
)
def test_caret_line_col(content, offset, expected) -> None:
    assert utils.caret_line_col(content, offset) == expected
