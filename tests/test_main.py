# tests/test_main.py
"""Tests for the command-line runner in `main.py`."""

import pytest

import main


pytestmark = pytest.mark.usefixtures("restore_logging")


@pytest.fixture
def page(tmp_path, monkeypatch):
    """A small HTML file; the working directory is moved next to it for the logs."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(main, "load_config", lambda path=None: _defaults())
    path = tmp_path / "page.html"
    path.write_text("<div><b>x</b></div>", encoding="utf-8")
    return path


def _defaults():
    from tagwalk.utils.utils import DEFAULT_CONFIG, deep_merge

    return deep_merge({}, DEFAULT_CONFIG)


def test_selection_action_prints_document(page, capsys):
    status = main.run(["matchPair", str(page), "--caret", "8"])

    out, err = capsys.readouterr()
    assert status == 0
    assert out == "<div><b>x</b></div>"
    assert "selection 8..9" in err


def test_write_back(page, capsys):
    status = main.run(["toggleComment", str(page), "--caret", "8", "--write"])

    assert status == 0
    assert page.read_text(encoding="utf-8") == "<div><!-- <b>x</b> --></div>"
    assert capsys.readouterr().out == ""


def test_wrap_with_selection(page, capsys):
    status = main.run(["wrapWithAbbreviation", str(page), "--select", "5", "13", "--abbr", "p.note"])

    assert status == 0
    assert capsys.readouterr().out == '<div><p class="note"><b>x</b></p></div>'


def test_noop_exit_status(page):
    assert main.run(["nextEditPoint", str(page), "--caret", "14"]) == 1


def test_wrap_requires_abbreviation(page, capsys):
    assert main.run(["wrapWithAbbreviation", str(page)]) == 2
    assert "needs --abbr" in capsys.readouterr().err


def test_unreadable_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(main, "load_config", lambda path=None: _defaults())

    assert main.run(["selectLine", str(tmp_path / "missing.html")]) == 2
    assert "cannot read" in capsys.readouterr().err


def test_unknown_action_is_rejected(page):
    with pytest.raises(SystemExit):
        main.run(["explode", str(page)])
