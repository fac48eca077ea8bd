# tests/test_core/test_code_commenter.py
"""Code Commenter Tests
=====================

Unit tests for `toggle_comment` and the `CodeCommenter` editor adapter.

This test module verifies that:

1. Commented spans are uncommented and the caret follows the removed marker.
2. Plain spans are wrapped, with nested markers dropped.
3. A tag living inside a comment uncomments the whole comment.
4. Unsupported syntaxes and empty lookups are no-ops.
"""

from tagwalk.core.CodeCommenter import CodeCommenter, toggle_comment
from tagwalk.core.Types import Range


class TestToggleComment:
    """Pure toggle computations."""

    def test_uncomment_selection(self):
        doc = "<!-- hello -->"
        edit = toggle_comment(doc, Range(0, len(doc)), caret=len(doc))

        assert edit is not None
        assert edit.content == "hello"
        assert edit.range == Range(0, len(doc))
        assert edit.caret == len(doc) - len("<!-- ")

    def test_comment_selection(self):
        doc = "<p>text</p>"
        edit = toggle_comment(doc, Range(0, len(doc)), caret=len(doc))

        assert edit is not None
        assert edit.content == "<!-- <p>text</p> -->"
        assert edit.caret == len(doc) + len("<!-- ")

    def test_toggle_twice_restores_text(self):
        doc = "<p>text</p>"
        first = toggle_comment(doc, Range(0, len(doc)), caret=0)
        commented = first.content

        second = toggle_comment(commented, Range(0, len(commented)), caret=0)
        assert second.content == doc

    def test_empty_selection_uses_tag_pair_at_caret(self, navigator):
        doc = "<div><b>x</b></div>"
        edit = toggle_comment(doc, Range.caret(8), caret=8, navigator=navigator)

        assert edit is not None
        assert edit.range == Range(5, 13)
        assert edit.content == "<!-- <b>x</b> -->"

    def test_tag_inside_comment_uncomments_whole_comment(self):
        doc = "<!-- <b>x</b> -->"
        caret = doc.index("x")
        edit = toggle_comment(doc, caret, caret=caret)

        assert edit is not None
        assert edit.range == Range(0, len(doc))
        assert edit.content == "<b>x</b>"
        assert edit.caret == caret - len("<!-- ")

    def test_nested_markers_are_removed(self):
        doc = "a <!-- b --> c"
        edit = toggle_comment(doc, Range(0, len(doc)), caret=0)
        assert edit.content == "<!-- a b c -->"

    def test_unclosed_comment_before_span_is_not_a_container(self):
        doc = "<!-- open <b>x</b>"
        span = Range(doc.index("<b>"), len(doc))
        edit = toggle_comment(doc, span, caret=span.end)

        assert edit.content == "<!-- <b>x</b> -->"
        assert edit.range == span

    def test_comment_closed_before_span_is_not_a_container(self):
        doc = "<!-- a --> <b>x</b>"
        span = Range(doc.index("<b>"), len(doc))
        edit = toggle_comment(doc, span, caret=span.end)

        assert edit.content == "<!-- <b>x</b> -->"

    def test_replacement_is_unindented_by_line_padding(self):
        doc = "\t<ul>\n\t\t<li>a</li>\n\t</ul>"
        edit = toggle_comment(doc, Range(1, len(doc)), caret=1, padding="\t")

        assert edit.content == "<!-- <ul>\n\t<li>a</li>\n</ul> -->"

    def test_unsupported_syntax_is_noop(self):
        assert toggle_comment("a { color: red }", Range(0, 5), caret=0, syntax="css") is None

    def test_no_tag_at_caret(self):
        assert toggle_comment("plain", 2, caret=2) is None

    def test_caret_inside_unterminated_comment_is_noop(self):
        doc = "<div><!-- unterminated"
        caret = doc.index("unterminated") + 2
        assert toggle_comment(doc, caret, caret=caret) is None


class TestCodeCommenter:
    """`CodeCommenter.perform_toggle` against a buffer editor."""

    def test_comments_tag_at_caret(self, make_editor):
        editor = make_editor("<div><b>x|</b></div>")
        commenter = CodeCommenter(editor)

        assert commenter.perform_toggle() is True
        assert editor.get_content() == "<div><!-- <b>x</b> --></div>"
        assert editor.get_caret_pos() == len("<div><!-- <b>x")

    def test_uncomments_comment_at_caret(self, make_editor):
        editor = make_editor("<p><!-- n|ote --></p>")
        commenter = CodeCommenter(editor)

        assert commenter.perform_toggle() is True
        assert editor.get_content() == "<p>note</p>"
        assert editor.get_caret_pos() == len("<p>n")

    def test_caret_is_clamped_to_document(self, make_editor):
        editor = make_editor("|<!-- hello -->|")

        assert CodeCommenter(editor).perform_toggle() is True
        assert editor.get_content() == "hello"
        assert editor.get_caret_pos() == len("hello")

    def test_noop_leaves_editor_untouched(self, make_editor):
        editor = make_editor("a {| color: red }", syntax="css")

        assert CodeCommenter(editor).perform_toggle() is False
        assert editor.get_content() == "a { color: red }"
        assert editor.modified is False
