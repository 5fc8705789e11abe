"""Tests for markup checks."""

from __future__ import annotations

from miniformat.lint import HINT, WARNING, check


def _messages(source: str, palette=None) -> list[str]:
    return [issue.message for issue in check(source, palette)]


class TestClean:
    def test_clean_markup(self):
        assert check("<bold>Hi <gradient:red:blue>there</gradient></bold>") == []

    def test_plain_text(self):
        assert check("just text") == []

    def test_alias_close_matches(self):
        assert check("<b>x</bold>") == []

    def test_anonymous_close(self):
        assert check("<bold>x</>") == []

    def test_custom_palette(self):
        assert check("<brand>x</brand>", {"brand": "#123456"}) == []


class TestClosing:
    def test_unmatched_close(self):
        issues = check("x</bold>")
        assert len(issues) == 1
        assert "no open tag" in issues[0].message
        assert issues[0].severity == WARNING

    def test_mismatched_close_is_hint(self):
        issues = check("<bold>x</italic>")
        assert len(issues) == 1
        assert issues[0].severity == HINT
        assert issues[0].message == "</italic> closes <bold>"

    def test_unclosed(self):
        assert _messages("<bold>x") == ["tag <bold> is never closed"]


class TestTags:
    def test_unknown_tag(self):
        assert _messages("<foo>x</foo>") == ["unknown tag <foo>"]

    def test_unknown_color_argument(self):
        assert _messages("<color:nope>x</color>") == ["unknown color 'nope'"]

    def test_color_without_argument(self):
        assert _messages("<color>x</color>") == ["color tag <color> has no color"]

    def test_unknown_gradient_stop(self):
        assert _messages("<gradient:red:nope>x</gradient>") == [
            "unknown color 'nope' (white is used)"
        ]

    def test_short_gradient(self):
        assert _messages("<gradient:red>x</gradient>") == [
            "gradient <gradient:red> needs at least two colors"
        ]

    def test_malformed_hex(self):
        assert _messages("<#12345g>x</#12345g>") == ["malformed hex color '#12345g'"]


class TestLocations:
    def test_issues_in_source_order(self):
        issues = check("ab\n<foo>")
        assert [i.message for i in issues] == [
            "unknown tag <foo>",
            "tag <foo> is never closed",
        ]
        for issue in issues:
            assert issue.span.start.line == 2
            assert issue.span.start.column == 1

    def test_format(self):
        (issue,) = check("hi </x>")
        formatted = issue.format("chat.txt")
        assert formatted.startswith("warning:")
        assert "--> chat.txt:1:4" in formatted
        assert "hi </x>" in formatted
        assert "^^^^" in formatted
