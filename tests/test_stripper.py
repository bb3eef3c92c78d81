"""Tests for sir.parsers.stripper."""
from sir.core.models import ParseOptions
from sir.parsers.stripper import strip_comments


class TestStripComments:
    def test_blanks_comments_anywhere(self) -> None:
        text = "a = 1 ; note\n# full line\nb=2"
        stripped, _ = strip_comments(text, ParseOptions())
        lines = stripped.split("\n")
        assert lines[0] == "a = 1 " + " " * len("; note")
        assert lines[1] == " " * len("# full line")
        assert lines[2] == "b=2"

    def test_preserves_length_and_newlines(self) -> None:
        text = "[s] ; c\r\nk = v # x\n\n"
        stripped, _ = strip_comments(text, ParseOptions())
        assert len(stripped) == len(text)
        assert stripped.count("\n") == text.count("\n")

    def test_hash_comments_disabled(self) -> None:
        text = "a = 1 # not a comment ; comment"
        stripped, _ = strip_comments(text, ParseOptions(disable_hash_comments=True))
        assert stripped.startswith("a = 1 # not a comment ")
        assert ";" not in stripped

    def test_comment_only_at_line_start(self) -> None:
        text = "a=1 ; kept\n; dropped\n  ; indented is kept"
        stripped, _ = strip_comments(text, ParseOptions(disable_comment_anywhere=True))
        lines = stripped.split("\n")
        assert lines[0] == "a=1 ; kept"
        assert lines[1].strip() == ""
        assert lines[2] == "  ; indented is kept"

    def test_comment_at_buffer_start(self) -> None:
        stripped, _ = strip_comments("#x=1", ParseOptions(disable_comment_anywhere=True))
        assert stripped.strip() == ""


class TestCounts:
    def test_counts_sections_plus_global(self) -> None:
        _, counts = strip_comments("[a]\nx=1\n[b]\n", ParseOptions())
        assert counts.sections == 3

    def test_counts_both_assignment_chars(self) -> None:
        _, counts = strip_comments("a:1\nb=2\n", ParseOptions())
        assert counts.keys == 2

    def test_colon_not_counted_when_disabled(self) -> None:
        _, counts = strip_comments("a:1\nb=2\n", ParseOptions(disable_colon_assignment=True))
        assert counts.keys == 1

    def test_commented_characters_not_counted(self) -> None:
        _, counts = strip_comments("a=1 ; [b] c=2\n", ParseOptions())
        assert counts.sections == 1
        assert counts.keys == 1
