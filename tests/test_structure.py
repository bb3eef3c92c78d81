"""Tests for sir.parsers.structure."""
from sir.core.models import ParseOptions
from sir.parsers import ParsedStructure, parse_structure, strip_comments


def build(text: str, **options: object) -> ParsedStructure:
    opts = ParseOptions(**options)
    stripped, counts = strip_comments(text, opts)
    return parse_structure(stripped, opts, counts)


def spans(parsed: ParsedStructure, index: int) -> list:
    return [(r.start, r.end) for r in parsed.sections[index].ranges]


class TestSections:
    def test_global_section_always_first(self) -> None:
        parsed = build("")
        assert [s.name for s in parsed.sections] == ["global"]
        assert spans(parsed, 0) == [(0, 0)]
        assert parsed.key_count == 0

    def test_reopened_section_gets_second_range(self) -> None:
        parsed = build("a=1\n[s1]\nb=2\n[s2]\nc=3\n[s1]\nd=4\n")
        assert [s.name for s in parsed.sections] == ["global", "s1", "s2"]
        assert spans(parsed, 0) == [(0, 1)]
        assert spans(parsed, 1) == [(1, 2), (3, 4)]
        assert spans(parsed, 2) == [(2, 3)]
        assert parsed.key_names == ["a", "b", "c", "d"]

    def test_repeated_header_of_open_section_keeps_one_range(self) -> None:
        parsed = build("[s]\nx=1\n[s]\ny=2\n")
        assert spans(parsed, 1) == [(0, 2)]

    def test_global_section_can_be_reopened_by_name(self) -> None:
        parsed = build("a=1\n[x]\nb=2\n[global]\nc=3")
        assert len(parsed.sections) == 2
        assert spans(parsed, 0) == [(0, 1), (2, 3)]

    def test_renamed_global_section(self) -> None:
        parsed = build("a=1\n[root]\nb=2", global_section_name="root")
        assert [s.name for s in parsed.sections] == ["root"]
        assert spans(parsed, 0) == [(0, 2)]

    def test_section_name_is_trimmed(self) -> None:
        parsed = build("[  spaced name \t]\nk=v")
        assert parsed.sections[1].name == "spaced name"

    def test_case_insensitive_section_merge(self) -> None:
        text = "[Foo]\na=1\n[FOO]\nb=2"
        assert len(build(text, disable_case_sensitivity=True).sections) == 2
        assert len(build(text).sections) == 3

    def test_unclosed_header_stops_parsing(self) -> None:
        parsed = build("a=1\n[broken\nb=2")
        assert len(parsed.sections) == 2
        assert parsed.sections[1].name == "broken\nb=2"
        assert parsed.key_names == ["a"]


class TestDuplicateKeys:
    TEXT = "[s]\nk=foo\nk=bar\n"

    def test_first_wins_by_default(self) -> None:
        parsed = build(self.TEXT)
        assert parsed.key_names == ["k"]
        assert parsed.key_values == ["foo"]

    def test_override_rewrites_in_place(self) -> None:
        parsed = build(self.TEXT, override_duplicate_keys=True)
        assert parsed.key_names == ["k"]
        assert parsed.key_values == ["bar"]

    def test_same_key_in_different_sections_is_kept(self) -> None:
        parsed = build("[a]\nk=1\n[b]\nk=2")
        assert parsed.key_values == ["1", "2"]

    def test_duplicate_across_reopened_ranges(self) -> None:
        text = "[a]\nk=1\n[b]\nx=0\n[a]\nk=2"
        assert build(text).key_values == ["1", "0"]
        assert build(text, override_duplicate_keys=True).key_values == ["2", "0"]

    def test_case_insensitive_duplicates(self) -> None:
        parsed = build("[s]\nKey=1\nkey=2", disable_case_sensitivity=True)
        assert parsed.key_names == ["Key"]
        assert parsed.key_values == ["1"]


class TestValues:
    def test_unquoted_values_are_trimmed(self) -> None:
        parsed = build("k =   trimmed value   \n")
        assert parsed.key_values == ["trimmed value"]

    def test_quoted_value_keeps_whitespace(self) -> None:
        parsed = build('k = "  spaced  "\n')
        assert parsed.key_values == ["  spaced  "]

    def test_quotes_kept_when_disabled(self) -> None:
        parsed = build('k = "hello"\n', disable_quotes=True)
        assert parsed.key_values == ['"hello"']

    def test_text_before_opening_quote_is_dropped(self) -> None:
        parsed = build('k = abc "d e"\nnext=1')
        assert parsed.key_values == ["d e", "1"]

    def test_parsing_resumes_after_closing_quote(self) -> None:
        parsed = build('k = "d e" trailing\nnext=1')
        assert parsed.key_names == ["k", "trailing\nnext"]
        assert parsed.key_values == ["d e", "1"]

    def test_quoted_value_spans_lines(self) -> None:
        parsed = build('k = "line1\nline2"\nother = 5\n')
        assert parsed.key_names == ["k", "other"]
        assert parsed.key_values == ["line1\nline2", "5"]

    def test_opening_quote_must_be_on_key_line(self) -> None:
        parsed = build('k = plain\nq = "x"')
        assert parsed.key_values == ["plain", "x"]

    def test_unterminated_quote_runs_to_end_of_text(self) -> None:
        parsed = build('k = "abc\nn=1')
        assert parsed.key_names == ["k"]
        assert parsed.key_values == ["abc\nn=1"]

    def test_crlf_line_endings(self) -> None:
        parsed = build("a = 1\r\nb=2\r\n")
        assert parsed.key_names == ["a", "b"]
        assert parsed.key_values == ["1", "2"]

    def test_comment_removed_from_value(self) -> None:
        parsed = build("k = value ; note\n")
        assert parsed.key_values == ["value"]


class TestAssignment:
    def test_earliest_delimiter_wins(self) -> None:
        assert build("a:b=c").key_values == ["b=c"]
        assert build("a=b:c").key_values == ["b:c"]

    def test_colon_disabled(self) -> None:
        parsed = build("a:b=c", disable_colon_assignment=True)
        assert parsed.key_names == ["a:b"]
        assert parsed.key_values == ["c"]

    def test_trailing_key_without_assignment(self) -> None:
        parsed = build("a=1\nlonely")
        assert parsed.key_names == ["a", "lonely"]
        assert parsed.key_values == ["1", ""]

    def test_key_without_assignment_absorbs_following_line(self) -> None:
        parsed = build("lonely\nb=2")
        assert parsed.key_names == ["lonely\nb"]
        assert parsed.key_values == ["2"]


class TestEmptyValues:
    def test_kept_by_default(self) -> None:
        parsed = build("a=\nb=1")
        assert parsed.key_names == ["a", "b"]
        assert parsed.key_values == ["", "1"]

    def test_ignored_when_requested(self) -> None:
        parsed = build("a=\nb=1\nlonely", ignore_empty_values=True)
        assert parsed.key_names == ["b"]

    def test_ignored_empty_value_is_not_a_duplicate(self) -> None:
        parsed = build("a=\na=1", ignore_empty_values=True)
        assert parsed.key_values == ["1"]


class TestStorage:
    def test_storage_trimmed_to_accepted_keys(self) -> None:
        parsed = build("a=1\na=2\nb==3\nc=4 ; d=5\n")
        assert parsed.key_count == 3
        assert len(parsed.key_values) == 3
        assert parsed.key_values == ["1", "=3", "4"]

    def test_uncounted_trailing_key_is_appended(self) -> None:
        parsed = build("lonely")
        assert parsed.key_names == ["lonely"]
        assert parsed.key_values == [""]
