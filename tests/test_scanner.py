"""
Tests for the case label scanner (Source Text → Ordered Case Labels).

We need to:
1. Classify lines (case lines, comments, blanks)
2. Skip the closure enclosing the call site by brace counting
3. Locate the contiguous case block
4. Pull one identifier per case line
5. Report unreadable files and malformed case lines
"""

import pytest

from caselabel.model import CaseBlockRange, ScanOptions
from caselabel.scanner import (
    FileUnreadableError,
    LabelScanError,
    StructuralParseError,
    extract_case_labels,
    extract_labels,
    extract_labels_from_lines,
    extract_labels_from_text,
    is_case_line,
    is_comment_or_blank,
    load_lines,
    locate_case_block,
    skip_closure,
    tokenize,
)


NESTED_CLOSURE = [
    "static let enhancer = Gen {",
    "    switch $0 {",
    "    case .none: $0 = .zero",
    "    case .some(let c):",
    "        switch c {",
    "        case .zero: $0 = nil",
    "        }",
    "    }",
    "}",
    "case zero",
    "case one",
]


def _write(tmp_path, lines, name="Source.swift"):
    path = tmp_path / name
    path.write_text("\n".join(lines), encoding="utf-8")
    return str(path)


class TestLineClassification:
    """Test the comment/blank and case line predicates."""

    def test_blank_lines(self):
        """Empty and whitespace-only lines are blank."""
        assert is_comment_or_blank("")
        assert is_comment_or_blank("   \t")

    def test_full_line_comment(self):
        """Lines starting with // after trimming are comments."""
        assert is_comment_or_blank("    // note")

    def test_trailing_comment_is_not_a_comment_line(self):
        """Code followed by a comment is still code."""
        assert not is_comment_or_blank("let x = 1 // note")
        assert not is_comment_or_blank("case a // note")

    def test_case_line(self):
        """Indented case declarations are case lines."""
        assert is_case_line("    case zero = 0")
        assert is_case_line("case one(T)")

    def test_keyword_followed_by_punctuation(self):
        """The keyword only has to end at a separator."""
        assert is_case_line("case(let x)")

    def test_keyword_must_be_its_own_token(self):
        """Identifiers that merely start with the keyword do not count."""
        assert not is_case_line("casey = 1")
        assert not is_case_line("case2 = 2")

    def test_underscore_ends_the_keyword(self):
        """Underscores separate tokens here just as they do in tokenize()."""
        assert is_case_line("case_value = 2")
        assert tokenize("case_value")[0] == "case"

    def test_keyword_must_open_the_line(self):
        """Occurrences later in the line do not count."""
        assert not is_case_line("switch v { case .a: 1 }")
        assert not is_case_line("// case a")

    def test_custom_options(self):
        """Keyword and comment marker come from ScanOptions."""
        options = ScanOptions(keyword="when", comment_marker="#")
        assert is_case_line("when a", options)
        assert not is_case_line("case a", options)
        assert is_comment_or_blank("# note", options)
        assert not is_comment_or_blank("// note", options)


class TestTokenize:
    """Test splitting on runs of non-alphanumeric characters."""

    def test_raw_value_case(self):
        assert tokenize("case zero = 0") == ["case", "zero", "0"]

    def test_separators_collapse(self):
        """Consecutive separators produce no empty tokens."""
        assert tokenize("case .some(let theCase):") == ["case", "some", "let", "theCase"]

    def test_underscore_separates(self):
        """Underscores are not letters or digits."""
        assert tokenize("case first_value") == ["case", "first", "value"]

    def test_empty(self):
        assert tokenize("  ") == []


class TestSkipClosure:
    """Test brace counting over the closure enclosing the call site."""

    def test_nested_closure(self):
        """Cursor lands on the line that closes the outermost brace."""
        assert skip_closure(NESTED_CLOSURE, 1) == 8

    def test_line_zero_is_clamped(self):
        """Line 0 starts counting at the first line."""
        assert skip_closure(NESTED_CLOSURE, 0) == 8

    def test_counting_starts_one_line_before(self):
        """Braces before line - 1 are ignored."""
        lines = ["}", "x = Gen {", "}", "case a"]
        assert skip_closure(lines, 2) == 2

    def test_closure_on_one_line(self):
        """A closure opened and closed on one line stops on that line."""
        lines = ["let e = Gen { $0 }", "case a"]
        assert skip_closure(lines, 1) == 0

    def test_unclosed_closure_reaches_end(self):
        """If the depth never returns to zero, the cursor is end-of-file."""
        lines = ["let e = Gen {", "case a"]
        assert skip_closure(lines, 1) == len(lines)

    def test_no_braces_reaches_end(self):
        """The depth must be incremented before a return to zero counts."""
        lines = ["case zero", "case one"]
        assert skip_closure(lines, 0) == len(lines)

    def test_custom_braces(self):
        options = ScanOptions(open_brace="(", close_brace=")")
        lines = ["f(", "  g(x)", ")", "case a"]
        assert skip_closure(lines, 1, options) == 2


class TestLocateCaseBlock:
    """Test finding the contiguous run of case lines."""

    def test_consecutive_cases(self):
        lines = ["case zero = 0", "case one = 1"]
        assert locate_case_block(lines, 0) == CaseBlockRange(start_line=0, end_line=1)

    def test_comments_and_blanks_inside_block(self):
        """Blank and comment lines do not break continuity."""
        lines = ["let a = 1", "case zero", "// c", "", "case one", "let x = 1"]
        assert locate_case_block(lines, 0) == CaseBlockRange(start_line=1, end_line=4)

    def test_block_ends_before_terminating_line(self):
        lines = ["case a", "// c", "func f()", "case b"]
        assert locate_case_block(lines, 0) == CaseBlockRange(start_line=0, end_line=1)

    def test_no_case_lines(self):
        lines = ["let x = y // case z", "switch v { case .a: 1 }"]
        assert locate_case_block(lines, 0) is None

    def test_cursor_past_cases(self):
        """Lines before the cursor are never examined."""
        lines = ["case a", "let b = 1"]
        assert locate_case_block(lines, 1) is None

    def test_cursor_at_end(self):
        lines = ["case a"]
        assert locate_case_block(lines, 1) is None


class TestExtractCaseLabels:
    """Test pulling labels from a located block."""

    def test_comments_dropped(self):
        lines = ["case zero", "// comment", "", "case one"]
        block = CaseBlockRange(start_line=0, end_line=3)
        assert extract_case_labels(lines, block) == ["zero", "one"]

    def test_keyword_without_identifier(self):
        """A bare keyword is a structural error, not a silent skip."""
        lines = ["case zero", "case :"]
        block = CaseBlockRange(start_line=0, end_line=1)
        with pytest.raises(StructuralParseError) as exc_info:
            extract_case_labels(lines, block)
        assert exc_info.value.line_number == 1
        assert exc_info.value.text == "case :"

    def test_structural_error_is_scan_error(self):
        lines = ["case"]
        with pytest.raises(LabelScanError):
            extract_case_labels(lines, CaseBlockRange(start_line=0, end_line=0))


class TestExtractLabels:
    """Test the full pipeline from a file."""

    def test_raw_value_cases(self, tmp_path):
        path = _write(tmp_path, ["case zero = 0", "case one = 1"])
        assert extract_labels(path, 0, 0, skip_closures=False) == ["zero", "one"]

    def test_interleaved_comment(self, tmp_path):
        path = _write(tmp_path, ["case zero", "// comment", "case one", "let x = 1"])
        assert extract_labels(path, 0, 0, skip_closures=False) == ["zero", "one"]

    def test_n_cases_in_source_order(self, tmp_path):
        """N case lines give N labels, in order."""
        names = ["alpha", "beta", "gamma", "delta", "epsilon"]
        lines = ["enum Greek {"] + [f"    case {n}" for n in names] + ["    var x: Int", "}"]
        path = _write(tmp_path, lines)
        assert extract_labels(path, 0, 0, skip_closures=False) == names

    def test_multiple_cases_on_one_line(self, tmp_path):
        """Only the first case of a comma-separated line is labelled."""
        path = _write(tmp_path, ["case a, b, c", "case d", "}"])
        assert extract_labels(path, 0, 0, skip_closures=False) == ["a", "d"]

    def test_single_multi_case_line(self, tmp_path):
        path = _write(tmp_path, ["case a, b, c"])
        assert extract_labels(path, 0, 0, skip_closures=False) == ["a"]

    def test_skips_nested_closure(self, tmp_path):
        """Cases inside the closure are ignored once it is skipped."""
        path = _write(tmp_path, NESTED_CLOSURE)
        assert extract_labels(path, 1, 0, skip_closures=True) == ["zero", "one"]

    def test_without_skipping_closure_cases_are_found(self, tmp_path):
        """Without brace counting the first case lines are inside the closure."""
        path = _write(tmp_path, NESTED_CLOSURE)
        assert extract_labels(path, 1, 0, skip_closures=False) == ["none", "some"]

    def test_unclosed_closure_gives_no_labels(self, tmp_path):
        path = _write(tmp_path, ["let e = Gen {", "case a", "case b"])
        assert extract_labels(path, 1, 0, skip_closures=True) == []

    def test_skip_without_closure_gives_no_labels(self, tmp_path):
        """With no brace to open, the cursor runs to end-of-file."""
        path = _write(tmp_path, ["case zero", "case one"])
        assert extract_labels(path, 0, 0, skip_closures=True) == []

    def test_no_case_block(self, tmp_path):
        path = _write(tmp_path, ["struct S {", "    let x = 1", "}"])
        assert extract_labels(path, 0, 0, skip_closures=False) == []

    def test_column_is_ignored(self, tmp_path):
        path = _write(tmp_path, NESTED_CLOSURE)
        assert extract_labels(path, 1, 0) == extract_labels(path, 1, 17)

    def test_skip_closures_defaults_to_options(self, tmp_path):
        path = _write(tmp_path, ["case zero", "case one"])
        assert extract_labels(path, 0) == []
        assert extract_labels(path, 0, options=ScanOptions(skip_closures=False)) == ["zero", "one"]

    def test_crlf_line_endings(self, tmp_path):
        """Carriage returns are trimmed with the rest of the whitespace."""
        path = tmp_path / "Windows.swift"
        path.write_bytes(b"case zero\r\ncase one\r\nlet x = 1\r\n")
        assert extract_labels(str(path), 0, 0, skip_closures=False) == ["zero", "one"]

    def test_malformed_case_line_fails_whole_extraction(self, tmp_path):
        path = _write(tmp_path, ["case zero", "case", "case two"])
        with pytest.raises(StructuralParseError):
            extract_labels(path, 0, 0, skip_closures=False)

    def test_negative_line(self, tmp_path):
        path = _write(tmp_path, ["case zero"])
        with pytest.raises(ValueError):
            extract_labels(path, -1, 0, skip_closures=False)

    def test_negative_column(self, tmp_path):
        path = _write(tmp_path, ["case zero"])
        with pytest.raises(ValueError):
            extract_labels(path, 0, -1, skip_closures=False)


class TestUnreadableFiles:
    """Test the FileUnreadable failure path."""

    def test_missing_file_raises(self, tmp_path):
        missing = str(tmp_path / "Missing.swift")
        with pytest.raises(FileUnreadableError) as exc_info:
            extract_labels(missing, 0, 0, skip_closures=False)
        assert exc_info.value.path == missing

    def test_missing_file_legacy_mode(self, tmp_path):
        """missing_ok restores the empty result, with a warning."""
        missing = str(tmp_path / "Missing.swift")
        with pytest.warns(UserWarning, match="Missing.swift"):
            labels = extract_labels(missing, 0, 0, skip_closures=False, missing_ok=True)
        assert labels == []

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "Latin1.swift"
        path.write_bytes(b"case caf\xe9\n")
        with pytest.raises(FileUnreadableError, match="UTF-8"):
            load_lines(str(path))

    def test_directory_is_unreadable(self, tmp_path):
        with pytest.raises(FileUnreadableError):
            load_lines(str(tmp_path))


class TestInMemorySources:
    """Test the pipeline over text and lines already loaded."""

    def test_from_text(self):
        text = "case zero = 0\ncase one = 1\n"
        assert extract_labels_from_text(text, 0, skip_closures=False) == ["zero", "one"]

    def test_from_lines_with_custom_syntax(self):
        options = ScanOptions(keyword="when", comment_marker="#", skip_closures=False)
        lines = ["when a", "# note", "when b", "end"]
        assert extract_labels_from_lines(lines, 0, options=options) == ["a", "b"]

    def test_explicit_argument_overrides_options(self):
        options = ScanOptions(skip_closures=True)
        assert extract_labels_from_lines(["case a"], 0, skip_closures=False, options=options) == ["a"]

    def test_underscore_case_line_label(self):
        lines = ["case_x", "case y", "end"]
        assert extract_labels_from_lines(lines, 0, skip_closures=False) == ["x", "y"]

    def test_multi_word_keyword(self):
        """The label follows the whole keyword, however many tokens it spans."""
        options = ScanOptions(keyword="enum case", skip_closures=False)
        lines = ["enum case red", "enum case blue", "x"]
        assert extract_labels_from_lines(lines, 0, options=options) == ["red", "blue"]

    def test_punctuation_keyword(self):
        """A keyword with no letters or digits still leaves the label in place."""
        options = ScanOptions(keyword="-", skip_closures=False)
        lines = ["- red", "-blue", "x"]
        assert extract_labels_from_lines(lines, 0, options=options) == ["red", "blue"]

    def test_custom_keyword_without_identifier(self):
        options = ScanOptions(keyword="enum case", skip_closures=False)
        with pytest.raises(StructuralParseError) as exc_info:
            extract_labels_from_lines(["enum case red", "enum case :", "x"], 0, options=options)
        assert exc_info.value.line_number == 1
