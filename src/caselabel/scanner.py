"""
Case Label Scanner (Source Text → Ordered Case Labels).

Re-reads the source file that declares an enumerated type and pulls one
identifier per case declaration, in source order.

Pipeline:
    load_lines          - read the file, split on line feeds
    skip_closure        - step over an enclosing brace-delimited closure
    locate_case_block   - find the contiguous run of case lines
    extract_case_labels - take the identifier after the keyword on each line

Syntax Notes:
    - A case line starts (after trimming) with the keyword as its own token
    - Blank lines and full-line `//` comments do not end a case block
    - Tokens are maximal runs of ASCII letters and digits

Known limitations:
    - Braces inside string literals or comments are counted
    - `case a, b, c` yields only `a`
    - Underscores separate tokens, so `case first_value` yields `first`
      and `case_x` is a case line labelled `x`
"""

import re
import warnings
from typing import List, Optional

from caselabel.model import CaseBlockRange, ScanOptions, SourcePosition


_SEPARATOR_RE = re.compile(r"[^A-Za-z0-9]+")


class LabelScanError(Exception):
    """Raised when labels cannot be extracted from a source file."""
    pass


class FileUnreadableError(LabelScanError):
    """Raised when the source file is missing, unreadable or not UTF-8."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read source file {path}: {reason}")


class StructuralParseError(LabelScanError):
    """Raised when a case line does not contain an identifier after the keyword."""

    def __init__(self, line_number: int, text: str):
        self.line_number = line_number
        self.text = text
        super().__init__(f"Line {line_number}: expected an identifier after the keyword in {text!r}")


def load_lines(path: str) -> List[str]:
    """
    Read a file as UTF-8 and split it into lines.

    Only the line-feed character separates lines; a trailing carriage
    return is left in place and removed later by trimming.

    Args:
        path: Path to the source file

    Returns:
        Lines of the file, 0-indexed

    Raises:
        FileUnreadableError: If the file is missing, unreadable or not UTF-8
    """
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            content = f.read()
    except FileNotFoundError as exc:
        raise FileUnreadableError(path, "file not found") from exc
    except UnicodeDecodeError as exc:
        raise FileUnreadableError(path, f"invalid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise FileUnreadableError(path, exc.strerror or str(exc)) from exc

    return content.split("\n")


def tokenize(text: str) -> List[str]:
    """Split text on runs of characters that are not ASCII letters or digits."""
    return [token for token in _SEPARATOR_RE.split(text) if token]


def is_comment_or_blank(text: str, options: Optional[ScanOptions] = None) -> bool:
    """True if the trimmed line is empty or a full-line comment."""
    options = options or ScanOptions()
    text = text.strip()
    return text == "" or text.startswith(options.comment_marker)


def is_case_line(text: str, options: Optional[ScanOptions] = None) -> bool:
    """
    True if the trimmed line opens with the case keyword.

    A keyword ending in a letter or digit must be followed by a separator,
    using the same separator rule as tokenize(), so `casey` is not a case
    line but `case_x` is.
    """
    options = options or ScanOptions()
    pattern = re.escape(options.keyword)
    if tokenize(options.keyword[-1]):
        pattern += r"(?![A-Za-z0-9])"
    return re.match(pattern, text.strip()) is not None


def skip_closure(lines: List[str], line: int, options: Optional[ScanOptions] = None) -> int:
    """
    Advance past the brace-delimited closure that starts near `line`.

    Counting begins one line before `line` (clamped to 0), because call
    sites report 1-based line numbers. Every open brace increments the
    depth and every close brace decrements it, with no awareness of
    strings or comments. Scanning stops at the line where the depth
    returns to zero after at least one open brace.

    Args:
        lines: Source lines
        line: Call-site line number
        options: Brace characters to count

    Returns:
        Index of the line closing the closure, or len(lines) if the
        closure never closes
    """
    options = options or ScanOptions()
    depth = 0
    opened = False

    for line_number in range(max(0, line - 1), len(lines)):
        for char in lines[line_number]:
            if char == options.open_brace:
                depth += 1
                opened = True
            elif char == options.close_brace:
                depth -= 1
            else:
                continue

            if opened and depth == 0:
                return line_number

    return len(lines)


def locate_case_block(
    lines: List[str], cursor: int, options: Optional[ScanOptions] = None
) -> Optional[CaseBlockRange]:
    """
    Find the contiguous run of case lines at or after `cursor`.

    Phase 1 seeks the first case line. Phase 2 extends the block through
    case lines, blank lines and comment lines, and ends it just before
    the first line that is none of those.

    Args:
        lines: Source lines
        cursor: First line index to examine
        options: Keyword and comment marker

    Returns:
        CaseBlockRange, or None if no case line exists from `cursor` on
    """
    options = options or ScanOptions()
    start_line = None

    for line_number in range(cursor, len(lines)):
        text = lines[line_number]

        if start_line is None:
            if is_case_line(text, options):
                start_line = line_number
            continue

        if not is_case_line(text, options) and not is_comment_or_blank(text, options):
            return CaseBlockRange(start_line=start_line, end_line=line_number - 1)

    if start_line is None:
        return None

    return CaseBlockRange(start_line=start_line, end_line=len(lines) - 1)


def extract_case_labels(
    lines: List[str], block: CaseBlockRange, options: Optional[ScanOptions] = None
) -> List[str]:
    """
    Take one label from each case line in `block`.

    Blank and comment lines are dropped. The label is the first token
    after the keyword, which may itself span several tokens or none.

    Raises:
        StructuralParseError: If nothing follows the keyword on a case line
    """
    options = options or ScanOptions()
    labels = []

    for line_number in range(block.start_line, block.end_line + 1):
        text = lines[line_number].strip()
        if is_comment_or_blank(text, options):
            continue

        tokens = tokenize(text[len(options.keyword):])
        if not tokens:
            raise StructuralParseError(line_number, text)
        labels.append(tokens[0])

    return labels


def extract_labels_from_lines(
    lines: List[str],
    line: int,
    skip_closures: Optional[bool] = None,
    options: Optional[ScanOptions] = None,
) -> List[str]:
    """
    Run the scanner pipeline over lines already in memory.

    Args:
        lines: Source lines
        line: Call-site line number
        skip_closures: Step over an enclosing closure first
            (defaults to options.skip_closures)
        options: Lexical settings

    Returns:
        Labels in source order; empty if no case block is found
    """
    options = options or ScanOptions()
    if skip_closures is None:
        skip_closures = options.skip_closures
    if line < 0:
        raise ValueError(f"line must be non-negative, got {line}")

    cursor = skip_closure(lines, line, options) if skip_closures else line

    block = locate_case_block(lines, cursor, options)
    if block is None:
        return []

    return extract_case_labels(lines, block, options)


def extract_labels_from_text(
    text: str,
    line: int,
    skip_closures: Optional[bool] = None,
    options: Optional[ScanOptions] = None,
) -> List[str]:
    """Run the scanner pipeline over source text."""
    return extract_labels_from_lines(text.split("\n"), line, skip_closures=skip_closures, options=options)


def extract_labels(
    path: str,
    line: int,
    column: int = 0,
    skip_closures: Optional[bool] = None,
    options: Optional[ScanOptions] = None,
    missing_ok: bool = False,
) -> List[str]:
    """
    Extract default case labels from the source file declaring an enum.

    Args:
        path: Source file path (usually the call site's file)
        line: Call-site line number
        column: Call-site column, accepted but not used
        skip_closures: Step over the closure enclosing the call site first
            (defaults to options.skip_closures)
        options: Lexical settings
        missing_ok: Warn and return [] instead of raising when the file
            cannot be read

    Returns:
        Labels in source order

    Raises:
        FileUnreadableError: If the file cannot be read and missing_ok is False
        StructuralParseError: If a case line has no identifier
        ValueError: If line or column is negative
    """
    position = SourcePosition(path=path, line=line, column=column)

    try:
        lines = load_lines(position.path)
    except FileUnreadableError as e:
        if not missing_ok:
            raise
        warnings.warn(f"{str(e)}; no labels extracted", UserWarning)
        return []

    return extract_labels_from_lines(lines, position.line, skip_closures=skip_closures, options=options)


__all__ = [
    "LabelScanError",
    "FileUnreadableError",
    "StructuralParseError",
    "load_lines",
    "tokenize",
    "is_comment_or_blank",
    "is_case_line",
    "skip_closure",
    "locate_case_block",
    "extract_case_labels",
    "extract_labels_from_lines",
    "extract_labels_from_text",
    "extract_labels",
]
