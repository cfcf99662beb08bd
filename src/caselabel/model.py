"""
Core Scanner Model Objects

Defines the small data structures passed between scanner stages.

These are pure data classes representing:
    - SourcePosition (where scanning starts)
    - CaseBlockRange (which lines declare cases)
    - ScanOptions (lexical settings)

ARCHITECTURAL RULE:
    These objects:
        - Hold no file contents
        - Are immutable
        - Are fully serializable
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourcePosition:
    """
    Identifies the call site from which scanning begins.

    Properties:
        path:
            Path of the source file declaring the enumerated type

        line:
            Line number reported by the call site (non-negative)

        column:
            Column reported by the call site (non-negative)
            Accepted for positional symmetry with the call site.
            The scanner does not consult it.
    """

    path: str
    line: int = 0
    column: int = 0

    def __post_init__(self):
        if self.line < 0:
            raise ValueError(f"line must be non-negative, got {self.line}")
        if self.column < 0:
            raise ValueError(f"column must be non-negative, got {self.column}")


@dataclass(frozen=True)
class CaseBlockRange:
    """
    Inclusive span of lines holding the case declarations.

    Both indices are 0-based. The span may contain blank and comment
    lines interleaved with the case lines.

    Example:
        0: case zero
        1: // comment
        2: case one
        3: let x = 1

    Becomes:
        CaseBlockRange(start_line=0, end_line=2)
    """

    start_line: int
    end_line: int

    def __len__(self) -> int:
        return self.end_line - self.start_line + 1

    def __contains__(self, line_number: int) -> bool:
        return self.start_line <= line_number <= self.end_line


@dataclass(frozen=True)
class ScanOptions:
    """
    Lexical settings for the scanner.

    Defaults match Swift/C-family sources: cases are introduced with
    `case`, full-line comments start with `//`, closures use braces.

    Properties:
        keyword: Word that must open a case line
        comment_marker: Prefix marking a full-line comment
        skip_closures: Step over an enclosing brace block before seeking cases
        open_brace: Character that increments the brace depth
        close_brace: Character that decrements the brace depth
    """

    keyword: str = "case"
    comment_marker: str = "//"
    skip_closures: bool = True
    open_brace: str = "{"
    close_brace: str = "}"

    def __post_init__(self):
        if not self.keyword:
            raise ValueError("keyword must not be empty")
        if not self.comment_marker:
            raise ValueError("comment_marker must not be empty")
        if len(self.open_brace) != 1 or len(self.close_brace) != 1:
            raise ValueError("open_brace and close_brace must be single characters")
        if self.open_brace == self.close_brace:
            raise ValueError("open_brace and close_brace must differ")
