"""
Case Block Report — diagnostics for a scanned declaration.

This module explains what the scanner saw:
    - Where the closure skip left the cursor
    - Which lines form the case block
    - Which lines were dropped as comments or blanks
    - Warning flags for labels that are likely wrong

IMPORTANT: This is read-only. It never changes what extract_labels
returns; it reruns the same stages and records their intermediate state.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional

from caselabel.model import CaseBlockRange, ScanOptions
from caselabel.scanner import (
    extract_case_labels,
    is_comment_or_blank,
    load_lines,
    locate_case_block,
    skip_closure,
)


# Associated-value lists such as `case two(T, T)` are not separate cases
_PAREN_GROUP_RE = re.compile(r"\([^()]*\)")
# Commas inside string or character raw values are not separators either
_QUOTED_RE = re.compile(r"'(?:[^'\\]|\\.)*'" + r'|"(?:[^"\\]|\\.)*"')


def _strip_non_case_commas(text: str, options: ScanOptions) -> str:
    """Drop quoted values, trailing comments and parenthesised groups."""
    text = _QUOTED_RE.sub("", text)
    text = text.split(options.comment_marker)[0]
    return _PAREN_GROUP_RE.sub("", text)


@dataclass
class ScanReport:
    """Intermediate results and warnings for one scan."""

    path: Optional[str]
    line: int
    total_lines: int = 0
    cursor: int = 0
    skipped_closure: bool = False
    block: Optional[CaseBlockRange] = None
    labels: List[str] = field(default_factory=list)

    # Lines inside the block that produced no label
    comment_or_blank_lines: List[int] = field(default_factory=list)
    # Lines declaring several cases; only the first is labelled
    multi_case_lines: List[int] = field(default_factory=list)
    duplicate_labels: List[str] = field(default_factory=list)

    expected_count: Optional[int] = None

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)

    @property
    def count_matches(self) -> Optional[bool]:
        if self.expected_count is None:
            return None
        return self.expected_count == len(self.labels)


def inspect_lines(
    lines: List[str],
    line: int,
    skip_closures: Optional[bool] = None,
    options: Optional[ScanOptions] = None,
    expected_count: Optional[int] = None,
    path: Optional[str] = None,
) -> ScanReport:
    """
    Scan lines already in memory and report on each stage.

    Raises:
        StructuralParseError: If a case line has no identifier
    """
    options = options or ScanOptions()
    if skip_closures is None:
        skip_closures = options.skip_closures
    if line < 0:
        raise ValueError(f"line must be non-negative, got {line}")

    report = ScanReport(path=path, line=line, total_lines=len(lines), expected_count=expected_count)

    # =========================================================================
    # 1. CLOSURE SKIP
    # =========================================================================

    if skip_closures:
        report.cursor = skip_closure(lines, line, options)
        report.skipped_closure = True
        if report.cursor >= len(lines):
            report.add_warning(f"Closure starting near line {line} never closes")
    else:
        report.cursor = line

    # =========================================================================
    # 2. CASE BLOCK
    # =========================================================================

    report.block = locate_case_block(lines, report.cursor, options)
    if report.block is None:
        report.add_warning(f"No '{options.keyword}' lines found from line {report.cursor}")
    else:
        report.labels = extract_case_labels(lines, report.block, options)

        for line_number in range(report.block.start_line, report.block.end_line + 1):
            text = lines[line_number].strip()
            if is_comment_or_blank(text, options):
                report.comment_or_blank_lines.append(line_number)
            elif "," in _strip_non_case_commas(text, options):
                report.multi_case_lines.append(line_number)

    # =========================================================================
    # 3. WARNING FLAGS
    # =========================================================================

    counts = Counter(report.labels)
    report.duplicate_labels = sorted(label for label, n in counts.items() if n > 1)

    if report.multi_case_lines:
        report.add_warning(
            f"Lines declaring several cases (only the first is labelled): "
            f"{', '.join(str(n) for n in report.multi_case_lines)}"
        )

    if report.duplicate_labels:
        report.add_warning(f"Duplicate labels: {', '.join(report.duplicate_labels)}")

    if report.count_matches is False:
        report.add_warning(
            f"Label count mismatch: {len(report.labels)} label(s) for {expected_count} case(s)"
        )

    return report


def inspect_case_block(
    path: str,
    line: int,
    skip_closures: Optional[bool] = None,
    options: Optional[ScanOptions] = None,
    expected_count: Optional[int] = None,
) -> ScanReport:
    """
    Scan a source file and report on each stage.

    Raises:
        FileUnreadableError: If the file cannot be read
        StructuralParseError: If a case line has no identifier
    """
    lines = load_lines(path)
    return inspect_lines(
        lines,
        line,
        skip_closures=skip_closures,
        options=options,
        expected_count=expected_count,
        path=path,
    )
