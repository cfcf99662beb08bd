#!/usr/bin/env python3
"""
Demo: Scan the example declarations and print their label tables.

Writes each example source to a temporary directory, scans it from the
enhancer's call site, pairs the labels with Python case values where
available, and prints the scan report plus the YAML label table.
"""

import tempfile

from caselabel.enhancer import EnumEnhancer
from caselabel.examples import EXAMPLE_SOURCES, RawValueEnum, raw_value_step, write_example_source
from caselabel.report import inspect_case_block
from caselabel.scanner import extract_labels
from caselabel.serialization import enhancer_to_yaml


def print_report(report):
    """Pretty-print a ScanReport."""
    print(f"  File:            {report.path}")
    print(f"  Call-site line:  {report.line}")
    print(f"  Closure skipped: {'YES' if report.skipped_closure else 'NO'} (cursor {report.cursor})")
    if report.block:
        print(f"  Case block:      lines {report.block.start_line}-{report.block.end_line}")
    print(f"  Labels:          {report.labels}")
    if report.comment_or_blank_lines:
        print(f"  Ignored lines:   {report.comment_or_blank_lines}")
    if report.warnings:
        print("  Warnings:")
        for i, warning in enumerate(report.warnings, 1):
            print(f"    {i}. {warning}")


def main():
    with tempfile.TemporaryDirectory() as directory:
        print("=" * 70)
        print("CASE LABEL SCAN DEMO")
        print("=" * 70)

        for name in EXAMPLE_SOURCES:
            path, line, skip_closures = write_example_source(directory, name)
            print(f"\n{name}:")
            print("-" * 70)
            print_report(inspect_case_block(path, line, skip_closures=skip_closures))
            print(f"  extract_labels:  {extract_labels(path, line, 0, skip_closures)}")

        path, line, _ = write_example_source(directory, "RawValueEnum")
        enhancer = EnumEnhancer.from_step(raw_value_step, path, line)

        print("\nRawValueEnum label table (YAML):")
        print("-" * 70)
        print(enhancer_to_yaml(enhancer))
        print(f"Label of {RawValueEnum.one}: {enhancer.label_for(RawValueEnum.one)}")


if __name__ == "__main__":
    main()
