"""
Enum Enhancer — pairs an enumerated type's cases with their labels.

The enhancer owns two parallel sequences:
    - cases: every value of the type, in declaration order
    - labels: one human-readable string per case, same order

Labels come from one of three places:
    - An explicit table supplied by the caller
    - A label capability on each case (`label` attribute or Enum name)
    - The scanner, reading the declaring source file

CONCURRENCY:
    Labels are computed once, in the constructor. The enhancer is frozen,
    so a module-level instance may be shared between threads without
    further locking.

COUNT POLICY:
    Cases and labels must have the same length. A mismatch raises
    CountMismatchError; nothing is truncated or padded.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple

from caselabel.model import ScanOptions
from caselabel.scanner import extract_labels


class CountMismatchError(ValueError):
    """Raised when the number of labels differs from the number of cases."""

    def __init__(self, case_count: int, label_count: int, source: Optional[str] = None):
        self.case_count = case_count
        self.label_count = label_count
        self.source = source
        msg = f"Found {label_count} label(s) for {case_count} case(s)"
        if source:
            msg += f" in {source}"
        super().__init__(msg)


class LabelUnavailableError(TypeError):
    """Raised when a case has no way to produce its own label."""
    pass


def default_label(case: Any) -> str:
    """
    Return the label a case provides for itself.

    An explicit string `label` attribute wins; Enum members fall back to
    their member name. Anything else has no label capability.
    """
    label = getattr(case, "label", None)
    if isinstance(label, str):
        return label
    if isinstance(case, Enum):
        return case.name
    raise LabelUnavailableError(
        f"{type(case).__name__} has no 'label' attribute and is not an Enum member"
    )


def iterate_cases(step: Callable[[Any], Any]) -> Iterator[Any]:
    """
    Turn a step function into an iterator of case values.

    `step(None)` returns the first case, `step(case)` the case after it,
    and `None` ends the sequence.

    Example:
        def step(previous):
            return {None: Color.RED, Color.RED: Color.GREEN}.get(previous)

        list(iterate_cases(step)) == [Color.RED, Color.GREEN]
    """
    case = step(None)
    while case is not None:
        yield case
        case = step(case)


@dataclass(frozen=True)
class EnumEnhancer:
    """
    Ordered case ↔ label table for one enumerated type.

    Properties:
        cases: Case values in declaration order
        labels: Labels, positionally matching cases
    """

    cases: Tuple[Any, ...]
    labels: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "cases", tuple(self.cases))
        object.__setattr__(self, "labels", tuple(self.labels))
        if len(self.cases) != len(self.labels):
            raise CountMismatchError(len(self.cases), len(self.labels))

    @property
    def count(self) -> int:
        return len(self.cases)

    def __len__(self) -> int:
        return len(self.cases)

    def pairs(self) -> List[Tuple[Any, str]]:
        return list(zip(self.cases, self.labels))

    def label_for(self, case: Any) -> str:
        """
        Look up the label of a case.

        Raises:
            KeyError: If the case is not part of this enhancer
        """
        for candidate, label in zip(self.cases, self.labels):
            if candidate == case:
                return label
        raise KeyError(f"Unknown case: {case!r}")

    def case_for(self, label: str) -> Any:
        """
        Look up the first case carrying a label.

        Raises:
            KeyError: If no case has this label
        """
        for case, candidate in zip(self.cases, self.labels):
            if candidate == label:
                return case
        raise KeyError(f"Unknown label: {label!r}")

    @classmethod
    def from_cases(cls, cases: Iterable[Any], label_of: Callable[[Any], str] = default_label) -> EnumEnhancer:
        """Build from cases that can label themselves."""
        cases = tuple(cases)
        return cls(cases=cases, labels=tuple(label_of(case) for case in cases))

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[Any, str]]) -> EnumEnhancer:
        pairs = list(pairs)
        return cls(cases=tuple(p[0] for p in pairs), labels=tuple(p[1] for p in pairs))

    @classmethod
    def from_cases_and_labels(cls, cases: Iterable[Any], labels: Iterable[str]) -> EnumEnhancer:
        return cls(cases=tuple(cases), labels=tuple(labels))

    @classmethod
    def from_source(
        cls,
        cases: Iterable[Any],
        path: str,
        line: int,
        column: int = 0,
        skip_closures: Optional[bool] = None,
        options: Optional[ScanOptions] = None,
    ) -> EnumEnhancer:
        """
        Build by scanning the source file that declares the cases.

        Args:
            cases: Case values, in the order they are declared
            path: Source file declaring the type
            line: Call-site line number (1-based, as reported by the caller)
            column: Call-site column, accepted but not used
            skip_closures: Step over the closure enclosing the call site
            options: Lexical settings

        Raises:
            CountMismatchError: If the scan finds a different number of labels
            FileUnreadableError: If the source file cannot be read
            StructuralParseError: If a case line has no identifier
        """
        cases = tuple(cases)
        labels = extract_labels(path, line, column, skip_closures=skip_closures, options=options)
        if len(labels) != len(cases):
            raise CountMismatchError(len(cases), len(labels), source=f"{path}:{line}")
        return cls(cases=cases, labels=tuple(labels))

    @classmethod
    def from_step(
        cls,
        step: Callable[[Any], Any],
        path: str,
        line: int,
        column: int = 0,
        skip_closures: Optional[bool] = None,
        options: Optional[ScanOptions] = None,
    ) -> EnumEnhancer:
        """Build from a step function (see iterate_cases) and a source scan."""
        return cls.from_source(
            iterate_cases(step), path, line, column, skip_closures=skip_closures, options=options
        )

    @classmethod
    def at_call_site(
        cls,
        cases: Iterable[Any],
        skip_closures: Optional[bool] = None,
        options: Optional[ScanOptions] = None,
    ) -> EnumEnhancer:
        """
        Build by scanning the caller's own source file from the calling line.

        The case block is expected to follow the call, as it does when an
        enhancer is declared at the top of the type it describes.
        """
        frame = inspect.currentframe().f_back
        try:
            path = frame.f_code.co_filename
            line = frame.f_lineno
        finally:
            del frame
        return cls.from_source(cases, path, line, skip_closures=skip_closures, options=options)


__all__ = [
    "CountMismatchError",
    "LabelUnavailableError",
    "EnumEnhancer",
    "default_label",
    "iterate_cases",
]
