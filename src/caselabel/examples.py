"""
Example declarations for demos and tests.

Three Swift-style enum declarations, each with the enhancer declared at
the top of the type:
    - RAW_VALUE_SOURCE: enhancer built from a generator closure
    - BASIC_SOURCE: enhancer built from an explicit case list
    - ASSOCIATED_VALUE_SOURCE: generator closure inside a computed property

Python counterparts of the case values are provided so the scanned labels
can be paired with real objects.
"""
import os
from enum import Enum
from typing import Dict, Optional, Tuple


RAW_VALUE_SOURCE = """\
enum RawValueEnum : Int, EnumeratesCasesAndLabels {
    // Swift's type inference gets a bit tripped up here.
    static let enhancer:EnumEnhancer<RawValueEnum> = EnhancedGenerator {
        // `$0` is a RawValueEnum?
        switch $0 {
        case .none: $0 = .zero
        case .some(let theCase):
            switch theCase {
            case .zero: $0 = .one
            case .one: $0 = nil
            }
        }
    }
    case zero = 0
    case one = 1
}
"""

BASIC_SOURCE = """\
enum BasicEnum : EnumeratesCasesAndLabels, CustomStringConvertible {
    static let enhancer = EnumEnhancer<BasicEnum>(cases: [.zero, .one])
    case zero
    case one
    var description: String {
        switch self {
        case .zero: return "zero"
        case .one: return "one"
        }
    }
}
"""

ASSOCIATED_VALUE_SOURCE = """\
enum AssociatedValueEnum<T: Initable> : EnumeratesCasesAndLabels, CustomStringConvertible {
    // Generic types can't have static storage, so this is computed
    static var enhancer: EnumEnhancer<AssociatedValueEnum<T>> {
        return EnhancedGenerator {
            switch $0 {
            case .none: $0 = .one(T())
            case .some(let theCase):
                switch theCase {
                case .one: $0 = .two(T(), T())
                case .two: $0 = nil
                }
            }
        }
    }

    case one(T)
    case two(T,T)
    var description: String {
        switch self {
        case .one (let msg): return "\\(msg)"
        case .two (let msg): return "\\(msg)"
        }
    }
}
"""

# name -> (source, marker on the enhancer's call-site line, skip closures)
EXAMPLE_SOURCES: Dict[str, Tuple[str, str, bool]] = {
    "RawValueEnum": (RAW_VALUE_SOURCE, "EnhancedGenerator {", True),
    "BasicEnum": (BASIC_SOURCE, "EnumEnhancer<BasicEnum>(cases:", False),
    "AssociatedValueEnum": (ASSOCIATED_VALUE_SOURCE, "EnhancedGenerator {", True),
}


class RawValueEnum(Enum):
    zero = 0
    one = 1


class BasicEnum(Enum):
    zero = "z"
    one = "o"

    @property
    def label(self) -> str:
        return {BasicEnum.zero: "zero", BasicEnum.one: "one"}[self]


def raw_value_step(previous: Optional[RawValueEnum]) -> Optional[RawValueEnum]:
    """Step function mirroring the RawValueEnum generator closure."""
    if previous is None:
        return RawValueEnum.zero
    if previous is RawValueEnum.zero:
        return RawValueEnum.one
    return None


def call_site_line(source: str, marker: str) -> int:
    """1-based number of the first line containing `marker`."""
    for number, text in enumerate(source.split("\n"), start=1):
        if marker in text:
            return number
    raise ValueError(f"Marker not found: {marker!r}")


def write_example_source(directory: str, name: str) -> Tuple[str, int, bool]:
    """
    Write one example declaration to `directory`.

    Returns:
        (path, call-site line, skip closures) ready for extract_labels
    """
    source, marker, skip_closures = EXAMPLE_SOURCES[name]
    path = os.path.join(directory, f"{name}.swift")
    with open(path, "w", encoding="utf-8") as f:
        f.write(source)
    return path, call_site_line(source, marker), skip_closures
