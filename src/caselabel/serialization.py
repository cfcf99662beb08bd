"""
Serialization helpers for scanner options and label tables.

Provides JSON/YAML round-trip via intermediate dict representation.
Label tables keep their order; case values are stored as plain data
(Enum members by value) and rebuilt through the caller's case type.
"""
from __future__ import annotations

import json
from dataclasses import asdict
from enum import Enum
from typing import Any, Callable, Dict

import yaml

from caselabel.enhancer import EnumEnhancer
from caselabel.model import ScanOptions


def options_to_dict(o: ScanOptions) -> Dict[str, Any]:
    return asdict(o)


def options_from_dict(d: Dict[str, Any] | None) -> ScanOptions:
    if not d:
        return ScanOptions()
    known = {k: v for k, v in d.items() if k in ScanOptions.__dataclass_fields__}
    unknown = sorted(set(d) - set(known))
    if unknown:
        raise ValueError(f"Unknown scan option(s): {', '.join(unknown)}")
    return ScanOptions(**known)


def options_to_json(o: ScanOptions) -> str:
    return json.dumps(options_to_dict(o), sort_keys=True)


def options_from_json(s: str) -> ScanOptions:
    return options_from_dict(json.loads(s))


def options_to_yaml(o: ScanOptions) -> str:
    return yaml.safe_dump(options_to_dict(o), sort_keys=True)


def options_from_yaml(s: str) -> ScanOptions:
    return options_from_dict(yaml.safe_load(s))


def load_options(path: str) -> ScanOptions:
    """Read ScanOptions from a YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        return options_from_yaml(f.read())


def case_to_data(case: Any) -> Any:
    if isinstance(case, Enum):
        return case.value
    return case


def enhancer_to_dict(e: EnumEnhancer) -> Dict[str, Any]:
    return {
        "count": e.count,
        "cases": [{"label": label, "value": case_to_data(case)} for case, label in e.pairs()],
    }


def enhancer_from_dict(d: Dict[str, Any], case_type: Callable[[Any], Any] | None = None) -> EnumEnhancer:
    """
    Rebuild a label table.

    Args:
        d: Dict produced by enhancer_to_dict
        case_type: Converts a stored value back into a case
            (an Enum class works directly); values are kept as-is if None
    """
    entries = d.get("cases", [])
    convert = case_type or (lambda value: value)
    enhancer = EnumEnhancer.from_pairs((convert(entry["value"]), entry["label"]) for entry in entries)
    if "count" in d and d["count"] != enhancer.count:
        raise ValueError(f"Stored count {d['count']} does not match {enhancer.count} entries")
    return enhancer


def enhancer_to_json(e: EnumEnhancer) -> str:
    return json.dumps(enhancer_to_dict(e), sort_keys=True)


def enhancer_from_json(s: str, case_type: Callable[[Any], Any] | None = None) -> EnumEnhancer:
    return enhancer_from_dict(json.loads(s), case_type)


def enhancer_to_yaml(e: EnumEnhancer) -> str:
    return yaml.safe_dump(enhancer_to_dict(e), sort_keys=False)


def enhancer_from_yaml(s: str, case_type: Callable[[Any], Any] | None = None) -> EnumEnhancer:
    return enhancer_from_dict(yaml.safe_load(s), case_type)
