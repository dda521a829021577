"""Parameter bag merging."""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

Parameters = Dict[str, Any]


def _merge_value(existing: Any, value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return value
    if isinstance(value, Mapping):
        if isinstance(existing, Mapping):
            return {**existing, **value}
        return dict(value)
    return value


def merge_parameters(*bags: Optional[Mapping[str, Any]]) -> Parameters:
    """Merge parameter *bags* from lowest to highest priority.

    Sequences replace the accumulated value, mappings are merged one level
    deep into an accumulated mapping, and everything else replaces it.
    ``None`` bags are skipped.
    """

    merged: Parameters = {}
    for bag in bags:
        if not bag:
            continue
        for key, value in bag.items():
            merged[key] = _merge_value(merged.get(key), value)
    return merged


__all__ = ["Parameters", "merge_parameters"]
