from __future__ import annotations

from storyhub.core.parameters import merge_parameters


def test_nested_mappings_merge_and_scalars_override() -> None:
    merged = merge_parameters({"a": 1, "b": {"x": 1}}, {"b": {"y": 2}}, {"a": 2})

    assert merged == {"a": 2, "b": {"x": 1, "y": 2}}


def test_sequences_replace_wholesale() -> None:
    merged = merge_parameters({"items": [1, 2, 3]}, {"items": [4]})

    assert merged == {"items": [4]}


def test_merge_is_one_level_deep() -> None:
    merged = merge_parameters(
        {"options": {"theme": {"color": "red", "size": 1}}},
        {"options": {"theme": {"color": "blue"}}},
    )

    assert merged == {"options": {"theme": {"color": "blue"}}}


def test_type_mismatch_replaces() -> None:
    assert merge_parameters({"a": "text"}, {"a": {"x": 1}}) == {"a": {"x": 1}}
    assert merge_parameters({"a": {"x": 1}}, {"a": None}) == {"a": None}


def test_inputs_are_not_mutated_and_none_bags_skipped() -> None:
    base = {"b": {"x": 1}}
    merged = merge_parameters(base, None, {"b": {"y": 2}})

    assert base == {"b": {"x": 1}}
    assert merged["b"] == {"x": 1, "y": 2}
