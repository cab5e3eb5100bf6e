from __future__ import annotations

import copy

from persistence.merge_patch import merge_patch


def test_null_removes_field():
    assert merge_patch({"a": 1, "b": 2}, {"a": None}) == {"b": 2}


def test_null_for_missing_field_is_noop():
    assert merge_patch({"b": 2}, {"a": None}) == {"b": 2}


def test_nested_objects_merge():
    assert merge_patch({"a": {"x": 1, "y": 2}}, {"a": {"x": 9}}) == {"a": {"x": 9, "y": 2}}


def test_nested_null_removes_nested_field():
    assert merge_patch({"a": {"x": 1, "y": 2}}, {"a": {"y": None}}) == {"a": {"x": 1}}


def test_arrays_replaced_wholesale():
    assert merge_patch({"a": [1, 2, 3]}, {"a": [4]}) == {"a": [4]}


def test_object_replaces_scalar_verbatim():
    assert merge_patch({"a": 1}, {"a": {"x": 1}}) == {"a": {"x": 1}}


def test_scalar_replaces_object():
    assert merge_patch({"a": {"x": 1}}, {"a": "flat"}) == {"a": "flat"}


def test_untouched_fields_kept_and_new_fields_added():
    assert merge_patch({"a": 1, "b": {"c": True}}, {"d": [None]}) == {"a": 1, "b": {"c": True}, "d": [None]}


def test_inputs_not_mutated():
    base = {"a": {"x": 1}, "b": [1, 2], "c": 3}
    patch = {"a": {"y": 2}, "c": None, "e": {"f": [1]}}
    base_before = copy.deepcopy(base)
    patch_before = copy.deepcopy(patch)

    result = merge_patch(base, patch)
    result["a"]["x"] = 100
    result["b"].append(3)
    result["e"]["f"].append(2)

    assert base == base_before
    assert patch == patch_before
