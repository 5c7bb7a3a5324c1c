"""Tests for the JSON value model."""

from collections import OrderedDict

import pytest

from couchpatch.value import is_array, is_object, json_equal


def test_container_predicates():
    assert is_object({})
    assert is_object(OrderedDict(a=1))
    assert not is_object([])

    assert is_array([])
    assert is_array((1, 2))
    assert not is_array("abc")
    assert not is_array(b"abc")
    assert not is_array({})


@pytest.mark.parametrize(
    ("left", "right"),
    [
        (1, 1),
        (1, 1.0),
        ("a", "a"),
        (None, None),
        (True, True),
        ({"a": 1, "b": [1, 2]}, {"b": [1, 2], "a": 1}),
        ([1, {"x": None}], [1, {"x": None}]),
        ([1, 2], (1, 2)),
    ],
)
def test_json_equal(left, right):
    assert json_equal(left, right)
    assert json_equal(right, left)


@pytest.mark.parametrize(
    ("left", "right"),
    [
        (True, 1),
        (False, 0),
        (0, None),
        ("1", 1),
        ({"a": 1}, {"a": 1, "b": 2}),
        ({"a": 1}, {"b": 1}),
        ({"a": True}, {"a": 1}),
        ([1, 2], [2, 1]),
        ([1], [1, 1]),
        ([], {}),
        ({}, None),
    ],
)
def test_json_not_equal(left, right):
    assert not json_equal(left, right)
    assert not json_equal(right, left)
