"""Tests for deep structural equality."""

import pytest

from env_prefs.core.equality import deep_equal


class TestPrimitives:
    @pytest.mark.parametrize("value", [1, 1.5, "a", True, False, ""])
    def test_equal_primitives(self, value):
        assert deep_equal(value, value)

    def test_different_primitives(self):
        assert not deep_equal(1, 2)
        assert not deep_equal("a", "b")

    def test_int_and_float_with_same_value_are_equal(self):
        assert deep_equal(1, 1.0)

    def test_bool_is_not_number(self):
        assert not deep_equal(True, 1)
        assert not deep_equal(0, False)

    def test_none_only_equals_none(self):
        assert deep_equal(None, None)
        assert not deep_equal(None, 0)
        assert not deep_equal({}, None)

    def test_primitive_never_equals_composite(self):
        assert not deep_equal("ab", ["a", "b"])
        assert not deep_equal(1, {"a": 1})


class TestMappings:
    def test_key_order_is_ignored(self):
        assert deep_equal({"a": 1, "b": 2}, {"b": 2, "a": 1})

    def test_different_values(self):
        assert not deep_equal({"a": 1}, {"a": 2})

    def test_different_key_sets(self):
        assert not deep_equal({"a": 1}, {"a": 1, "b": 2})
        assert not deep_equal({"a": 1}, {"b": 1})

    def test_nested_mappings_with_different_insertion_order(self):
        left = {"filters": {"namespace": "default", "pod": "web"}, "limit": 5}
        right = {"limit": 5, "filters": {"pod": "web", "namespace": "default"}}
        assert deep_equal(left, right)

    def test_empty_mappings(self):
        assert deep_equal({}, {})


class TestSequences:
    def test_same_order(self):
        assert deep_equal([1, 2], [1, 2])

    def test_order_matters(self):
        assert not deep_equal([1, 2], [2, 1])

    def test_different_lengths(self):
        assert not deep_equal([1], [1, 1])

    def test_nested_sequence_inside_mapping(self):
        assert deep_equal({"args": ["-n", "x"]}, {"args": ["-n", "x"]})
        assert not deep_equal({"args": ["-n", "x"]}, {"args": ["x", "-n"]})

    def test_sequence_compares_like_index_keyed_mapping(self):
        """Sequences are compared as mappings keyed by index."""
        assert deep_equal([1, 2], {"0": 1, "1": 2})
