"""Tests for the equality policy."""

from decimal import Decimal

from digestx import are_equal, snapshot


class _Point:
    def __init__(self, x, y):
        self.x = x
        self.y = y


class _SlotPoint:
    __slots__ = ("x", "y")

    def __init__(self, x, y):
        self.x = x
        self.y = y


class TestReferenceMode:
    def test_same_object(self):
        items = [1, 2]
        assert are_equal(items, items)

    def test_distinct_equal_lists_differ(self):
        assert not are_equal([1, 2], [1, 2])

    def test_scalars_by_value(self):
        assert are_equal(int("1000"), 1000)
        assert are_equal("ab" + "c", "".join(["a", "bc"]))
        assert are_equal(None, None)

    def test_bool_is_not_int(self):
        assert not are_equal(True, 1)
        assert not are_equal(0, False)
        assert are_equal(True, True)

    def test_int_and_float_by_value(self):
        assert are_equal(1, 1.0)
        assert are_equal(2.0, 2)
        assert not are_equal(1, 1.5)

    def test_nan(self):
        assert are_equal(float("nan"), float("nan"))
        assert are_equal(Decimal("nan"), float("nan"))
        assert not are_equal(float("nan"), 0.0)


class TestDeepMode:
    def test_structural(self):
        assert are_equal([1, {"a": (2, 3)}], [1, {"a": (2, 3)}], deep=True)
        assert not are_equal([1, 2], [1, 2, 3], deep=True)
        assert not are_equal({"a": 1}, {"b": 1}, deep=True)

    def test_list_is_not_tuple(self):
        assert not are_equal([1, 2], (1, 2), deep=True)

    def test_nested_nan(self):
        assert are_equal({"x": [float("nan")]}, {"x": [float("nan")]}, deep=True)

    def test_snapshot_copies_in_deep_mode(self):
        value = {"a": [1]}
        copied = snapshot(value, deep=True)
        assert copied == value and copied is not value
        assert copied["a"] is not value["a"]
        assert snapshot(value) is value

    def test_plain_objects_by_attributes(self):
        assert are_equal(_Point(1, [2]), _Point(1, [2]), deep=True)
        assert not are_equal(_Point(1, 2), _Point(1, 3), deep=True)
        assert are_equal(_Point(float("nan"), 0), _Point(float("nan"), 0), deep=True)

    def test_slotted_objects_by_attributes(self):
        assert are_equal(_SlotPoint(1, 2), _SlotPoint(1, 2), deep=True)
        assert not are_equal(_SlotPoint(1, 2), _SlotPoint(2, 2), deep=True)

    def test_plain_object_equals_its_snapshot(self):
        point = _Point(1, {"tags": ["a"]})
        assert are_equal(point, snapshot(point, deep=True), deep=True)

    def test_different_types_differ(self):
        assert not are_equal(_Point(1, 2), _SlotPoint(1, 2), deep=True)

    def test_plain_objects_by_identity_in_reference_mode(self):
        assert not are_equal(_Point(1, 2), _Point(1, 2))
