"""Equality policy — decides whether a fresh sample counts as a change.

Reference mode (the default) treats two samples as equal when they are the
same object, when they are equal numbers (int and float alike, bool kept
apart), the same str, bytes or None by value, or when both are NaN.
Mutable composites are compared by identity only, so an in-place mutation of a watched list goes unnoticed.

Deep mode compares structure recursively (mappings, lists, tuples, and the
attributes of plain objects without their own __eq__) and stores a deep
copy of each new baseline, so later in-place mutation of the live value
still shows up as a change.
"""

from __future__ import annotations

import copy
import numbers
import types
from collections.abc import Mapping
from typing import Any

# Immutable values whose identity is an implementation detail.
_SCALARS = (numbers.Number, str, bytes, type(None))

# Objects with a __dict__ that are not data.
_OPAQUE = (type, types.FunctionType, types.MethodType, types.ModuleType)


def _is_nan(value: Any) -> bool:
    return isinstance(value, numbers.Number) and value != value


def are_equal(new: Any, old: Any, deep: bool = False) -> bool:
    """True if new and old count as the same sample under the chosen mode."""
    if deep:
        return _deep_equal(new, old)
    if new is old:
        return True
    if _is_nan(new) and _is_nan(old):
        return True
    # bool is a Number; keep True distinct from 1. Equal bools are identical.
    if isinstance(new, bool) or isinstance(old, bool):
        return False
    if isinstance(new, numbers.Number) and isinstance(old, numbers.Number):
        return new == old
    if isinstance(new, _SCALARS) and type(new) is type(old):
        return new == old
    return False


def _deep_equal(a: Any, b: Any) -> bool:
    if a is b:
        return True
    if _is_nan(a) and _is_nan(b):
        return True
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if a.keys() != b.keys():
            return False
        return all(_deep_equal(a[key], b[key]) for key in a)
    if isinstance(a, (list, tuple)) and type(a) is type(b):
        return len(a) == len(b) and all(map(_deep_equal, a, b))
    if type(a) is type(b) and type(a).__eq__ is object.__eq__ and not isinstance(a, _OPAQUE):
        # Plain objects: compare attributes instead of identity.
        attrs_a, attrs_b = _attributes(a), _attributes(b)
        if attrs_a is not None and attrs_b is not None:
            return _deep_equal(attrs_a, attrs_b)
    return bool(a == b)


def _attributes(obj: Any) -> dict[str, Any] | None:
    """Instance attributes from __dict__ and __slots__, or None if it has neither."""
    attrs = dict(vars(obj)) if hasattr(obj, "__dict__") else None
    for cls in type(obj).__mro__:
        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__"):
                continue
            if name.startswith("__") and not name.endswith("__"):
                name = f"_{cls.__name__.lstrip('_')}{name}"
            if attrs is None:
                attrs = {}
            # Unset slots are left out, same as a missing key.
            if hasattr(obj, name):
                attrs[name] = getattr(obj, name)
    return attrs


def snapshot(value: Any, deep: bool = False) -> Any:
    """Baseline to store for a changed sample."""
    return copy.deepcopy(value) if deep else value
