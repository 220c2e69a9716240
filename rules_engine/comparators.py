"""
Built-in comparison operators.

Each comparator takes ``(field_value, condition_value)`` and returns a bool,
raising TypeMismatchError when the operands cannot be compared. Equality and
ordering share ``to_number`` so that 100, 100.0 and "100" compare as the same
magnitude; structural equality stays type-strict.
"""

import numbers
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

from .errors import TypeMismatchError

OperatorFunc = Callable[[Any, Any], bool]

_SEQUENCE_TYPES = (list, tuple)


def to_number(value: Any) -> Optional[float]:
    """Coerce ``value`` to a float, or return None if it is not numeric.

    Booleans, containers and non-numeric strings are rejected.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (numbers.Real, Decimal)):
        try:
            return float(value)
        except (OverflowError, ValueError):
            return None
    if isinstance(value, str):
        # Plain decimal notation only: no padding, no digit separators
        if value != value.strip() or "_" in value:
            return None
        try:
            return float(value)
        except ValueError:
            return None
    return None


def deep_equal(a: Any, b: Any) -> bool:
    """Type-strict structural equality across nested containers."""
    if isinstance(a, Mapping) or isinstance(b, Mapping):
        if not (isinstance(a, Mapping) and isinstance(b, Mapping)):
            return False
        if a.keys() != b.keys():
            return False
        return all(deep_equal(a[key], b[key]) for key in a)

    if isinstance(a, _SEQUENCE_TYPES) or isinstance(b, _SEQUENCE_TYPES):
        if not (isinstance(a, _SEQUENCE_TYPES) and isinstance(b, _SEQUENCE_TYPES)):
            return False
        if len(a) != len(b):
            return False
        return all(deep_equal(x, y) for x, y in zip(a, b))

    if type(a) is not type(b):
        return False
    return a == b


def equal(a: Any, b: Any) -> bool:
    """Structural equality, falling back to numeric comparison."""
    if deep_equal(a, b):
        return True
    fa = to_number(a)
    if fa is None:
        return False
    fb = to_number(b)
    if fb is None:
        return False
    return fa == fb


def _numeric_operands(operator: str, a: Any, b: Any):
    fa = to_number(a)
    fb = to_number(b)
    if fa is None or fb is None:
        raise TypeMismatchError(
            operator,
            details={"field_type": type(a).__name__, "value_type": type(b).__name__},
        )
    return fa, fb


def eq(a: Any, b: Any) -> bool:
    return equal(a, b)


def ne(a: Any, b: Any) -> bool:
    return not equal(a, b)


def gt(a: Any, b: Any) -> bool:
    fa, fb = _numeric_operands("gt", a, b)
    return fa > fb


def gte(a: Any, b: Any) -> bool:
    fa, fb = _numeric_operands("gte", a, b)
    return fa >= fb


def lt(a: Any, b: Any) -> bool:
    fa, fb = _numeric_operands("lt", a, b)
    return fa < fb


def lte(a: Any, b: Any) -> bool:
    fa, fb = _numeric_operands("lte", a, b)
    return fa <= fb


def contains(a: Any, b: Any) -> bool:
    """True if ``b`` is a substring of ``a``; both must be strings."""
    if not (isinstance(a, str) and isinstance(b, str)):
        raise TypeMismatchError(
            "contains",
            details={"field_type": type(a).__name__, "value_type": type(b).__name__},
        )
    return b in a


def in_(a: Any, b: Any) -> bool:
    """True if any element of the sequence ``b`` equals ``a``."""
    if not isinstance(b, _SEQUENCE_TYPES):
        raise TypeMismatchError(
            "in",
            "in requires a sequence value",
            details={"value_type": type(b).__name__},
        )
    return any(equal(a, item) for item in b)


BUILTIN_OPERATORS: Dict[str, OperatorFunc] = {
    "eq": eq,
    "ne": ne,
    "gt": gt,
    "gte": gte,
    "lt": lt,
    "lte": lte,
    "contains": contains,
    "in": in_,
}
