"""Numeric bounds.

All bounds report ``value.range_out_of_bounds`` with the operator and limit in
``data``, and reject non-numbers with ``type.mismatch`` first.
"""

from __future__ import annotations

import math
import operator
from collections.abc import Callable
from typing import Any

from ..codes import ExpectationCodes
from ..expectation import Expectation
from ..validator import Predicate, Validator
from .types import is_number


def _check_limit(name: str, limit: Any) -> None:
    if isinstance(limit, bool) or not isinstance(limit, (int, float)):
        raise ValueError(f"{name} must be a number, got {limit!r}")
    if math.isnan(limit):
        raise ValueError(f"{name} must not be NaN")


def _bound(
    op: Callable[[Any, Any], bool],
    symbol: str,
    label: str,
    limit: Any,
    message: str | None,
) -> Validator:
    _check_limit("limit", limit)
    return is_number() & Predicate(
        lambda value: op(value, limit),
        lambda value: Expectation(
            message=message or f"{label} {limit}",
            value=value,
            code=ExpectationCodes.VALUE_RANGE_OUT_OF_BOUNDS,
            data={"operator": symbol, "limit": limit},
        ),
    )


def is_lt(limit: Any, message: str | None = None) -> Validator:
    return _bound(operator.lt, "<", "less than", limit, message)


def is_lte(limit: Any, message: str | None = None) -> Validator:
    return _bound(operator.le, "<=", "less than or equal to", limit, message)


def is_gt(limit: Any, message: str | None = None) -> Validator:
    return _bound(operator.gt, ">", "greater than", limit, message)


def is_gte(limit: Any, message: str | None = None) -> Validator:
    return _bound(operator.ge, ">=", "greater than or equal to", limit, message)


def is_in_range(min_value: Any, max_value: Any, message: str | None = None) -> Validator:
    """Pass when ``min_value <= value <= max_value``.

    Raises:
        ValueError: If a bound is not a number, or ``min_value > max_value``
    """
    _check_limit("min_value", min_value)
    _check_limit("max_value", max_value)
    if min_value > max_value:
        raise ValueError(f"min_value ({min_value}) must be <= max_value ({max_value})")
    return is_number() & Predicate(
        lambda value: min_value <= value <= max_value,
        lambda value: Expectation(
            message=message or f"between {min_value} and {max_value} inclusive",
            value=value,
            code=ExpectationCodes.VALUE_RANGE_OUT_OF_BOUNDS,
            data={"operator": "between_inclusive", "min": min_value, "max": max_value},
        ),
    )
