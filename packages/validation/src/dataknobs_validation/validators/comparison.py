"""Equality, membership, length and containment checks.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..codes import ExpectationCodes
from ..combinators import All
from ..execution import Outcome, then
from ..expectation import Expectation
from ..result import Result
from ..validator import Predicate, Validator


def _same_kind(a: Any, b: Any) -> bool:
    # True == 1 in Python, but a bool and an int are different values here
    return isinstance(a, bool) == isinstance(b, bool)


def is_eq(expected: Any, message: str | None = None) -> Validator:
    """Pass when the value equals ``expected``."""
    return Predicate(
        lambda value: _same_kind(value, expected) and value == expected,
        lambda value: Expectation(
            message=message or f"equal to {expected!r}",
            value=value,
            code=ExpectationCodes.VALUE_EQUAL_MISMATCH,
            data={"expected": expected, "found": value, "mode": "shallow"},
        ),
    )


def is_deep_eq(expected: Any, message: str | None = None) -> Validator:
    """Pass when the value structurally equals ``expected`` (nested containers included)."""
    return Predicate(
        lambda value: _deep_equal(value, expected),
        lambda value: Expectation(
            message=message or f"equal to {expected!r}",
            value=value,
            code=ExpectationCodes.VALUE_DEEP_EQUAL_MISMATCH,
            data={"expected": expected, "found": value, "mode": "deep"},
        ),
    )


def _deep_equal(a: Any, b: Any) -> bool:
    if isinstance(a, dict) and isinstance(b, dict):
        return a.keys() == b.keys() and all(_deep_equal(a[k], b[k]) for k in a)
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        return len(a) == len(b) and all(_deep_equal(x, y) for x, y in zip(a, b))
    return _same_kind(a, b) and a == b


def is_one_of(options: Iterable[Any], message: str | None = None) -> Validator:
    """Pass when the value is one of ``options``."""
    choices = list(options)
    return Predicate(
        lambda value: any(_same_kind(value, o) and value == o for o in choices),
        lambda value: Expectation(
            message=message or f"one of: {choices!r}",
            value=value,
            code=ExpectationCodes.VALUE_MEMBERSHIP_MISMATCH,
            data={"options": choices},
        ),
    )


class Length(Validator):
    """Run validators against ``len(value)``; failures are merged into one expectation."""

    def __init__(self, validators: Iterable[Validator], message: str | None = None):
        super().__init__()
        self.inner = All(validators)
        self.message = message

    def evaluate(self, value: Any) -> Outcome:
        if not hasattr(value, "__len__"):
            return Result.invalid(value, Expectation(
                message=self.message or f"{type(value).__name__} does not have a length",
                value=value,
                code=ExpectationCodes.LOGIC_PREDICATE_FAILED,
            ))
        size = len(value)
        return then(self.inner.run(size), lambda result: self._settle(result, value, size))

    def describe(self, value: Any) -> Expectation | None:
        inner = self.inner.describe(len(value) if hasattr(value, "__len__") else None)
        message = self.message or (f"length [{inner.message}]" if inner else "length")
        return Expectation(
            message=message, value=value, code=ExpectationCodes.VALUE_LENGTH_OUT_OF_RANGE
        )

    def _settle(self, result: Result, value: Any, size: int) -> Result:
        if result.is_valid:
            return Result.valid(value)
        joined = " & ".join(e.message for e in result.expectations)
        return Result.invalid(value, Expectation(
            message=self.message or f"length [{joined}]",
            value=value,
            code=ExpectationCodes.VALUE_LENGTH_OUT_OF_RANGE,
            data={"length": size},
        ))


def length(validators: Iterable[Validator], message: str | None = None) -> Validator:
    """Validate the length of a sized value, e.g. ``length([is_gte(2), is_lte(5)])``."""
    return Length(validators, message)


def _contains(container: Any, item: Any) -> bool:
    try:
        return item in container
    except TypeError:
        return False


def contains(item: Any, message: str | None = None) -> Validator:
    """Pass when ``item in value``."""
    return Predicate(
        lambda value: hasattr(value, "__contains__") and _contains(value, item),
        lambda value: Expectation(
            message=message or (
                f"contains {item!r}" if hasattr(value, "__contains__")
                else f"{type(value).__name__} does not support containment"
            ),
            value=value,
            code=ExpectationCodes.VALUE_CONTAINS_MISSING,
            data={"needle": item},
        ),
    )
