"""Type checks.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from numbers import Real
from typing import Any

from ..codes import ExpectationCodes
from ..expectation import Expectation
from ..validator import Predicate, Validator


def type_name(expected: type | tuple[type, ...]) -> str:
    """Readable name for a type or a tuple of alternatives."""
    if isinstance(expected, tuple):
        return "|".join(type_name(t) for t in expected)
    return getattr(expected, "__name__", str(expected))


def type_expectation(value: Any, expected: str, message: str | None = None) -> Expectation:
    """Build the ``type.mismatch`` expectation for ``value``."""
    return Expectation(
        message=message or expected,
        value=value,
        code=ExpectationCodes.TYPE_MISMATCH,
        data={"expected": expected, "found": type(value).__name__},
    )


def type_check(test: Callable[[Any], bool], expected: str, message: str | None = None) -> Validator:
    """Build a type-check predicate reporting ``type.mismatch``."""
    return Predicate(test, lambda value: type_expectation(value, expected, message))


def is_type(expected: type | tuple[type, ...], message: str | None = None) -> Validator:
    """Pass when the value is an instance of ``expected``."""
    return type_check(lambda value: isinstance(value, expected), type_name(expected), message)


def is_none(message: str | None = None) -> Validator:
    return type_check(lambda value: value is None, "None", message)


def is_str(message: str | None = None) -> Validator:
    return is_type(str, message)


def is_int(message: str | None = None) -> Validator:
    """Pass for ints; bools are rejected even though they subclass int."""
    return type_check(
        lambda value: isinstance(value, int) and not isinstance(value, bool), "int", message
    )


def is_float(message: str | None = None) -> Validator:
    return is_type(float, message)


def is_number(message: str | None = None) -> Validator:
    """Pass for real numbers other than bools."""
    return type_check(
        lambda value: isinstance(value, Real) and not isinstance(value, bool), "number", message
    )


def is_bool(message: str | None = None) -> Validator:
    return is_type(bool, message)


def is_list(message: str | None = None) -> Validator:
    """Pass for lists and tuples."""
    return type_check(lambda value: isinstance(value, (list, tuple)), "list", message)


def is_dict(message: str | None = None) -> Validator:
    """Pass for any mapping."""
    return type_check(lambda value: isinstance(value, Mapping), "dict", message)


def is_datetime(message: str | None = None) -> Validator:
    return is_type(datetime, message)


def is_callable(message: str | None = None) -> Validator:
    return type_check(callable, "callable", message)


def is_iterable(message: str | None = None) -> Validator:
    return type_check(lambda value: isinstance(value, Iterable), "iterable", message)
