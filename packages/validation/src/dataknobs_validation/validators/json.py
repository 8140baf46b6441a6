"""Checks for decoded JSON shapes (objects, arrays and their contents).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ..codes import ExpectationCodes
from ..execution import Outcome, Steps, run
from ..expectation import Expectation
from ..result import Result
from ..validator import Predicate, Validator


def _shape(expected: str, message: str) -> Any:
    return lambda value: Expectation(
        message=message,
        value=value,
        code=ExpectationCodes.VALUE_TYPE_MISMATCH,
        data={"expected": expected, "found": type(value).__name__},
    )


def is_json_container() -> Validator:
    return Predicate(
        lambda value: isinstance(value, (Mapping, list)),
        _shape("dict|list", "a JSON object or array"),
    )


def is_json_object() -> Validator:
    """Pass for mappings whose keys are all strings."""
    return Predicate(
        lambda value: isinstance(value, Mapping) and all(isinstance(k, str) for k in value),
        _shape("dict[str, Any]", "a JSON object"),
    )


def is_json_array() -> Validator:
    return Predicate(lambda value: isinstance(value, list), _shape("list", "a JSON array"))


def json_has_keys(keys: Iterable[str]) -> Validator:
    required = list(keys)
    return Predicate(
        lambda value: isinstance(value, Mapping) and all(k in value for k in required),
        lambda value: Expectation(
            message=f"JSON object has keys: {', '.join(required)}",
            value=value,
            code=ExpectationCodes.VALUE_CONTAINS_MISSING,
            data={
                "keys": required,
                "missing": [k for k in required if not isinstance(value, Mapping) or k not in value],
            },
        ),
    )


def json_array_length(min_length: int | None = None, max_length: int | None = None) -> Validator:
    if min_length is not None and max_length is not None and min_length > max_length:
        raise ValueError("min_length must be <= max_length")
    bounds = "".join([
        f" >= {min_length}" if min_length is not None else "",
        f" <= {max_length}" if max_length is not None else "",
    ])

    def within(value: Any) -> bool:
        return (
            isinstance(value, list)
            and (min_length is None or len(value) >= min_length)
            and (max_length is None or len(value) <= max_length)
        )

    return Predicate(
        within,
        lambda value: Expectation(
            message=f"array length{bounds}",
            value=value,
            code=ExpectationCodes.VALUE_LENGTH_OUT_OF_RANGE,
            data={
                "min": min_length,
                "max": max_length,
                "length": len(value) if isinstance(value, list) else None,
            },
        ),
    )


class JsonArrayEvery(Validator):
    """Every element of a JSON array passes ``element``; stops at the first failure."""

    def __init__(self, element: Validator):
        super().__init__()
        self.element = element

    def evaluate(self, value: Any) -> Outcome:
        if not isinstance(value, list):
            return Result.invalid(value, _shape("list", "a JSON array")(value))
        return run(self._steps(value))

    def _steps(self, value: list) -> Steps:
        for index, item in enumerate(value):
            result = yield self.element.run(item)
            if not result.is_valid:
                return Result.invalid(value, [e.add_to_path(index) for e in result.expectations])
        return Result.valid(value)


def json_array_every(element: Validator) -> Validator:
    return JsonArrayEvery(element)
