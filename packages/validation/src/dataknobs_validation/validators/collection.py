"""Map key/value and list checks.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ..codes import ExpectationCodes
from ..combinators import with_expectation
from ..expectation import Expectation
from ..validator import Predicate, Validator
from .comparison import contains, is_eq, length
from .number import is_gt, is_lte
from .types import is_dict, is_list


def contains_key(key: Any, message: str | None = None) -> Validator:
    return is_dict() & Predicate(
        lambda value: key in value,
        lambda value: Expectation(
            message=message or f'contains key "{key}"',
            value=value,
            code=ExpectationCodes.VALUE_CONTAINS_MISSING,
            data={"keys": [key]},
        ),
    )


def contains_keys(keys: Iterable[Any], message: str | None = None) -> Validator:
    """Pass when every key is present; ``data['missing']`` lists the absent ones."""
    wanted = list(keys)
    return is_dict() & Predicate(
        lambda value: all(k in value for k in wanted),
        lambda value: Expectation(
            message=message or f"contains keys: {wanted!r}",
            value=value,
            code=ExpectationCodes.VALUE_CONTAINS_MISSING,
            data={"keys": wanted, "missing": [k for k in wanted if k not in value]},
        ),
    )


def contains_values(values: Iterable[Any], message: str | None = None) -> Validator:
    wanted = list(values)

    def test(value: Mapping) -> bool:
        present = list(value.values())
        return all(v in present for v in wanted)

    return is_dict() & Predicate(
        test,
        lambda value: Expectation(
            message=message or f"contains values: {wanted!r}",
            value=value,
            code=ExpectationCodes.VALUE_CONTAINS_MISSING,
            data={"values": wanted},
        ),
    )


def list_length(validators: Iterable[Validator], message: str | None = None) -> Validator:
    return is_list() & length(validators, message)


def list_is_of_length(size: int, message: str | None = None) -> Validator:
    if size < 0:
        raise ValueError("size must be non-negative")
    return list_length([is_eq(size)], message)


def list_contains(item: Any, message: str | None = None) -> Validator:
    return is_list() & with_expectation(contains(item), Expectation(
        message=message or f"List to contain {item!r}",
        code=ExpectationCodes.VALUE_CONTAINS_MISSING,
        data={"needle": item},
    ))


def list_empty(message: str | None = None) -> Validator:
    return list_length([is_lte(0)], message or "List to be empty")


def list_not_empty(message: str | None = None) -> Validator:
    return list_length([is_gt(0)], message or "List to be non-empty")
