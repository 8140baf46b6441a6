"""Structural validators for maps and lists.

``schema`` validates a mapping field by field, applying each field's presence
flags, and reports every failing field with its path:

    ```python
    address = schema({"street": is_str(), "zip": is_int_string()})
    user = schema({
        "name": is_str(),
        "age": to_int(is_gte(0)),
        "address": address,
        "tags": list_each(is_str()).optional(),
    })

    result = user.validate({"name": "Ann", "age": "41", "address": {"street": 1}})
    # result.expectations -> paths "address.street" and "address.zip"
    ```

On success the result value is a new mapping (or list) holding the coerced
field values; ``original_value`` keeps the input untouched.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from .codes import ExpectationCodes
from .contextual import ContextualValidator
from .execution import Outcome, Steps, run
from .expectation import Expectation
from .result import Result
from .validator import Validator
from .validators.types import type_expectation


def _prefixed(
    result: Result, segment: str | int, fallback_code: str, message: str | None
) -> list[Expectation]:
    out = []
    for e in result.expectations:
        e = e.add_to_path(segment)
        if message is not None:
            e = e.copy_with(message=message)
        if e.code is None:
            e = e.copy_with(code=fallback_code)
        out.append(e)
    return out


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


class Schema(Validator):
    """Validate a mapping against per-key validators.

    Field presence rules:

    - missing key and an optional field: skipped
    - ``None`` value and a nullable field: skipped
    - missing key and a required field: the field validator sees ``None``
      as an absent value, so only ``optional`` would have accepted it

    Contextual fields (``when``, ``resolve``) also receive the mapping.

    Args:
        fields: Validator per key, evaluated in insertion order
        strict: Also fail on keys that have no validator
        message: Replace every field failure message (paths and codes kept)
    """

    def __init__(
        self,
        fields: Mapping[Any, Validator],
        *,
        strict: bool = False,
        message: str | None = None,
        nullable: bool = False,
        optional: bool = False,
    ):
        super().__init__(nullable=nullable, optional=optional)
        self.fields = dict(fields)
        self.strict = strict
        self.message = message

    def evaluate(self, value: Any) -> Outcome:
        if not isinstance(value, Mapping):
            return Result.invalid(value, type_expectation(value, "dict"))
        return run(self._steps(value))

    def _steps(self, value: Mapping) -> Steps:
        output = dict(value)
        failures: list[Expectation] = []

        for key, field in self.fields.items():
            exists = key in value
            field_value = value.get(key)
            if not exists and field.is_optional:
                continue
            if exists and field_value is None and field.is_nullable:
                continue

            if isinstance(field, ContextualValidator):
                result = yield field.run_with_parent(field_value, value, exists)
            else:
                result = yield field.run(field_value, exists)

            if result.is_valid:
                if exists or result.value is not None:
                    output[key] = result.value
            else:
                segment = key if isinstance(key, (str, int)) else str(key)
                failures.extend(_prefixed(
                    result, segment, ExpectationCodes.STRUCTURE_MAP_FIELD_FAILED, self.message
                ))

        if self.strict:
            unknown = [k for k in value if k not in self.fields]
            if unknown:
                failures.append(Expectation(
                    message=self.message or f"has unknown keys: {', '.join(map(str, unknown))}",
                    value=value,
                    code=ExpectationCodes.STRUCTURE_UNKNOWN_KEY,
                    data={"keys": unknown},
                ))

        if failures:
            return Result.invalid(value, failures)
        return Result.valid(output, original_value=value)


class ListItems(Validator):
    """Base for list validators; ``None`` items are skipped for nullable item validators."""

    def __init__(
        self,
        *,
        message: str | None = None,
        nullable: bool = False,
        optional: bool = False,
    ):
        super().__init__(nullable=nullable, optional=optional)
        self.message = message

    @abstractmethod
    def _item_validator(self, index: int) -> Validator:
        """Validator for the item at ``index``."""

    def evaluate(self, value: Any) -> Outcome:
        if not _is_sequence(value):
            return Result.invalid(value, type_expectation(value, "list"))
        return run(self._steps(value))

    def _steps(self, value: Sequence) -> Steps:
        output = list(value)
        failures: list[Expectation] = []

        for index, item in enumerate(value):
            validator = self._item_validator(index)
            if item is None and validator.is_nullable:
                continue
            result = yield validator.run(item)
            if result.is_valid:
                output[index] = result.value
            else:
                failures.extend(_prefixed(
                    result, index, ExpectationCodes.STRUCTURE_LIST_ITEM_FAILED, self.message
                ))

        if failures:
            return Result.invalid(value, failures)
        return Result.valid(output, original_value=value)


class ListEach(ListItems):
    """Validate every item of a list with the same validator."""

    def __init__(
        self,
        item: Validator,
        *,
        message: str | None = None,
        nullable: bool = False,
        optional: bool = False,
    ):
        super().__init__(message=message, nullable=nullable, optional=optional)
        self.item = item

    def _item_validator(self, index: int) -> Validator:
        return self.item


class ListSchema(ListItems):
    """Validate a fixed-length list position by position."""

    def __init__(
        self,
        items: Sequence[Validator],
        *,
        message: str | None = None,
        nullable: bool = False,
        optional: bool = False,
    ):
        super().__init__(message=message, nullable=nullable, optional=optional)
        self.items = tuple(items)

    def _item_validator(self, index: int) -> Validator:
        return self.items[index]

    def evaluate(self, value: Any) -> Outcome:
        if _is_sequence(value) and len(value) != len(self.items):
            return Result.invalid(value, Expectation(
                message=self.message or f"length [equal to {len(self.items)}]",
                value=value,
                code=ExpectationCodes.VALUE_LENGTH_OUT_OF_RANGE,
                data={"length": len(value), "expected": len(self.items)},
            ))
        return super().evaluate(value)


class GetField(Validator):
    """Validate one field of a mapping, passing the mapping through unchanged."""

    def __init__(self, key: Any, inner: Validator):
        super().__init__()
        self.key = key
        self.inner = inner

    def evaluate(self, value: Any) -> Outcome:
        if not isinstance(value, Mapping):
            return Result.invalid(value, type_expectation(value, "dict"))
        return run(self._steps(value))

    def _steps(self, value: Mapping) -> Steps:
        result = yield self.inner.run(value.get(self.key), self.key in value)
        if result.is_valid:
            return Result.valid(value)
        return Result.invalid(value, _prefixed(
            result, self.key, ExpectationCodes.STRUCTURE_MAP_FIELD_FAILED, None
        ))


def schema(fields: Mapping[Any, Validator], message: str | None = None) -> Schema:
    """Validate a mapping field by field."""
    return Schema(fields, message=message)


def strict_schema(fields: Mapping[Any, Validator], message: str | None = None) -> Schema:
    """Like ``schema`` but keys without a validator fail with ``structure.unknown_key``."""
    return Schema(fields, strict=True, message=message)


def list_each(item: Validator, message: str | None = None) -> ListEach:
    """Validate every item of a list with ``item``."""
    return ListEach(item, message=message)


def list_schema(items: Sequence[Validator], message: str | None = None) -> ListSchema:
    """Validate a list of exactly ``len(items)`` elements, one validator per position."""
    return ListSchema(items, message=message)


def get_field(key: Any, inner: Validator) -> GetField:
    """Validate ``value[key]`` with ``inner``; a missing key is seen as absent."""
    return GetField(key, inner)
