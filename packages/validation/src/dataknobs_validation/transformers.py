"""Coercions and normalizers that change the value flowing through a chain.

A transformer is a validator whose successful result carries a new value;
``original_value`` keeps the input. Each function optionally takes a ``child``
validator that receives the transformed value:

    ```python
    age = to_int(is_gte(0))
    age.validate(" 42 ").value          # 42
    age.validate("abc").first_expectation.code  # "value.coercion_failed"

    tags = pluck_key("tags", list_each(trim(string_not_empty())))
    ```

Coercions never raise for bad input: ``ValueError``, ``TypeError`` and
``OverflowError`` raised while converting become ``value.coercion_failed``
expectations.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from enum import Enum
from numbers import Real
from typing import Any

from .codes import ExpectationCodes
from .combinators import All, with_expectation
from .execution import Outcome
from .expectation import Expectation
from .result import Result
from .validator import Validator

MAX_SAFE_INT = 2 ** 53 - 1

_TRUE_WORDS = frozenset({"true", "t", "yes", "y", "on", "1"})
_FALSE_WORDS = frozenset({"false", "f", "no", "n", "off", "0"})
_WHITESPACE_RUNS = re.compile(r"\s+")


class CoercionKind(Enum):
    """Value kind produced by a coercion step."""

    INT = "int"
    FLOAT = "float"
    NUMBER = "number"
    BOOL = "bool"
    STRING = "string"
    DATETIME = "datetime"
    JSON = "json"
    CUSTOM = "custom"


class _Reject(Exception):
    """Internal signal for a value that cannot be converted."""


class Coercion(Validator):
    """Validator that converts its input.

    Args:
        fn: Conversion function; raising ``ValueError``/``TypeError``/
            ``OverflowError`` or returning None (unless ``allow_none``) fails
        expected: Description of acceptable input, used as the failure message
        kind: Value kind produced, None for normalizers that keep the kind
        variant: Name of the conversion rule; defaults to the kind name, so
            conversions of one kind with different rules stay distinct
        accepts: Optional guard checked before ``fn`` runs
        allow_none: Accept None as a conversion result
    """

    def __init__(
        self,
        fn: Callable[[Any], Any],
        expected: str,
        *,
        kind: CoercionKind | None = None,
        variant: str | None = None,
        accepts: Callable[[Any], bool] | None = None,
        allow_none: bool = False,
        nullable: bool = False,
        optional: bool = False,
    ):
        super().__init__(nullable=nullable, optional=optional)
        self.fn = fn
        self.expected = expected
        self.kind = kind
        self.variant = variant or (kind.value if kind else None)
        self.accepts = accepts
        self.allow_none = allow_none

    def evaluate(self, value: Any) -> Outcome:
        if self.accepts is not None and not self.accepts(value):
            return self._fail(value)
        try:
            converted = self.fn(value)
        except (_Reject, ValueError, TypeError, OverflowError):
            return self._fail(value)
        if converted is None and not self.allow_none:
            return self._fail(value)
        return Result.valid(converted, original_value=value)

    def describe(self, value: Any) -> Expectation:
        return Expectation(
            message=self.expected,
            value=value,
            code=ExpectationCodes.VALUE_COERCION_FAILED,
            data={
                "target": self.kind.value if self.kind else None,
                "found": type(value).__name__,
            },
        )

    def _fail(self, value: Any) -> Result:
        return Result.invalid(value, self.describe(value))

    def __repr__(self) -> str:
        return f"Coercion({self.kind.value if self.kind else self.expected!r})"


def _finish(step: Coercion, child: Validator | None, message: str | None) -> Validator:
    validator: Validator = step if child is None else All([step, child])
    if message is not None:
        return with_expectation(validator, message)
    return validator


def _not_bool(value: Any) -> bool:
    return not isinstance(value, bool)


def _int(value: Any) -> int:
    if isinstance(value, str):
        return int(value.strip())
    if isinstance(value, float):
        return int(value)
    if isinstance(value, int):
        return value
    raise _Reject()


def _int_strict(value: Any) -> int:
    if isinstance(value, str):
        return int(value.strip())
    if isinstance(value, int):
        return value
    raise _Reject()


def _int_safe(value: Any) -> int:
    number = _int_strict(value)
    if not -MAX_SAFE_INT <= number <= MAX_SAFE_INT:
        raise _Reject()
    return number


def _float(value: Any) -> float:
    if isinstance(value, str):
        return float(value.strip())
    if isinstance(value, Real):
        return float(value)
    raise _Reject()


def _number(value: Any) -> int | float:
    if isinstance(value, Real):
        return value  # type: ignore[return-value]
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            return float(text)
    raise _Reject()


def _bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return value == 1
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise _Reject()


def _bool_strict(value: Any) -> bool:
    if isinstance(value, int) and not isinstance(value, bool):
        raise _Reject()
    return _bool(value)


def _bool_lenient(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    word = str(value).strip().lower() if isinstance(value, (str, int)) else None
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise _Reject()


def _datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.strip())
    raise _Reject()


def _json(value: Any) -> dict | list:
    if isinstance(value, (dict, list)):
        return value
    if isinstance(value, (str, bytes, bytearray)):
        decoded = json.loads(value)
        if isinstance(decoded, (dict, list)):
            return decoded
    raise _Reject()


def _flatten(value: Mapping, delimiter: str) -> dict[str, Any]:
    flat: dict[str, Any] = {}

    def walk(node: Mapping, prefix: str) -> None:
        for key, item in node.items():
            path = f"{prefix}{delimiter}{key}" if prefix else str(key)
            if isinstance(item, Mapping):
                walk(item, path)
            else:
                flat[path] = item

    walk(value, "")
    return flat


def _is_str(value: Any) -> bool:
    return isinstance(value, str)


def _is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


# Coercion steps, shared with the builder

def int_step() -> Coercion:
    return Coercion(_int, "a value convertible to int", kind=CoercionKind.INT, accepts=_not_bool)


def int_strict_step() -> Coercion:
    return Coercion(
        _int_strict, "a value strictly convertible to int", kind=CoercionKind.INT,
        variant="int_strict", accepts=_not_bool,
    )


def int_safe_step() -> Coercion:
    return Coercion(
        _int_safe,
        "a value strictly convertible to an int within the safe 53-bit range",
        kind=CoercionKind.INT,
        variant="int_safe",
        accepts=_not_bool,
    )


def float_step() -> Coercion:
    return Coercion(_float, "a value convertible to float", kind=CoercionKind.FLOAT, accepts=_not_bool)


def number_step() -> Coercion:
    return Coercion(
        _number, "a value convertible to a number", kind=CoercionKind.NUMBER, accepts=_not_bool
    )


def bool_step() -> Coercion:
    return Coercion(_bool, "a value convertible to bool", kind=CoercionKind.BOOL)


def bool_strict_step() -> Coercion:
    return Coercion(_bool_strict, "a bool or 'true'/'false'", kind=CoercionKind.BOOL, variant="bool_strict")


def bool_lenient_step() -> Coercion:
    return Coercion(_bool_lenient, "a value convertible to bool", kind=CoercionKind.BOOL, variant="bool_lenient")


def str_step() -> Coercion:
    return Coercion(
        str, "a value convertible to str", kind=CoercionKind.STRING,
        accepts=lambda value: value is not None,
    )


def datetime_step() -> Coercion:
    return Coercion(_datetime, "a value convertible to datetime", kind=CoercionKind.DATETIME)


def json_step() -> Coercion:
    return Coercion(_json, "a JSON decodable value (dict/list)", kind=CoercionKind.JSON)


def custom_step(fn: Callable[[Any], Any], expected: str = "a transformable value") -> Coercion:
    return Coercion(fn, expected, kind=CoercionKind.CUSTOM, allow_none=True)


def trim_step() -> Coercion:
    return Coercion(str.strip, "a str to trim", accepts=_is_str)


def collapse_whitespace_step() -> Coercion:
    return Coercion(
        lambda value: _WHITESPACE_RUNS.sub(" ", value).strip(),
        "a str to collapse",
        accepts=_is_str,
    )


def lower_step() -> Coercion:
    return Coercion(str.lower, "a str to lower-case", accepts=_is_str)


def upper_step() -> Coercion:
    return Coercion(str.upper, "a str to upper-case", accepts=_is_str)


# Functional forms

def to_int(child: Validator | None = None, message: str | None = None) -> Validator:
    """Coerce ints, floats (truncated) and int strings to int."""
    return _finish(int_step(), child, message)


def to_int_strict(child: Validator | None = None, message: str | None = None) -> Validator:
    """Coerce ints and int strings to int; floats are rejected."""
    return _finish(int_strict_step(), child, message)


def to_int_safe(child: Validator | None = None, message: str | None = None) -> Validator:
    """Like ``to_int_strict`` but limited to the 53-bit range shared with JSON consumers."""
    return _finish(int_safe_step(), child, message)


def to_float(child: Validator | None = None, message: str | None = None) -> Validator:
    return _finish(float_step(), child, message)


def to_number(child: Validator | None = None, message: str | None = None) -> Validator:
    """Keep numbers; parse strings as int, falling back to float."""
    return _finish(number_step(), child, message)


def to_bool(child: Validator | None = None, message: str | None = None) -> Validator:
    """Coerce bools, 0/1 and 'true'/'false' (any case) to bool."""
    return _finish(bool_step(), child, message)


def to_bool_strict(child: Validator | None = None, message: str | None = None) -> Validator:
    return _finish(bool_strict_step(), child, message)


def to_bool_lenient(child: Validator | None = None, message: str | None = None) -> Validator:
    """Also accept yes/no, y/n, on/off, t/f and '1'/'0'."""
    return _finish(bool_lenient_step(), child, message)


def to_str(child: Validator | None = None, message: str | None = None) -> Validator:
    return _finish(str_step(), child, message)


def to_datetime(child: Validator | None = None, message: str | None = None) -> Validator:
    """Keep datetimes; parse ISO 8601 strings."""
    return _finish(datetime_step(), child, message)


def to_json_decoded(child: Validator | None = None, message: str | None = None) -> Validator:
    """Keep dicts/lists; decode JSON strings whose top level is an object or array."""
    return _finish(json_step(), child, message)


def trim(child: Validator | None = None, message: str | None = None) -> Validator:
    return _finish(trim_step(), child, message)


def collapse_whitespace(child: Validator | None = None, message: str | None = None) -> Validator:
    """Replace whitespace runs by one space and trim."""
    return _finish(collapse_whitespace_step(), child, message)


def to_lower(child: Validator | None = None, message: str | None = None) -> Validator:
    return _finish(lower_step(), child, message)


def to_upper(child: Validator | None = None, message: str | None = None) -> Validator:
    return _finish(upper_step(), child, message)


def split(separator: str, child: Validator | None = None, message: str | None = None) -> Validator:
    return _finish(
        Coercion(lambda value: value.split(separator), "a str to split", accepts=_is_str),
        child,
        message,
    )


def pick_keys(keys: Iterable[Any], child: Validator | None = None) -> Validator:
    """Keep only ``keys`` (those present) of a mapping."""
    wanted = list(keys)
    return _finish(
        Coercion(
            lambda value: {k: value[k] for k in wanted if k in value},
            f"a dict containing keys: {', '.join(map(str, wanted))}",
            accepts=_is_mapping,
        ),
        child,
        None,
    )


def pluck_key(key: Any, child: Validator | None = None) -> Validator:
    """Replace a mapping by the value at ``key``."""
    return _finish(
        Coercion(
            lambda value: value[key],
            f"a dict containing key: {key}",
            accepts=lambda value: isinstance(value, Mapping) and key in value,
            allow_none=True,
        ),
        child,
        None,
    )


def flatten_keys(delimiter: str = ".", child: Validator | None = None) -> Validator:
    """Flatten nested mappings into one level of ``delimiter``-joined keys."""
    return _finish(
        Coercion(lambda value: _flatten(value, delimiter), "a dict to flatten", accepts=_is_mapping),
        child,
        None,
    )


def default_to(default: Any, child: Validator | None = None) -> Validator:
    """Replace ``None`` (or an absent value) with ``default``."""
    return _finish(
        Coercion(lambda value: default if value is None else value, "any value", allow_none=True),
        child,
        None,
    )


def transform(fn: Callable[[Any], Any], child: Validator | None = None, message: str | None = None) -> Validator:
    """Apply an arbitrary conversion; errors it raises become coercion failures."""
    return _finish(custom_step(fn), child, message)
