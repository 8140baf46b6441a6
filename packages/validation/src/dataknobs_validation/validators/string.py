"""String checks: length, content, case and common formats.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from datetime import datetime
from re import Pattern
from typing import Any
from urllib.parse import urlparse

from ..codes import ExpectationCodes
from ..expectation import Expectation
from ..validator import Predicate, Validator
from .comparison import contains, is_eq, length
from .number import is_gt, is_lte
from .types import is_str

_EMAIL = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
_UUID_V4 = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-4[0-9a-fA-F]{3}-[89abAB][0-9a-fA-F]{3}-[0-9a-fA-F]{12}$"
)


def _expectation(message: str, code: str, **data: Any) -> Callable[[Any], Expectation]:
    return lambda value: Expectation(
        message=message, value=value, code=code, data=data or None
    )


def _parses(parse: Callable[[str], Any]) -> Callable[[str], bool]:
    def test(value: str) -> bool:
        try:
            parse(value.strip())
        except ValueError:
            return False
        return True

    return test


def string_length(validators: Iterable[Validator], message: str | None = None) -> Validator:
    return is_str() & length(validators, message)


def string_is_of_length(size: int, message: str | None = None) -> Validator:
    if size < 0:
        raise ValueError("size must be non-negative")
    return string_length([is_eq(size)], message)


def string_contains(needle: str, message: str | None = None) -> Validator:
    return is_str() & contains(needle, message or f"String to contain {needle!r}")


def string_empty(message: str | None = None) -> Validator:
    return string_length([is_lte(0)], message or "String to be empty")


def string_not_empty(message: str | None = None) -> Validator:
    return string_length([is_gt(0)], message or "String to be non-empty")


def string_matches_pattern(pattern: str | Pattern[str], message: str | None = None) -> Validator:
    """Pass when ``pattern`` is found anywhere in the string (``re.search``)."""
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    return is_str() & Predicate(
        lambda value: regex.search(value) is not None,
        _expectation(
            message or f'String to match "{regex.pattern}"',
            ExpectationCodes.VALUE_PATTERN_MISMATCH,
            pattern=regex.pattern,
        ),
    )


def is_lower_case(message: str | None = None) -> Validator:
    return is_str() & Predicate(
        str.islower,
        _expectation(message or "lowercase string", ExpectationCodes.VALUE_CASE_MISMATCH, case="lower"),
    )


def is_upper_case(message: str | None = None) -> Validator:
    return is_str() & Predicate(
        str.isupper,
        _expectation(message or "uppercase string", ExpectationCodes.VALUE_CASE_MISMATCH, case="upper"),
    )


def _format(
    test: Callable[[str], bool], message: str, fmt: str
) -> Validator:
    return is_str() & Predicate(
        test, _expectation(message, ExpectationCodes.VALUE_FORMAT_INVALID, format=fmt)
    )


def is_email(message: str | None = None) -> Validator:
    return _format(lambda v: _EMAIL.match(v) is not None, message or "a valid email address", "email")


def _is_url(value: str, strict: bool) -> bool:
    if not value or any(c.isspace() for c in value):
        return False
    try:
        parts = urlparse(value)
    except ValueError:
        return False
    if strict:
        return bool(parts.scheme and parts.netloc)
    return bool(parts.scheme or parts.netloc or parts.path)


def is_url(strict: bool = False, message: str | None = None) -> Validator:
    """Pass for URLs; ``strict`` requires an absolute URL with scheme and host."""
    return _format(lambda v: _is_url(v, strict), message or "a valid URL", "url")


def is_strict_url(message: str | None = None) -> Validator:
    return is_url(strict=True, message=message)


def is_uuid_v4(message: str | None = None) -> Validator:
    return _format(lambda v: _UUID_V4.match(v) is not None, message or "a valid UUID v4", "uuid_v4")


def is_int_string(message: str | None = None) -> Validator:
    return _format(_parses(int), message or "a valid formatted int string", "int")


def is_float_string(message: str | None = None) -> Validator:
    return _format(_parses(float), message or "a valid formatted float string", "float")


def is_number_string(message: str | None = None) -> Validator:
    return _format(
        lambda v: _parses(int)(v) or _parses(float)(v),
        message or "a valid formatted number string",
        "number",
    )


def is_date_string(message: str | None = None) -> Validator:
    return _format(
        _parses(datetime.fromisoformat), message or "a valid ISO 8601 date string", "date"
    )
