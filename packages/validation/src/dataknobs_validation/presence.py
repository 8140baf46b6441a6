"""Presence wrappers: nullable, optional and required.

``nullable`` accepts an explicit ``None``; ``optional`` accepts an absent
value, which only happens for missing map keys. Both are flags on the
validator itself, so wrapping twice is the same as wrapping once.

    ```python
    user = schema({
        "nickname": optional(is_str()),   # may be missing
        "middle_name": nullable(is_str()),  # must be present, may be None
        "email": required(is_email()),
    })
    ```
"""

from __future__ import annotations

from .codes import ExpectationCodes
from .combinators import All
from .expectation import Expectation
from .validator import Predicate, Validator

_REQUIRED = Expectation(message="is required", code=ExpectationCodes.REQUIRED_MISSING)


def nullable(validator: Validator) -> Validator:
    """Accept ``None`` in addition to whatever ``validator`` accepts."""
    return validator.build().nullable()


def optional(validator: Validator) -> Validator:
    """Accept an absent value in addition to whatever ``validator`` accepts."""
    return validator.build().optional()


def is_present() -> Validator:
    """Reject ``None`` with the ``required_missing`` code."""
    return Predicate(lambda value: value is not None, _REQUIRED)


def required(validator: Validator) -> Validator:
    """Reject ``None`` and absent values, then run ``validator``."""
    return All([is_present(), validator.copy_with(nullable=False, optional=False)])
