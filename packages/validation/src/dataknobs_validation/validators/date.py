"""Datetime comparisons.

Non-datetime values simply fail the check. Comparing a naive datetime with an
aware one fails as well rather than raising.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any

from ..codes import ExpectationCodes
from ..expectation import Expectation
from ..result import Result
from ..validator import FunctionValidator, Predicate, Validator


def _safe(compare: Callable[[datetime], bool]) -> Callable[[Any], bool]:
    def test(value: Any) -> bool:
        if not isinstance(value, datetime):
            return False
        try:
            return compare(value)
        except TypeError:
            return False

    return test


def is_date_before(
    bound: datetime, inclusive: bool = False, message: str | None = None
) -> Validator:
    return Predicate(
        _safe(lambda v: v <= bound if inclusive else v < bound),
        lambda value: Expectation(
            message=message or (
                f"a datetime before{' or equal to' if inclusive else ''} {bound.isoformat()}"
            ),
            value=value,
            code=ExpectationCodes.VALUE_DATE_OUT_OF_RANGE,
            data={"bound": bound.isoformat(), "op": "before", "inclusive": inclusive},
        ),
    )


def is_date_after(
    bound: datetime, inclusive: bool = False, message: str | None = None
) -> Validator:
    return Predicate(
        _safe(lambda v: v >= bound if inclusive else v > bound),
        lambda value: Expectation(
            message=message or (
                f"a datetime after{' or equal to' if inclusive else ''} {bound.isoformat()}"
            ),
            value=value,
            code=ExpectationCodes.VALUE_DATE_OUT_OF_RANGE,
            data={"bound": bound.isoformat(), "op": "after", "inclusive": inclusive},
        ),
    )


def is_date_between(
    start: datetime,
    end: datetime,
    inclusive_start: bool = True,
    inclusive_end: bool = True,
    message: str | None = None,
) -> Validator:
    if start > end:
        raise ValueError("start must not be after end")

    def within(v: datetime) -> bool:
        after_start = v >= start if inclusive_start else v > start
        before_end = v <= end if inclusive_end else v < end
        return after_start and before_end

    brackets = ("[" if inclusive_start else "(") + ("]" if inclusive_end else ")")
    return Predicate(
        _safe(within),
        lambda value: Expectation(
            message=message or (
                f"a datetime between {start.isoformat()} and {end.isoformat()} ({brackets})"
            ),
            value=value,
            code=ExpectationCodes.VALUE_DATE_OUT_OF_RANGE,
            data={
                "start": start.isoformat(),
                "end": end.isoformat(),
                "inclusive_start": inclusive_start,
                "inclusive_end": inclusive_end,
            },
        ),
    )


def is_date_same_day(day: datetime, message: str | None = None) -> Validator:
    target = day.date().isoformat()
    return Predicate(
        _safe(lambda v: v.date() == day.date()),
        lambda value: Expectation(
            message=message or f"a datetime on the same day as {target}",
            value=value,
            code=ExpectationCodes.VALUE_DATE_MISMATCH,
            data={"target_day": target},
        ),
    )


def _now_like(value: datetime) -> datetime:
    return datetime.now(value.tzinfo) if value.tzinfo is not None else datetime.now()


def _relative_to_now(past: bool, allow_now: bool, message: str | None) -> Validator:
    label = "past" if past else "future"
    code = ExpectationCodes.VALUE_DATE_NOT_PAST if past else ExpectationCodes.VALUE_DATE_NOT_FUTURE

    def check(value: Any) -> Result:
        now = _now_like(value) if isinstance(value, datetime) else datetime.now()
        if past:
            ok = _safe(lambda v: v <= now if allow_now else v < now)(value)
        else:
            ok = _safe(lambda v: v >= now if allow_now else v > now)(value)
        return Result.check(ok, value, Expectation(
            message=message or f"a datetime in the {label}{' or now' if allow_now else ''}",
            value=value,
            code=code,
            data={"now": now.isoformat(), "allow_now": allow_now},
        ))

    return FunctionValidator(check)


def is_date_in_past(allow_now: bool = True, message: str | None = None) -> Validator:
    """Pass for datetimes earlier than the moment of evaluation."""
    return _relative_to_now(True, allow_now, message)


def is_date_in_future(allow_now: bool = True, message: str | None = None) -> Validator:
    """Pass for datetimes later than the moment of evaluation."""
    return _relative_to_now(False, allow_now, message)
