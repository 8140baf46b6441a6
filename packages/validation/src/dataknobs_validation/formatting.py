"""Human-readable reports for validation results.

The report layout is deterministic but is not a contract; clients should
branch on expectation codes, not on report text:

    Validation failed (errors: 2) for value (dict): {'name': 7}
      1) name: String expected [code=type.mismatch] {data={'expected': 'str', 'found': 'int'}}
      2) age: is required [code=required_missing]
"""

from __future__ import annotations

from typing import Any

from .result import Result
from .settings import DEFAULT_REPORT_SETTINGS, ReportSettings


def _value_repr(value: Any, settings: ReportSettings) -> str:
    try:
        text = repr(value)
    except Exception:
        text = f"<unprintable {type(value).__name__}>"
    if len(text) > settings.max_value_length:
        text = text[:settings.max_value_length] + settings.ellipsis
    return text


def build_validation_failure_message(
    result: Result,
    settings: ReportSettings | None = None,
) -> str:
    """Build the multi-line report for an invalid result.

    Args:
        result: An invalid result
        settings: Truncation limits, defaults to ``DEFAULT_REPORT_SETTINGS``

    Returns:
        Report with a header line and one numbered line per listed expectation

    Raises:
        ValueError: If the result is valid
    """
    if result.is_valid:
        raise ValueError("Only invalid results have a failure message")
    settings = settings or DEFAULT_REPORT_SETTINGS

    lines = [
        f"Validation failed (errors: {result.expectation_count}) for value "
        f"({type(result.value).__name__}): {_value_repr(result.value, settings)}"
    ]
    shown = result.expectations[:settings.max_errors_to_list]
    for i, expectation in enumerate(shown, start=1):
        line = f"  {i}) {expectation.description}"
        if expectation.code is not None:
            line += f" [code={expectation.code}]"
        if expectation.data:
            line += f" {{data={dict(expectation.data)!r}}}"
        lines.append(line)

    remaining = result.expectation_count - len(shown)
    if remaining > 0:
        lines.append(f"  {settings.ellipsis} ({remaining} more not shown)")
    return "\n".join(lines)


def build_validation_message(
    result: Result,
    settings: ReportSettings | None = None,
) -> str:
    """Build a report for any result.

    Valid results render as ``Valid (<type>): <value>``; invalid ones delegate
    to ``build_validation_failure_message``.
    """
    settings = settings or DEFAULT_REPORT_SETTINGS
    if result.is_valid:
        return f"Valid ({type(result.value).__name__}): {_value_repr(result.value, settings)}"
    return build_validation_failure_message(result, settings)
