"""Exception hierarchy for the validation package.

Validation failures are normally reported as ``Result`` values. Exceptions are
reserved for programmer errors (running suspending validators synchronously,
bad settings) and for the explicit raising entry points such as
``Validator.validate_or_raise``.

All of them extend ``DataknobsError`` from ``dataknobs_common``, so callers
that catch dataknobs errors generically also catch these.

Example:
    ```python
    from dataknobs_validation import ValidatorFailedError, is_str

    try:
        is_str().validate_or_raise(42)
    except ValidatorFailedError as e:
        print(e.summary)
        print(e.result.expectations)
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict

from dataknobs_common import ConfigurationError, DataknobsError, ValidationError

if TYPE_CHECKING:
    from .result import Result


class DataknobsValidationError(DataknobsError):
    """Base exception for the validation package."""

    pass


class AsyncValidatorError(DataknobsValidationError):
    """Raised when a synchronous entry point meets a validator that suspends.

    This is a programmer error: the validator graph contains asynchronous work
    and must be run through ``validate_async``.
    """

    def __init__(self, validator: Any = None, message: str | None = None):
        name = type(validator).__name__ if validator is not None else "validator"
        super().__init__(
            message or (
                f"{name} returned an awaitable from a synchronous validate() call; "
                "use validate_async() instead"
            ),
            context={"validator": name},
        )


class ValidatorFailedError(DataknobsValidationError, ValidationError):
    """Raised by the raising entry points when validation fails.

    Attributes:
        result: The full invalid ``Result``
        summary: One-line description of the failure
    """

    def __init__(self, result: Result, message: str | None = None):
        from .formatting import build_validation_failure_message

        self.result = result
        self.summary = result.description
        super().__init__(
            message or build_validation_failure_message(result),
            context={
                "value": result.value,
                "codes": [e.code for e in result.expectations],
            },
        )


class ValidationSettingsError(DataknobsValidationError, ConfigurationError):
    """Raised when report settings are missing or malformed."""

    def __init__(self, message: str, setting: str | None = None, value: Any = None):
        context: Dict[str, Any] = {}
        if setting is not None:
            context["setting"] = setting
            context["value"] = value
        super().__init__(message, context=context)
        self.setting = setting
