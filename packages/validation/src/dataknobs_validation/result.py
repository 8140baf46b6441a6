"""Validation result type with a strict validity invariant.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .expectation import Expectation

if TYPE_CHECKING:
    from .settings import ReportSettings

_UNSET: Any = object()


@dataclass(frozen=True)
class Result:
    """Outcome of running a validator against a value.

    ``is_valid`` is always equivalent to "there are no expectations": a valid
    result never carries expectations and an invalid one always has at least
    one.

    Attributes:
        is_valid: Whether the value satisfied the validator
        value: The (possibly coerced) value
        expectations: Unmet expectations, in the order they were produced
        original_value: The value before any coercion; defaults to ``value``
    """

    is_valid: bool
    value: Any = None
    expectations: tuple[Expectation, ...] = ()
    original_value: Any = field(default=_UNSET)

    def __post_init__(self) -> None:
        expectations = tuple(self.expectations)
        if self.is_valid and expectations:
            raise ValueError("A valid result cannot carry expectations")
        if not self.is_valid and not expectations:
            raise ValueError("An invalid result requires at least one expectation")
        object.__setattr__(self, "expectations", expectations)
        if self.original_value is _UNSET:
            object.__setattr__(self, "original_value", self.value)

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.is_valid

    @classmethod
    def valid(cls, value: Any, original_value: Any = _UNSET) -> Result:
        """Create a successful result.

        Args:
            value: The validated (possibly coerced) value
            original_value: The value before coercion, if it differs

        Returns:
            Valid Result
        """
        return cls(True, value, (), original_value)

    @classmethod
    def invalid(
        cls,
        value: Any,
        expectations: Iterable[Expectation] | Expectation,
        original_value: Any = _UNSET,
    ) -> Result:
        """Create a failed result.

        Args:
            value: The value that failed validation
            expectations: One or more unmet expectations
            original_value: The value before coercion, if it differs

        Returns:
            Invalid Result

        Raises:
            ValueError: If no expectations are given
        """
        if isinstance(expectations, Expectation):
            expectations = (expectations,)
        return cls(False, value, tuple(expectations), original_value)

    @classmethod
    def check(cls, passed: bool, value: Any, expectation: Expectation) -> Result:
        """Build a result from a predicate outcome.

        The expectation is only attached when ``passed`` is false.
        """
        if passed:
            return cls.valid(value)
        return cls.invalid(value, (expectation,))

    @property
    def is_not_valid(self) -> bool:
        return not self.is_valid

    @property
    def first_expectation(self) -> Expectation | None:
        return self.expectations[0] if self.expectations else None

    @property
    def expectation_count(self) -> int:
        return len(self.expectations)

    @property
    def description(self) -> str:
        """One-line summary: ``Valid`` or the joined expectation descriptions."""
        if self.is_valid:
            return "Valid"
        return ", ".join(e.description for e in self.expectations)

    @property
    def short_description(self) -> str:
        """Like ``description`` but limited to the first expectation."""
        if self.is_valid:
            return "Valid"
        first = self.expectations[0].description
        rest = len(self.expectations) - 1
        return f"{first} (+{rest} more)" if rest else first

    def detailed(self, settings: ReportSettings | None = None) -> str:
        """Multi-line human-readable report of this result.

        Args:
            settings: Optional truncation limits for the report

        Returns:
            Formatted report (see ``formatting.build_validation_message``)
        """
        from .formatting import build_validation_message

        return build_validation_message(self, settings)

    def value_or(self, default: Any) -> Any:
        """Return the value when valid, otherwise ``default``."""
        return self.value if self.is_valid else default

    def raise_if_invalid(self) -> Any:
        """Return the value, raising ``ValidatorFailedError`` when invalid."""
        if not self.is_valid:
            from .exceptions import ValidatorFailedError

            raise ValidatorFailedError(self)
        return self.value

    def with_value(self, value: Any) -> Result:
        """Return a copy carrying a different value and the same original value."""
        return Result(self.is_valid, value, self.expectations, self.original_value)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dictionary."""
        return {
            "is_valid": self.is_valid,
            "value": self.value,
            "original_value": self.original_value,
            "expectations": [e.to_dict() for e in self.expectations],
        }

    def __str__(self) -> str:
        return self.description
