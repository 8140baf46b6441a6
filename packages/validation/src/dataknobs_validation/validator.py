"""Validator base class and the sync/async execution contract.

Every validator implements a single primitive, ``evaluate(value)``, that
returns either a ``Result`` or an awaitable of one. Callers never invoke the
primitive directly; they go through one of two entry points:

- ``validate(value)`` runs synchronously and raises ``AsyncValidatorError`` if
  the primitive suspends.
- ``await validate_async(value)`` runs anything, awaiting where needed.

Both entry points apply the same presence rules before the primitive runs:
``None`` passes a nullable validator, and an absent value passes an optional
validator.

Example:
    ```python
    from dataknobs_validation import is_str, is_int, predicate

    name = is_str() & predicate(lambda v: len(v) > 1, "at least 2 chars")
    name.validate("Al").is_valid        # True
    (is_str() | is_int()).validate(3.5).expectation_count  # 2

    async def unique(v):
        return v not in await load_taken_names()

    taken = predicate(unique, "name is taken")
    await taken.validate_async("bob")
    ```
"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Union

from .codes import ExpectationCodes
from .exceptions import AsyncValidatorError, ValidatorFailedError
from .execution import Outcome, discard, is_pending, then
from .expectation import Expectation
from .result import Result

if TYPE_CHECKING:
    from .combinators import All, AnyOf, Not

logger = logging.getLogger(__name__)

ErrorSpec = Union[str, Expectation, Callable[[Any], Expectation]]


class Validator(ABC):
    """Base class for all validators with composable operators.

    Validators are immutable once built and keep no per-call state, so one
    instance can be shared by concurrent evaluations.

    Args:
        nullable: Accept ``None`` without running the primitive
        optional: Accept an absent value (a missing map key) without running
            the primitive
    """

    def __init__(self, *, nullable: bool = False, optional: bool = False):
        self._nullable = bool(nullable)
        self._optional = bool(optional)

    @property
    def is_nullable(self) -> bool:
        return self._nullable

    @property
    def is_optional(self) -> bool:
        return self._optional

    @abstractmethod
    def evaluate(self, value: Any) -> Outcome:
        """Check a value, ignoring presence flags.

        Args:
            value: Value to check

        Returns:
            Result, or an awaitable producing one for asynchronous checks
        """

    def describe(self, value: Any) -> Expectation | None:
        """Expectation this validator stands for, used when it is negated.

        Returns None when the validator has no single describable expectation.
        """
        return None

    def run(self, value: Any, exists: bool = True) -> Outcome:
        """Apply presence rules, then evaluate. Used by composite validators."""
        if value is None and ((self._nullable and exists) or (self._optional and not exists)):
            return Result.valid(value)
        return self.evaluate(value)

    def validate(self, value: Any, *, exists: bool = True) -> Result:
        """Validate synchronously.

        Args:
            value: Value to validate
            exists: False when the value is absent (e.g. a missing map key)

        Returns:
            The Result

        Raises:
            AsyncValidatorError: If any part of the validator suspends
        """
        outcome = self.run(value, exists)
        if is_pending(outcome):
            discard(outcome)
            logger.debug("Synchronous validate() reached asynchronous work in %r", self)
            raise AsyncValidatorError(self)
        return outcome  # type: ignore[return-value]

    async def validate_async(self, value: Any, *, exists: bool = True) -> Result:
        """Validate, awaiting asynchronous checks as needed."""
        outcome = self.run(value, exists)
        if is_pending(outcome):
            return await outcome  # type: ignore[misc]
        return outcome  # type: ignore[return-value]

    def validate_or_raise(self, value: Any) -> Any:
        """Validate synchronously and return the (possibly coerced) value.

        Raises:
            ValidatorFailedError: If validation fails, carrying the full Result
        """
        result = self.validate(value)
        if not result.is_valid:
            raise ValidatorFailedError(result)
        return result.value

    async def validate_or_raise_async(self, value: Any) -> Any:
        result = await self.validate_async(value)
        if not result.is_valid:
            raise ValidatorFailedError(result)
        return result.value

    def is_valid(self, value: Any) -> bool:
        return self.validate(value).is_valid

    async def is_valid_async(self, value: Any) -> bool:
        return (await self.validate_async(value)).is_valid

    def build(self) -> Validator:
        """Return an immutable validator; builders override this to freeze their chain."""
        return self

    def copy_with(self, *, nullable: bool | None = None, optional: bool | None = None) -> Validator:
        """Return a copy with the given presence flags replaced."""
        clone = copy.copy(self)
        if nullable is not None:
            clone._nullable = bool(nullable)
        if optional is not None:
            clone._optional = bool(optional)
        return clone

    def nullable(self) -> Validator:
        """Return a validator that also accepts ``None``."""
        return self if self._nullable else self.copy_with(nullable=True)

    def optional(self) -> Validator:
        """Return a validator that also accepts an absent value."""
        return self if self._optional else self.copy_with(optional=True)

    def with_message(self, message: str) -> Validator:
        """Replace the failure message, keeping the underlying code and data."""
        from .combinators import with_expectation

        return with_expectation(self, message)

    def __and__(self, other: Validator) -> All:
        """Combine with AND: both validators must pass, values chain left to right."""
        from .combinators import All

        return All(All.flatten([self, other]))

    def __or__(self, other: Validator) -> AnyOf:
        """Combine with OR: at least one validator must pass."""
        from .combinators import AnyOf

        return AnyOf(AnyOf.flatten([self, other]))

    def __invert__(self) -> Not:
        """Negate this validator."""
        from .combinators import Not

        return Not(self)

    def __repr__(self) -> str:
        flags = [name for name, on in (("nullable", self._nullable), ("optional", self._optional)) if on]
        return f"{type(self).__name__}({', '.join(flags)})"


class FunctionValidator(Validator):
    """Validator backed by a function returning a Result (or an awaitable of one)."""

    def __init__(
        self,
        fn: Callable[[Any], Result | Awaitable[Result]],
        *,
        nullable: bool = False,
        optional: bool = False,
    ):
        super().__init__(nullable=nullable, optional=optional)
        self.fn = fn

    def evaluate(self, value: Any) -> Outcome:
        return self.fn(value)


class Predicate(Validator):
    """Validator backed by a boolean test.

    Args:
        test: Returns truthy when the value is acceptable; may be async
        error: Failure message, Expectation, or a factory building the
            Expectation from the offending value
    """

    def __init__(
        self,
        test: Callable[[Any], bool | Awaitable[bool]],
        error: ErrorSpec,
        *,
        nullable: bool = False,
        optional: bool = False,
    ):
        super().__init__(nullable=nullable, optional=optional)
        self.test = test
        self.error = error

    def evaluate(self, value: Any) -> Outcome:
        return then(self.test(value), lambda passed: self._settle(bool(passed), value))

    def describe(self, value: Any) -> Expectation:
        error = self.error
        if isinstance(error, str):
            return Expectation(
                message=error, value=value, code=ExpectationCodes.LOGIC_PREDICATE_FAILED
            )
        if isinstance(error, Expectation):
            return error.copy_with(value=value)
        return error(value)

    def _settle(self, passed: bool, value: Any) -> Result:
        if passed:
            return Result.valid(value)
        return Result.invalid(value, self.describe(value))

    def __repr__(self) -> str:
        return f"Predicate({getattr(self.test, '__name__', 'test')})"


class Lazy(Validator):
    """Deferred reference to a validator, for recursive schemas.

    The thunk is called on every evaluation, so the reference holds no state
    and always sees the current binding of the name it closes over.

    Example:
        ```python
        node = schema({
            "name": is_str(),
            "children": list_each(lazy(lambda: node)).optional(),
        })
        ```
    """

    def __init__(
        self,
        thunk: Callable[[], Validator],
        *,
        nullable: bool = False,
        optional: bool = False,
    ):
        super().__init__(nullable=nullable, optional=optional)
        self.thunk = thunk

    @property
    def target(self) -> Validator:
        return self.thunk()

    def evaluate(self, value: Any) -> Outcome:
        return self.target.run(value)

    def describe(self, value: Any) -> Expectation | None:
        return self.target.describe(value)

    def __repr__(self) -> str:
        return "Lazy(...)"


def validator(
    fn: Callable[[Any], Result | Awaitable[Result]],
    *,
    nullable: bool = False,
    optional: bool = False,
) -> Validator:
    """Wrap a Result-returning function in a Validator."""
    return FunctionValidator(fn, nullable=nullable, optional=optional)


def predicate(
    test: Callable[[Any], bool | Awaitable[bool]],
    error: ErrorSpec = "predicate failed",
    *,
    nullable: bool = False,
    optional: bool = False,
) -> Validator:
    """Build a validator from a boolean test.

    Args:
        test: Returns truthy when the value is acceptable; may be a coroutine
            function
        error: Failure message (coded ``logic.predicate_failed``), a fixed
            Expectation, or a factory building one from the value

    Returns:
        Predicate validator
    """
    return Predicate(test, error, nullable=nullable, optional=optional)


def lazy(thunk: Callable[[], Validator]) -> Validator:
    """Defer building a validator until it is first evaluated."""
    return Lazy(thunk)


def always_valid() -> Validator:
    """Validator that accepts every value unchanged."""
    return FunctionValidator(Result.valid)
