"""Combinators: conjunction, disjunction, exclusion and negation.

All multi-child combinators share one evaluation loop, ``MultiValidator``,
whose behavior is selected by a ``CombinatorPolicy``:

=====================  ======  ================  ================  ====================
combinator             chains  stops on success  stops on failure  collects from passing
=====================  ======  ================  ================  ====================
``all_of``             yes     no                yes               no
``all_of(collecting)`` no      no                no                no
``any_of``             no      yes               no                no
``none_of``            no      no                no                yes (negated)
=====================  ======  ================  ================  ====================

``not_`` is exclusion over a single child.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from .codes import ExpectationCodes
from .exceptions import ValidatorFailedError
from .execution import Outcome, Steps, run, then
from .expectation import Expectation
from .result import Result
from .validator import Validator


def negate(expectation: Expectation) -> Expectation:
    """Turn an expectation into its "not ..." counterpart."""
    return expectation.copy_with(
        message=f"not {expectation.message}",
        code=expectation.code or ExpectationCodes.LOGIC_NOT_EXPECTED,
    )


@dataclass(frozen=True)
class CombinatorPolicy:
    """How a ``MultiValidator`` walks its children.

    Attributes:
        chains_value: Feed each child the previous child's output value
        stop_on_success: Return as soon as a child passes; failing every
            child fails the combinator
        stop_on_failure: Return as soon as a child fails
        collect_from_passing: Gather expectations from passing children
            (transformed by ``transform``) instead of from failing ones
        transform: Applied to expectations gathered from passing children
    """

    chains_value: bool
    stop_on_success: bool
    stop_on_failure: bool
    collect_from_passing: bool
    transform: Callable[[Expectation], Expectation] | None = None


ALL = CombinatorPolicy(
    chains_value=True, stop_on_success=False, stop_on_failure=True, collect_from_passing=False,
)
ALL_COLLECTING = CombinatorPolicy(
    chains_value=False, stop_on_success=False, stop_on_failure=False, collect_from_passing=False,
)
ANY = CombinatorPolicy(
    chains_value=False, stop_on_success=True, stop_on_failure=False, collect_from_passing=False,
)
NONE = CombinatorPolicy(
    chains_value=False, stop_on_success=False, stop_on_failure=False, collect_from_passing=True,
    transform=negate,
)


class MultiValidator(Validator):
    """Base for validators that walk a sequence of children.

    Args:
        validators: Child validators, evaluated strictly left to right
        message: Optional replacement for the failure message; the code and
            data of the first underlying expectation are kept
    """

    policy: CombinatorPolicy = ALL

    def __init__(
        self,
        validators: Iterable[Validator],
        *,
        message: str | None = None,
        nullable: bool = False,
        optional: bool = False,
    ):
        super().__init__(nullable=nullable, optional=optional)
        self.validators: tuple[Validator, ...] = tuple(validators)
        self.message = message

    @classmethod
    def flatten(cls, validators: Iterable[Validator]) -> list[Validator]:
        """Inline children that are plain instances of this combinator."""
        flat: list[Validator] = []
        for v in validators:
            if cls._is_plain(v):
                flat.extend(v.validators)  # type: ignore[attr-defined]
            else:
                flat.append(v)
        return flat

    @classmethod
    def _is_plain(cls, v: Validator) -> bool:
        return (
            type(v) is cls
            and v.message is None  # type: ignore[attr-defined]
            and not v.is_nullable
            and not v.is_optional
        )

    def evaluate(self, value: Any) -> Outcome:
        return run(self._steps(value))

    def _steps(self, value: Any) -> Steps:
        policy = self.policy
        current = value
        collected: list[Expectation] = []

        for child in self.validators:
            given = current if policy.chains_value else value
            result = yield child.run(given)

            if result.is_valid:
                if policy.collect_from_passing:
                    source = child.describe(given) or Expectation(message="passed", value=given)
                    collected.append(policy.transform(source) if policy.transform else source)
                elif policy.stop_on_success:
                    return Result.valid(result.value, original_value=value)
                if policy.chains_value:
                    current = result.value
            elif not policy.collect_from_passing:
                collected.extend(result.expectations)
                if policy.stop_on_failure:
                    return self._fail(given, collected, value)

        if policy.stop_on_success:
            if not collected:
                collected.append(Expectation(
                    message="at least one validator to pass",
                    value=value,
                    code=ExpectationCodes.LOGIC_PREDICATE_FAILED,
                ))
            return self._fail(value, collected, value)
        if collected:
            return self._fail(current, collected, value)
        return Result.valid(current, original_value=value)

    def _fail(self, value: Any, expectations: Sequence[Expectation], original: Any) -> Result:
        if self.message is not None:
            first = expectations[0]
            expectations = [Expectation(
                message=self.message, value=value, code=first.code, data=first.data,
            )]
        return Result.invalid(value, expectations, original_value=original)

    def __repr__(self) -> str:
        children = ", ".join(repr(v) for v in self.validators)
        return f"{type(self).__name__}([{children}])"


class All(MultiValidator):
    """Every child must pass.

    By default the output of each child is fed to the next and evaluation
    stops at the first failure. With ``collecting=True`` every child sees the
    original value and every failure is reported.
    """

    def __init__(
        self,
        validators: Iterable[Validator],
        *,
        collecting: bool = False,
        message: str | None = None,
        nullable: bool = False,
        optional: bool = False,
    ):
        super().__init__(validators, message=message, nullable=nullable, optional=optional)
        self.collecting = collecting

    @property
    def policy(self) -> CombinatorPolicy:  # type: ignore[override]
        return ALL_COLLECTING if self.collecting else ALL

    @classmethod
    def _is_plain(cls, v: Validator) -> bool:
        return super()._is_plain(v) and not v.collecting  # type: ignore[attr-defined]

    def describe(self, value: Any) -> Expectation | None:
        # type guards come first, the last step carries the meaningful expectation
        if self.message is not None:
            return Expectation(message=self.message, value=value)
        if not self.validators:
            return None
        return self.validators[-1].describe(value)


class AnyOf(MultiValidator):
    """At least one child must pass; the first passing child's value is returned."""

    policy = ANY


class NoneOf(MultiValidator):
    """No child may pass; each passing child is reported as "not ..."."""

    policy = NONE


class Not(NoneOf):
    """The child must fail."""

    def __init__(
        self,
        child: Validator,
        *,
        message: str | None = None,
        nullable: bool = False,
        optional: bool = False,
    ):
        super().__init__([child], message=message, nullable=nullable, optional=optional)

    @property
    def child(self) -> Validator:
        return self.validators[0]

    def __repr__(self) -> str:
        return f"Not({self.child!r})"


class WithExpectation(Validator):
    """Replace a child's failure with a single custom expectation.

    The child's code and data, when present, win over the replacement's so
    clients can still branch on the underlying failure.
    """

    def __init__(self, child: Validator, expectation: Expectation):
        super().__init__(nullable=child.is_nullable, optional=child.is_optional)
        self.child = child
        self.expectation = expectation

    def evaluate(self, value: Any) -> Outcome:
        return then(self.child.run(value), lambda result: self._settle(result, value))

    def describe(self, value: Any) -> Expectation:
        return self.expectation.copy_with(value=value)

    def _settle(self, result: Result, value: Any) -> Result:
        if result.is_valid:
            return result
        first = result.expectations[0]
        return Result.invalid(
            value,
            self.expectation.copy_with(
                value=value,
                code=first.code or self.expectation.code,
                data=first.data if first.data is not None else self.expectation.data,
            ),
            original_value=result.original_value,
        )


class RaiseInstead(Validator):
    """Raise ``ValidatorFailedError`` from inside evaluation when the child fails."""

    def __init__(self, child: Validator):
        super().__init__(nullable=child.is_nullable, optional=child.is_optional)
        self.child = child

    def evaluate(self, value: Any) -> Outcome:
        return then(self.child.run(value), self._settle)

    @staticmethod
    def _settle(result: Result) -> Result:
        if not result.is_valid:
            raise ValidatorFailedError(result)
        return result


def all_of(
    validators: Iterable[Validator],
    *,
    message: str | None = None,
    collecting: bool = False,
) -> All:
    """Pass when every validator passes.

    Args:
        validators: Validators to run in order
        message: Optional replacement failure message
        collecting: Run every validator against the original value and report
            all failures instead of chaining and stopping at the first

    Returns:
        All validator
    """
    return All(validators, collecting=collecting, message=message)


def any_of(validators: Iterable[Validator], *, message: str | None = None) -> AnyOf:
    """Pass when at least one validator passes; failures from all are reported otherwise."""
    return AnyOf(validators, message=message)


def none_of(validators: Iterable[Validator], *, message: str | None = None) -> NoneOf:
    """Pass when no validator passes."""
    return NoneOf(validators, message=message)


def not_(child: Validator, *, message: str | None = None) -> Not:
    """Pass when ``child`` fails."""
    return Not(child, message=message)


def with_expectation(child: Validator, expectation: Expectation | str) -> WithExpectation:
    """Replace the failure reported by ``child``.

    Args:
        child: Validator to wrap
        expectation: Replacement expectation, or just its message

    Returns:
        Wrapped validator; successes pass through unchanged
    """
    if isinstance(expectation, str):
        expectation = Expectation(message=expectation)
    return WithExpectation(child, expectation)


def raise_instead(child: Validator) -> RaiseInstead:
    """Make ``child`` raise ``ValidatorFailedError`` rather than return a failure."""
    return RaiseInstead(child)
