"""Validators whose behavior depends on the enclosing map.

``when`` and ``resolve`` only make sense as fields of a ``schema``: the schema
hands them the parent mapping along with the field value. Evaluated anywhere
else they report a ``logic.contextual_misuse`` failure instead of raising.

    ```python
    payment = schema({
        "method": is_one_of(["card", "cash"]),
        "card_number": when(
            get_field("method", is_eq("card")),
            then=string_matches_pattern(r"^\\d{16}$"),
            otherwise=is_none(),
        ),
    })
    ```
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Union

from .codes import ExpectationCodes
from .exceptions import AsyncValidatorError
from .execution import Outcome, discard, is_pending
from .execution import then as after
from .expectation import Expectation
from .presence import required
from .result import Result
from .validator import Predicate, Validator

logger = logging.getLogger(__name__)

Resolver = Callable[[Mapping[str, Any]], Union[Validator, None, Awaitable[Union[Validator, None]]]]


class ContextualValidator(Validator):
    """Base for validators that need the parent mapping of the value."""

    name = "contextual"

    def evaluate(self, value: Any) -> Outcome:
        return Result.invalid(value, Expectation(
            message=f"`{self.name}` validator can only be used inside a schema map validator",
            value=value,
            code=ExpectationCodes.LOGIC_CONTEXTUAL_MISUSE,
        ))

    @abstractmethod
    def evaluate_with_parent(self, value: Any, parent: Mapping[str, Any]) -> Outcome:
        """Check a field value, given the mapping that contains it."""

    def run_with_parent(self, value: Any, parent: Mapping[str, Any], exists: bool = True) -> Outcome:
        if value is None and ((self.is_nullable and exists) or (self.is_optional and not exists)):
            return Result.valid(value)
        return self.evaluate_with_parent(value, parent)

    def validate_with_parent(
        self, value: Any, parent: Mapping[str, Any], *, exists: bool = True
    ) -> Result:
        """Synchronous validation of a field value against its parent mapping."""
        outcome = self.run_with_parent(value, parent, exists)
        if is_pending(outcome):
            discard(outcome)
            raise AsyncValidatorError(self)
        return outcome  # type: ignore[return-value]

    async def validate_with_parent_async(
        self, value: Any, parent: Mapping[str, Any], *, exists: bool = True
    ) -> Result:
        outcome = self.run_with_parent(value, parent, exists)
        if is_pending(outcome):
            return await outcome  # type: ignore[misc]
        return outcome  # type: ignore[return-value]


class When(ContextualValidator):
    """Pick a branch for the field value by testing the parent mapping.

    Args:
        condition: Validator (or plain predicate) run against the parent mapping
        then: Validator for the field value when the condition passes
        otherwise: Validator for the field value when it fails; accepts
            anything when omitted
        message: Optional replacement failure message, keeping the branch's code
    """

    name = "when"

    def __init__(
        self,
        condition: Validator | Callable[[Mapping[str, Any]], bool],
        then: Validator,
        otherwise: Validator | None = None,
        message: str | None = None,
        *,
        nullable: bool = False,
        optional: bool = False,
    ):
        super().__init__(nullable=nullable, optional=optional)
        if not isinstance(condition, Validator):
            condition = Predicate(condition, "condition")
        self.condition = condition
        self.then = then
        self.otherwise = otherwise
        self.message = message

    def evaluate_with_parent(self, value: Any, parent: Mapping[str, Any]) -> Outcome:
        return after(
            self.condition.run(parent),
            lambda cond: after(self._branch(cond.is_valid, value), self._settle),
        )

    def _branch(self, matched: bool, value: Any) -> Outcome:
        branch = self.then if matched else self.otherwise
        if branch is None:
            return Result.valid(value)
        return branch.run(value)

    def _settle(self, result: Result) -> Result:
        if result.is_valid or self.message is None:
            return result
        first = result.expectations[0]
        return Result.invalid(
            result.value,
            Expectation(message=self.message, value=result.value, code=first.code, data=first.data),
            original_value=result.original_value,
        )


class Resolve(ContextualValidator):
    """Choose the field validator at evaluation time from the parent mapping.

    The resolver may return a validator, ``None`` (anything goes), or an
    awaitable of either.
    """

    name = "resolve"

    def __init__(self, resolver: Resolver, *, nullable: bool = False, optional: bool = False):
        super().__init__(nullable=nullable, optional=optional)
        self.resolver = resolver

    def evaluate_with_parent(self, value: Any, parent: Mapping[str, Any]) -> Outcome:
        return after(self.resolver(parent), lambda chosen: self._apply(chosen, value))

    @staticmethod
    def _apply(chosen: Validator | None, value: Any) -> Outcome:
        if chosen is None:
            return Result.valid(value)
        return chosen.run(value)


class SwitchBy(Validator):
    """Validate a mapping with the validator registered for its discriminator key."""

    def __init__(
        self,
        key: str,
        cases: Mapping[Any, Validator],
        *,
        nullable: bool = False,
        optional: bool = False,
    ):
        super().__init__(nullable=nullable, optional=optional)
        self.key = key
        self.cases = dict(cases)

    def evaluate(self, value: Any) -> Outcome:
        if not isinstance(value, Mapping):
            return Result.invalid(value, Expectation(
                message="Map expected",
                value=value,
                code=ExpectationCodes.TYPE_MISMATCH,
                data={"expected": "dict", "found": type(value).__name__},
            ))
        if self.key not in value:
            return Result.invalid(value, Expectation(
                message=f'Missing key: "{self.key}"',
                value=value,
                code=ExpectationCodes.VALUE_CONTAINS_MISSING,
                data={"keys": [self.key]},
            ))
        tag = value[self.key]
        case = self.cases.get(tag) if _hashable(tag) else None
        if case is None:
            return Result.invalid(value, Expectation(
                message=f"one of: {list(self.cases)}",
                value=tag,
                path=self.key,
                code=ExpectationCodes.VALUE_MEMBERSHIP_MISMATCH,
                data={"options": list(self.cases)},
            ))
        return case.run(value)


def _hashable(value: Any) -> bool:
    try:
        hash(value)
    except TypeError:
        return False
    return True


def when(
    condition: Validator | Callable[[Mapping[str, Any]], bool],
    then: Validator,
    otherwise: Validator | None = None,
    message: str | None = None,
) -> When:
    """Branch a field's validation on its parent mapping.

    Args:
        condition: Run against the parent mapping
        then: Run against the field value when the condition passes
        otherwise: Run against the field value when it does not
        message: Optional replacement failure message

    Returns:
        When validator, usable as a schema field
    """
    return When(condition, then, otherwise, message)


def required_when(
    condition: Validator | Callable[[Mapping[str, Any]], bool],
    validator: Validator,
    message: str | None = None,
) -> When:
    """Require a field when ``condition`` holds for the parent; otherwise make it optional."""
    base = validator.build()
    return When(
        condition,
        required(base),
        base.optional().nullable(),
        message,
    )


def resolve(resolver: Resolver) -> Resolve:
    """Pick a field's validator from its parent mapping at evaluation time."""
    return Resolve(resolver)


def switch_by(key: str, cases: Mapping[Any, Validator]) -> SwitchBy:
    """Validate a mapping with ``cases[mapping[key]]``."""
    return SwitchBy(key, cases)
