"""Fluent builder that threads coercions and constraints into one validator.

    ```python
    from dataknobs_validation import builder

    age = builder().string().trim().to_int().gte(0).lte(150).optional().build()
    age.validate(" 42 ").value      # 42
    age.validate(None, exists=False).is_valid  # True

    username = (
        builder().string()
        .length_range(3, 20)
        .not_.matches(r"\\s")
        .error("invalid username")
    )
    ```

A builder records steps on a ``Chain``: the starting type guard, coercions
(each tagged with a ``CoercionKind``), normalizers and constraints, all run in
order with the value flowing from one step to the next. Presence flags are not
steps: ``optional()`` and ``nullable()`` can be called anywhere in the chain
and the built validator carries the OR of every call, so their position never
matters. Requesting the coercion that is already in effect is a no-op.

Builders are validators themselves and can be used directly as schema fields;
``build()`` freezes the current chain into an immutable validator.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from re import Pattern
from typing import Any, TypeVar

from . import transformers as tr
from . import validators as v
from .combinators import All, Not, with_expectation
from .execution import Outcome
from .expectation import Expectation
from .structure import list_each, schema, strict_schema
from .transformers import Coercion, CoercionKind
from .validator import ErrorSpec, Validator, predicate

logger = logging.getLogger(__name__)

B = TypeVar("B", bound="BaseBuilder")


@dataclass
class PresenceFlags:
    """Presence attributes collected while building; merged by OR."""

    nullable: bool = False
    optional: bool = False

    def merge(self, *, nullable: bool = False, optional: bool = False) -> None:
        self.nullable = self.nullable or nullable
        self.optional = self.optional or optional


class Chain:
    """Mutable, ordered build state shared by the builders of one pipeline."""

    def __init__(self) -> None:
        self.steps: list[Validator] = []
        self.kind: CoercionKind | None = None
        self.variant: str | None = None
        self.presence = PresenceFlags()

    def add(self, step: Validator) -> None:
        self.steps.append(step)

    def coerce(self, step: Coercion) -> bool:
        """Append a coercion unless the same conversion is already in effect.

        A conversion of the current kind under a different rule (``to_int_safe``
        after ``to_int``) is appended, so its stricter check still runs. Custom
        coercions are always appended.

        Returns:
            True if the step was appended
        """
        kind = step.kind
        if kind is not None and kind is not CoercionKind.CUSTOM and step.variant == self.variant:
            logger.debug("Skipping repeated %s coercion", step.variant)
            return False
        self.steps.append(step)
        if kind is not None:
            self.kind = kind
            self.variant = step.variant
        return True

    def reset_kind(self, kind: CoercionKind | None = None) -> None:
        """Set the value kind without adding a step."""
        self.kind = kind
        self.variant = kind.value if kind else None

    def wrap(self, fn: Callable[[Validator], Validator]) -> None:
        """Replace the steps so far by ``fn`` applied to their conjunction."""
        if self.steps:
            self.steps = [fn(All(self.steps))]

    def freeze(self) -> Validator:
        """Build the immutable validator for the current state."""
        return All(self.steps, nullable=self.presence.nullable, optional=self.presence.optional)


class BaseBuilder(Validator):
    """Common builder operations.

    Args:
        chain: Chain to extend; a new one is created when omitted
    """

    def __init__(self, chain: Chain | None = None):
        super().__init__()
        self.chain = chain or Chain()
        self._negated = False

    # Presence

    @property
    def is_nullable(self) -> bool:
        return self.chain.presence.nullable

    @property
    def is_optional(self) -> bool:
        return self.chain.presence.optional

    def nullable(self: B) -> B:
        """Accept ``None``; applies to the whole chain wherever it is called."""
        self.chain.presence.merge(nullable=True)
        return self

    def optional(self: B) -> B:
        """Accept an absent value; applies to the whole chain wherever it is called."""
        self.chain.presence.merge(optional=True)
        return self

    # Steps

    @property
    def not_(self: B) -> B:
        """Negate the next constraint."""
        self._negated = True
        return self

    def add(self: B, validator: Validator, message: str | None = None) -> B:
        """Append a constraint, honoring a pending ``not_`` and an optional message."""
        if self._negated:
            validator = Not(validator)
            self._negated = False
        if message:
            validator = with_expectation(validator, message)
        self.chain.add(validator)
        return self

    def wrap(self: B, fn: Callable[[Validator], Validator]) -> B:
        self.chain.wrap(fn)
        self._negated = False
        return self

    def error(self: B, message: str) -> B:
        """Replace the failure message of everything added so far."""
        return self.wrap(lambda current: with_expectation(current, message))

    def custom(self: B, test: Callable[[Any], bool], error: ErrorSpec = "custom check failed") -> B:
        return self.add(predicate(test, error))

    def async_check(
        self: B,
        test: Callable[[Any], Awaitable[bool]],
        error: ErrorSpec = "async check failed",
    ) -> B:
        """Add a coroutine predicate; the built validator must be run with ``validate_async``."""
        return self.add(predicate(test, error))

    def use(self: B, validator: Validator, message: str | None = None) -> B:
        """Add any prebuilt validator as a constraint."""
        return self.add(validator, message)

    def eq(self: B, value: Any, message: str | None = None) -> B:
        return self.add(v.is_eq(value), message)

    def deep_eq(self: B, value: Any, message: str | None = None) -> B:
        return self.add(v.is_deep_eq(value), message)

    def one_of(self: B, values: Iterable[Any], message: str | None = None) -> B:
        return self.add(v.is_one_of(values), message)

    # Freezing and running

    def build(self) -> Validator:
        return self.chain.freeze()

    def evaluate(self, value: Any) -> Outcome:
        return self.build().evaluate(value)

    def run(self, value: Any, exists: bool = True) -> Outcome:
        return self.build().run(value, exists)

    def describe(self, value: Any) -> Expectation | None:
        return self.build().describe(value)

    def copy_with(self, *, nullable: bool | None = None, optional: bool | None = None) -> Validator:
        return self.build().copy_with(nullable=nullable, optional=optional)

    def _pivot(self, step: Coercion, builder_cls: type[B], message: str | None = None) -> B:
        self._negated = False
        if self.chain.coerce(step) and message:
            self.chain.steps[-1] = with_expectation(step, message)
        return builder_cls(self.chain)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self.chain.steps)} steps)"


class TransformerMixin:
    """Coercions; each returns the builder for the new value kind."""

    def to_int(self: Any, message: str | None = None) -> IntBuilder:
        return self._pivot(tr.int_step(), IntBuilder, message)

    def to_int_strict(self: Any, message: str | None = None) -> IntBuilder:
        return self._pivot(tr.int_strict_step(), IntBuilder, message)

    def to_int_safe(self: Any, message: str | None = None) -> IntBuilder:
        return self._pivot(tr.int_safe_step(), IntBuilder, message)

    def to_float(self: Any, message: str | None = None) -> FloatBuilder:
        return self._pivot(tr.float_step(), FloatBuilder, message)

    def to_number(self: Any, message: str | None = None) -> NumberBuilder:
        return self._pivot(tr.number_step(), NumberBuilder, message)

    def to_bool(self: Any, message: str | None = None) -> BoolBuilder:
        return self._pivot(tr.bool_step(), BoolBuilder, message)

    def to_bool_strict(self: Any, message: str | None = None) -> BoolBuilder:
        return self._pivot(tr.bool_strict_step(), BoolBuilder, message)

    def to_bool_lenient(self: Any, message: str | None = None) -> BoolBuilder:
        return self._pivot(tr.bool_lenient_step(), BoolBuilder, message)

    def to_str(self: Any, message: str | None = None) -> StringBuilder:
        return self._pivot(tr.str_step(), StringBuilder, message)

    def to_datetime(self: Any, message: str | None = None) -> DateTimeBuilder:
        return self._pivot(tr.datetime_step(), DateTimeBuilder, message)

    def to_json(self: Any, message: str | None = None) -> JsonBuilder:
        return self._pivot(tr.json_step(), JsonBuilder, message)

    def transform(
        self: Any,
        fn: Callable[[Any], Any],
        expected: str = "a transformable value",
        message: str | None = None,
    ) -> GenericBuilder:
        """Apply a custom conversion; always appended, even if repeated."""
        return self._pivot(tr.custom_step(fn, expected), GenericBuilder, message)


class LengthMixin:
    def length(self: Any, validators: Iterable[Validator], message: str | None = None) -> Any:
        return self.add(v.length(validators), message)

    def length_min(self: Any, minimum: int, message: str | None = None) -> Any:
        return self.length([v.is_gte(minimum)], message)

    def length_max(self: Any, maximum: int, message: str | None = None) -> Any:
        return self.length([v.is_lte(maximum)], message)

    def length_range(self: Any, minimum: int, maximum: int, message: str | None = None) -> Any:
        return self.length([v.is_in_range(minimum, maximum)], message)

    def contains(self: Any, item: Any, message: str | None = None) -> Any:
        return self.add(v.contains(item), message)


class NumberMixin:
    def lt(self: Any, limit: Any, message: str | None = None) -> Any:
        return self.add(v.is_lt(limit), message)

    def lte(self: Any, limit: Any, message: str | None = None) -> Any:
        return self.add(v.is_lte(limit), message)

    def gt(self: Any, limit: Any, message: str | None = None) -> Any:
        return self.add(v.is_gt(limit), message)

    def gte(self: Any, limit: Any, message: str | None = None) -> Any:
        return self.add(v.is_gte(limit), message)

    def between(self: Any, minimum: Any, maximum: Any, message: str | None = None) -> Any:
        return self.add(v.is_in_range(minimum, maximum), message)


class StringMixin:
    def empty(self: Any, message: str | None = None) -> Any:
        return self.add(v.string_empty(), message)

    def matches(self: Any, pattern: str | Pattern[str], message: str | None = None) -> Any:
        return self.add(v.string_matches_pattern(pattern), message)

    def email(self: Any, message: str | None = None) -> Any:
        return self.add(v.is_email(), message)

    def lower_case(self: Any, message: str | None = None) -> Any:
        return self.add(v.is_lower_case(), message)

    def upper_case(self: Any, message: str | None = None) -> Any:
        return self.add(v.is_upper_case(), message)

    def url(self: Any, strict: bool = False, message: str | None = None) -> Any:
        return self.add(v.is_url(strict=strict), message)

    def uuid_v4(self: Any, message: str | None = None) -> Any:
        return self.add(v.is_uuid_v4(), message)

    def int_string(self: Any, message: str | None = None) -> Any:
        return self.add(v.is_int_string(), message)

    def float_string(self: Any, message: str | None = None) -> Any:
        return self.add(v.is_float_string(), message)

    def number_string(self: Any, message: str | None = None) -> Any:
        return self.add(v.is_number_string(), message)

    def date_string(self: Any, message: str | None = None) -> Any:
        return self.add(v.is_date_string(), message)

    # Normalizers keep the string kind

    def trim(self: Any) -> Any:
        self.chain.add(tr.trim_step())
        return self

    def collapse_whitespace(self: Any) -> Any:
        self.chain.add(tr.collapse_whitespace_step())
        return self

    def to_lower(self: Any) -> Any:
        self.chain.add(tr.lower_step())
        return self

    def to_upper(self: Any) -> Any:
        self.chain.add(tr.upper_step())
        return self


class MapMixin:
    def schema(self: Any, fields: Mapping[Any, Validator], message: str | None = None) -> Any:
        return self.add(schema(fields), message)

    def strict(self: Any, fields: Mapping[Any, Validator], message: str | None = None) -> Any:
        return self.add(strict_schema(fields), message)

    def contains_key(self: Any, key: Any, message: str | None = None) -> Any:
        return self.add(v.contains_key(key), message)

    def contains_keys(self: Any, keys: Iterable[Any], message: str | None = None) -> Any:
        return self.add(v.contains_keys(keys), message)

    def pick(self: Any, keys: Iterable[Any]) -> Any:
        self.chain.add(tr.pick_keys(keys))
        return self

    def flatten_keys(self: Any, delimiter: str = ".") -> Any:
        self.chain.add(tr.flatten_keys(delimiter))
        return self

    def pluck_value(self: Any, key: Any) -> GenericBuilder:
        """Continue the chain with the value at ``key``."""
        self._negated = False
        self.chain.add(tr.pluck_key(key))
        self.chain.reset_kind()
        return GenericBuilder(self.chain)


class IterableMixin:
    def each(self: Any, item: Validator, message: str | None = None) -> Any:
        return self.add(list_each(item), message)


class DateTimeMixin:
    def before(self: Any, bound: datetime, inclusive: bool = False, message: str | None = None) -> Any:
        return self.add(v.is_date_before(bound, inclusive), message)

    def after(self: Any, bound: datetime, inclusive: bool = False, message: str | None = None) -> Any:
        return self.add(v.is_date_after(bound, inclusive), message)

    def between_dates(
        self: Any,
        start: datetime,
        end: datetime,
        inclusive_start: bool = True,
        inclusive_end: bool = True,
        message: str | None = None,
    ) -> Any:
        return self.add(v.is_date_between(start, end, inclusive_start, inclusive_end), message)

    def same_day(self: Any, day: datetime, message: str | None = None) -> Any:
        return self.add(v.is_date_same_day(day), message)

    def in_past(self: Any, allow_now: bool = True, message: str | None = None) -> Any:
        return self.add(v.is_date_in_past(allow_now), message)

    def in_future(self: Any, allow_now: bool = True, message: str | None = None) -> Any:
        return self.add(v.is_date_in_future(allow_now), message)


class JsonMixin:
    def json_container(self: Any, message: str | None = None) -> Any:
        return self.add(v.is_json_container(), message)

    def json_object(self: Any, message: str | None = None) -> Any:
        return self.add(v.is_json_object(), message)

    def json_array(self: Any, message: str | None = None) -> Any:
        return self.add(v.is_json_array(), message)

    def json_requires_keys(self: Any, keys: Iterable[str], message: str | None = None) -> Any:
        return self.add(v.json_has_keys(keys), message)

    def json_array_len(
        self: Any, min_length: int | None = None, max_length: int | None = None, message: str | None = None
    ) -> Any:
        return self.add(v.json_array_length(min_length, max_length), message)

    def json_array_each(self: Any, element: Validator, message: str | None = None) -> Any:
        return self.add(v.json_array_every(element), message)


class StringBuilder(LengthMixin, StringMixin, TransformerMixin, BaseBuilder):
    pass


class NumberBuilder(NumberMixin, TransformerMixin, BaseBuilder):
    pass


class IntBuilder(NumberBuilder):
    pass


class FloatBuilder(NumberBuilder):
    pass


class BoolBuilder(TransformerMixin, BaseBuilder):
    def is_true(self, message: str | None = None) -> BoolBuilder:
        return self.add(v.is_eq(True), message)

    def is_false(self, message: str | None = None) -> BoolBuilder:
        return self.add(v.is_eq(False), message)


class DateTimeBuilder(DateTimeMixin, TransformerMixin, BaseBuilder):
    pass


class ListBuilder(LengthMixin, IterableMixin, TransformerMixin, BaseBuilder):
    pass


class DictBuilder(LengthMixin, MapMixin, TransformerMixin, BaseBuilder):
    pass


class JsonBuilder(LengthMixin, JsonMixin, MapMixin, IterableMixin, BaseBuilder):
    pass


class GenericBuilder(LengthMixin, TransformerMixin, BaseBuilder):
    pass


class RootBuilder:
    """Entry point: pick the starting kind, which adds its type guard."""

    def _start(
        self, builder_cls: type[B], guard: Validator | None, kind: CoercionKind | None
    ) -> B:
        chain = Chain()
        if guard is not None:
            chain.add(guard)
        chain.reset_kind(kind)
        return builder_cls(chain)

    def string(self, message: str | None = None) -> StringBuilder:
        return self._start(StringBuilder, v.is_str(message), CoercionKind.STRING)

    def int_(self, message: str | None = None) -> IntBuilder:
        return self._start(IntBuilder, v.is_int(message), CoercionKind.INT)

    def float_(self, message: str | None = None) -> FloatBuilder:
        return self._start(FloatBuilder, v.is_float(message), CoercionKind.FLOAT)

    def number(self, message: str | None = None) -> NumberBuilder:
        return self._start(NumberBuilder, v.is_number(message), CoercionKind.NUMBER)

    def bool_(self, message: str | None = None) -> BoolBuilder:
        return self._start(BoolBuilder, v.is_bool(message), CoercionKind.BOOL)

    def list_(self, message: str | None = None) -> ListBuilder:
        return self._start(ListBuilder, v.is_list(message), None)

    def dict_(self, message: str | None = None) -> DictBuilder:
        return self._start(DictBuilder, v.is_dict(message), None)

    def datetime(self, message: str | None = None) -> DateTimeBuilder:
        return self._start(DateTimeBuilder, v.is_datetime(message), CoercionKind.DATETIME)

    def json(self, message: str | None = None) -> JsonBuilder:
        guard = v.is_json_container()
        if message:
            guard = with_expectation(guard, message)
        return self._start(JsonBuilder, guard, CoercionKind.JSON)

    def type_(self, expected: type | tuple[type, ...], message: str | None = None) -> GenericBuilder:
        return self._start(GenericBuilder, v.is_type(expected, message), None)

    def any_(self) -> GenericBuilder:
        return self._start(GenericBuilder, None, None)


def builder() -> RootBuilder:
    """Start a fluent validator chain."""
    return RootBuilder()
