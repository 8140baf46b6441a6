"""Tests for synchronous and asynchronous execution."""

import asyncio
import inspect

import pytest

from dataknobs_validation import (
    AsyncValidatorError,
    Result,
    ValidatorFailedError,
    all_of,
    any_of,
    is_int,
    is_str,
    list_each,
    predicate,
    schema,
    to_int,
    validator,
)
from dataknobs_validation.execution import discard, is_pending, run, then


async def _is_even(value):
    await asyncio.sleep(0)
    return value % 2 == 0


class TestExecutionDriver:
    """Test the step driver."""

    def test_run_stays_synchronous(self):
        """Test that steps without awaitables produce a Result directly."""

        def steps():
            first = yield Result.valid(1)
            second = yield Result.valid(first.value + 1)
            return Result.valid(second.value)

        outcome = run(steps())
        assert isinstance(outcome, Result)
        assert outcome.value == 2

    @pytest.mark.asyncio
    async def test_run_switches_to_async(self):
        """Test that the first awaitable turns the run into an awaitable."""

        async def later(value):
            return Result.valid(value)

        def steps():
            first = yield Result.valid(1)
            second = yield later(first.value + 1)
            third = yield Result.valid(second.value + 1)
            return third

        outcome = run(steps())
        assert is_pending(outcome)
        result = await outcome
        assert result.value == 3

    def test_then_sync(self):
        """Test mapping a plain value."""
        assert then(2, lambda v: v * 3) == 6

    @pytest.mark.asyncio
    async def test_then_flattens(self):
        """Test that awaitables returned by the mapper are awaited too."""

        async def double(v):
            return v * 2

        async def two():
            return 2

        assert await then(two(), double) == 4

    def test_discard_closes_suspended_work(self):
        """Test that discarding a suspended run closes its pending coroutine and steps."""

        async def later(value):
            return Result.valid(value)

        pending = later(1)

        def steps():
            first = yield pending
            return first

        gen = steps()
        outcome = run(gen)
        discard(outcome)
        assert inspect.getcoroutinestate(pending) == inspect.CORO_CLOSED
        assert inspect.getgeneratorstate(gen) == inspect.GEN_CLOSED


class TestSyncEntryPoints:
    """Test synchronous validation of asynchronous validators."""

    def test_sync_validate_rejects_async(self):
        """Test that a suspending validator raises in sync mode."""
        with pytest.raises(AsyncValidatorError):
            predicate(_is_even, "even").validate(2)

    def test_sync_validate_rejects_nested_async(self):
        """Test detection of asynchronous work deep inside a schema."""
        v = schema({"n": all_of([is_int(), predicate(_is_even, "even")])})
        with pytest.raises(AsyncValidatorError):
            v.validate({"n": 2})

    def test_sync_misuse_closes_user_coroutine(self):
        """Test that the coroutine started by a check is closed after the error."""
        started = []

        def check(value):
            coro = _is_even(value)
            started.append(coro)
            return coro

        v = schema({"n": all_of([is_int(), predicate(check, "even")])})
        with pytest.raises(AsyncValidatorError):
            v.validate({"n": 2})
        assert inspect.getcoroutinestate(started[0]) == inspect.CORO_CLOSED

    def test_sync_validate_when_async_part_is_skipped(self):
        """Test that a short-circuit before the async child stays synchronous."""
        result = all_of([is_int(), predicate(_is_even, "even")]).validate("x")
        assert not result.is_valid

    def test_is_valid(self):
        """Test the boolean shortcut."""
        assert is_str().is_valid("a")
        assert not is_str().is_valid(1)


class TestAsyncEntryPoints:
    """Test asynchronous validation."""

    @pytest.mark.asyncio
    async def test_async_predicate(self):
        """Test awaiting a coroutine predicate."""
        even = predicate(_is_even, "even")
        assert (await even.validate_async(4)).is_valid
        result = await even.validate_async(3)
        assert result.first_expectation.message == "even"

    @pytest.mark.asyncio
    async def test_async_matches_sync(self):
        """Test that sync-only validators give the same result in both modes."""
        v = schema({"name": is_str(), "age": to_int()})
        value = {"name": 3, "age": "12"}
        assert await v.validate_async(value) == v.validate(value)

    @pytest.mark.asyncio
    async def test_children_run_in_order(self):
        """Test left-to-right evaluation even when children suspend."""
        order = []

        def tracked(name, delay):
            async def check(value):
                await asyncio.sleep(delay)
                order.append(name)
                return Result.valid(value)

            return validator(check)

        v = all_of([tracked("slow", 0.02), tracked("fast", 0), tracked("sync", 0)])
        assert (await v.validate_async(1)).is_valid
        assert order == ["slow", "fast", "sync"]

    @pytest.mark.asyncio
    async def test_async_schema_collects_paths(self):
        """Test that async failures keep their paths."""
        v = schema({"ids": list_each(predicate(_is_even, "even"))})
        result = await v.validate_async({"ids": [2, 3, 4, 5]})
        assert [e.path for e in result.expectations] == ["ids[1]", "ids[3]"]

    @pytest.mark.asyncio
    async def test_async_any_short_circuits(self):
        """Test that any_of stops after an awaited success."""
        calls = []

        def spy(value):
            calls.append(value)
            return Result.valid(value)

        result = await any_of([predicate(_is_even, "even"), validator(spy)]).validate_async(2)
        assert result.is_valid
        assert calls == []

    @pytest.mark.asyncio
    async def test_validate_or_raise_async(self):
        """Test the raising async entry point."""
        even = predicate(_is_even, "even")
        assert await even.validate_or_raise_async(2) == 2
        with pytest.raises(ValidatorFailedError):
            await even.validate_or_raise_async(1)
        assert await even.is_valid_async(6)
