"""Drivers that run validation steps synchronously or asynchronously.

Loops over child validators are written once, as generators that yield each
child's outcome (a ``Result`` or an awaitable of one) and receive the settled
``Result`` back. ``run`` drives such a generator synchronously until a child
suspends; from that point on the remaining steps are driven by a coroutine.
Children are therefore always evaluated strictly left to right, and a loop
that never meets an awaitable never creates one.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Generator
from typing import Any, TypeVar, Union

from .result import Result

T = TypeVar("T")
U = TypeVar("U")

Outcome = Union[Result, Awaitable[Result]]
Steps = Generator[Outcome, Result, Result]


class Deferred:
    """Awaitable continuation of work that suspended on ``pending``.

    The continuation coroutine is only created when the deferred is awaited,
    so discarding it releases ``pending`` itself (closing a coroutine that
    never started would not reach it).

    Args:
        pending: The awaitable the work is suspended on
        resume: Builds the coroutine that awaits ``pending`` and finishes
        on_close: Called when the deferred is discarded unawaited
    """

    def __init__(
        self,
        pending: Awaitable[Any],
        resume: Callable[[Awaitable[Any]], Awaitable[Any]],
        on_close: Callable[[], None] | None = None,
    ):
        self.pending = pending
        self.resume = resume
        self.on_close = on_close

    def __await__(self) -> Generator[Any, None, Any]:
        return self.resume(self.pending).__await__()

    def close(self) -> None:
        discard(self.pending)
        if self.on_close is not None:
            self.on_close()


def is_pending(outcome: Any) -> bool:
    """Return True when ``outcome`` still has to be awaited."""
    return inspect.isawaitable(outcome)


def run(steps: Steps) -> Outcome:
    """Drive a step generator, switching to async on the first awaitable.

    Args:
        steps: Generator yielding child outcomes and returning the final Result

    Returns:
        The final Result, or a ``Deferred`` producing it if any step suspended
    """
    try:
        outcome = next(steps)
        while not is_pending(outcome):
            outcome = steps.send(outcome)
    except StopIteration as stop:
        return stop.value
    return Deferred(outcome, lambda first: _run_async(steps, first), steps.close)


async def _run_async(steps: Steps, pending: Awaitable[Result]) -> Result:
    outcome: Any = pending
    try:
        while True:
            if is_pending(outcome):
                outcome = await outcome
            outcome = steps.send(outcome)
    except StopIteration as stop:
        return stop.value


def then(value: T | Awaitable[T], fn: Callable[[T], U]) -> U | Awaitable[U]:
    """Apply ``fn`` to a value that may still be pending.

    Synchronous values are mapped immediately; awaitables are wrapped in a
    ``Deferred`` that awaits them first. If ``fn`` itself returns an awaitable
    inside that coroutine, it is awaited too.
    """
    if is_pending(value):
        async def _chain(pending: Awaitable[T]) -> U:
            mapped = fn(await pending)
            if is_pending(mapped):
                mapped = await mapped  # type: ignore[misc]
            return mapped

        return Deferred(value, _chain)  # type: ignore[arg-type, return-value]
    return fn(value)  # type: ignore[arg-type]


def discard(outcome: Any) -> None:
    """Release a pending outcome that will never be awaited."""
    if isinstance(outcome, Deferred):
        outcome.close()
    elif inspect.iscoroutine(outcome):
        outcome.close()
    elif hasattr(outcome, "cancel"):
        outcome.cancel()
