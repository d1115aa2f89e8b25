"""
WikiResult - composable asynchronous computations that can fail in two ways.

A WikiResult is a lazy wrapper around a coroutine function that resolves to an
Outcome: a Success holding a value, a DomainFailure holding the expected,
data-level errors reported by a data source (an article that does not exist,
a search without hits), or a SystemFailure holding the exception raised by the
infrastructure (timeouts, broken connections, corrupt databases).

Nothing runs until the result is awaited, and awaiting never raises for an
ordinary exception: anything escaping the computation becomes a SystemFailure.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import (
    Any,
    Awaitable,
    Callable,
    Generic,
    Iterable,
    List,
    Tuple,
    TypeVar,
    Union,
)

from wikigraph.exceptions import DomainErrorException, SystemFailureException
from wikigraph.models import WikiError

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")
A = TypeVar("A")


# --- Outcomes ---

@dataclass(frozen=True)
class Success(Generic[T]):
    """The computation produced a value."""
    value: T

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class DomainFailure:
    """The computation failed with one or more expected, recoverable errors."""
    errors: Tuple[WikiError, ...]

    def unwrap(self):
        raise DomainErrorException(self.errors)


@dataclass(frozen=True)
class SystemFailure:
    """The computation failed because of the infrastructure. Never recovered."""
    exception: Exception

    def unwrap(self):
        raise SystemFailureException(self.exception) from self.exception


Outcome = Union[Success[T], DomainFailure, SystemFailure]

_OUTCOME_TYPES = (Success, DomainFailure, SystemFailure)


async def _resolved(outcome: Outcome) -> Outcome:
    return outcome


class WikiResult(Generic[T]):
    """
    A lazy asynchronous computation resolving to an Outcome.

    Awaiting a WikiResult runs it and returns the Outcome. A WikiResult can be
    awaited more than once; each await runs the computation again.
    """

    __slots__ = ("_thunk",)

    def __init__(self, thunk: Callable[[], Awaitable[Outcome[T]]]):
        """
        Args:
            thunk: Zero-argument callable returning an awaitable Outcome. It is
                only called when the result is awaited.
        """
        self._thunk = thunk

    def __await__(self):
        return self.run().__await__()

    async def run(self) -> Outcome[T]:
        """Run the computation, turning escaping exceptions into a SystemFailure."""
        try:
            outcome = await self._thunk()
        except Exception as e:
            logger.debug(f"Computation raised {type(e).__name__}: {e}")
            return SystemFailure(e)
        if not isinstance(outcome, _OUTCOME_TYPES):
            return SystemFailure(TypeError(f"Expected an Outcome, got {type(outcome).__name__}"))
        return outcome

    # --- Constructors ---

    @classmethod
    def successful(cls, value: T) -> "WikiResult[T]":
        """A result that immediately succeeds with `value`."""
        outcome = Success(value)
        return cls(lambda: _resolved(outcome))

    @classmethod
    def domain_error(cls, *errors: WikiError) -> "WikiResult[Any]":
        """A result that fails with the given domain errors."""
        outcome = DomainFailure(tuple(errors))
        return cls(lambda: _resolved(outcome))

    @classmethod
    def system_failure(cls, exception: Exception) -> "WikiResult[Any]":
        """A result that fails with the given infrastructure exception."""
        outcome = SystemFailure(exception)
        return cls(lambda: _resolved(outcome))

    @classmethod
    def from_async(cls, fn: Callable[..., Awaitable[T]], *args, **kwargs) -> "WikiResult[T]":
        """Lift a coroutine function: its return value succeeds, anything it raises is a system failure."""
        async def run() -> Outcome[T]:
            return Success(await fn(*args, **kwargs))
        return cls(run)

    # --- Combinators ---

    def map(self, f: Callable[[T], U]) -> "WikiResult[U]":
        """Transform the value on success. Failures propagate unchanged."""
        async def run() -> Outcome[U]:
            outcome = await self
            if isinstance(outcome, Success):
                return Success(f(outcome.value))
            return outcome
        return WikiResult(run)

    def flat_map(self, f: Callable[[T], "WikiResult[U]"]) -> "WikiResult[U]":
        """Chain a dependent computation. `f` is not called when this result fails."""
        async def run() -> Outcome[U]:
            outcome = await self
            if isinstance(outcome, Success):
                return await f(outcome.value)
            return outcome
        return WikiResult(run)

    def fallback_to(
        self, alternative: Union["WikiResult[T]", Callable[[], "WikiResult[T]"]]
    ) -> "WikiResult[T]":
        """
        Recover from a domain failure with an alternative computation.

        The alternative is only evaluated when this result ends in a
        DomainFailure. Successes and system failures are returned untouched.

        Args:
            alternative: A WikiResult, or a zero-argument callable building one.
        """
        async def run() -> Outcome[T]:
            outcome = await self
            if isinstance(outcome, DomainFailure):
                alt = alternative() if callable(alternative) else alternative
                return await alt
            return outcome
        return WikiResult(run)

    def zip(self, other: "WikiResult[U]") -> "WikiResult[Tuple[T, U]]":
        """Run both results concurrently and pair their values."""
        return WikiResult.sequence([self, other]).map(tuple)

    # --- Collections ---

    @classmethod
    def traverse(cls, items: Iterable[A], f: Callable[[A], "WikiResult[T]"]) -> "WikiResult[List[T]]":
        """
        Apply `f` to every item and run the resulting computations concurrently.

        The values are returned in the order of `items`, whatever order the
        underlying calls complete in. The first system failure to complete
        wins: the remaining computations are cancelled and that failure is
        returned. Without system failures, the domain errors of every failing
        item are accumulated, in item order, into a single DomainFailure.
        """
        items = list(items)

        async def run() -> Outcome[List[T]]:
            if not items:
                return Success([])
            tasks: List[asyncio.Future] = []
            try:
                for item in items:
                    tasks.append(asyncio.ensure_future(f(item).run()))
                for next_done in asyncio.as_completed(tasks):
                    outcome = await next_done
                    if isinstance(outcome, SystemFailure):
                        return outcome
            finally:
                pending = [task for task in tasks if not task.done()]
                for task in pending:
                    task.cancel()
                if pending:
                    await asyncio.gather(*pending, return_exceptions=True)

            outcomes = [task.result() for task in tasks]
            errors = tuple(
                error
                for outcome in outcomes
                if isinstance(outcome, DomainFailure)
                for error in outcome.errors
            )
            if errors:
                return DomainFailure(errors)
            return Success([outcome.value for outcome in outcomes])

        return cls(run)

    @classmethod
    def sequence(cls, results: Iterable["WikiResult[T]"]) -> "WikiResult[List[T]]":
        """Run the given results concurrently, keeping their order."""
        return cls.traverse(results, lambda result: result)
