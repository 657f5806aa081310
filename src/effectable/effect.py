"""
Deferred computations returned by effectable method wrappers.

An ``Effect`` describes asynchronous work without performing it. Running the
effect (``await effect.run()``) executes the description and produces an
``Exit``: either ``Success`` carrying a value or ``Failure`` carrying a typed
error value. Effects are re-runnable; each run executes the description again
unless the effect was built with ``Effect.memoized``.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import threading
import typing as t
from dataclasses import dataclass

from effectable.errors import EffectFailedError

A = t.TypeVar("A")
B = t.TypeVar("B")
E = t.TypeVar("E")
F = t.TypeVar("F")


@dataclass(frozen=True)
class Success(t.Generic[A]):
    """Successful outcome of an effect run."""

    value: A

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure(t.Generic[E]):
    """Failed outcome of an effect run."""

    error: E

    @property
    def is_success(self) -> bool:
        return False


Exit = t.Union[Success[A], Failure[E]]


class _Memo:
    """Shared state of a memoized effect."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.future: concurrent.futures.Future[t.Any] | None = None
        self.task: asyncio.Task[t.Any] | None = None

    def settle(self, task: asyncio.Task[t.Any]) -> None:
        """Copy the outcome of the first run into the shared future."""
        if task.cancelled():
            self.future.cancel()
        elif task.exception() is not None:
            self.future.set_exception(task.exception())
        else:
            self.future.set_result(task.result())


class Effect(t.Generic[A, E]):
    """
    Lazy description of work settling to ``Success[A]`` or ``Failure[E]``.

    Parameters
    ----------
    run : typing.Callable[[], typing.Awaitable[Exit[A, E]]]
        Zero-argument coroutine function executed on every run.
    """

    def __init__(self, run: t.Callable[[], t.Awaitable[Exit[A, E]]]) -> None:
        self._run = run

    def __repr__(self) -> str:
        return f"<Effect at {id(self):#x}>"

    @classmethod
    def succeed(cls, value: A) -> Effect[A, t.Any]:
        """
        Build an effect that settles to ``Success(value)``.

        Parameters
        ----------
        value : A
            Success value.

        Returns
        -------
        Effect[A, typing.Any]
            Already-resolved effect.
        """

        async def _run() -> Exit[A, t.Any]:
            return Success(value)

        return cls(_run)

    @classmethod
    def fail(cls, error: E) -> Effect[t.Any, E]:
        """
        Build an effect that settles to ``Failure(error)``.

        Parameters
        ----------
        error : E
            Failure value.

        Returns
        -------
        Effect[typing.Any, E]
            Already-failed effect.
        """

        async def _run() -> Exit[t.Any, E]:
            return Failure(error)

        return cls(_run)

    @classmethod
    def suspend(cls, body: t.Callable[[], t.Awaitable[Effect[A, E]]]) -> Effect[A, E]:
        """
        Build an effect whose content is computed only when it runs.

        Parameters
        ----------
        body : typing.Callable[[], typing.Awaitable[Effect[A, E]]]
            Coroutine function awaited on every run; the effect it returns is
            run in turn and its outcome becomes the outcome of this effect.

        Returns
        -------
        Effect[A, E]
            Suspended effect.
        """

        async def _run() -> Exit[A, E]:
            effect = await body()
            return await effect.run()

        return cls(_run)

    async def run(self) -> Exit[A, E]:
        """
        Execute the effect.

        Returns
        -------
        Exit[A, E]
            ``Success`` or ``Failure`` outcome of this run.
        """
        return await self._run()

    def run_sync(self) -> Exit[A, E]:
        """
        Execute the effect on a fresh event loop.

        Returns
        -------
        Exit[A, E]
            ``Success`` or ``Failure`` outcome of this run.

        Raises
        ------
        RuntimeError
            If called from a running event loop.
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self.run())
        raise RuntimeError("run_sync() cannot be called from a running event loop; await run()")

    async def run_or_raise(self) -> A:
        """
        Execute the effect and unwrap its success value.

        Returns
        -------
        A
            Success value.

        Raises
        ------
        BaseException
            The failure value itself, when it is an exception.
        EffectFailedError
            When the failure value is not an exception.
        """
        outcome = await self.run()
        if isinstance(outcome, Failure):
            if isinstance(outcome.error, BaseException):
                raise outcome.error
            raise EffectFailedError(outcome.error)
        return outcome.value

    def map(self, fn: t.Callable[[A], B]) -> Effect[B, E]:
        """Transform the success value of every run."""

        async def _run() -> Exit[B, E]:
            outcome = await self.run()
            if isinstance(outcome, Success):
                return Success(fn(outcome.value))
            return outcome

        return Effect(_run)

    def map_error(self, fn: t.Callable[[E], F]) -> Effect[A, F]:
        """Transform the failure value of every run."""

        async def _run() -> Exit[A, F]:
            outcome = await self.run()
            if isinstance(outcome, Failure):
                return Failure(fn(outcome.error))
            return outcome

        return Effect(_run)

    def memoized(self) -> Effect[A, E]:
        """
        Build an effect sharing the outcome of its first run.

        The first run starts the execution; concurrent runs, from any thread or
        event loop, await that same execution. Once settled, the outcome is
        replayed on every later run.

        Returns
        -------
        Effect[A, E]
            Memoized effect.
        """
        memo = _Memo()

        async def _run() -> Exit[A, E]:
            with memo.lock:
                if memo.future is None:
                    memo.future = concurrent.futures.Future()
                    memo.task = asyncio.get_running_loop().create_task(self.run())
                    memo.task.add_done_callback(memo.settle)
                future = memo.future
            # shield: a cancelled caller must not cancel the shared execution
            return await asyncio.shield(asyncio.wrap_future(future))

        return Effect(_run)
