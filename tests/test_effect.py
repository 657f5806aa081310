"""
Tests for the Effect type in effectable.effect.
"""

import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from effectable.effect import Effect, Failure, Success
from effectable.errors import EffectFailedError


def test_effect_succeed() -> None:
    """Test that a succeeded effect settles to its value."""
    assert Effect.succeed(5).run_sync() == Success(5)


def test_effect_fail() -> None:
    """Test that a failed effect settles to its error value."""
    outcome = Effect.fail("boom").run_sync()

    assert outcome == Failure("boom")
    assert outcome.is_success is False


def test_effect_suspend_is_lazy() -> None:
    """Test that a suspended body only runs when the effect runs."""
    calls = []

    async def body():
        calls.append(1)
        return Effect.succeed(len(calls))

    effect = Effect.suspend(body)
    assert calls == []

    assert effect.run_sync() == Success(1)
    assert effect.run_sync() == Success(2)


@pytest.mark.asyncio
async def test_effect_run_in_running_loop() -> None:
    """Test that effects run from an async context."""

    async def body():
        await asyncio.sleep(0.01)
        return Effect.fail(ValueError("late"))

    outcome = await Effect.suspend(body).run()

    assert isinstance(outcome, Failure)
    assert str(outcome.error) == "late"


@pytest.mark.asyncio
async def test_effect_run_sync_rejects_running_loop() -> None:
    """Test that run_sync cannot be used inside a running event loop."""
    with pytest.raises(RuntimeError):
        Effect.succeed(1).run_sync()


@pytest.mark.asyncio
async def test_effect_run_or_raise() -> None:
    """Test unwrapping success values and raising failures."""
    assert await Effect.succeed("ok").run_or_raise() == "ok"

    with pytest.raises(ValueError, match="bad"):
        await Effect.fail(ValueError("bad")).run_or_raise()

    with pytest.raises(EffectFailedError) as exc_info:
        await Effect.fail({"kind": "FETCH_ERROR"}).run_or_raise()
    assert exc_info.value.error == {"kind": "FETCH_ERROR"}


def test_effect_map_and_map_error() -> None:
    """Test that map and map_error only touch their own channel."""
    assert Effect.succeed(2).map(lambda value: value * 10).run_sync() == Success(20)
    assert Effect.fail("e").map(lambda value: value * 10).run_sync() == Failure("e")
    assert Effect.fail("e").map_error(str.upper).run_sync() == Failure("E")
    assert Effect.succeed(2).map_error(str.upper).run_sync() == Success(2)


def test_effect_memoized_replays_outcome() -> None:
    """Test that a memoized effect runs its description once across loops."""
    calls = []

    async def body():
        calls.append(1)
        return Effect.succeed(len(calls))

    effect = Effect.suspend(body).memoized()

    assert effect.run_sync() == Success(1)
    assert effect.run_sync() == Success(1)
    assert calls == [1]


@pytest.mark.asyncio
async def test_effect_memoized_shares_in_flight_run() -> None:
    """Test that concurrent runs of a memoized effect share one execution."""
    calls = []
    release = asyncio.Event()

    async def body():
        calls.append(1)
        await release.wait()
        return Effect.succeed("done")

    effect = Effect.suspend(body).memoized()
    first = asyncio.create_task(effect.run())
    second = asyncio.create_task(effect.run())
    await asyncio.sleep(0.01)
    release.set()

    assert await asyncio.gather(first, second) == [Success("done"), Success("done")]
    assert calls == [1]


@pytest.mark.asyncio
async def test_effect_memoized_survives_cancelled_caller() -> None:
    """Test that cancelling one caller does not cancel the shared execution."""
    release = asyncio.Event()

    async def body():
        await release.wait()
        return Effect.succeed("done")

    effect = Effect.suspend(body).memoized()
    cancelled = asyncio.create_task(effect.run())
    await asyncio.sleep(0.01)
    cancelled.cancel()
    with pytest.raises(asyncio.CancelledError):
        await cancelled

    release.set()
    assert await effect.run() == Success("done")


def test_effect_memoized_shares_run_across_threads() -> None:
    """Test that runs from threads with their own event loops share one execution."""
    calls = []
    barrier = threading.Barrier(parties=4)

    async def body():
        calls.append(1)
        await asyncio.sleep(0.05)
        return Effect.succeed("done")

    effect = Effect.suspend(body).memoized()

    def run_in_thread(_):
        barrier.wait()
        return effect.run_sync()

    with ThreadPoolExecutor(max_workers=4) as executor:
        outcomes = list(executor.map(run_in_thread, range(4)))

    assert outcomes == [Success("done")] * 4
    assert calls == [1]
