from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable  # noqa: TC003

import pytest

from cvtailor.domain.errors import RenderUnavailable, RulesEngineUnavailable
from cvtailor.domain.preview import PreviewChannel


def _returning(value: str, calls: list[str]) -> Callable[[], Awaitable[str]]:
    async def call() -> str:
        calls.append(value)
        return value

    return call


def _gated(value: str, gate: asyncio.Event) -> Callable[[], Awaitable[str]]:
    async def call() -> str:
        await gate.wait()
        return value

    return call


def test_rapid_changes_collapse_into_one_call() -> None:
    async def scenario() -> tuple[list[str], list[str], PreviewChannel[str]]:
        channel = PreviewChannel[str]("structured", debounce_seconds=0.02)
        calls: list[str] = []
        applied: list[str] = []
        for value in ("a", "ab", "abc"):
            channel.schedule(_returning(value, calls), applied.append)
        assert channel.pending
        await channel.wait_idle()
        return calls, applied, channel

    calls, applied, channel = asyncio.run(scenario())

    assert calls == ["abc"]
    assert applied == ["abc"]
    assert channel.token == 3
    assert not channel.pending
    assert not channel.loading


def test_stale_result_is_discarded_when_it_resolves_last() -> None:
    async def scenario() -> tuple[list[str], list[bool]]:
        channel = PreviewChannel[str]("structured", debounce_seconds=0)
        first_gate, second_gate = asyncio.Event(), asyncio.Event()
        applied: list[str] = []
        loading: list[bool] = []

        first_token = channel.schedule(_gated("r1", first_gate), applied.append)
        await asyncio.sleep(0.01)
        second_token = channel.schedule(_gated("r2", second_gate), applied.append)
        await asyncio.sleep(0.01)
        assert (first_token, second_token) == (1, 2)
        loading.append(channel.loading)

        second_gate.set()
        await asyncio.sleep(0.01)
        loading.append(channel.loading)
        first_gate.set()
        await channel.wait_idle()
        loading.append(channel.loading)
        return applied, loading

    applied, loading = asyncio.run(scenario())

    assert applied == ["r2"]
    assert loading == [True, False, False]


def test_failure_sets_channel_error_without_retry() -> None:
    async def scenario() -> tuple[PreviewChannel[str], int, list[str]]:
        channel = PreviewChannel[str]("structured", debounce_seconds=0)
        attempts = 0
        applied: list[str] = []

        async def failing() -> str:
            nonlocal attempts
            attempts += 1
            raise RulesEngineUnavailable("boom", status=502)

        channel.schedule(failing, applied.append)
        await channel.wait_idle()
        return channel, attempts, applied

    channel, attempts, applied = asyncio.run(scenario())

    assert attempts == 1
    assert applied == []
    assert isinstance(channel.error, RulesEngineUnavailable)
    assert channel.error.status == 502
    assert not channel.loading


def test_next_successful_call_clears_error() -> None:
    async def scenario() -> PreviewChannel[str]:
        channel = PreviewChannel[str]("document", debounce_seconds=0)

        async def failing() -> str:
            raise RenderUnavailable("down")

        channel.schedule(failing, lambda _: None)
        await channel.wait_idle()
        assert channel.error is not None
        channel.schedule(_returning("ok", []), lambda _: None)
        await channel.wait_idle()
        return channel

    assert asyncio.run(scenario()).error is None


def test_stale_failure_is_ignored() -> None:
    async def scenario() -> tuple[PreviewChannel[str], list[str]]:
        channel = PreviewChannel[str]("structured", debounce_seconds=0)
        gate = asyncio.Event()
        applied: list[str] = []

        async def failing_later() -> str:
            await gate.wait()
            raise RulesEngineUnavailable("late failure")

        channel.schedule(failing_later, applied.append)
        await asyncio.sleep(0.01)
        channel.schedule(_returning("fresh", []), applied.append)
        await asyncio.sleep(0.01)
        gate.set()
        await channel.wait_idle()
        return channel, applied

    channel, applied = asyncio.run(scenario())

    assert applied == ["fresh"]
    assert channel.error is None


def test_run_now_cancels_pending_timer() -> None:
    async def scenario() -> tuple[bool, list[str], PreviewChannel[str]]:
        channel = PreviewChannel[str]("structured", debounce_seconds=10)
        calls: list[str] = []
        applied: list[str] = []
        channel.schedule(_returning("debounced", calls), applied.append)
        ran = await channel.run_now(_returning("now", calls), applied.append)
        await channel.wait_idle()
        return ran, calls, channel

    ran, calls, channel = asyncio.run(scenario())

    assert ran is True
    assert calls == ["now"]
    assert not channel.pending


def test_invalidate_fences_in_flight_call() -> None:
    async def scenario() -> list[str]:
        channel = PreviewChannel[str]("document", debounce_seconds=0)
        gate = asyncio.Event()
        applied: list[str] = []
        channel.schedule(_gated("old", gate), applied.append)
        await asyncio.sleep(0.01)
        channel.invalidate()
        gate.set()
        await channel.wait_idle()
        return applied

    assert asyncio.run(scenario()) == []


def test_unexpected_errors_propagate() -> None:
    async def scenario() -> None:
        channel = PreviewChannel[str]("structured", debounce_seconds=0)

        async def broken() -> str:
            raise KeyError("missing")

        channel.schedule(broken, lambda _: None)
        await channel.wait_idle()

    with pytest.raises(KeyError):
        asyncio.run(scenario())
