"""ConnectivityMonitor: degrade on failure, throttled probes, single probe in flight."""

import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock

from taskboard.infrastructure.cache.connectivity import ConnectivityMonitor


def _monitor(clock) -> ConnectivityMonitor:
    return ConnectivityMonitor(timedelta(minutes=2), clock=clock)


async def test_available_monitor_does_not_probe(clock) -> None:
    monitor = _monitor(clock)
    probe = AsyncMock()
    assert await monitor.try_recover(probe) is True
    probe.assert_not_awaited()
    assert monitor.seconds_since_last_probe is None


def test_mark_degraded_records_failure_instant(clock) -> None:
    monitor = _monitor(clock)
    monitor.mark_degraded("boom")
    assert monitor.is_degraded
    clock.advance(7)
    assert monitor.seconds_since_last_probe == 7


async def test_no_probe_within_retry_interval(clock) -> None:
    monitor = _monitor(clock)
    monitor.mark_degraded("boom")
    probe = AsyncMock()
    clock.advance(119)
    assert await monitor.try_recover(probe) is False
    probe.assert_not_awaited()
    assert monitor.is_degraded


async def test_successful_probe_after_interval_restores(clock) -> None:
    monitor = _monitor(clock)
    monitor.mark_degraded("boom")
    probe = AsyncMock()
    clock.advance(120)
    assert await monitor.try_recover(probe) is True
    probe.assert_awaited_once()
    assert not monitor.is_degraded


async def test_failed_probe_restarts_interval(clock) -> None:
    monitor = _monitor(clock)
    monitor.mark_degraded("boom")
    probe = AsyncMock(side_effect=ConnectionError("still down"))
    clock.advance(120)
    assert await monitor.try_recover(probe) is False
    assert monitor.is_degraded
    clock.advance(60)
    assert await monitor.try_recover(probe) is False
    assert probe.await_count == 1
    clock.advance(60)
    assert await monitor.try_recover(probe) is False
    assert probe.await_count == 2


async def test_caller_does_not_wait_for_probe_in_flight(clock) -> None:
    """While one probe runs, other callers return False immediately."""
    monitor = _monitor(clock)
    monitor.mark_degraded("boom")
    clock.advance(120)
    release = asyncio.Event()
    calls = 0

    async def probe() -> None:
        nonlocal calls
        calls += 1
        await release.wait()

    first = asyncio.create_task(monitor.try_recover(probe))
    await asyncio.sleep(0)
    assert await monitor.try_recover(probe) is False
    release.set()
    assert await first is True
    assert calls == 1


async def test_repeated_failures_keep_degraded(clock) -> None:
    monitor = _monitor(clock)
    monitor.mark_degraded("first")
    clock.advance(30)
    monitor.mark_degraded("second")
    assert monitor.is_degraded
    assert monitor.seconds_since_last_probe == 0
