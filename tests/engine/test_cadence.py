import asyncio

import pytest

from engine.cadence import Cadence
from lifecycle.task_registry import TaskCategory, TaskRegistry


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        Cadence(0, lambda: None, description="bad")


@pytest.mark.asyncio
async def test_sync_callback_fires_periodically():
    calls = []
    cadence = Cadence(0.01, lambda: calls.append(1), description="sync")

    cadence.start()
    await asyncio.sleep(0.08)
    await cadence.stop_async()

    assert len(calls) >= 3
    assert cadence.running is False


@pytest.mark.asyncio
async def test_async_callback_is_awaited():
    calls = []

    async def callback():
        calls.append(1)

    cadence = Cadence(0.01, callback, description="async")
    cadence.start()
    await asyncio.sleep(0.05)
    await cadence.stop_async()

    assert calls


@pytest.mark.asyncio
async def test_stop_prevents_further_callbacks():
    calls = []
    cadence = Cadence(0.01, lambda: calls.append(1), description="stoppable")

    cadence.start()
    await asyncio.sleep(0.035)
    await cadence.stop_async()
    count = len(calls)

    await asyncio.sleep(0.05)
    assert len(calls) == count


@pytest.mark.asyncio
async def test_restart_uses_fresh_task():
    cadence = Cadence(10, lambda: None, description="fresh")

    cadence.start()
    first_task = cadence._task
    cadence.start()  # already running: no-op
    assert cadence._task is first_task
    assert cadence.generation == 1

    await cadence.stop_async()
    cadence.start()
    assert cadence._task is not first_task
    assert cadence.generation == 2
    assert first_task.cancelled()

    await cadence.stop_async()


@pytest.mark.asyncio
async def test_reconcile_matches_predicate():
    cadence = Cadence(10, lambda: None, description="reconciled")

    cadence.reconcile(True)
    assert cadence.running is True
    cadence.reconcile(True)
    assert cadence.generation == 1

    cadence.reconcile(False)
    await asyncio.sleep(0)
    assert cadence.running is False


@pytest.mark.asyncio
async def test_failing_callback_keeps_cadence_alive():
    calls = []

    def callback():
        calls.append(1)
        raise RuntimeError("boom")

    cadence = Cadence(0.01, callback, description="flaky")
    cadence.start()
    await asyncio.sleep(0.05)

    assert len(calls) >= 2
    assert cadence.running is True
    await cadence.stop_async()


@pytest.mark.asyncio
async def test_callback_can_stop_its_own_cadence():
    calls = []
    cadence = None

    def callback():
        calls.append(1)
        cadence.stop()

    cadence = Cadence(0.01, callback, description="self-stopping")
    cadence.start()
    await asyncio.sleep(0.05)

    assert calls == [1]
    assert cadence.running is False


@pytest.mark.asyncio
async def test_tasks_are_tracked_in_registry():
    cadence = Cadence(10, lambda: None, description="tracked")
    cadence.start()

    active = TaskRegistry.instance().active()
    assert [r.info.description for r in active] == ["tracked"]
    assert active[0].info.category == TaskCategory.CADENCE

    await cadence.stop_async()
    assert TaskRegistry.instance().active() == []


def test_engine_modules_are_documented():
    import engine.cadence
    import engine.display_mapper
    import engine.timer_controller

    for module in (engine.cadence, engine.display_mapper, engine.timer_controller):
        assert module.__doc__ and module.__doc__.strip()
