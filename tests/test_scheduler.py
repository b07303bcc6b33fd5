"""Tests for deferred task scheduling."""

import asyncio

from utils.scheduler import TaskScheduler


async def test_callback_runs_once_after_delay():
    scheduler = TaskScheduler()
    calls = []

    async def callback():
        calls.append('ran')

    handle = scheduler.schedule(0, callback, name='once')
    assert scheduler.pending == 1

    await handle.wait()
    await asyncio.sleep(0)

    assert calls == ['ran']
    assert handle.done
    assert handle.error is None
    assert scheduler.pending == 0


async def test_failure_is_kept_not_raised():
    scheduler = TaskScheduler()

    async def callback():
        raise RuntimeError('channel gone')

    handle = scheduler.schedule(0, callback)
    await handle.wait()

    assert isinstance(handle.error, RuntimeError)
    assert not handle.cancelled


async def test_cancel_before_running():
    scheduler = TaskScheduler()
    calls = []

    async def callback():
        calls.append('ran')

    handle = scheduler.schedule(30, callback)
    assert handle.cancel() is True
    await handle.wait()

    assert handle.cancelled
    assert calls == []
    assert handle.cancel() is False


async def test_cancel_all():
    scheduler = TaskScheduler()

    async def callback():
        pass

    handles = [scheduler.schedule(30, callback, name=f'task-{index}') for index in range(3)]
    assert scheduler.cancel_all() == 3

    for handle in handles:
        await handle.wait()
    await asyncio.sleep(0)
    assert scheduler.pending == 0
