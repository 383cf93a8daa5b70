"""Tests for cancellable scheduled tasks."""

import asyncio

import pytest

from shotmaker.services.scheduler import ScheduledTask, TaskGroup, schedule_every


class TestScheduledTask:
    @pytest.mark.asyncio
    async def test_stops_when_callback_returns_false(self):
        ticks = []

        def tick():
            ticks.append(len(ticks))
            return len(ticks) < 3

        handle = schedule_every("counter", 0.001, tick)
        await handle.wait()

        assert ticks == [0, 1, 2]
        assert handle.done
        assert not handle.cancelled

    @pytest.mark.asyncio
    async def test_cancel_stops_ticks(self):
        ticks = []
        handle = schedule_every("forever", 0.001, lambda: ticks.append(1))

        await asyncio.sleep(0.02)
        handle.cancel()
        await handle.wait()
        seen = len(ticks)
        await asyncio.sleep(0.02)

        assert handle.cancelled
        assert len(ticks) == seen

    @pytest.mark.asyncio
    async def test_cancel_is_idempotent(self):
        handle = schedule_every("noop", 0.001, lambda: False)
        await handle.wait()
        handle.cancel()
        handle.cancel()
        assert handle.cancelled

    @pytest.mark.asyncio
    async def test_cancel_before_first_tick(self):
        ticks = []
        handle = schedule_every("slow", 0.05, lambda: ticks.append(1))
        handle.cancel()
        await handle.wait()
        assert ticks == []

    def test_unstarted_handle(self):
        handle = ScheduledTask("idle", 1.0, lambda: None)
        assert not handle.done
        assert not handle.cancelled


class TestTaskGroup:
    @pytest.mark.asyncio
    async def test_cancel_all(self):
        ticks = {"a": 0, "b": 0}

        def bump(name):
            def tick():
                ticks[name] += 1
            return tick

        group = TaskGroup()
        group.every("a", 0.001, bump("a"))
        group.every("b", 0.001, bump("b"))
        await asyncio.sleep(0.01)
        assert group.active

        group.cancel_all()
        snapshot = dict(ticks)
        await asyncio.sleep(0.01)

        assert ticks == snapshot
        assert not group.active
        assert len(group) == 0

    @pytest.mark.asyncio
    async def test_same_name_replaces(self):
        group = TaskGroup()
        first = group.every("job", 0.001, lambda: None)
        second = group.every("job", 0.001, lambda: None)

        assert first.cancelled
        assert group.get("job") is second
        group.cancel_all()

    @pytest.mark.asyncio
    async def test_finished_tasks_are_not_active(self):
        group = TaskGroup()
        handle = group.every("once", 0.001, lambda: False)
        await handle.wait()
        assert not group.active
