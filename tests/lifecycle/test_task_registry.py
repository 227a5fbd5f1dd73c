"""
Tests for TaskRegistry and create_tracked_task.
"""

import asyncio

import pytest

from lifecycle.task_registry import TaskCategory, create_tracked_task


async def _fail():
    raise RuntimeError("boom")


class TestTaskRegistry:

    @pytest.mark.asyncio
    async def test_tracks_completion(self, task_registry):
        task = create_tracked_task(asyncio.sleep(0, result=5), category=TaskCategory.GENERAL, description="sleep")
        assert len(task_registry.active()) == 1
        assert await task == 5
        await asyncio.sleep(0)

        record = task_registry.list_all()[0]
        assert record.status == "completed"
        assert record.info.description == "sleep"
        assert task_registry.active() == []

    @pytest.mark.asyncio
    async def test_tracks_failure_and_cancel(self, task_registry):
        failing = create_tracked_task(_fail(), category=TaskCategory.RENDER, description="failing")
        sleeping = create_tracked_task(asyncio.sleep(10), category=TaskCategory.OVERLAY, description="sleeping")
        sleeping.cancel()
        await asyncio.gather(failing, sleeping, return_exceptions=True)
        await asyncio.sleep(0)

        assert [r.info.description for r in task_registry.failed()] == ["failing"]
        assert [r.info.description for r in task_registry.cancelled()] == ["sleeping"]
        assert "failed=1" in task_registry.summary()
        assert task_registry.prune_finished() == 2
        assert task_registry.list_all() == []

    @pytest.mark.asyncio
    async def test_shutdown_candidates_respect_exclude(self, task_registry):
        keep = create_tracked_task(asyncio.sleep(10), category=TaskCategory.API, description="api")
        other = create_tracked_task(asyncio.sleep(10), category=TaskCategory.RENDER, description="sampler")

        assert task_registry.get_tasks_for_shutdown(exclude=[keep]) == [other]

        for task in (keep, other):
            task.cancel()
        await asyncio.gather(keep, other, return_exceptions=True)

    @pytest.mark.asyncio
    async def test_owner_and_category_filter(self, task_registry):
        sampler = create_tracked_task(
            asyncio.sleep(10), category=TaskCategory.RENDER, description="Frame sampler (cta)", owner="cta"
        )
        api = create_tracked_task(asyncio.sleep(10), category=TaskCategory.API, description="api")

        render = task_registry.list_all(TaskCategory.RENDER)
        assert [r.info.owner for r in render] == ["cta"]
        assert render[0].status == "running"
        assert task_registry.list_all(TaskCategory.API)[0].info.owner is None

        sampler.cancel()
        await asyncio.gather(sampler, return_exceptions=True)
        await asyncio.sleep(0)
        assert render[0].status == "cancelled"

        api.cancel()
        await asyncio.gather(api, return_exceptions=True)
