"""
System endpoints - task introspection
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Query

from lifecycle.task_registry import TaskRegistry

router = APIRouter(prefix="/system", tags=["System"])


@router.get("/tasks/summary")
async def get_task_summary() -> Dict[str, Any]:
    """High-level counts of tracked tasks"""
    registry = TaskRegistry.instance()
    return {
        "summary": registry.summary(),
        "total": len(registry.list_all()),
        "active": len(registry.active()),
        "failed": len(registry.failed()),
        "cancelled": len(registry.cancelled()),
    }


@router.get("/tasks")
async def get_all_tasks(
    category: Optional[str] = Query(None, description="Only tasks of this category, e.g. RENDER"),
) -> Dict[str, Any]:
    """
    Tracked tasks with category, owner, status and age.

    Useful for finding sampler loops that outlived their session.
    """
    now = datetime.now(timezone.utc).timestamp()
    tasks = [
        {
            "id": r.info.id,
            "category": r.info.category.name,
            "description": r.info.description,
            "owner": r.info.owner,
            "created_at": r.info.created_at,
            "status": r.status,
            "running_for_seconds": round(now - r.info.created_timestamp, 2) if not r.task.done() else None,
            "error": str(r.finished_with_error) if r.finished_with_error else None,
        }
        for r in TaskRegistry.instance().list_all()
        if category is None or r.info.category.name == category.upper()
    ]
    return {"count": len(tasks), "tasks": tasks}
