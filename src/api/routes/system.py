"""
System endpoints - Task introspection and health
"""

from fastapi import APIRouter
from typing import Any, Dict, Optional
from datetime import datetime, timezone
from lifecycle.task_registry import TaskRegistry

router = APIRouter(prefix="/system", tags=["System"])


@router.get("/tasks")
async def get_tasks(status: Optional[str] = None) -> Dict[str, Any]:
    """
    Tracked asyncio tasks (API server, cadences).

    Query:
        status: "active" or "failed" to filter
    """
    registry = TaskRegistry.instance()
    if status == "active":
        records = registry.active()
    elif status == "failed":
        records = registry.failed()
    else:
        records = registry.list_all()

    return {
        "count": len(records),
        "stats": registry.get_stats(),
        "tasks": [r.to_dict() for r in records]
    }


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """
    Returns:
        - status: "healthy" or "degraded" (a background task failed)
        - tasks: Task statistics
    """
    registry = TaskRegistry.instance()
    failed = registry.failed()

    return {
        "status": "degraded" if failed else "healthy",
        "reason": f"{len(failed)} background task(s) have failed" if failed else None,
        "tasks": registry.get_stats(),
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
