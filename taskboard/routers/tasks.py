"""Global task list.

These routes predate per-user tasks and are not guarded: anyone can read or
change any task through them.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from ..dependencies import get_task_repository, get_today
from ..errors import NotFound, ValidationError
from ..repositories import TaskRepository
from ..schemas.task import Task as TaskSchema, TaskComplete, TaskFields, missing_fields
from ..schemas.user import MessageResponse
from ..week import week_bounds

router = APIRouter(prefix="/tasks")


@router.post("", response_model=TaskSchema, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: TaskFields,
    tasks: TaskRepository = Depends(get_task_repository),
):
    """Add a task without an owner. ``folder`` defaults to ``"default"``."""
    if missing_fields(payload, "text", "date", "priority"):
        raise ValidationError("Missing required fields (text, date, priority).")
    return tasks.create(payload.model_dump())


@router.get("", response_model=List[TaskSchema])
def list_tasks(tasks: TaskRepository = Depends(get_task_repository)):
    return tasks.list_all()


@router.get("/week", response_model=List[TaskSchema])
def list_week_tasks(
    start: Optional[date] = None,
    today: date = Depends(get_today),
    tasks: TaskRepository = Depends(get_task_repository),
):
    """Tasks of one week, from ``start`` (YYYY-MM-DD) or the current Sunday."""
    first, last = week_bounds(start, today)
    return tasks.list_by_date_range(first, last)


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: int,
    tasks: TaskRepository = Depends(get_task_repository),
):
    if not tasks.delete(task_id):
        raise NotFound()
    return {"message": "Task deleted successfully."}


@router.patch("/{task_id}", response_model=MessageResponse)
def set_task_completed(
    task_id: int,
    payload: TaskComplete,
    tasks: TaskRepository = Depends(get_task_repository),
):
    """Mark a task as done or not done."""
    if payload.completed is None:
        raise ValidationError("Field completed is required.")
    if not tasks.set_completed(task_id, payload.completed):
        raise NotFound()
    return {"message": "Task updated successfully."}
