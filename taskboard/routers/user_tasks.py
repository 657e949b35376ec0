"""Tasks that belong to a user.

Every route here needs a session token for the user in the path, and every
mutation goes through the ownership guard.
"""

import logging

from fastapi import APIRouter, Depends, status

from ..dependencies import get_current_claims, get_ownership_guard, get_task_repository
from ..errors import AuthorizationDenied, ValidationError
from ..guards import OwnershipGuard
from ..repositories import TaskRepository
from ..schemas.task import TaskCreated, TaskFields, TaskList, TaskUpdate, missing_fields
from ..schemas.user import MessageResponse
from ..security import SessionClaims

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/usuario")


def _ensure_user_scope(user_id: int, claims: SessionClaims) -> None:
    # Acting on another user's tasks looks the same as acting on missing ones
    if user_id != claims.id:
        logger.info("User %s tried to reach tasks of user %s", claims.id, user_id)
        raise AuthorizationDenied()


@router.get("/{user_id}/tasks", response_model=TaskList)
def list_user_tasks(
    user_id: int,
    claims: SessionClaims = Depends(get_current_claims),
    tasks: TaskRepository = Depends(get_task_repository),
):
    """List all tasks owned by the user."""
    _ensure_user_scope(user_id, claims)

    owned = tasks.list_by_owner(user_id)
    if not owned:
        raise AuthorizationDenied("No tasks found for this user.")
    return {"tasks": owned}


@router.post("/{user_id}/task", response_model=TaskCreated, status_code=status.HTTP_201_CREATED)
def create_user_task(
    user_id: int,
    payload: TaskFields,
    claims: SessionClaims = Depends(get_current_claims),
    tasks: TaskRepository = Depends(get_task_repository),
):
    """Create a task owned by the user. ``folder`` is required here."""
    _ensure_user_scope(user_id, claims)
    if missing_fields(payload, "text", "date", "priority", "folder"):
        raise ValidationError()

    task = tasks.create(payload.model_dump(), owner_id=user_id)
    return {"message": "Task created successfully.", "taskId": task.id}


@router.put("/{user_id}/task/{task_id}", response_model=MessageResponse)
def update_user_task(
    user_id: int,
    task_id: int,
    payload: TaskUpdate,
    claims: SessionClaims = Depends(get_current_claims),
    tasks: TaskRepository = Depends(get_task_repository),
    guard: OwnershipGuard = Depends(get_ownership_guard),
):
    """Replace every field of an owned task."""
    _ensure_user_scope(user_id, claims)
    if missing_fields(payload, "text", "date", "priority", "folder", "completed"):
        raise ValidationError()

    guard.authorize(user_id, task_id)
    # Keyed on the owner as well, so a task deleted meanwhile updates nothing
    if not tasks.update(task_id, payload.model_dump(), owner_id=user_id):
        raise AuthorizationDenied()
    return {"message": "Task updated successfully."}


@router.delete("/{user_id}/task/{task_id}", response_model=MessageResponse)
def delete_user_task(
    user_id: int,
    task_id: int,
    claims: SessionClaims = Depends(get_current_claims),
    tasks: TaskRepository = Depends(get_task_repository),
    guard: OwnershipGuard = Depends(get_ownership_guard),
):
    """Delete an owned task."""
    _ensure_user_scope(user_id, claims)

    guard.authorize(user_id, task_id)
    if not tasks.delete(task_id, owner_id=user_id):
        raise AuthorizationDenied()
    return {"message": "Task deleted successfully."}
