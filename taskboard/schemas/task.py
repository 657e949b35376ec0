from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from datetime import date as Date
from typing import List, Optional


def missing_fields(payload: BaseModel, *names: str) -> List[str]:
    """Names of required fields that are absent or empty."""
    missing = []
    for name in names:
        value = getattr(payload, name)
        if value is None or value == "":
            missing.append(name)
    return missing


class TaskFields(BaseModel):
    """Task attributes as sent by clients; presence is checked per route."""
    model_config = ConfigDict(populate_by_name=True)

    text: Optional[str] = None
    date: Optional[Date] = None
    priority: Optional[str] = None
    folder: Optional[str] = None


class TaskUpdate(TaskFields):
    """Full replacement of an owned task's fields."""
    completed: Optional[bool] = Field(
        default=None, validation_alias=AliasChoices("completed", "concluded")
    )


class TaskComplete(BaseModel):
    """Schema for toggling completion of a task."""
    completed: Optional[bool] = Field(
        default=None, validation_alias=AliasChoices("completed", "concluded")
    )


class Task(BaseModel):
    """Task as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    text: str
    date: Date
    priority: str
    folder: str
    completed: bool
    owner_id: Optional[int] = None


class TaskCreated(BaseModel):
    message: str
    taskId: int


class TaskList(BaseModel):
    tasks: List[Task]
