from sqlmodel import SQLModel, Field, Relationship
from datetime import date as Date, datetime, timezone
from typing import Optional

DEFAULT_FOLDER = "default"


class Task(SQLModel, table=True):
    """To-do item.

    Tasks created through the global endpoints have no owner.
    """
    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    text: str
    date: Date = Field(index=True)
    priority: str
    folder: str = Field(default=DEFAULT_FOLDER)
    completed: bool = Field(default=False)
    owner_id: Optional[int] = Field(default=None, foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Relationship back to user
    owner: Optional["User"] = Relationship(back_populates="tasks")
