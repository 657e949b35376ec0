from sqlmodel import SQLModel, Field, Relationship
from datetime import datetime, timezone
from typing import Optional, List


class User(SQLModel, table=True):
    """Registered account.

    ``email`` is unique and compared exactly as stored (no case folding).
    ``password_hash`` only ever holds a bcrypt digest.
    """
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)
    password_hash: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Relationship to tasks
    tasks: List["Task"] = Relationship(back_populates="owner")
