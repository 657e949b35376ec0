import logging
from datetime import date, datetime, timezone
from typing import List, Mapping, Optional

from sqlalchemy import delete as sql_delete, update as sql_update
from sqlmodel import Session, select

from ..models import Task
from ..models.task import DEFAULT_FOLDER

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("text", "date", "priority", "folder", "completed")

# Largest value an INTEGER primary key can hold
MAX_ID = 2 ** 63 - 1


def valid_id(value: int) -> bool:
    """Ids outside the column range cannot exist; treat them as absent."""
    return 0 < value <= MAX_ID


class TaskRepository:
    """CRUD over tasks, either globally or scoped to one owner.

    ``update`` and ``delete`` are single statements; when ``owner_id`` is
    given the statement only matches that owner's task, so a concurrent
    change between a lookup and the write shows up as zero rows.
    """

    def __init__(self, session: Session):
        self.session = session

    def create(self, fields: Mapping, owner_id: Optional[int] = None) -> Task:
        task = Task(
            text=fields["text"],
            date=fields["date"],
            priority=fields["priority"],
            folder=fields.get("folder") or DEFAULT_FOLDER,
            completed=False,
            owner_id=owner_id,
        )
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        logger.debug("Created task %s (owner=%s)", task.id, owner_id)
        return task

    def list_all(self) -> List[Task]:
        return list(self.session.exec(select(Task).order_by(Task.id)).all())

    def list_by_owner(self, owner_id: int) -> List[Task]:
        if not valid_id(owner_id):
            return []
        query = select(Task).where(Task.owner_id == owner_id).order_by(Task.id)
        return list(self.session.exec(query).all())

    def get(self, task_id: int) -> Optional[Task]:
        if not valid_id(task_id):
            return None
        return self.session.get(Task, task_id)

    def list_by_date_range(self, start: date, end: date) -> List[Task]:
        """Tasks dated between ``start`` and ``end``, both included."""
        query = (
            select(Task)
            .where(Task.date >= start, Task.date <= end)
            .order_by(Task.date, Task.id)
        )
        return list(self.session.exec(query).all())

    def update(self, task_id: int, fields: Mapping, owner_id: Optional[int] = None) -> bool:
        values = {name: fields[name] for name in EDITABLE_FIELDS if name in fields}
        if not values or not valid_id(task_id):
            return False
        values["updated_at"] = datetime.now(timezone.utc)

        statement = sql_update(Task).where(Task.id == task_id)
        if owner_id is not None:
            statement = statement.where(Task.owner_id == owner_id)
        return self._execute(statement.values(**values))

    def set_completed(self, task_id: int, completed: bool) -> bool:
        return self.update(task_id, {"completed": completed})

    def delete(self, task_id: int, owner_id: Optional[int] = None) -> bool:
        if not valid_id(task_id):
            return False
        statement = sql_delete(Task).where(Task.id == task_id)
        if owner_id is not None:
            statement = statement.where(Task.owner_id == owner_id)
        return self._execute(statement)

    def _execute(self, statement) -> bool:
        result = self.session.exec(statement)
        self.session.commit()
        return result.rowcount > 0
