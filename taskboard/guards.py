import logging

from .errors import AuthorizationDenied
from .models import Task
from .repositories import TaskRepository

logger = logging.getLogger(__name__)


class OwnershipGuard:
    """Binds task mutations to the user who owns the task."""

    def __init__(self, tasks: TaskRepository):
        self.tasks = tasks

    def authorize(self, owner_id: int, task_id: int) -> Task:
        """Return the task if ``owner_id`` owns it.

        A missing task and someone else's task raise the same
        ``AuthorizationDenied`` so callers cannot probe for other users' ids.
        """
        task = self.tasks.get(task_id)
        if task is None or task.owner_id is None or task.owner_id != owner_id:
            logger.info("Denied access to task %s for user %s", task_id, owner_id)
            raise AuthorizationDenied()
        return task
