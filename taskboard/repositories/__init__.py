from .tasks import TaskRepository
from .users import CredentialStore

__all__ = ["CredentialStore", "TaskRepository"]
