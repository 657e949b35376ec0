import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..errors import DuplicateEmail
from ..models import User
from .tasks import valid_id

logger = logging.getLogger(__name__)


class CredentialStore:
    """User records, looked up by exact e-mail."""

    def __init__(self, session: Session):
        self.session = session

    def find_by_email(self, email: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.email == email)).first()

    def get(self, user_id: int) -> Optional[User]:
        if not valid_id(user_id):
            return None
        return self.session.get(User, user_id)

    def insert(self, name: str, email: str, password_hash: str) -> int:
        """Store a new user and return its id.

        The unique constraint on ``email`` is what settles concurrent
        registrations; a violation becomes ``DuplicateEmail``.
        """
        user = User(name=name, email=email, password_hash=password_hash)
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            logger.info("Rejected duplicate registration")
            raise DuplicateEmail()
        self.session.refresh(user)
        return user.id
