"""FastAPI dependencies wiring the request to the app's shared services."""

from datetime import date
from typing import Optional

from fastapi import Depends, Request
from sqlmodel import Session

from .database import get_db
from .errors import AuthenticationError
from .guards import OwnershipGuard
from .repositories import CredentialStore, TaskRepository
from .security import PasswordHasher, SessionClaims, TokenService


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_today() -> date:
    """Clock used for date windows; overridden in tests."""
    return date.today()


def get_credential_store(db: Session = Depends(get_db)) -> CredentialStore:
    return CredentialStore(db)


def get_task_repository(db: Session = Depends(get_db)) -> TaskRepository:
    return TaskRepository(db)


def get_ownership_guard(tasks: TaskRepository = Depends(get_task_repository)) -> OwnershipGuard:
    return OwnershipGuard(tasks)


def _get_token_from_request(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.lower().startswith("bearer "):
        return auth_header.split(" ", 1)[1].strip()
    return request.cookies.get("token")


def get_current_claims(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
) -> SessionClaims:
    """Claims of the caller's session token, or 401."""
    token = _get_token_from_request(request)
    if not token:
        raise AuthenticationError("Not authenticated.")

    claims = tokens.verify(token)
    if claims is None:
        raise AuthenticationError("Invalid or expired token.")
    return claims
