import logging

from fastapi import APIRouter, Depends, status

from ..dependencies import get_credential_store, get_password_hasher, get_token_service
from ..errors import AuthenticationError, DuplicateEmail, ValidationError
from ..repositories import CredentialStore
from ..schemas.user import LoginRequest, LoginResponse, MessageResponse, RegisterRequest
from ..security import PasswordHasher, TokenService

logger = logging.getLogger(__name__)

router = APIRouter()

BAD_CREDENTIALS = "Invalid e-mail or password."


@router.post("/cadastro", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    users: CredentialStore = Depends(get_credential_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    """Create a new user account."""
    if not all((payload.name, payload.email, payload.password, payload.confirm_password)):
        raise ValidationError("All fields are required.")
    if payload.password != payload.confirm_password:
        raise ValidationError("Passwords do not match.")

    if users.find_by_email(payload.email) is not None:
        raise DuplicateEmail()

    user_id = users.insert(payload.name, payload.email, hasher.hash(payload.password))
    logger.info("Registered user %s", user_id)
    return {"message": "User registered successfully."}


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    users: CredentialStore = Depends(get_credential_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    """Sign in and get a session token valid for one hour."""
    if not payload.email or not payload.password:
        raise ValidationError("E-mail and password are required.")

    user = users.find_by_email(payload.email)
    if user is None:
        hasher.verify(payload.password, hasher.dummy_digest())
        logger.info("Login failed: unknown e-mail")
        raise AuthenticationError(BAD_CREDENTIALS)
    if not hasher.verify(payload.password, user.password_hash):
        logger.info("Login failed: wrong password for user %s", user.id)
        raise AuthenticationError(BAD_CREDENTIALS)

    token = tokens.issue({"id": user.id, "name": user.name, "email": user.email})
    logger.info("User %s logged in", user.id)
    return {"message": "Login successful.", "token": token, "token_type": "bearer"}
