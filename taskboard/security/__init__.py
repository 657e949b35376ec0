from .passwords import PasswordHasher
from .tokens import SessionClaims, TokenService

__all__ = ["PasswordHasher", "SessionClaims", "TokenService"]
