"""Session tokens: signed, time-bounded claims about a user.

Tokens are HS256 JWTs signed with one process-wide key. There is no
revocation list, so a token stays valid until it expires.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Mapping, Optional

from jose import JWTError, jwt

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
DEFAULT_TTL = timedelta(hours=1)
CLAIM_FIELDS = ("id", "name", "email")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SessionClaims:
    """Decoded payload of a verified session token."""

    id: int
    name: str
    email: str
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """Issues session tokens at login and verifies them on later requests."""

    def __init__(
        self,
        secret_key: str,
        ttl: timedelta = DEFAULT_TTL,
        algorithm: str = ALGORITHM,
        clock: Callable[[], datetime] = utcnow,
    ):
        if not secret_key:
            raise ValueError("a signing key is required")
        self._secret_key = secret_key
        self.ttl = ttl
        self.algorithm = algorithm
        self._clock = clock

    def issue(self, claims: Mapping, ttl: Optional[timedelta] = None) -> str:
        """Create a signed token carrying ``id``, ``name`` and ``email``."""
        missing = [field for field in CLAIM_FIELDS if claims.get(field) is None]
        if missing:
            raise ValueError(f"missing claims: {', '.join(missing)}")

        issued_at = self._clock()
        expire = issued_at + (ttl if ttl is not None else self.ttl)
        to_encode = {field: claims[field] for field in CLAIM_FIELDS}
        to_encode.update({
            "iat": int(issued_at.timestamp()),
            "exp": int(expire.timestamp()),
        })
        return jwt.encode(to_encode, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> Optional[SessionClaims]:
        """Return the claims of a valid token, ``None`` otherwise.

        Bad signatures, expired tokens and garbage all give ``None``.
        """
        if not token:
            return None
        try:
            # Expiry is checked below against our own clock
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            logger.debug("Rejected session token: %s", exc)
            return None

        try:
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
            issued_at = datetime.fromtimestamp(int(payload.get("iat", 0)), tz=timezone.utc)
            claims = SessionClaims(
                id=payload["id"],
                name=payload["name"],
                email=payload["email"],
                issued_at=issued_at,
                expires_at=expires_at,
            )
        except (KeyError, TypeError, ValueError, OverflowError):
            logger.debug("Rejected session token with malformed claims")
            return None

        if expires_at <= self._clock():
            logger.debug("Rejected expired session token for user %s", claims.id)
            return None
        return claims
