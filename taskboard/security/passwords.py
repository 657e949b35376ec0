import bcrypt

# bcrypt only looks at the first 72 bytes of the secret
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """Salted one-way hashing of passwords with bcrypt."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds
        self._dummy_digest = None

    @staticmethod
    def _encode(plaintext: str) -> bytes:
        return plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]

    def hash(self, plaintext: str) -> str:
        """Hash a password with a fresh salt.

        Callers reject empty passwords before getting here.
        """
        if not plaintext:
            raise ValueError("cannot hash an empty password")
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(self._encode(plaintext), salt).decode("utf-8")

    def dummy_digest(self) -> str:
        """Digest of a throwaway secret at the same cost factor.

        Verifying against it when no user matches keeps a failed lookup as
        slow as a wrong password.
        """
        if self._dummy_digest is None:
            self._dummy_digest = self.hash("not-a-real-password")
        return self._dummy_digest

    def verify(self, plaintext: str, digest: str) -> bool:
        """Check a password against a stored digest.

        A malformed digest is a mismatch, not an error.
        """
        if not plaintext or not digest:
            return False
        digest_bytes = digest.encode("utf-8") if isinstance(digest, str) else digest
        try:
            return bcrypt.checkpw(self._encode(plaintext), digest_bytes)
        except (ValueError, TypeError):
            return False
