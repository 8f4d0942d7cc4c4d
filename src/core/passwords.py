"""Argon2id password hashing."""
from argon2 import PasswordHasher, Type
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError


class MalformedHashError(Exception):
    """Raised when a stored hash cannot be parsed or checked (as opposed to not matching)."""

    def __init__(self, message: str = "Stored password hash is malformed") -> None:
        super().__init__(message)


class CredentialHasher:
    """
    One-way hashing and verification of user passwords.

    Every call to `hash` draws a fresh random salt, so hashing the same password
    twice yields different strings. The encoded result carries the algorithm,
    version, cost parameters and salt, which is everything `verify` needs.

    Instances hold only immutable cost parameters and are safe to share across
    concurrent requests.
    """

    def __init__(
        self,
        time_cost: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4,
    ) -> None:
        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            type=Type.ID,
        )
        # Fixed verification target for burn(); no account can match it
        self._dummy_hash = self._hasher.hash("not-a-real-password")

    def hash(self, plaintext: str) -> str:
        """Hash a plaintext password with a fresh salt."""
        return self._hasher.hash(plaintext)

    def verify(self, plaintext: str, stored_hash: str) -> bool:
        """
        Check a plaintext password against a stored hash.

        Returns:
            True if the password matches, False if it does not.

        Raises:
            MalformedHashError: If the stored hash is corrupt or unparseable.
        """
        try:
            return self._hasher.verify(stored_hash, plaintext)
        except VerifyMismatchError:
            return False
        except (InvalidHashError, VerificationError) as e:
            raise MalformedHashError(f"Stored password hash is malformed: {e}") from e

    def needs_rehash(self, stored_hash: str) -> bool:
        """Return True if the stored hash was made with different cost parameters."""
        try:
            return self._hasher.check_needs_rehash(stored_hash)
        except (InvalidHashError, ValueError):
            return False

    def burn(self, plaintext: str) -> None:
        """
        Run a verification that always fails.

        Used when no account exists for a login attempt so that the response takes
        about as long as a real password check.
        """
        try:
            self._hasher.verify(self._dummy_hash, plaintext)
        except VerifyMismatchError:
            pass
