"""Issuing and verifying signed, time-bounded identity tokens."""
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt

from core.config import Settings

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
REQUIRED_CLAIMS = ["sub", "email", "iat", "exp"]


class TokenVerificationError(Exception):
    """
    Raised for any token that fails verification.

    Forged, expired, and malformed tokens all raise this same error with the same
    message, so callers cannot tell them apart.
    """

    def __init__(self) -> None:
        super().__init__("Invalid token")


@dataclass(frozen=True)
class TokenConfig:
    """Immutable signing configuration handed to the TokenManager at startup."""

    secret: str = field(repr=False)
    lifetime_hours: int

    def __post_init__(self) -> None:
        if not self.secret:
            raise ValueError("Token signing secret must not be empty")
        if self.lifetime_hours < 1:
            raise ValueError("Token lifetime must be at least one hour")

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenConfig":
        """Build the token configuration from application settings."""
        return cls(secret=settings.jwt_secret, lifetime_hours=settings.jwt_expiration_hours)


@dataclass(frozen=True)
class TokenClaims:
    """Verified claims carried by a token."""

    subject_id: UUID
    email: str
    issued_at: datetime
    expires_at: datetime


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TokenManager:
    """
    Issues and verifies HS256 JSON Web Tokens.

    A token is valid while its signature checks out and the current time is
    strictly before its `exp` claim. There is no refresh and no revocation list.
    """

    def __init__(
        self,
        config: TokenConfig,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._config = config
        self._clock = clock

    @property
    def lifetime(self) -> timedelta:
        """How long an issued token stays valid."""
        return timedelta(hours=self._config.lifetime_hours)

    def issue(self, subject_id: UUID, email: str) -> str:
        """Issue a token for a subject, valid for the configured lifetime."""
        issued_at = int(self._clock().timestamp())
        expires_at = issued_at + int(self.lifetime.total_seconds())
        payload = {
            "sub": str(subject_id),
            "email": email,
            "iat": issued_at,
            "exp": expires_at,
        }
        return jwt.encode(payload, self._config.secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        """
        Verify a token's signature and expiry.

        Expiry is checked against the manager's own clock rather than PyJWT's,
        so a token is accepted exactly while `now < expires_at`.

        Raises:
            TokenVerificationError: For any invalid, expired, or malformed token.
        """
        try:
            payload = jwt.decode(
                token,
                self._config.secret,
                algorithms=[ALGORITHM],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                    "require": REQUIRED_CLAIMS,
                },
            )
            subject_id = UUID(payload["sub"])
            email = payload["email"]
            issued_at = int(payload["iat"])
            expires_at = int(payload["exp"])
        except (jwt.PyJWTError, ValueError, TypeError, KeyError) as e:
            logger.warning("JWT validation failed: %s", e)
            raise TokenVerificationError() from e

        if not isinstance(email, str):
            logger.warning("JWT validation failed: email claim is not a string")
            raise TokenVerificationError()

        if self._clock().timestamp() >= expires_at:
            logger.warning("JWT validation failed: token expired")
            raise TokenVerificationError()

        return TokenClaims(
            subject_id=subject_id,
            email=email,
            issued_at=datetime.fromtimestamp(issued_at, UTC),
            expires_at=datetime.fromtimestamp(expires_at, UTC),
        )
