"""Bearer token authentication."""
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from uuid import UUID

from fastapi import Depends, Request

from core.passwords import CredentialHasher
from core.tokens import TokenManager, TokenVerificationError
from services.exceptions import InternalError, UnauthenticatedError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity of the caller, valid for a single request."""

    id: UUID
    email: str


def _get_authorization_header(headers: Mapping[str, str]) -> str | None:
    """Case-insensitive lookup that works for plain dicts and Starlette headers."""
    for name, value in headers.items():
        if name.lower() == "authorization":
            return value
    return None


def extract_identity(
    headers: Mapping[str, str],
    token_manager: TokenManager,
) -> AuthenticatedUser:
    """
    Resolve the caller's identity from request headers.

    The Authorization header must be present and start with the literal
    "Bearer " prefix, and the rest must verify as a token. Every failure raises
    the same UnauthenticatedError.

    Raises:
        UnauthenticatedError: If the header is missing or the token is not valid.
    """
    header = _get_authorization_header(headers)
    if header is None or not header.startswith(BEARER_PREFIX):
        raise UnauthenticatedError()

    token = header[len(BEARER_PREFIX):]
    try:
        claims = token_manager.verify(token)
    except TokenVerificationError as e:
        raise UnauthenticatedError() from e

    return AuthenticatedUser(id=claims.subject_id, email=claims.email)


def get_token_manager(request: Request) -> TokenManager:
    """Return the TokenManager the application was built with."""
    token_manager = getattr(request.app.state, "token_manager", None)
    if token_manager is None:
        logger.error("Token manager is not configured on the application")
        raise InternalError("Token manager not configured")
    return token_manager


def get_password_hasher(request: Request) -> CredentialHasher:
    """Return the CredentialHasher the application was built with."""
    hasher = getattr(request.app.state, "password_hasher", None)
    if hasher is None:
        logger.error("Password hasher is not configured on the application")
        raise InternalError("Password hasher not configured")
    return hasher


async def get_current_user(
    request: Request,
    token_manager: TokenManager = Depends(get_token_manager),
) -> AuthenticatedUser:
    """
    Dependency that authenticates the request.

    Opt-in per route: public routes (registration, login, health) do not
    declare it.
    """
    return extract_identity(request.headers, token_manager)
