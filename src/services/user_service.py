"""
Service layer for account registration and password authentication.

Argon2 hashing and verification run in the threadpool so other requests keep
being served while a password is checked.
"""
import logging
from uuid import UUID

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.passwords import CredentialHasher, MalformedHashError
from models.user import User
from schemas.user import UserCreate
from services.exceptions import (
    ConflictError,
    InternalError,
    InvalidCredentialsError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


async def get_by_email(db: AsyncSession, email: str) -> User | None:
    """Look up a user by exact email address."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_by_id(db: AsyncSession, user_id: UUID) -> User:
    """
    Load a user by id.

    Raises:
        NotFoundError: If the user no longer exists.
    """
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


async def register(db: AsyncSession, hasher: CredentialHasher, data: UserCreate) -> User:
    """
    Create an account with a hashed password.

    Raises:
        ConflictError: If the email is already registered.
    """
    if await get_by_email(db, data.email) is not None:
        raise ConflictError("Email already registered")

    user = User(
        email=data.email,
        password_hash=await run_in_threadpool(hasher.hash, data.password),
        name=data.name,
    )
    try:
        async with db.begin_nested():
            db.add(user)
    except IntegrityError as e:
        raise ConflictError("Email already registered") from e
    await db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


async def _check_password(hasher: CredentialHasher, user: User, password: str) -> None:
    try:
        matches = await run_in_threadpool(hasher.verify, password, user.password_hash)
    except MalformedHashError as e:
        logger.error("Stored password hash for user %s is malformed", user.id)
        raise InternalError("Stored password hash is malformed") from e
    if not matches:
        raise InvalidCredentialsError()


async def authenticate(
    db: AsyncSession,
    hasher: CredentialHasher,
    email: str,
    password: str,
) -> User:
    """
    Check an email/password pair.

    An unknown email and a wrong password raise the same error. A hash made with
    outdated cost parameters is transparently upgraded on success.

    Raises:
        InvalidCredentialsError: If the email is unknown or the password is wrong.
        InternalError: If the stored hash cannot be parsed.
    """
    user = await get_by_email(db, email)
    if user is None:
        await run_in_threadpool(hasher.burn, password)
        raise InvalidCredentialsError()

    await _check_password(hasher, user, password)

    if hasher.needs_rehash(user.password_hash):
        user.password_hash = await run_in_threadpool(hasher.hash, password)
        await db.flush()
        logger.info("Rehashed password for user %s", user.id)
    return user


async def change_password(
    db: AsyncSession,
    hasher: CredentialHasher,
    user_id: UUID,
    current_password: str,
    new_password: str,
) -> None:
    """
    Replace a user's password after checking the current one.

    Raises:
        NotFoundError: If the user no longer exists.
        InvalidCredentialsError: If current_password is wrong.
    """
    user = await get_by_id(db, user_id)
    await _check_password(hasher, user, current_password)
    user.password_hash = await run_in_threadpool(hasher.hash, new_password)
    await db.flush()
    logger.info("Changed password for user %s", user.id)
