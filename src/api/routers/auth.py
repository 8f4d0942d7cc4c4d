"""Registration, login and account endpoints."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import (
    get_async_session,
    get_current_user,
    get_password_hasher,
    get_token_manager,
)
from core.auth import AuthenticatedUser
from core.passwords import CredentialHasher
from core.tokens import TokenManager
from models.user import User
from schemas.user import AuthResponse, PasswordChange, UserCreate, UserLogin, UserResponse
from services import user_service

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _auth_response(token_manager: TokenManager, user: User) -> AuthResponse:
    return AuthResponse(
        token=token_manager.issue(user.id, user.email),
        user=UserResponse.model_validate(user),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: UserCreate,
    db: AsyncSession = Depends(get_async_session),
    hasher: CredentialHasher = Depends(get_password_hasher),
    token_manager: TokenManager = Depends(get_token_manager),
) -> AuthResponse:
    """
    Create an account and return a token for it.

    Returns 409 if the email is already registered.
    """
    user = await user_service.register(db, hasher, data)
    return _auth_response(token_manager, user)


@router.post("/login", response_model=AuthResponse)
async def login(
    data: UserLogin,
    db: AsyncSession = Depends(get_async_session),
    hasher: CredentialHasher = Depends(get_password_hasher),
    token_manager: TokenManager = Depends(get_token_manager),
) -> AuthResponse:
    """
    Exchange an email and password for a token.

    Returns 401 `invalid_credentials` for an unknown email or a wrong password.
    """
    user = await user_service.authenticate(db, hasher, data.email, data.password)
    return _auth_response(token_manager, user)


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """Get the current authenticated user's account."""
    return await user_service.get_by_id(db, current_user.id)


@router.post("/password", status_code=status.HTTP_204_NO_CONTENT)
async def change_password(
    data: PasswordChange,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
    hasher: CredentialHasher = Depends(get_password_hasher),
) -> None:
    """
    Replace the caller's password.

    Tokens issued before the change stay valid until they expire.
    """
    await user_service.change_password(
        db, hasher, current_user.id, data.current_password, data.new_password,
    )
