"""FastAPI dependencies for injection."""
from core.auth import get_current_user, get_password_hasher, get_token_manager
from db.session import get_async_session

__all__ = [
    "get_async_session",
    "get_current_user",
    "get_password_hasher",
    "get_token_manager",
]
