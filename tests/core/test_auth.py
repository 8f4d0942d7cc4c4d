"""Tests for bearer token identity extraction."""
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from core.auth import AuthenticatedUser, extract_identity
from core.tokens import TokenConfig, TokenManager
from services.exceptions import UnauthenticatedError

SECRET = "identity-extractor-secret-long-enough-for-tests"


@pytest.fixture
def manager() -> TokenManager:
    return TokenManager(TokenConfig(secret=SECRET, lifetime_hours=24))


def test__extract_identity__valid_bearer_token(manager: TokenManager) -> None:
    user_id = uuid4()
    token = manager.issue(user_id, "a@example.com")

    identity = extract_identity({"Authorization": f"Bearer {token}"}, manager)

    assert identity == AuthenticatedUser(id=user_id, email="a@example.com")


def test__extract_identity__header_name_is_case_insensitive(manager: TokenManager) -> None:
    user_id = uuid4()
    token = manager.issue(user_id, "a@example.com")

    identity = extract_identity({"authorization": f"Bearer {token}"}, manager)

    assert identity.id == user_id


def test__extract_identity__missing_header(manager: TokenManager) -> None:
    with pytest.raises(UnauthenticatedError):
        extract_identity({}, manager)


@pytest.mark.parametrize(
    "header",
    [
        "",
        "Bearer",
        "Bearer ",
        "Basic dXNlcjpwYXNz",
        "Token abc",
    ],
)
def test__extract_identity__unusable_header(manager: TokenManager, header: str) -> None:
    with pytest.raises(UnauthenticatedError):
        extract_identity({"Authorization": header}, manager)


def test__extract_identity__scheme_is_case_sensitive(manager: TokenManager) -> None:
    """Only the literal "Bearer " prefix is accepted."""
    token = manager.issue(uuid4(), "a@example.com")
    with pytest.raises(UnauthenticatedError):
        extract_identity({"Authorization": f"bearer {token}"}, manager)


def test__extract_identity__token_from_other_secret(manager: TokenManager) -> None:
    other = TokenManager(TokenConfig(secret="x" * 40, lifetime_hours=24))
    token = other.issue(uuid4(), "a@example.com")
    with pytest.raises(UnauthenticatedError):
        extract_identity({"Authorization": f"Bearer {token}"}, manager)


def test__extract_identity__expired_token() -> None:
    issued = datetime(2024, 1, 1, tzinfo=UTC)
    now = {"value": issued}
    manager = TokenManager(
        TokenConfig(secret=SECRET, lifetime_hours=1),
        clock=lambda: now["value"],
    )
    token = manager.issue(uuid4(), "a@example.com")
    now["value"] = issued + timedelta(hours=2)

    with pytest.raises(UnauthenticatedError):
        extract_identity({"Authorization": f"Bearer {token}"}, manager)


def test__extract_identity__all_failures_share_one_message(manager: TokenManager) -> None:
    messages = set()
    for headers in ({}, {"Authorization": "Basic x"}, {"Authorization": "Bearer garbage"}):
        with pytest.raises(UnauthenticatedError) as exc_info:
            extract_identity(headers, manager)
        messages.add(exc_info.value.message)
    assert messages == {"Authentication required"}
