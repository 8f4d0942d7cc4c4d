"""Tests for JWT issuing and verification."""
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import jwt
import pytest

from core.tokens import (
    ALGORITHM,
    TokenConfig,
    TokenManager,
    TokenVerificationError,
)

SECRET = "a-secret-that-is-long-enough-for-hs256-signing"
ISSUED_AT = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)


class FakeClock:
    """Settable clock for driving expiry deterministically."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(ISSUED_AT)


@pytest.fixture
def manager(clock: FakeClock) -> TokenManager:
    return TokenManager(TokenConfig(secret=SECRET, lifetime_hours=24), clock=clock)


class TestTokenConfig:
    """Tests for TokenConfig validation."""

    def test__token_config__rejects_empty_secret(self) -> None:
        with pytest.raises(ValueError, match="secret"):
            TokenConfig(secret="", lifetime_hours=24)

    def test__token_config__rejects_zero_lifetime(self) -> None:
        with pytest.raises(ValueError, match="lifetime"):
            TokenConfig(secret=SECRET, lifetime_hours=0)

    def test__token_config__secret_not_in_repr(self) -> None:
        config = TokenConfig(secret=SECRET, lifetime_hours=24)
        assert SECRET not in repr(config)

    def test__token_config__is_immutable(self) -> None:
        config = TokenConfig(secret=SECRET, lifetime_hours=24)
        with pytest.raises(AttributeError):
            config.lifetime_hours = 48  # type: ignore[misc]


class TestIssueAndVerify:
    """Tests for the issue/verify cycle."""

    def test__verify__returns_issued_identity(self, manager: TokenManager) -> None:
        user_id = uuid4()
        token = manager.issue(user_id, "a@example.com")

        claims = manager.verify(token)

        assert claims.subject_id == user_id
        assert claims.email == "a@example.com"
        assert claims.issued_at == ISSUED_AT
        assert claims.expires_at == ISSUED_AT + timedelta(hours=24)

    def test__issue__payload_has_expected_claims(self, manager: TokenManager) -> None:
        """Claims are sub, email, iat and exp with exp = iat + lifetime."""
        user_id = uuid4()
        token = manager.issue(user_id, "a@example.com")

        payload = jwt.decode(token, SECRET, algorithms=[ALGORITHM], options={"verify_exp": False})

        assert set(payload) == {"sub", "email", "iat", "exp"}
        assert payload["sub"] == str(user_id)
        assert payload["exp"] - payload["iat"] == 24 * 3600

    def test__issue__uses_hs256(self, manager: TokenManager) -> None:
        token = manager.issue(uuid4(), "a@example.com")
        assert jwt.get_unverified_header(token)["alg"] == "HS256"


class TestExpiry:
    """Tokens are valid while now < exp."""

    def test__verify__accepts_at_issue_time(self, manager: TokenManager) -> None:
        token = manager.issue(uuid4(), "a@example.com")
        manager.verify(token)

    def test__verify__accepts_one_second_before_expiry(
        self, manager: TokenManager, clock: FakeClock,
    ) -> None:
        token = manager.issue(uuid4(), "a@example.com")
        clock.now = ISSUED_AT + timedelta(hours=24) - timedelta(seconds=1)
        manager.verify(token)

    def test__verify__rejects_at_expiry(self, manager: TokenManager, clock: FakeClock) -> None:
        token = manager.issue(uuid4(), "a@example.com")
        clock.now = ISSUED_AT + timedelta(hours=24)
        with pytest.raises(TokenVerificationError):
            manager.verify(token)

    def test__verify__rejects_one_second_after_expiry(
        self, manager: TokenManager, clock: FakeClock,
    ) -> None:
        token = manager.issue(uuid4(), "a@example.com")
        clock.now = ISSUED_AT + timedelta(hours=24, seconds=1)
        with pytest.raises(TokenVerificationError):
            manager.verify(token)

    def test__verify__lifetime_follows_config(self, clock: FakeClock) -> None:
        manager = TokenManager(TokenConfig(secret=SECRET, lifetime_hours=1), clock=clock)
        token = manager.issue(uuid4(), "a@example.com")
        clock.now = ISSUED_AT + timedelta(minutes=59)
        manager.verify(token)
        clock.now = ISSUED_AT + timedelta(hours=1, seconds=1)
        with pytest.raises(TokenVerificationError):
            manager.verify(token)


class TestRejection:
    """Every kind of bad token raises the same error."""

    def test__verify__rejects_other_secret(self, manager: TokenManager, clock: FakeClock) -> None:
        other = TokenManager(
            TokenConfig(secret="another-secret-entirely-also-long-enough", lifetime_hours=24),
            clock=clock,
        )
        token = other.issue(uuid4(), "a@example.com")
        with pytest.raises(TokenVerificationError):
            manager.verify(token)

    def test__verify__rejects_tampered_payload(self, manager: TokenManager) -> None:
        token = manager.issue(uuid4(), "a@example.com")
        header, _, signature = token.split(".")
        forged_payload = jwt.encode(
            {"sub": str(uuid4()), "email": "evil@example.com", "iat": 0, "exp": 2**31},
            SECRET,
            algorithm=ALGORITHM,
        ).split(".")[1]
        with pytest.raises(TokenVerificationError):
            manager.verify(f"{header}.{forged_payload}.{signature}")

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c", "not.a.jwt.at.all"])
    def test__verify__rejects_malformed(self, manager: TokenManager, token: str) -> None:
        with pytest.raises(TokenVerificationError):
            manager.verify(token)

    def test__verify__rejects_none_algorithm(self, manager: TokenManager) -> None:
        token = jwt.encode(
            {"sub": str(uuid4()), "email": "a@example.com", "iat": 0, "exp": 2**31},
            None,
            algorithm="none",
        )
        with pytest.raises(TokenVerificationError):
            manager.verify(token)

    @pytest.mark.parametrize("missing", ["sub", "email", "iat", "exp"])
    def test__verify__rejects_missing_claim(self, manager: TokenManager, missing: str) -> None:
        now = int(ISSUED_AT.timestamp())
        payload = {"sub": str(uuid4()), "email": "a@example.com", "iat": now, "exp": now + 60}
        del payload[missing]
        token = jwt.encode(payload, SECRET, algorithm=ALGORITHM)
        with pytest.raises(TokenVerificationError):
            manager.verify(token)

    def test__verify__rejects_non_uuid_subject(self, manager: TokenManager) -> None:
        now = int(ISSUED_AT.timestamp())
        token = jwt.encode(
            {"sub": "user-1", "email": "a@example.com", "iat": now, "exp": now + 60},
            SECRET,
            algorithm=ALGORITHM,
        )
        with pytest.raises(TokenVerificationError):
            manager.verify(token)

    def test__verify__errors_are_indistinguishable(
        self, manager: TokenManager, clock: FakeClock,
    ) -> None:
        """Expired and forged tokens produce the same message."""
        expired = manager.issue(uuid4(), "a@example.com")
        clock.now = ISSUED_AT + timedelta(days=2)
        with pytest.raises(TokenVerificationError) as expired_exc:
            manager.verify(expired)
        with pytest.raises(TokenVerificationError) as garbage_exc:
            manager.verify("garbage")
        assert str(expired_exc.value) == str(garbage_exc.value)
