"""
Tests for password hashing and token signing.
"""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.models import User
from app.utils.dates import epoch_micros
from app.utils.security import (
    InvalidTokenError,
    TokenExpiredError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

SECRET = "unit-test-secret"


class TestPasswords:

    def test_hash_is_not_plaintext(self):
        hashed = hash_password("hunter22", rounds=4)
        assert hashed != "hunter22"
        assert verify_password("hunter22", hashed)

    def test_wrong_password(self):
        hashed = hash_password("hunter22", rounds=4)
        assert not verify_password("hunter23", hashed)

    def test_non_bcrypt_value_does_not_verify(self):
        assert not verify_password("hunter22", "not-a-hash")


class TestTokens:

    def test_token_resolves_to_user(self):
        token = create_access_token(42, SECRET, "HS256", timedelta(hours=1))
        claims = decode_access_token(token, SECRET, "HS256")
        assert claims.user_id == 42

    def test_issue_time_is_recorded_to_the_microsecond(self):
        issued = datetime(2026, 1, 1, 12, 0, 0, 250000, tzinfo=timezone.utc)
        token = create_access_token(1, SECRET, "HS256", timedelta(days=3650), issued_at=issued)
        claims = decode_access_token(token, SECRET, "HS256")
        whole_seconds = int(datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc).timestamp())
        assert claims.issued_at_us == whole_seconds * 1_000_000 + 250_000

    def test_token_without_sub_second_issue_time_is_invalid(self):
        token = jwt.encode({"id": 1, "iat": 0, "exp": 4102444800}, SECRET, algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            decode_access_token(token, SECRET, "HS256")

    def test_expired_token(self):
        issued = datetime.now(timezone.utc) - timedelta(hours=2)
        token = create_access_token(1, SECRET, "HS256", timedelta(hours=1), issued_at=issued)
        with pytest.raises(TokenExpiredError):
            decode_access_token(token, SECRET, "HS256")

    def test_wrong_secret(self):
        token = create_access_token(1, SECRET, "HS256", timedelta(hours=1))
        with pytest.raises(InvalidTokenError):
            decode_access_token(token, "another-secret", "HS256")

    def test_garbage(self):
        with pytest.raises(InvalidTokenError):
            decode_access_token("loggedout", SECRET, "HS256")


class TestPasswordChangeOrdering:

    def test_change_later_in_the_same_second_is_detected(self):
        user = User(password_changed_at=datetime(2026, 1, 1, 12, 0, 0, 900000))
        issued = datetime(2026, 1, 1, 12, 0, 0, 100000)
        assert user.changed_password_after(epoch_micros(issued))

    def test_token_issued_after_change_is_current(self):
        changed = datetime(2026, 1, 1, 12, 0, 0, 900000)
        user = User(password_changed_at=changed)
        assert not user.changed_password_after(epoch_micros(changed))
        assert not user.changed_password_after(epoch_micros(changed) + 1)

    def test_never_changed(self):
        assert not User().changed_password_after(0)
