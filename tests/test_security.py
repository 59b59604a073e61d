"""Password hashing and token handling."""
from datetime import timedelta

import jwt
import pytest

from expense_tracker.core.config import settings
from expense_tracker.core.exceptions import AuthenticationFailure
from expense_tracker.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from expense_tracker.models.credential import Role


class TestPasswords:
    def test_hash_is_salted_and_verifies(self):
        first = get_password_hash("pw1")
        second = get_password_hash("pw1")
        assert first != second
        assert first != "pw1"
        assert verify_password("pw1", first)
        assert verify_password("pw1", second)

    def test_wrong_password_does_not_verify(self):
        hashed = get_password_hash("correct horse")
        assert not verify_password("battery staple", hashed)


class TestTokens:
    def test_claims_round_trip(self):
        token = create_access_token("alice", extra_claims={"role": "USER", "email": "a@x.com"})
        identity = decode_access_token(token)
        assert identity.username == "alice"
        assert identity.role is Role.USER
        assert identity.email == "a@x.com"

    def test_token_carries_expiry_and_issued_at(self):
        token = create_access_token("alice", extra_claims={"role": "ADMIN"})
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        assert payload["sub"] == "alice"
        assert payload["role"] == "ADMIN"
        assert payload["exp"] > payload["iat"]

    def test_expired_token_is_rejected(self):
        token = create_access_token("alice", extra_claims={"role": "USER"}, expires_delta=timedelta(seconds=-5))
        with pytest.raises(AuthenticationFailure, match="expired"):
            decode_access_token(token)

    def test_token_signed_with_other_key_is_rejected(self):
        token = jwt.encode({"sub": "alice", "role": "USER"}, "another-secret", algorithm="HS256")
        with pytest.raises(AuthenticationFailure, match="Invalid token"):
            decode_access_token(token)

    def test_garbage_is_rejected(self):
        with pytest.raises(AuthenticationFailure):
            decode_access_token("not-a-jwt")

    def test_unknown_role_is_rejected(self):
        token = create_access_token("alice", extra_claims={"role": "ROOT"})
        with pytest.raises(AuthenticationFailure, match="role"):
            decode_access_token(token)

    def test_missing_role_is_rejected(self):
        token = create_access_token("alice")
        with pytest.raises(AuthenticationFailure):
            decode_access_token(token)
