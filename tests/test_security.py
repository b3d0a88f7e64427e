"""
Tests for password hashing and JWT helpers.
"""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from devconnector.exceptions import InvalidTokenError
from devconnector.security import (
    create_access_token,
    decode_access_token,
    gravatar_url,
    hash_password,
    verify_password,
)


class TestPasswords:
    def test_hash_is_salted_and_verifies(self):
        first = hash_password("secret1", rounds=4)
        second = hash_password("secret1", rounds=4)

        assert first != second
        assert first != "secret1"
        assert verify_password("secret1", first)
        assert verify_password("secret1", second)

    def test_wrong_password_does_not_verify(self):
        hashed = hash_password("secret1", rounds=4)
        assert not verify_password("secret2", hashed)

    def test_overlong_password_is_refused(self):
        with pytest.raises(ValueError, match="at most 72 bytes"):
            hash_password("x" * 73, rounds=4)

    def test_overlong_candidate_never_verifies(self):
        hashed = hash_password("x" * 72, rounds=4)
        assert not verify_password("x" * 73, hashed)

    def test_malformed_hash_does_not_verify(self):
        assert not verify_password("secret1", "not-a-bcrypt-hash")


def test_gravatar_url_normalizes_email():
    url = gravatar_url("  A@X.com ")
    assert url == gravatar_url("a@x.com")
    assert url.startswith("//www.gravatar.com/avatar/")
    assert url.endswith("?s=200&r=pg&d=mm")


class TestTokens:
    def test_round_trip_keeps_subject(self, settings):
        token = create_access_token({"sub": "42"}, settings)
        payload = decode_access_token(token, settings)

        assert payload["sub"] == "42"
        assert "jti" in payload

    def test_default_lifetime_is_100_hours(self, settings):
        token = create_access_token({"sub": "1"}, settings)
        payload = jwt.get_unverified_claims(token)

        assert payload["exp"] - payload["iat"] == settings.access_token_expire_minutes * 60
        assert settings.access_token_expire_minutes == 6000

    def test_each_token_has_unique_jti(self, settings):
        a = jwt.get_unverified_claims(create_access_token({"sub": "1"}, settings))
        b = jwt.get_unverified_claims(create_access_token({"sub": "1"}, settings))
        assert a["jti"] != b["jti"]

    def test_token_from_other_secret_is_rejected(self, settings):
        other = settings.model_copy(update={"jwt_secret_key": "another-secret-key-of-32-characters-min"})
        token = create_access_token({"sub": "1"}, other)

        with pytest.raises(InvalidTokenError):
            decode_access_token(token, settings)

    def test_expired_token_is_rejected(self, settings):
        issued = datetime.now(timezone.utc) - timedelta(hours=2)
        token = create_access_token({"sub": "1"}, settings, expires_minutes=60, now=issued)

        with pytest.raises(InvalidTokenError):
            decode_access_token(token, settings)

    def test_garbage_token_is_rejected(self, settings):
        with pytest.raises(InvalidTokenError):
            decode_access_token("not.a.jwt", settings)
