"""
Unit tests for core.security module.
Tests JWT session tokens and the OAuth anti-forgery state.
"""
import pytest
import datetime as dt
import jwt
from app.core.security import (
    create_access_token,
    decode_access_token,
    generate_state,
    validate_state,
    ACCESS_TOKEN_EXPIRE_MINUTES,
)


class TestJWTTokens:
    """Tests for JWT token creation and validation."""

    def test_create_access_token_returns_string(self):
        """create_access_token should return a JWT token string."""
        token = create_access_token("42", "user")
        assert isinstance(token, str)
        assert len(token) > 0

    def test_create_access_token_contains_user_id_and_role(self):
        """Token should carry the user id as subject and the role."""
        payload = decode_access_token(create_access_token("42", "admin"))
        assert payload["sub"] == "42"
        assert payload["role"] == "admin"

    def test_create_access_token_has_expiration(self):
        """Token should expire in the future."""
        payload = decode_access_token(create_access_token("7", "user"))
        assert "exp" in payload
        assert "iat" in payload
        assert payload["exp"] > dt.datetime.now(dt.timezone.utc).timestamp()

    def test_token_expiration_time(self):
        """Token lifetime should match the configured minutes."""
        payload = decode_access_token(create_access_token("7", "user"))
        diff_minutes = (payload["exp"] - payload["iat"]) / 60
        assert abs(diff_minutes - ACCESS_TOKEN_EXPIRE_MINUTES) < 1

    def test_decode_access_token_invalid_token(self):
        """decode_access_token should raise for a malformed token."""
        with pytest.raises(jwt.InvalidTokenError):
            decode_access_token("invalid.token.here")

    def test_decode_access_token_wrong_secret(self):
        """A token signed with another secret must be rejected."""
        forged = jwt.encode({"sub": "1", "role": "admin"}, "wrong-secret", algorithm="HS256")
        with pytest.raises(jwt.InvalidSignatureError):
            decode_access_token(forged)


class TestOAuthState:
    """Tests for OAuth state generation and comparison."""

    def test_generate_state_is_64_hex_chars(self):
        state = generate_state()
        assert len(state) == 64
        int(state, 16)  # hex only

    def test_generate_state_is_random(self):
        assert generate_state() != generate_state()

    def test_validate_state_matches(self):
        state = generate_state()
        assert validate_state(state, state) is True

    def test_validate_state_mismatch(self):
        assert validate_state(generate_state(), generate_state()) is False

    @pytest.mark.parametrize("expected,received", [(None, "abc"), ("abc", None), ("", ""), (None, None)])
    def test_validate_state_missing_values(self, expected, received):
        assert validate_state(expected, received) is False

    def test_validate_state_different_lengths(self):
        assert validate_state("abc", "abcd") is False
