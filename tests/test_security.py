"""
Security Utility Tests

Tests for password hashing and JWT helpers.
"""

from datetime import timedelta

from bookcatalog.services.security import (
    ACCESS_TOKEN_TYPE,
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
    verify_token_type,
)


class TestPasswordHashing:
    """Tests for bcrypt password hashing."""

    def test_hash_is_not_plain_text(self):
        hashed = hash_password("secret")

        assert hashed != "secret"
        assert hashed.startswith("$2b$")

    def test_verify_password(self):
        hashed = hash_password("secret")

        assert verify_password("secret", hashed)
        assert not verify_password("Secret", hashed)

    def test_hashes_are_salted(self):
        assert hash_password("secret") != hash_password("secret")


class TestTokens:
    """Tests for access token creation and decoding."""

    def test_round_trip_keeps_claims(self):
        token = create_access_token({"username": "mluukkai", "id": 7})

        payload = decode_token(token)

        assert payload["username"] == "mluukkai"
        assert payload["id"] == 7
        assert payload["type"] == ACCESS_TOKEN_TYPE
        assert "exp" in payload

    def test_does_not_mutate_input(self):
        data = {"username": "mluukkai", "id": 7}

        create_access_token(data)

        assert data == {"username": "mluukkai", "id": 7}

    def test_expired_token_is_rejected(self):
        token = create_access_token({"id": 7}, expires_delta=timedelta(seconds=-5))

        assert decode_token(token) is None

    def test_tampered_token_is_rejected(self):
        token = create_access_token({"id": 7})
        header, payload, signature = token.split(".")
        tampered = f"{header}.{payload}.{signature[::-1]}"

        assert decode_token(tampered) is None

    def test_verify_token_type(self):
        token = create_access_token({"id": 7})

        assert verify_token_type(token) is not None
        assert verify_token_type(token, expected_type="refresh") is None

    def test_garbage_is_rejected(self):
        assert decode_token("not.a.token") is None
