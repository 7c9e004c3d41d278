"""Tests for password hashing, tokens, TOTP and the login endpoint."""

import pyotp
import pytest

from journal.config import settings
from journal.errors import AuthenticationError, RegistrationError
from journal.services.auth import (
    authenticate_user,
    create_access_token,
    decode_access_token,
    get_totp_uri,
    hash_password,
    register_user,
    verify_password,
)

from conftest import PASSWORD, bearer, make_user


class TestAuthService:
    def test_password_round_trip(self):
        hashed = hash_password("hunter2")
        assert hashed != "hunter2"
        assert verify_password("hunter2", hashed)
        assert not verify_password("hunter3", hashed)

    def test_token_subject(self):
        assert decode_access_token(create_access_token("alice")) == "alice"

    def test_expired_token(self):
        assert decode_access_token(create_access_token("alice", expires_minutes=-1)) is None

    def test_tampered_token(self):
        token = create_access_token("alice")
        assert decode_access_token(token[:-2] + "xx") is None

    def test_totp_uri_names_journal(self):
        uri = get_totp_uri(pyotp.random_base32(), "alice")
        assert uri.startswith("otpauth://totp/")
        assert "Crypto%20Trade%20Journal" in uri


class TestAuthenticateUser:
    def test_all_factors_valid(self, session, alice):
        code = pyotp.TOTP(alice.totp_secret).now()
        assert authenticate_user(session, "alice", PASSWORD, code).id == alice.id

    def test_unknown_and_wrong_password_look_alike(self, session, alice):
        code = pyotp.TOTP(alice.totp_secret).now()
        with pytest.raises(AuthenticationError) as unknown:
            authenticate_user(session, "mallory", PASSWORD, code)
        with pytest.raises(AuthenticationError) as wrong:
            authenticate_user(session, "alice", "wrong", code)
        assert str(unknown.value) == str(wrong.value) == "Invalid credentials"

    def test_bad_totp_named(self, session, alice):
        with pytest.raises(AuthenticationError, match="TOTP"):
            authenticate_user(session, "alice", PASSWORD, "not-a-code")


class TestRegisterUser:
    def test_creates_active_user(self, session):
        user = register_user(session, "  carol ", "s3cret")
        assert user.id is not None
        assert user.username == "carol"
        assert user.is_active
        assert verify_password("s3cret", user.hashed_password)
        assert pyotp.TOTP(user.totp_secret).now()

    def test_duplicate_username(self, session, alice):
        with pytest.raises(RegistrationError, match="already exists"):
            register_user(session, "alice", "other")

    @pytest.mark.parametrize("username,password", [("", "pw"), ("   ", "pw"), ("erin", "")])
    def test_blank_input(self, session, username, password):
        with pytest.raises(RegistrationError, match="cannot be empty"):
            register_user(session, username, password)


class TestLogin:
    def test_login_success(self, client, alice):
        response = client.post(
            "/api/auth/login",
            json={
                "username": "alice",
                "password": PASSWORD,
                "totpCode": pyotp.TOTP(alice.totp_secret).now(),
            },
        )
        assert response.status_code == 200
        body = response.json()
        assert body["tokenType"] == "bearer"
        assert body["expiresIn"] == settings.jwt_expire_minutes * 60
        assert decode_access_token(body["accessToken"]) == "alice"

        trades = client.get(
            "/api/trades", headers={"Authorization": f"Bearer {body['accessToken']}"}
        )
        assert trades.status_code == 200

    def test_wrong_password(self, client, alice):
        response = client.post(
            "/api/auth/login",
            json={
                "username": "alice",
                "password": "wrong",
                "totp_code": pyotp.TOTP(alice.totp_secret).now(),
            },
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    def test_wrong_totp(self, client, alice):
        code = pyotp.TOTP(alice.totp_secret).now()
        bad = "000000" if code != "000000" else "111111"
        response = client.post(
            "/api/auth/login",
            json={"username": "alice", "password": PASSWORD, "totp_code": bad},
        )
        assert response.status_code == 401

    def test_unknown_user(self, client):
        response = client.post(
            "/api/auth/login",
            json={"username": "mallory", "password": PASSWORD, "totp_code": "123456"},
        )
        assert response.status_code == 401

    def test_inactive_user_cannot_login(self, client, session):
        dave = make_user(session, "dave", is_active=False)
        response = client.post(
            "/api/auth/login",
            json={
                "username": "dave",
                "password": PASSWORD,
                "totp_code": pyotp.TOTP(dave.totp_secret).now(),
            },
        )
        assert response.status_code == 401

    def test_token_for_deleted_user(self, client, session, alice):
        headers = bearer(alice)
        session.delete(alice)
        session.commit()
        assert client.get("/api/trades", headers=headers).status_code == 401
