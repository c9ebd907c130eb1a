"""HTTP tests for the ``/api/v1/auth`` endpoints."""

from __future__ import annotations

from datetime import timedelta

import pytest

from tests.factories.user import DEFAULT_PASSWORD, UserFactory
from tests.helpers.assertions import assert_json_keys, assert_problem
from tests.helpers.auth import bearer, issue_token

BASE = "/api/v1/auth"


def _signup_payload(**overrides) -> dict:
    payload = {
        "fullName": "Carla Owner",
        "email": "carla@example.com",
        "password": "secret1",
        "companyName": "Carla Cargo SL",
        "role": "cargo-owner",
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def account(session) -> dict:
    """Persist a user and return the plain values tests need after requests."""
    user = UserFactory()
    session.commit()
    return {"id": user.id, "email": user.email, "token": issue_token(user)}


def _login(client, email: str) -> dict:
    resp = client.post(f"{BASE}/login", json={"email": email, "password": DEFAULT_PASSWORD})
    assert resp.status_code == 200, resp.get_data(as_text=True)
    return resp.get_json()["data"]


# ------------------------------- Signup ----------------------------------- #
def test_signup_returns_pair_and_profile(client):
    resp = client.post(f"{BASE}/signup", json=_signup_payload())

    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert_json_keys(data, {"accessToken", "refreshToken", "tokenType", "user"})
    assert data["tokenType"] == "Bearer"
    assert data["user"]["email"] == "carla@example.com"
    assert data["user"]["role"] == "CARGO_OWNER"
    assert data["user"]["companyName"] == "Carla Cargo SL"
    assert "password" not in data["user"] and "passwordHash" not in data["user"]


def test_signup_duplicate_email_is_conflict(client):
    assert client.post(f"{BASE}/signup", json=_signup_payload()).status_code == 201

    resp = client.post(f"{BASE}/signup", json=_signup_payload(role="transporter"))

    assert_problem(resp, 409, "conflict")


@pytest.mark.parametrize(
    "overrides",
    [
        {"email": "not-an-email"},
        {"password": "123"},
        {"role": "admin"},
        {"fullName": ""},
    ],
)
def test_signup_validation_errors(client, overrides):
    resp = client.post(f"{BASE}/signup", json=_signup_payload(**overrides))

    body = assert_problem(resp, 400, "validation_error")
    assert "errors" in body["details"]


# -------------------------------- Login ----------------------------------- #
def test_login_success(client, account):
    data = _login(client, account["email"])
    assert data["user"]["id"] == account["id"]
    assert data["accessToken"] and data["refreshToken"]


def test_login_failures_share_message(client, account):
    wrong = client.post(f"{BASE}/login", json={"email": account["email"], "password": "nope"})
    unknown = client.post(
        f"{BASE}/login", json={"email": "ghost@example.com", "password": DEFAULT_PASSWORD}
    )

    first = assert_problem(wrong, 401, "unauthorized", "Invalid credentials")
    second = assert_problem(unknown, 401, "unauthorized", "Invalid credentials")
    assert first["detail"] == second["detail"]


def test_repeat_signup_then_login_failures_are_indistinguishable(client):
    payload = _signup_payload(email="a@b.com", password="secret1")
    assert client.post(f"{BASE}/signup", json=payload).status_code == 201

    again = client.post(f"{BASE}/signup", json=payload)
    body = assert_problem(again, 409, "conflict")
    assert "Email already registered" in body["detail"]

    wrong = client.post(f"{BASE}/login", json={"email": "a@b.com", "password": "secret2"})
    unknown = client.post(f"{BASE}/login", json={"email": "x@b.com", "password": "secret1"})

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.get_json()["detail"] == unknown.get_json()["detail"] == "Invalid credentials"


# ------------------------------- Refresh ---------------------------------- #
def test_refresh_rotates_token(client, account):
    pair = _login(client, account["email"])

    resp = client.post(f"{BASE}/refresh", json={"refreshToken": pair["refreshToken"]})

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["refreshToken"] != pair["refreshToken"]
    assert data["user"]["id"] == account["id"]


def test_refresh_reuse_is_rejected(client, account):
    pair = _login(client, account["email"])
    client.post(f"{BASE}/refresh", json={"refreshToken": pair["refreshToken"]})

    resp = client.post(f"{BASE}/refresh", json={"refreshToken": pair["refreshToken"]})

    assert_problem(resp, 401, "unauthorized", "Invalid refresh token")


def test_refresh_with_access_token_is_rejected(client, account):
    pair = _login(client, account["email"])

    resp = client.post(f"{BASE}/refresh", json={"refreshToken": pair["accessToken"]})

    assert_problem(resp, 401, "unauthorized")


def test_refresh_with_garbage_is_rejected(client):
    resp = client.post(f"{BASE}/refresh", json={"refreshToken": "not.a.jwt"})
    assert_problem(resp, 401, "unauthorized")


def test_refresh_requires_body_field(client):
    resp = client.post(f"{BASE}/refresh", json={})
    assert_problem(resp, 400, "validation_error")


# ------------------------------- Logout ----------------------------------- #
def test_logout_then_refresh_fails(client, account):
    pair = _login(client, account["email"])

    resp = client.post(f"{BASE}/logout", json={"refreshToken": pair["refreshToken"]})
    assert resp.status_code == 200
    assert resp.get_json()["data"]["message"] == "Logged out successfully"

    again = client.post(f"{BASE}/refresh", json={"refreshToken": pair["refreshToken"]})
    assert_problem(again, 401, "unauthorized", "Invalid refresh token")


def test_logout_with_unknown_token_succeeds(client):
    resp = client.post(f"{BASE}/logout", json={"refreshToken": "whatever"})
    assert resp.status_code == 200


def test_logout_all_revokes_every_session(client, account):
    pairs = [_login(client, account["email"]) for _ in range(2)]

    resp = client.post(f"{BASE}/logout-all", headers=bearer(pairs[0]["accessToken"]))

    assert resp.status_code == 200
    assert resp.get_json()["data"]["revoked"] == 2
    for pair in pairs:
        again = client.post(f"{BASE}/refresh", json={"refreshToken": pair["refreshToken"]})
        assert again.status_code == 401


def test_logout_all_requires_auth(client):
    resp = client.post(f"{BASE}/logout-all")
    assert_problem(resp, 401, "unauthorized", "Missing authorization token")


# ------------------------------- Profile ---------------------------------- #
def test_profile_returns_caller(client, account):
    resp = client.get(f"{BASE}/profile", headers=bearer(account["token"]))

    assert resp.status_code == 200
    assert resp.get_json()["data"]["email"] == account["email"]


def test_profile_with_expired_token(client, session):
    user = UserFactory()
    session.commit()
    token = issue_token(user, expires_delta=timedelta(seconds=-1))

    resp = client.get(f"{BASE}/profile", headers=bearer(token))

    assert_problem(resp, 401, "unauthorized", "Token has expired")


def test_profile_with_unknown_role_claim(client, session):
    user = UserFactory()
    session.commit()
    token = issue_token(user, role="SUPERUSER")

    resp = client.get(f"{BASE}/profile", headers=bearer(token))

    assert_problem(resp, 401, "unauthorized", "Invalid token claims")
