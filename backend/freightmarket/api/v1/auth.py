"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, current_app
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from freightmarket.api.deps import (
    auth_service,
    current_principal,
    json_body,
    json_response,
    require_auth,
    timing,
)
from freightmarket.core.errors import Unauthorized
from freightmarket.core.extensions import limiter
from freightmarket.models.user import Role
from freightmarket.schemas import (
    LoginSchema,
    RefreshTokenSchema,
    SignupSchema,
    TokenPairSchema,
    UserPublicSchema,
)
from freightmarket.services import AuthResultOut, LoginIn, SignupIn

bp = Blueprint("auth", __name__, url_prefix="/auth")

signup_schema = SignupSchema()
login_schema = LoginSchema()
refresh_schema = RefreshTokenSchema()
token_schema = TokenPairSchema()
user_schema = UserPublicSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


def _auth_body(result: AuthResultOut) -> dict:
    body = token_schema.dump(result.tokens)
    body["user"] = user_schema.dump(result.user)
    return {"data": body}


@bp.post("/signup")
@timing
def signup():
    """Register a cargo owner or transporter and sign them in."""

    data = signup_schema.load(json_body())
    dto = SignupIn(
        email=data["email"],
        password=data["password"],
        full_name=data["full_name"],
        role=Role.from_signup(data["role"]),
        company_name=data["company_name"],
        phone_number=data["phone_number"],
    )
    result = auth_service().signup(dto)
    return json_response(_auth_body(result), status=201)


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    """Authenticate credentials and issue a token pair."""

    data = login_schema.load(json_body())
    result = auth_service().login(LoginIn(email=data["email"], password=data["password"]))
    return json_response(_auth_body(result))


@bp.post("/refresh")
@timing
def refresh():
    """Rotate the refresh token from the JSON body and issue a new pair."""

    data = refresh_schema.load(json_body())
    verify_jwt_in_request(refresh=True, locations=["json"])
    try:
        user_id = int(get_jwt_identity())
    except (TypeError, ValueError) as exc:
        raise Unauthorized("Invalid refresh token") from exc
    result = auth_service().refresh(user_id, data["refresh_token"])
    return json_response(_auth_body(result))


@bp.post("/logout")
@timing
def logout():
    """Revoke the given refresh token. Succeeds for unknown or revoked tokens."""

    data = refresh_schema.load(json_body())
    auth_service().logout(data["refresh_token"])
    return json_response({"data": {"message": "Logged out successfully"}})


@bp.post("/logout-all")
@require_auth
@timing
def logout_all():
    """Revoke every refresh session of the caller."""

    revoked = auth_service().logout_all(current_principal().user_id)
    return json_response({"data": {"message": "Logged out from all devices", "revoked": revoked}})


@bp.get("/profile")
@require_auth
@timing
def profile():
    """Return the authenticated user's public profile."""

    user = auth_service().profile(current_principal().user_id)
    return json_response({"data": user_schema.dump(user)})
