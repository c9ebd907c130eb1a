"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

SIGNUP_ROLES = ("transporter", "cargo-owner")


class SignupSchema(Schema):
    """Input payload for account registration."""

    full_name = fields.String(
        required=True, data_key="fullName", validate=validate.Length(min=1, max=120)
    )
    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=6, max=128))
    company_name = fields.String(
        load_default=None, data_key="companyName", validate=validate.Length(max=160)
    )
    phone_number = fields.String(
        load_default=None, data_key="phoneNumber", validate=validate.Length(max=40)
    )
    role = fields.String(required=True, validate=validate.OneOf(SIGNUP_ROLES))


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class RefreshTokenSchema(Schema):
    """Input payload carrying a refresh token (refresh and logout)."""

    refresh_token = fields.String(
        required=True, data_key="refreshToken", validate=validate.Length(min=1)
    )


class TokenPairSchema(Schema):
    """Response payload with the issued credential pair."""

    access_token = fields.String(required=True, data_key="accessToken")
    refresh_token = fields.String(required=True, data_key="refreshToken")
    token_type = fields.Constant("Bearer", data_key="tokenType")
