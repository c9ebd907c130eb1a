"""User resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields

from freightmarket.models.user import Role


class UserPublicSchema(Schema):
    """Public representation of a user (never exposes the password hash)."""

    id = fields.Integer(required=True)
    email = fields.Email(required=True)
    role = fields.Enum(Role, by_value=True, required=True)
    full_name = fields.String(required=True, data_key="fullName")
    company_name = fields.String(allow_none=True, data_key="companyName")
    phone_number = fields.String(allow_none=True, data_key="phoneNumber")
