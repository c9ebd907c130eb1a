# freightmarket/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass

from freightmarket.models.user import Role
from freightmarket.services._shared.dto import UserPublic

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class SignupIn:
    """
    Input DTO for self-service registration.

    :param email: User email (normalized by the model).
    :param password: Raw password (hashed by the model setter).
    :param full_name: Contact name.
    :param role: Marketplace role; admins are never self-registered.
    :param company_name: Optional company.
    :param phone_number: Optional phone.
    """

    email: str
    password: str
    full_name: str
    role: Role
    company_name: str | None = None
    phone_number: str | None = None


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :param password: Raw password (to be verified).
    """

    email: str
    password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :param refresh_token: Encoded refresh JWT.
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class AuthResultOut:
    """
    Token pair plus the identity it was issued for.

    :param tokens: Issued credential pair.
    :param user: Public projection of the authenticated user.
    """

    tokens: TokenPairOut
    user: UserPublic
