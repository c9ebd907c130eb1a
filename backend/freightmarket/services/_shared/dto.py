# comments in English; reST docstrings strict
from __future__ import annotations

from dataclasses import dataclass

from freightmarket.models.user import Role


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller as read from a verified access token.

    :param user_id: Subject claim, parsed to the user primary key.
    :param email: Email claim at issuance time.
    :param role: Role claim parsed into the closed :class:`Role` enum.
    """

    user_id: int
    email: str
    role: Role


@dataclass(frozen=True, slots=True)
class UserPublic:
    """
    Identity projection safe to return to clients (never carries the hash).

    :param id: User id.
    :param email: Login email.
    :param role: Marketplace role.
    :param full_name: Contact name.
    :param company_name: Optional company.
    :param phone_number: Optional phone.
    """

    id: int
    email: str
    role: Role
    full_name: str
    company_name: str | None = None
    phone_number: str | None = None


def to_user_public(user) -> UserPublic:
    """Project a :class:`~freightmarket.models.user.User` into :class:`UserPublic`."""
    return UserPublic(
        id=user.id,
        email=user.email,
        role=user.role,
        full_name=user.full_name,
        company_name=user.company_name,
        phone_number=user.phone_number,
    )
