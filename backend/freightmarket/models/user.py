"""User model definition for the freight marketplace."""

from __future__ import annotations

from enum import Enum
from typing import Any

from sqlalchemy import Enum as SAEnum
from sqlalchemy import Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates

from freightmarket.core.extensions import db
from freightmarket.infra.crypto.credential_hasher import hash_password, verify_password

from .base import PKMixin, ReprMixin, TimestampMixin


class Role(str, Enum):
    """Closed set of marketplace roles carried in access-token claims."""

    CARGO_OWNER = "CARGO_OWNER"
    TRANSPORTER = "TRANSPORTER"
    ADMIN = "ADMIN"

    @classmethod
    def from_signup(cls, value: str) -> Role:
        """Map the public signup value (``cargo-owner``/``transporter``) to a role.

        :raises ValueError: If ``value`` is not a self-service role.
        """
        try:
            return _SIGNUP_ROLES[value]
        except KeyError:
            raise ValueError(f"Unsupported signup role: {value!r}") from None

    @classmethod
    def from_claim(cls, value: Any) -> Role:
        """Parse a role claim read back from a token.

        :raises ValueError: If the claim is not one of the known members.
        """
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown role claim: {value!r}") from None


_SIGNUP_ROLES: dict[str, Role] = {
    "cargo-owner": Role.CARGO_OWNER,
    "transporter": Role.TRANSPORTER,
}


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Marketplace account: a cargo owner, a transporter or an administrator.

    Fields
    ------
    email : str
        Login email. Stored normalized (lowercase, trimmed). Unique.
    password_hash : str
        Hashed password (write-only setter via ``password``).
    role : Role
        Drives quote visibility and which operations the user may invoke.
    full_name : str
        Contact name shown to counterparties.
    company_name : str | None
        Optional legal/trading name.
    phone_number : str | None
        Optional contact phone.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(254), nullable=False)
    role: Mapped[Role] = mapped_column(
        SAEnum(Role, name="enum_user_role", native_enum=True, create_constraint=True),
        nullable=False,
    )
    full_name: Mapped[str] = mapped_column(String(120), nullable=False)
    company_name: Mapped[str | None] = mapped_column(String(160), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(40), nullable=True)

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        Index("ix_users_role", "role"),
    )

    # -------------------- Password API --------------------
    @property
    def password(self) -> Any:  # pragma: no cover - explicit write-only contract
        """
        Disallow reading passwords.

        :raises AttributeError: Always, to ensure password is write-only.
        """
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        """
        Hash and set the password.

        :param raw: Plain text password to hash.
        :type raw: str
        """
        self.password_hash = hash_password(raw)

    def verify_password(self, raw: str) -> bool:
        """
        Verify a password against the stored hash.

        :param raw: Plain text password candidate.
        :type raw: str
        :returns: ``True`` if it matches; otherwise ``False``.
        :rtype: bool
        """
        return verify_password(self.password_hash, raw)

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("full_name")
    def _normalize_full_name(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Full name is required.")
        return value.strip()
