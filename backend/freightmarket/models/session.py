"""Persisted refresh sessions (one row per issued refresh token)."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from freightmarket.core.clock import utcnow
from freightmarket.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin, UTCDateTime

if TYPE_CHECKING:
    from .user import User


class RefreshSession(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Server-side record of an issued refresh token.

    Only the SHA-256 digest of the token is stored. A row is valid while
    ``revoked_at`` is null and ``expires_at`` lies in the future. Rows are
    mutated only by setting ``revoked_at``; deletion is left to pruning.

    Fields
    ------
    token_digest : str
        Hex digest of the refresh JWT. Unique.
    user_id : int
        Owner of the session. ``ON DELETE CASCADE``.
    expires_at : datetime
        Hard expiry mirrored from the token's ``exp``.
    revoked_at : datetime | None
        Set once on rotation, logout or logout-all.
    """

    __tablename__ = "refresh_sessions"

    token_digest: Mapped[str] = mapped_column(String(64), nullable=False)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    expires_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    revoked_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)

    __table_args__ = (
        UniqueConstraint("token_digest", name="uq_refresh_sessions_token_digest"),
        Index("ix_refresh_sessions_user_id", "user_id"),
        Index("ix_refresh_sessions_expires_at", "expires_at"),
    )

    user: Mapped[User] = relationship("User", passive_deletes=True)

    def is_active(self, now: datetime | None = None) -> bool:
        """Return ``True`` when the session is neither revoked nor expired."""
        now = now or utcnow()
        return self.revoked_at is None and self.expires_at > now
