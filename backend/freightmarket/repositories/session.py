"""Refresh-session repository: digest lookups, conditional revocation, pruning."""

from __future__ import annotations

from datetime import datetime
from typing import cast

from sqlalchemy import delete, or_, select, update

from freightmarket.models.session import RefreshSession
from freightmarket.repositories.base import BaseRepository


class RefreshSessionRepository(BaseRepository[RefreshSession]):
    """Persistence-only access to :class:`RefreshSession` rows.

    Every mutation is a single conditional statement so concurrent requests
    racing on the same token are arbitrated by the database.
    """

    model = RefreshSession

    def register(self, *, user_id: int, token_digest: str, expires_at: datetime) -> RefreshSession:
        """Insert a new, active session row and flush it."""
        return self.add(
            RefreshSession(user_id=user_id, token_digest=token_digest, expires_at=expires_at)
        )

    def get_by_digest(self, token_digest: str) -> RefreshSession | None:
        """Return the session stored under ``token_digest`` (active or not)."""
        stmt = select(RefreshSession).where(RefreshSession.token_digest == token_digest)
        return cast(RefreshSession | None, self.session.execute(stmt).scalars().first())

    def revoke(
        self,
        token_digest: str,
        *,
        now: datetime,
        user_id: int | None = None,
        require_unexpired: bool = False,
    ) -> int:
        """
        Revoke one session, only if it is still unrevoked.

        :param token_digest: Digest of the presented refresh token.
        :param now: Revocation instant (also the expiry cut-off).
        :param user_id: When given, the row must belong to this user.
        :param require_unexpired: When ``True``, an expired row is not touched.
        :returns: Number of rows affected (``0`` or ``1``).
        """
        stmt = (
            update(RefreshSession)
            .where(RefreshSession.token_digest == token_digest)
            .where(RefreshSession.revoked_at.is_(None))
            .values(revoked_at=now)
            .execution_options(synchronize_session=False)
        )
        if user_id is not None:
            stmt = stmt.where(RefreshSession.user_id == user_id)
        if require_unexpired:
            stmt = stmt.where(RefreshSession.expires_at > now)
        return int(self.session.execute(stmt).rowcount or 0)

    def revoke_all_for_user(self, user_id: int, *, now: datetime) -> int:
        """Revoke every still-unrevoked session of ``user_id`` in one statement."""
        stmt = (
            update(RefreshSession)
            .where(RefreshSession.user_id == user_id)
            .where(RefreshSession.revoked_at.is_(None))
            .values(revoked_at=now)
            .execution_options(synchronize_session=False)
        )
        return int(self.session.execute(stmt).rowcount or 0)

    def prune(self, *, now: datetime) -> int:
        """Delete rows that are expired or revoked. Returns the deleted count."""
        stmt = (
            delete(RefreshSession)
            .where(
                or_(
                    RefreshSession.expires_at < now,
                    RefreshSession.revoked_at.is_not(None),
                )
            )
            .execution_options(synchronize_session=False)
        )
        return int(self.session.execute(stmt).rowcount or 0)
