"""Authentication helpers for tests."""

from __future__ import annotations

from datetime import timedelta

from flask_jwt_extended import create_access_token
from sqlalchemy import func, select

from freightmarket.core.clock import utcnow
from freightmarket.models.session import RefreshSession


def issue_token(user, expires_delta: timedelta | None = None, **claims) -> str:
    """Generate an access JWT for ``user`` carrying its email and role claims.

    Parameters
    ----------
    user:
        Persisted :class:`~freightmarket.models.user.User`.
    expires_delta:
        Optional expiry delta. If ``None``, the default expiry is used.
    **claims:
        Overrides for the additional claims (e.g. a bogus ``role``).
    """

    payload = {"email": user.email, "role": user.role.value, **claims}
    return create_access_token(
        identity=str(user.id), additional_claims=payload, expires_delta=expires_delta
    )


def bearer(token: str) -> dict[str, str]:
    """Return the ``Authorization`` header for ``token``."""

    return {"Authorization": f"Bearer {token}"}


def active_session_count(session, user_id: int) -> int:
    """Count refresh sessions of ``user_id`` that are neither revoked nor expired."""

    stmt = select(func.count(RefreshSession.id)).where(
        RefreshSession.user_id == user_id,
        RefreshSession.revoked_at.is_(None),
        RefreshSession.expires_at > utcnow(),
    )
    return session.execute(stmt).scalar_one()
