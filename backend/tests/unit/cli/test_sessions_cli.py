"""Tests for the ``flask sessions prune`` command."""

from __future__ import annotations

from datetime import timedelta

from freightmarket.core.clock import utcnow
from freightmarket.models import RefreshSession
from tests.factories.session import RefreshSessionFactory
from tests.factories.user import UserFactory


def test_prune_command_reports_deleted_rows(runner, session):
    user = UserFactory()
    RefreshSessionFactory(user=user)
    RefreshSessionFactory(user=user, expires_at=utcnow() - timedelta(days=1))
    RefreshSessionFactory(user=user, revoked_at=utcnow())
    user_id = user.id
    session.commit()

    result = runner.invoke(args=["sessions", "prune"])

    assert result.exit_code == 0, result.output
    assert "Pruned 2 refresh session(s)." in result.output
    assert session.query(RefreshSession).filter_by(user_id=user_id).count() == 1


def test_prune_command_with_nothing_to_do(runner):
    result = runner.invoke(args=["sessions", "prune"])

    assert result.exit_code == 0
    assert "Pruned 0 refresh session(s)." in result.output
