"""Unit tests for UserRepository and the shared BaseRepository helpers."""

import pytest

from freightmarket.repositories.user import UserRepository
from tests.factories.user import TransporterFactory, UserFactory


class TestUserRepository:
    """Ensure ``UserRepository`` performs core persistence operations."""

    @pytest.fixture()
    def repo(self, session):
        return UserRepository(session=session)

    def test_get_by_email_is_case_insensitive(self, repo, session):
        u = UserFactory(email="alice@example.com")
        session.commit()

        fetched = repo.get_by_email("  ALICE@example.com ")
        assert fetched is not None
        assert fetched.id == u.id

    def test_exists_by_email(self, repo, session):
        UserFactory(email="bob@example.com")
        session.commit()

        assert repo.exists_by_email("bob@example.com")
        assert not repo.exists_by_email("nonexistent@example.com")

    def test_authenticate_valid_and_invalid(self, repo, session):
        UserFactory(email="auth@example.com", password="strongpass")
        session.commit()

        assert repo.authenticate("auth@example.com", "strongpass") is not None
        assert repo.authenticate("auth@example.com", "wrongpass") is None
        assert repo.authenticate("nope@example.com", "strongpass") is None

    def test_exists_with_whitelisted_filters(self, repo, session):
        carrier = TransporterFactory()
        session.flush()

        assert repo.exists(email=carrier.email)
        assert not repo.exists(email="ghost@example.com")

    def test_unknown_filter_is_rejected(self, repo):
        with pytest.raises(ValueError, match="Unknown filter field"):
            repo.exists(password_hash="x")

    def test_get_missing_returns_none(self, repo):
        assert repo.get(999_999) is None
