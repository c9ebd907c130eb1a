"""
SQLAlchemy implementation of UnitOfWork.
"""

from __future__ import annotations

from contextlib import suppress

from sqlalchemy import event
from sqlalchemy.orm import Session

from freightmarket.repositories import (
    BidRepository,
    QuoteRepository,
    RefreshSessionRepository,
    ShipmentRepository,
    UserRepository,
)
from freightmarket.uow.base import UnitOfWork


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=self.session)
        self.refresh_sessions = RefreshSessionRepository(session=self.session)
        self.quotes = QuoteRepository(session=self.session)
        self.bids = BidRepository(session=self.session)
        self.shipments = ShipmentRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    SQLAlchemy-backed UoW over an explicitly provided session.

    The same session is shared across all repositories for a consistent
    transaction: everything staged inside the ``with`` block is committed on a
    clean exit and rolled back when the block raises.
    """

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # No-op: the session is lazily started on the first statement.
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            try:
                self.commit()
            except Exception:
                self.rollback()
                raise
        else:
            self.rollback()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only Unit of Work sharing the caller's session.

    This UoW:
    - Blocks ORM flushes that would emit DML while the scope is open.
    - Disallows ``commit()``.
    - Leaves the session's transaction untouched on exit so loaded objects
      stay usable for serialization.
    """

    def __init__(self, *, session: Session) -> None:
        super().__init__(session=session)
        self._listener_installed = False

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        event.listen(self.session, "before_flush", self._before_flush)
        self._listener_installed = True
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._listener_installed:
            with suppress(Exception):
                event.remove(self.session, "before_flush", self._before_flush)
            self._listener_installed = False
        if exc_type is not None:
            self.rollback()

    @staticmethod
    def _before_flush(session, flush_context, instances) -> None:
        if session.new or session.dirty or session.deleted:
            raise RuntimeError(
                "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
            )

    def commit(self) -> None:
        """
        Disallow commit in read-only Unit of Work.

        :raises RuntimeError: always, to prevent accidental writes.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()
