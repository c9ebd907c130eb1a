# freightmarket/services/_shared/base.py
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from freightmarket.services._shared.errors import AuthorizationError
from freightmarket.services._shared.policies.common import is_owner
from freightmarket.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data (auth, request ids, etc.).

    :param actor_id: Authenticated user identifier.
    :param request_id: Correlation id for logging/tracing.
    """

    actor_id: int | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Offer shared authorization helpers.
    * Keep services thin, orchestration-only, no web leakage.

    Notes
    -----
    - The storage handle is explicit: every service receives the SQLAlchemy
      session it must use and never touches a global one.
    - Multi-step writes always happen inside a single read-write UoW.
    """

    def __init__(self, *, session: Session, ctx: ServiceContext | None = None) -> None:
        """
        :param session: SQLAlchemy session all units of work are bound to.
        :param ctx: Optional request-scoped context (auth, tracing).
        """
        self.session = session
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """Create a read-write Unit of Work (commit on success, rollback on error)."""
        return SQLAlchemyUnitOfWork(session=self.session)

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """Create a read-only Unit of Work."""
        return SQLAlchemyReadOnlyUnitOfWork(session=self.session)

    # --------------------------- AuthZ --------------------------------

    def ensure_owner(self, actor_id: int | None, owner_id: int, *, msg: str | None = None) -> None:
        """
        Ensure the current actor is the resource owner.

        :param actor_id: Authenticated user id.
        :param owner_id: Expected owner user id.
        :param msg: Optional custom error message.
        :raises AuthorizationError: If actor is not the owner.
        """
        if not is_owner(actor_id=actor_id, owner_id=owner_id):
            raise AuthorizationError(msg or "Access denied")
