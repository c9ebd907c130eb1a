"""Units of work for the marketplace services.

``SQLAlchemyUnitOfWork`` wraps multi-step writes (signup, rotation, bid
acceptance) in one transaction; ``SQLAlchemyReadOnlyUnitOfWork`` guards
role-aware reads against accidental flushes.
"""

from .base import UnitOfWork
from .sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyRepositoryContainer,
    SQLAlchemyUnitOfWork,
)

__all__ = [
    "UnitOfWork",
    "SQLAlchemyRepositoryContainer",
    "SQLAlchemyUnitOfWork",
    "SQLAlchemyReadOnlyUnitOfWork",
]
