"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
concerns. They are the stable contract between repositories, models and
application services.

The translation to HTTP responses (RFC 7807) is handled by
``freightmarket/core/errors.py``:

=======================  ===========
Exception                HTTP status
=======================  ===========
``NotFoundError``        404
``AuthorizationError``   403
``ConflictError``        409
``AuthenticationError``  401
``BusinessRuleError``    400
``ServiceError``         400
=======================  ===========
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name in the driver message. SQLite only
    reports the offending columns (``UNIQUE constraint failed: shipments.quote_id``),
    so callers may pass either form.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        Constraint name (e.g. ``'uq_users_email'``) or ``table.column`` marker.

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories or domain logic.
    - Nothing in the core retries on them; retries are the caller's call.
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "Quote").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or terminal-state rule conflicts.

    :param entity: Entity name (e.g., "Shipment").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class AuthorizationError(ServiceError):
    """Raised when an authenticated actor may not act on a resource."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(message)


class AuthenticationError(ServiceError):
    """
    Raised when credentials are missing, wrong, expired or revoked.

    Messages stay deliberately vague ("Invalid credentials", "Invalid refresh
    token") so callers cannot tell which half of a credential was wrong.
    """

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class BusinessRuleError(ServiceError):
    """Raised when an operation is incompatible with the current entity state."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
