"""Unit tests for service-error translation and constraint matching."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from freightmarket.core.errors import (
    BadRequest,
    Conflict,
    Forbidden,
    NotFound,
    Unauthorized,
    translate_service_error,
)
from freightmarket.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    BusinessRuleError,
    ConflictError,
    NotFoundError,
    ServiceError,
    violates,
)


@pytest.mark.parametrize(
    ("exc", "expected", "status"),
    [
        (NotFoundError("Quote", 3), NotFound, 404),
        (AuthorizationError(), Forbidden, 403),
        (ConflictError("Shipment", "exists"), Conflict, 409),
        (AuthenticationError("Invalid credentials"), Unauthorized, 401),
        (BusinessRuleError("This quote has expired"), BadRequest, 400),
        (ServiceError("other"), BadRequest, 400),
    ],
)
def test_translate_service_error(exc, expected, status):
    api_error = translate_service_error(exc)
    assert isinstance(api_error, expected)
    assert api_error.status_code == status
    assert api_error.message == str(exc)


def test_messages_are_human_readable():
    assert str(NotFoundError("Quote", 3)) == "Quote not found: 3"
    assert "A shipment already exists" in str(
        ConflictError("Shipment", "A shipment already exists for this quote")
    )


@pytest.mark.parametrize(
    ("message", "marker", "expected"),
    [
        ('duplicate key value violates unique constraint "uq_users_email"', "uq_users_email", True),
        ("UNIQUE constraint failed: shipments.quote_id", "shipments.quote_id", True),
        ("UNIQUE constraint failed: shipments.quote_id", "uq_users_email", False),
    ],
)
def test_violates_matches_constraint_or_column(message, marker, expected):
    exc = IntegrityError("INSERT ...", {}, Exception(message))
    assert violates(exc, marker) is expected
