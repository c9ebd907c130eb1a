"""Shared API helpers for request parsing, auth and service construction."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from datetime import timedelta
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import get_jwt, verify_jwt_in_request
from sqlalchemy.orm import Session

from freightmarket.core.errors import Forbidden, Unauthorized
from freightmarket.core.extensions import db
from freightmarket.core.logger import ensure_request_id
from freightmarket.infra.jwt.flask_jwt_token_signer import FlaskJWTTokenSigner
from freightmarket.models.user import Role
from freightmarket.services import (
    AuthSessionManager,
    BidAcceptanceCoordinator,
    Principal,
    QuoteBoard,
    ServiceContext,
)
from freightmarket.services._shared.ports import AuthTokenConfig

F = TypeVar("F", bound=Callable[..., Any])


def get_session() -> Session:
    """Return the SQLAlchemy session bound to the current application."""

    return db.session


# ------------------------------- Principal -----------------------------------


def current_principal() -> Principal:
    """Build the :class:`Principal` from the verified access token of this request.

    :raises Unauthorized: If the subject or role claim cannot be parsed.
    """

    claims = get_jwt() or {}
    try:
        user_id = int(claims["sub"])
        role = Role.from_claim(claims.get("role"))
    except (KeyError, TypeError, ValueError) as exc:
        raise Unauthorized("Invalid token claims") from exc
    return Principal(user_id=user_id, email=str(claims.get("email", "")), role=role)


def require_auth(func: F) -> F:
    """Ensure the request carries a valid JWT access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_roles(*roles: Role) -> Callable[[F], F]:
    """Ensure the verified JWT carries one of ``roles``."""

    allowed = frozenset(roles)

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            verify_jwt_in_request(optional=False)
            if current_principal().role not in allowed:
                raise Forbidden("Insufficient role")
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


# ------------------------------- Services ------------------------------------


def _service_context() -> ServiceContext:
    return ServiceContext(request_id=ensure_request_id())


def auth_service() -> AuthSessionManager:
    """Build the credential lifecycle service for the current request."""

    return AuthSessionManager(
        session=get_session(),
        token_signer=FlaskJWTTokenSigner(),
        token_cfg=AuthTokenConfig.from_mapping(current_app.config),
        ctx=_service_context(),
    )


def quote_board() -> QuoteBoard:
    """Build the quote lifecycle service for the current request."""

    ttl_days = int(current_app.config.get("QUOTE_DEFAULT_TTL_DAYS", 7))
    return QuoteBoard(
        session=get_session(), quote_ttl=timedelta(days=ttl_days), ctx=_service_context()
    )


def bidding_service() -> BidAcceptanceCoordinator:
    """Build the bidding/acceptance service for the current request."""

    return BidAcceptanceCoordinator(session=get_session(), ctx=_service_context())


# ------------------------------- Responses -----------------------------------


def json_body() -> dict[str, Any]:
    """Return the JSON request body, or an empty mapping when absent/invalid."""

    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
