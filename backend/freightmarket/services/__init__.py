"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`freightmarket.services` without knowing internal
structure.

Re-exports
----------
- Base primitives (from ``freightmarket.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Shared DTOs (from ``freightmarket.services._shared.dto``)
    * :class:`Principal`, :class:`UserPublic`

- Credential lifecycle (from ``freightmarket.services.auth``)
    * :class:`AuthSessionManager`
    * DTOs: :class:`SignupIn`, :class:`LoginIn`, :class:`TokenPairOut`,
      :class:`AuthResultOut`

- Quotes (from ``freightmarket.services.quotes``)
    * :class:`QuoteBoard`
    * DTOs: :class:`QuoteOpenIn`, :class:`QuoteOut`, :class:`BidOut`,
      :class:`ShipmentOut`

- Bidding (from ``freightmarket.services.bidding``)
    * :class:`BidAcceptanceCoordinator`
    * DTOs: :class:`BidPlaceIn`
"""

from __future__ import annotations

from ._shared.base import BaseService, ServiceContext
from ._shared.dto import Principal, UserPublic
from .auth.dto import AuthResultOut, LoginIn, SignupIn, TokenPairOut
from .auth.service import AuthSessionManager
from .bidding.dto import BidPlaceIn
from .bidding.service import BidAcceptanceCoordinator
from .quotes.dto import BidOut, QuoteOpenIn, QuoteOut, ShipmentOut
from .quotes.service import QuoteBoard

__all__ = [
    # Base
    "BaseService",
    "ServiceContext",
    "Principal",
    "UserPublic",
    # Auth
    "AuthSessionManager",
    "SignupIn",
    "LoginIn",
    "TokenPairOut",
    "AuthResultOut",
    # Quotes
    "QuoteBoard",
    "QuoteOpenIn",
    "QuoteOut",
    "BidOut",
    "ShipmentOut",
    # Bidding
    "BidAcceptanceCoordinator",
    "BidPlaceIn",
]
