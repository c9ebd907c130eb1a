"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from freightmarket.repositories.base import BaseRepository
from freightmarket.repositories.quote import BidRepository, QuoteRepository
from freightmarket.repositories.session import RefreshSessionRepository
from freightmarket.repositories.shipment import ShipmentRepository
from freightmarket.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "BidRepository",
    "QuoteRepository",
    "RefreshSessionRepository",
    "ShipmentRepository",
    "UserRepository",
]
