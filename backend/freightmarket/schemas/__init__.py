"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import LoginSchema, RefreshTokenSchema, SignupSchema, TokenPairSchema
from .quote import BidCreateSchema, BidSchema, QuoteCreateSchema, QuoteSchema, ShipmentSchema
from .user import UserPublicSchema

__all__ = [
    "BidCreateSchema",
    "BidSchema",
    "LoginSchema",
    "QuoteCreateSchema",
    "QuoteSchema",
    "RefreshTokenSchema",
    "ShipmentSchema",
    "SignupSchema",
    "TokenPairSchema",
    "UserPublicSchema",
]
