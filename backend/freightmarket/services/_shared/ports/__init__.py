"""
freightmarket.services._shared.ports
====================================

Collection of *ports* (hexagonal interfaces) that define the contracts for
token issuing.

These ports decouple the service layer from concrete implementations. The
Flask-JWT-Extended adapter lives under ``freightmarket.infra.jwt``.
"""

from __future__ import annotations

from .token_signer import (
    DEFAULT_ACCESS_TTL,
    DEFAULT_REFRESH_TTL,
    AuthTokenConfig,
    TokenSigner,
    parse_expiration,
)

__all__ = [
    "AuthTokenConfig",
    "DEFAULT_ACCESS_TTL",
    "DEFAULT_REFRESH_TTL",
    "TokenSigner",
    "parse_expiration",
]
