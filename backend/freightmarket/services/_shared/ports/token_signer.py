from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Protocol

DEFAULT_ACCESS_TTL = timedelta(minutes=15)
DEFAULT_REFRESH_TTL = timedelta(days=7)

_EXPIRATION_RE = re.compile(r"^\s*(\d+)\s*([dhm])\s*$")
_UNITS = {"d": "days", "h": "hours", "m": "minutes"}


def parse_expiration(value: str | None, default: timedelta = DEFAULT_REFRESH_TTL) -> timedelta:
    """
    Parse a duration such as ``"7d"``, ``"12h"`` or ``"15m"``.

    :param value: ``<int><unit>`` where unit is ``d``, ``h`` or ``m``.
    :param default: Returned for anything unparseable (unknown unit, empty,
        negative or malformed values).
    :returns: Parsed duration.
    """
    if not value:
        return default
    match = _EXPIRATION_RE.match(str(value))
    if match is None:
        return default
    amount, unit = int(match.group(1)), match.group(2)
    return timedelta(**{_UNITS[unit]: amount})


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Lifetimes applied when issuing a credential pair.

    :param access_ttl: Access token lifetime.
    :param refresh_ttl: Refresh token lifetime (also the session row expiry).
    """

    access_ttl: timedelta = DEFAULT_ACCESS_TTL
    refresh_ttl: timedelta = DEFAULT_REFRESH_TTL

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> AuthTokenConfig:
        """Build from ``JWT_ACCESS_EXPIRATION``/``JWT_REFRESH_EXPIRATION`` settings."""
        return cls(
            access_ttl=parse_expiration(config.get("JWT_ACCESS_EXPIRATION"), DEFAULT_ACCESS_TTL),
            refresh_ttl=parse_expiration(
                config.get("JWT_REFRESH_EXPIRATION"), DEFAULT_REFRESH_TTL
            ),
        )


class TokenSigner(Protocol):
    """Port for issuing and decoding signed, expiring tokens."""

    def sign_access(
        self, *, subject: str, claims: dict[str, Any], expires_delta: timedelta
    ) -> str: ...

    def sign_refresh(
        self, *, subject: str, claims: dict[str, Any], expires_delta: timedelta
    ) -> str: ...

    def decode(self, token: str) -> dict[str, Any]: ...
