# freightmarket/infra/jwt/flask_jwt_token_signer.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, cast

from flask_jwt_extended import create_access_token, create_refresh_token, decode_token

from freightmarket.services._shared.ports import TokenSigner


@dataclass(slots=True)
class FlaskJWTTokenSigner(TokenSigner):
    """
    Adapter for Flask-JWT-Extended (HS256 with ``JWT_SECRET_KEY``).

    Every token carries a fresh ``jti``, so two refresh tokens issued for the
    same user within the same second still have distinct digests.

    .. note::
       Requires an active Flask app context with proper JWT settings.
    """

    def sign_access(
        self, *, subject: str, claims: dict[str, Any], expires_delta: timedelta
    ) -> str:
        return cast(
            str,
            create_access_token(
                identity=subject, additional_claims=claims, expires_delta=expires_delta
            ),
        )

    def sign_refresh(
        self, *, subject: str, claims: dict[str, Any], expires_delta: timedelta
    ) -> str:
        return cast(
            str,
            create_refresh_token(
                identity=subject, additional_claims=claims, expires_delta=expires_delta
            ),
        )

    def decode(self, token: str) -> dict[str, Any]:
        return cast(dict[str, Any], decode_token(token))
