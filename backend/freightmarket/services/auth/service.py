# freightmarket/services/auth/service.py
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from freightmarket.core.clock import utcnow
from freightmarket.infra.crypto.credential_hasher import token_digest
from freightmarket.models.user import User
from freightmarket.services._shared.base import BaseService, ServiceContext
from freightmarket.services._shared.dto import UserPublic, to_user_public
from freightmarket.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    violates,
)
from freightmarket.services._shared.ports import AuthTokenConfig, TokenSigner
from freightmarket.services.auth.dto import AuthResultOut, LoginIn, SignupIn, TokenPairOut
from freightmarket.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
INVALID_REFRESH_TOKEN = "Invalid refresh token"


class AuthSessionManager(BaseService):
    """
    Credential lifecycle service (signup / login / refresh / logout).

    Access tokens are stateless: they are verified by signature and expiry
    only. Refresh tokens are single-use; each one is backed by a
    ``refresh_sessions`` row keyed by the SHA-256 digest of the token.
    """

    def __init__(
        self,
        *,
        session: Session,
        token_signer: TokenSigner,
        token_cfg: AuthTokenConfig | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        :param session: SQLAlchemy session for all units of work.
        :param token_signer: Adapter issuing signed JWTs.
        :param token_cfg: Access/refresh lifetimes.
        :param ctx: Optional request-scoped context.
        """
        super().__init__(session=session, ctx=ctx)
        self.tokens = token_signer
        self.cfg = token_cfg or AuthTokenConfig()

    # ------------------------------------------------------------------ #
    # Signup / Login
    # ------------------------------------------------------------------ #

    def signup(self, dto: SignupIn) -> AuthResultOut:
        """
        Register a user and issue their first token pair.

        :raises ConflictError: If the email is already registered (including
            a concurrent registration losing the unique-constraint race).
        """
        try:
            with self.rw_uow() as uow:
                if uow.users.exists_by_email(dto.email):
                    raise ConflictError("User", "Email already registered")
                user = uow.users.model(
                    email=dto.email,
                    password=dto.password,  # model setter hashes
                    full_name=dto.full_name,
                    role=dto.role,
                    company_name=dto.company_name,
                    phone_number=dto.phone_number,
                )
                uow.users.add(user)
                result = self._issue(uow, user)
        except IntegrityError as exc:
            if violates(exc, "uq_users_email") or violates(exc, "users.email"):
                raise ConflictError("User", "Email already registered") from exc
            raise

        logger.info("User registered", extra={"user_id": result.user.id, "role": dto.role.value})
        return result

    def login(self, dto: LoginIn) -> AuthResultOut:
        """
        Authenticate credentials and issue a fresh token pair.

        Unknown email and wrong password fail identically.

        :raises AuthenticationError: If credentials are invalid.
        """
        with self.rw_uow() as uow:
            user = uow.users.authenticate(dto.email, dto.password)
            if user is None:
                raise AuthenticationError(INVALID_CREDENTIALS)
            result = self._issue(uow, user)

        logger.info("User logged in", extra={"user_id": result.user.id})
        return result

    # ------------------------------------------------------------------ #
    # Refresh with rotation
    # ------------------------------------------------------------------ #

    def refresh(self, user_id: int, refresh_token: str) -> AuthResultOut:
        """
        Rotate a refresh token and emit a new token pair.

        The presented session is revoked with a conditional update and that
        revocation is committed before the new pair is issued. Of two
        concurrent refreshes with the same token only one sees an affected
        row; the other fails. If issuing the new pair fails, the old session
        stays revoked and the client must sign in again.

        :param user_id: Subject of the already signature-verified refresh JWT.
        :param refresh_token: Encoded refresh JWT as presented by the client.
        :raises AuthenticationError: If the user is gone or the token's session
            is unknown, revoked, expired or owned by someone else.
        """
        digest = token_digest(refresh_token)
        now = utcnow()

        with self.rw_uow() as uow:
            if uow.users.get(user_id) is None:
                raise AuthenticationError(INVALID_REFRESH_TOKEN)
            revoked = uow.refresh_sessions.revoke(
                digest, now=now, user_id=user_id, require_unexpired=True
            )
            if revoked == 0:
                logger.warning("Refresh rejected", extra={"user_id": user_id})
                raise AuthenticationError(INVALID_REFRESH_TOKEN)

        with self.rw_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise AuthenticationError(INVALID_REFRESH_TOKEN)
            result = self._issue(uow, user)

        logger.info("Refresh token rotated", extra={"user_id": user_id})
        return result

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, refresh_token: str) -> None:
        """Revoke the session of ``refresh_token``. Unknown or revoked tokens are a no-op."""
        with self.rw_uow() as uow:
            affected = uow.refresh_sessions.revoke(token_digest(refresh_token), now=utcnow())
        logger.info("Logout", extra={"revoked": affected})

    def logout_all(self, user_id: int) -> int:
        """
        Revoke every active session of ``user_id`` in a single bulk update.

        Access tokens already issued stay valid until they expire.

        :returns: Number of sessions revoked.
        """
        with self.rw_uow() as uow:
            affected = uow.refresh_sessions.revoke_all_for_user(user_id, now=utcnow())
        logger.info("Logout from all sessions", extra={"user_id": user_id, "revoked": affected})
        return affected

    # ------------------------------------------------------------------ #
    # Maintenance / reads
    # ------------------------------------------------------------------ #

    def prune_expired(self) -> int:
        """Delete expired or revoked sessions. Returns the number of rows removed."""
        with self.rw_uow() as uow:
            deleted = uow.refresh_sessions.prune(now=utcnow())
        logger.info("Pruned refresh sessions", extra={"deleted": deleted})
        return deleted

    def profile(self, user_id: int) -> UserPublic:
        """Return the public projection of ``user_id``.

        :raises NotFoundError: If the user no longer exists.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return to_user_public(user)

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _issue(self, uow: SQLAlchemyUnitOfWork, user: User) -> AuthResultOut:
        """Sign a pair for ``user`` and persist the refresh session in ``uow``."""
        subject = str(user.id)
        claims: dict[str, Any] = {"email": user.email, "role": user.role.value}

        access = self.tokens.sign_access(
            subject=subject, claims=claims, expires_delta=self.cfg.access_ttl
        )
        refresh = self.tokens.sign_refresh(
            subject=subject, claims=claims, expires_delta=self.cfg.refresh_ttl
        )
        uow.refresh_sessions.register(
            user_id=user.id,
            token_digest=token_digest(refresh),
            expires_at=utcnow() + self.cfg.refresh_ttl,
        )
        return AuthResultOut(
            tokens=TokenPairOut(access_token=access, refresh_token=refresh),
            user=to_user_public(user),
        )
