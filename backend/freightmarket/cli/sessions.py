"""Flask CLI commands for refresh-session maintenance."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy.exc import SQLAlchemyError

from freightmarket.core.extensions import db
from freightmarket.infra.jwt.flask_jwt_token_signer import FlaskJWTTokenSigner
from freightmarket.services import AuthSessionManager
from freightmarket.services._shared.ports import AuthTokenConfig

LOGGER = logging.getLogger(__name__)


@click.group("sessions")
def sessions_cli() -> None:
    """Refresh-session maintenance commands."""


@sessions_cli.command("prune")
@with_appcontext
def prune_command() -> None:
    """Delete refresh sessions that are expired or revoked."""
    manager = AuthSessionManager(
        session=db.session,
        token_signer=FlaskJWTTokenSigner(),
        token_cfg=AuthTokenConfig.from_mapping(current_app.config),
    )
    try:
        deleted = manager.prune_expired()
    except SQLAlchemyError as exc:  # pragma: no cover - CLI safeguard
        raise click.ClickException(f"Pruning failed: {exc}") from exc
    LOGGER.info("sessions.prune", extra={"deleted": deleted})
    click.echo(f"Pruned {deleted} refresh session(s).")
