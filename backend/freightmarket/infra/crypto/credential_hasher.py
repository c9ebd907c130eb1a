"""Password hashing and refresh-token digests."""

from __future__ import annotations

import hashlib

from werkzeug.security import check_password_hash, generate_password_hash


def hash_password(raw: str) -> str:
    """
    Produce a salted, adaptive hash of ``raw``.

    :param raw: Plain text password.
    :type raw: str
    :returns: Self-describing Werkzeug hash (method, salt and digest).
    :rtype: str
    :raises ValueError: If ``raw`` is empty or not a string.
    """
    if not isinstance(raw, str) or not raw:
        raise ValueError("Password must be a non-empty string.")
    return generate_password_hash(raw)


def verify_password(stored_hash: str | None, raw: str) -> bool:
    """
    Check ``raw`` against a hash produced by :func:`hash_password`.

    :param stored_hash: Persisted hash, may be empty for legacy rows.
    :param raw: Plain text candidate.
    :returns: ``True`` on match; ``False`` otherwise (never raises on mismatch).
    :rtype: bool
    """
    if not stored_hash or not isinstance(raw, str):
        return False
    # ``check_password_hash`` is not typed and returns ``Any``; coerce to bool for mypy.
    return bool(check_password_hash(stored_hash, raw))


def token_digest(token: str) -> str:
    """
    Return the SHA-256 hex digest of a refresh token.

    Only digests are persisted; the plaintext credential never reaches storage.

    :param token: Encoded refresh JWT.
    :returns: 64-character lowercase hex string.
    """
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


__all__ = ["hash_password", "verify_password", "token_digest"]
