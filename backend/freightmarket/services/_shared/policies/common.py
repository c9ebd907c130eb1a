from __future__ import annotations

from freightmarket.models.user import Role


def is_owner(*, actor_id, owner_id) -> bool:
    """Return True if the actor owns the resource."""
    return actor_id is not None and str(actor_id) == str(owner_id)


def can_open_quotes(role: Role) -> bool:
    """Cargo owners and admins post quotes; transporters never do."""
    if role is Role.CARGO_OWNER or role is Role.ADMIN:
        return True
    if role is Role.TRANSPORTER:
        return False
    raise ValueError(f"Unhandled role: {role!r}")


def can_bid(role: Role) -> bool:
    """Only transporters place bids."""
    if role is Role.TRANSPORTER:
        return True
    if role is Role.CARGO_OWNER or role is Role.ADMIN:
        return False
    raise ValueError(f"Unhandled role: {role!r}")
