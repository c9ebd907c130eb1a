"""Unit tests for role and ownership policies."""

from __future__ import annotations

import pytest

from freightmarket.models import Role
from freightmarket.services._shared.policies.common import can_bid, can_open_quotes, is_owner


@pytest.mark.parametrize(
    ("role", "opens", "bids"),
    [
        (Role.CARGO_OWNER, True, False),
        (Role.TRANSPORTER, False, True),
        (Role.ADMIN, True, False),
    ],
)
def test_role_capabilities(role, opens, bids):
    assert can_open_quotes(role) is opens
    assert can_bid(role) is bids


@pytest.mark.parametrize("check", [can_open_quotes, can_bid])
def test_unknown_role_is_rejected(check):
    with pytest.raises(ValueError, match="Unhandled role"):
        check("SUPERUSER")


def test_is_owner():
    assert is_owner(actor_id=7, owner_id=7)
    assert is_owner(actor_id="7", owner_id=7)
    assert not is_owner(actor_id=8, owner_id=7)
    assert not is_owner(actor_id=None, owner_id=7)
