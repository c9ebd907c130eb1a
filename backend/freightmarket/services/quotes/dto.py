from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from freightmarket.models.quote import QuoteStatus
from freightmarket.models.shipment import ShipmentStatus
from freightmarket.services._shared.dto import UserPublic

# ------------------------------ Input DTOs ------------------------------- #


@dataclass(frozen=True, slots=True)
class QuoteOpenIn:
    """
    Fields a cargo owner provides when posting a quote request.

    ``expires_at`` defaults to the configured TTL; ``distance`` stays
    ``None`` when unknown.
    """

    cargo: str
    from_location: str
    to_location: str
    weight: Decimal
    cargo_type: str | None = None
    cargo_description: str | None = None
    from_address: str | None = None
    to_address: str | None = None
    distance: Decimal | None = None
    dimensions: str | None = None
    estimated_value: Decimal | None = None
    insurance_required: bool = False
    special_instructions: str | None = None
    pickup_date: datetime | None = None
    delivery_date: datetime | None = None
    expires_at: datetime | None = None


# ------------------------------ Output DTOs ------------------------------ #


@dataclass(frozen=True, slots=True)
class BidOut:
    """Public projection of a bid, fee split included."""

    id: int
    quote_id: int
    transporter_id: int
    amount: Decimal
    estimated_days: int
    notes: str | None
    is_accepted: bool
    platform_fee: Decimal
    transporter_payout: Decimal
    created_at: datetime
    transporter: UserPublic | None = None


@dataclass(frozen=True, slots=True)
class QuoteOut:
    """Quote as observed at read time; ``status`` is the effective status."""

    id: int
    cargo_owner_id: int
    cargo: str
    cargo_type: str | None
    cargo_description: str | None
    from_location: str
    from_address: str | None
    to_location: str
    to_address: str | None
    weight: Decimal
    distance: Decimal | None
    dimensions: str | None
    estimated_value: Decimal | None
    insurance_required: bool
    special_instructions: str | None
    pickup_date: datetime | None
    delivery_date: datetime | None
    status: QuoteStatus
    expires_at: datetime
    created_at: datetime
    bids: list[BidOut]


@dataclass(frozen=True, slots=True)
class ShipmentOut:
    """Shipment snapshot with both counterparties attached."""

    id: int
    quote_id: int
    cargo: str
    cargo_description: str | None
    from_location: str
    from_address: str | None
    to_location: str
    to_address: str | None
    weight: Decimal
    distance: Decimal | None
    dimensions: str | None
    amount: Decimal
    eta: datetime
    pickup_date: datetime | None
    status: ShipmentStatus
    progress: int
    created_at: datetime
    cargo_owner: UserPublic
    transporter: UserPublic
