from __future__ import annotations

from datetime import datetime

from freightmarket.core.clock import utcnow
from freightmarket.models.quote import Bid, Quote
from freightmarket.models.shipment import Shipment
from freightmarket.services._shared.dto import to_user_public

from .dto import BidOut, QuoteOut, ShipmentOut


def bid_to_out(row: Bid) -> BidOut:
    return BidOut(
        id=row.id,
        quote_id=row.quote_id,
        transporter_id=row.transporter_id,
        amount=row.amount,
        estimated_days=row.estimated_days,
        notes=row.notes,
        is_accepted=row.is_accepted,
        platform_fee=row.platform_fee,
        transporter_payout=row.transporter_payout,
        created_at=row.created_at,
        transporter=to_user_public(row.transporter) if row.transporter is not None else None,
    )


def quote_to_out(row: Quote, *, now: datetime | None = None) -> QuoteOut:
    """Convert a quote, resolving the derived ``EXPIRED`` status at ``now``."""
    now = now or utcnow()
    return QuoteOut(
        id=row.id,
        cargo_owner_id=row.cargo_owner_id,
        cargo=row.cargo,
        cargo_type=row.cargo_type,
        cargo_description=row.cargo_description,
        from_location=row.from_location,
        from_address=row.from_address,
        to_location=row.to_location,
        to_address=row.to_address,
        weight=row.weight,
        distance=row.distance,
        dimensions=row.dimensions,
        estimated_value=row.estimated_value,
        insurance_required=row.insurance_required,
        special_instructions=row.special_instructions,
        pickup_date=row.pickup_date,
        delivery_date=row.delivery_date,
        status=row.effective_status(now),
        expires_at=row.expires_at,
        created_at=row.created_at,
        bids=[bid_to_out(b) for b in row.bids],
    )


def shipment_to_out(row: Shipment) -> ShipmentOut:
    return ShipmentOut(
        id=row.id,
        quote_id=row.quote_id,
        cargo=row.cargo,
        cargo_description=row.cargo_description,
        from_location=row.from_location,
        from_address=row.from_address,
        to_location=row.to_location,
        to_address=row.to_address,
        weight=row.weight,
        distance=row.distance,
        dimensions=row.dimensions,
        amount=row.amount,
        eta=row.eta,
        pickup_date=row.pickup_date,
        status=row.status,
        progress=row.progress,
        created_at=row.created_at,
        cargo_owner=to_user_public(row.cargo_owner),
        transporter=to_user_public(row.transporter),
    )
