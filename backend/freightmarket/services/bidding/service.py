"""
BidAcceptanceCoordinator
========================

Bid placement and the atomic quote -> bid -> shipment transition.

Acceptance runs in one read-write unit of work: the quote row is locked with
``SELECT ... FOR UPDATE``, preconditions are checked in a fixed order, then the
bid is flagged, the quote becomes ``ACCEPTED`` and the shipment is inserted.
The unique ``shipments.quote_id`` constraint and the partial unique index on
accepted bids back the lock up; their violations surface as conflicts.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from sqlalchemy.exc import IntegrityError

from freightmarket.core.clock import utcnow
from freightmarket.models.quote import QuoteStatus
from freightmarket.models.shipment import ShipmentStatus
from freightmarket.services._shared.base import BaseService
from freightmarket.services._shared.dto import Principal
from freightmarket.services._shared.errors import (
    AuthorizationError,
    BusinessRuleError,
    ConflictError,
    NotFoundError,
    violates,
)
from freightmarket.services._shared.policies.common import can_bid
from freightmarket.services.quotes._converters import bid_to_out, shipment_to_out
from freightmarket.services.quotes.dto import BidOut, ShipmentOut

from .dto import BidPlaceIn

logger = logging.getLogger(__name__)

QUOTE_NOT_ACTIVE = "This quote is no longer active"
QUOTE_EXPIRED = "This quote has expired"
ALREADY_BID = "You have already placed a bid on this quote"
SHIPMENT_EXISTS = "A shipment already exists for this quote"
ETA_OUT_OF_RANGE = "Estimated delivery date is out of range"
BID_ALREADY_ACCEPTED = "This bid has already been accepted"


class BidAcceptanceCoordinator(BaseService):
    """Place bids on active quotes and turn one accepted bid into a shipment."""

    def create_bid(self, quote_id: int, principal: Principal, dto: BidPlaceIn) -> BidOut:
        """
        Place a bid by ``principal`` on ``quote_id``.

        :raises AuthorizationError: If the caller is not a transporter.
        :raises NotFoundError: If the quote does not exist.
        :raises BusinessRuleError: If the quote is not active, has expired, or
            the transporter already bid on it.
        """
        if not can_bid(principal.role):
            raise AuthorizationError("Only transporters can place bids")

        now = utcnow()
        try:
            with self.rw_uow() as uow:
                quote = uow.quotes.get(quote_id)
                if quote is None:
                    raise NotFoundError("Quote", quote_id)
                if quote.status != QuoteStatus.ACTIVE:
                    raise BusinessRuleError(QUOTE_NOT_ACTIVE)
                if quote.is_expired(now):
                    raise BusinessRuleError(QUOTE_EXPIRED)
                if uow.bids.has_bid_from(quote_id, principal.user_id):
                    raise BusinessRuleError(ALREADY_BID)

                bid = uow.bids.model(
                    quote_id=quote_id,
                    transporter_id=principal.user_id,
                    amount=dto.amount,
                    estimated_days=dto.estimated_days,
                    notes=dto.notes,
                    is_accepted=False,
                )
                uow.bids.add(bid)
                out = bid_to_out(bid)
        except IntegrityError as exc:
            if violates(exc, "uq_bids_quote_transporter") or violates(
                exc, "bids.quote_id, bids.transporter_id"
            ):
                raise BusinessRuleError(ALREADY_BID) from exc
            raise

        logger.info(
            "Bid placed",
            extra={"quote_id": quote_id, "bid_id": out.id, "transporter_id": principal.user_id},
        )
        return out

    def accept_bid(self, quote_id: int, bid_id: int, caller_id: int) -> ShipmentOut:
        """
        Accept ``bid_id`` on ``quote_id`` and create the shipment.

        Preconditions are checked in this order:

        1. the quote exists (``NotFoundError``);
        2. the caller owns it (``AuthorizationError``);
        3. no shipment exists for it yet (``ConflictError``);
        4. the bid belongs to the quote (``NotFoundError``);
        5. the bid is not already accepted (``ConflictError``);
        6. the quote is still effectively ``ACTIVE`` (``BusinessRuleError``).

        Any unique-constraint violation raised while persisting, i.e. a
        concurrent acceptance that slipped past the checks, is reported as
        ``ConflictError``; nothing is persisted in that case.

        :returns: The new shipment with owner and transporter projections.
        """
        now = utcnow()
        try:
            with self.rw_uow() as uow:
                quote = uow.quotes.get_for_update(quote_id)
                if quote is None:
                    raise NotFoundError("Quote", quote_id)
                self.ensure_owner(
                    caller_id, quote.cargo_owner_id, msg="Only the quote owner may accept bids"
                )
                if uow.shipments.exists_for_quote(quote_id):
                    raise ConflictError("Shipment", SHIPMENT_EXISTS)
                bid = uow.bids.get_in_quote(quote_id, bid_id)
                if bid is None:
                    raise NotFoundError("Bid", bid_id)
                if bid.is_accepted:
                    raise ConflictError("Bid", BID_ALREADY_ACCEPTED)
                status = quote.effective_status(now)
                if status != QuoteStatus.ACTIVE:
                    raise BusinessRuleError(
                        QUOTE_EXPIRED if status == QuoteStatus.EXPIRED else QUOTE_NOT_ACTIVE
                    )

                eta = _estimated_arrival(quote.delivery_date, now, bid.estimated_days)

                bid.is_accepted = True
                quote.status = QuoteStatus.ACCEPTED
                shipment = uow.shipments.model(
                    quote_id=quote.id,
                    cargo_owner_id=quote.cargo_owner_id,
                    transporter_id=bid.transporter_id,
                    cargo=quote.cargo,
                    cargo_description=quote.cargo_description,
                    from_location=quote.from_location,
                    from_address=quote.from_address,
                    to_location=quote.to_location,
                    to_address=quote.to_address,
                    weight=quote.weight,
                    distance=quote.distance,
                    dimensions=quote.dimensions,
                    amount=bid.amount,
                    eta=eta,
                    pickup_date=quote.pickup_date,
                    status=ShipmentStatus.PENDING_PICKUP,
                    progress=0,
                )
                uow.shipments.add(shipment)
                out = shipment_to_out(shipment)
        except IntegrityError as exc:
            logger.warning(
                "Concurrent bid acceptance rejected",
                extra={"quote_id": quote_id, "bid_id": bid_id},
            )
            raise ConflictError("Shipment", SHIPMENT_EXISTS) from exc

        logger.info(
            "Bid accepted",
            extra={
                "quote_id": quote_id,
                "bid_id": bid_id,
                "shipment_id": out.id,
                "transporter_id": out.transporter.id,
            },
        )
        return out


def _estimated_arrival(delivery_date: datetime | None, now: datetime, days: int) -> datetime:
    """Quote delivery date when set, otherwise ``now`` plus the bid's transit days."""
    if delivery_date is not None:
        return delivery_date
    try:
        return now + timedelta(days=days)
    except OverflowError as exc:
        raise BusinessRuleError(ETA_OUT_OF_RANGE) from exc
