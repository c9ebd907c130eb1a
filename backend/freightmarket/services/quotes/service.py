from __future__ import annotations

import logging
from datetime import timedelta

from sqlalchemy.orm import Session

from freightmarket.core.clock import as_utc, utcnow
from freightmarket.models.quote import QuoteStatus
from freightmarket.models.user import Role
from freightmarket.services._shared.base import BaseService, ServiceContext
from freightmarket.services._shared.dto import Principal
from freightmarket.services._shared.errors import (
    AuthorizationError,
    BusinessRuleError,
    NotFoundError,
)
from freightmarket.services._shared.policies.common import can_open_quotes

from ._converters import quote_to_out, shipment_to_out
from .dto import QuoteOpenIn, QuoteOut, ShipmentOut

logger = logging.getLogger(__name__)

DEFAULT_QUOTE_TTL = timedelta(days=7)


class QuoteBoard(BaseService):
    """Quote lifecycle: open, cancel and role-aware reads.

    The derived ``EXPIRED`` status is computed at read time and never stored.
    """

    def __init__(
        self,
        *,
        session: Session,
        quote_ttl: timedelta = DEFAULT_QUOTE_TTL,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(session=session, ctx=ctx)
        self.quote_ttl = quote_ttl

    def open_quote(self, principal: Principal, dto: QuoteOpenIn) -> QuoteOut:
        """Post a new ``ACTIVE`` quote owned by ``principal``.

        :raises AuthorizationError: If the role may not post quotes.
        :raises BusinessRuleError: If ``expires_at`` is already in the past.
        """
        if not can_open_quotes(principal.role):
            raise AuthorizationError("Only cargo owners can create quotes")

        now = utcnow()
        expires_at = as_utc(dto.expires_at) or now + self.quote_ttl
        if expires_at <= now:
            raise BusinessRuleError("Expiry must be in the future")

        with self.rw_uow() as uow:
            quote = uow.quotes.model(
                cargo_owner_id=principal.user_id,
                cargo=dto.cargo,
                cargo_type=dto.cargo_type,
                cargo_description=dto.cargo_description,
                from_location=dto.from_location,
                from_address=dto.from_address,
                to_location=dto.to_location,
                to_address=dto.to_address,
                weight=dto.weight,
                distance=dto.distance,
                dimensions=dto.dimensions,
                estimated_value=dto.estimated_value,
                insurance_required=dto.insurance_required,
                special_instructions=dto.special_instructions,
                pickup_date=as_utc(dto.pickup_date),
                delivery_date=as_utc(dto.delivery_date),
                status=QuoteStatus.ACTIVE,
                expires_at=expires_at,
            )
            uow.quotes.add(quote)
            out = quote_to_out(quote, now=now)

        logger.info(
            "Quote opened", extra={"quote_id": out.id, "cargo_owner_id": principal.user_id}
        )
        return out

    def cancel_quote(self, quote_id: int, caller_id: int) -> QuoteOut:
        """Cancel an active quote. Owner only.

        :raises NotFoundError: If the quote does not exist.
        :raises AuthorizationError: If the caller is not the owner.
        :raises BusinessRuleError: If the quote is no longer active (accepted,
            cancelled or expired).
        """
        now = utcnow()
        with self.rw_uow() as uow:
            quote = uow.quotes.get_for_update(quote_id)
            if quote is None:
                raise NotFoundError("Quote", quote_id)
            self.ensure_owner(caller_id, quote.cargo_owner_id, msg="Access denied")
            if quote.effective_status(now) != QuoteStatus.ACTIVE:
                raise BusinessRuleError("Only active quotes can be cancelled")
            quote.status = QuoteStatus.CANCELLED
            uow.quotes.flush()
            out = quote_to_out(quote, now=now)

        logger.info("Quote cancelled", extra={"quote_id": quote_id, "cargo_owner_id": caller_id})
        return out

    def get_quote(self, quote_id: int, principal: Principal) -> QuoteOut:
        """Read one quote with its bids, subject to role visibility.

        * cargo owners see only their own quotes;
        * transporters see only quotes that are still active;
        * admins see everything.
        """
        now = utcnow()
        with self.ro_uow() as uow:
            quote = uow.quotes.get(quote_id)
            if quote is None:
                raise NotFoundError("Quote", quote_id)

            role = principal.role
            if role is Role.CARGO_OWNER:
                self.ensure_owner(principal.user_id, quote.cargo_owner_id, msg="Access denied")
            elif role is Role.TRANSPORTER:
                if quote.effective_status(now) != QuoteStatus.ACTIVE:
                    raise AuthorizationError("This quote is no longer active")
            elif role is Role.ADMIN:
                pass
            else:
                raise AuthorizationError("Access denied")

            return quote_to_out(quote, now=now)

    def get_quote_shipment(self, quote_id: int, caller_id: int) -> ShipmentOut | None:
        """Return the shipment created from ``quote_id``, or ``None``. Owner only."""
        with self.ro_uow() as uow:
            quote = uow.quotes.get(quote_id)
            if quote is None:
                raise NotFoundError("Quote", quote_id)
            self.ensure_owner(caller_id, quote.cargo_owner_id, msg="Access denied")
            shipment = uow.shipments.get_by_quote(quote_id)
            return shipment_to_out(shipment) if shipment is not None else None
