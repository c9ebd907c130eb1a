"""Shipment repository."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from freightmarket.models.shipment import Shipment
from freightmarket.repositories.base import BaseRepository


class ShipmentRepository(BaseRepository[Shipment]):
    """Persistence-only repository for :class:`Shipment`."""

    model = Shipment

    def _filterable_fields(self):
        return {
            "quote_id": Shipment.quote_id,
            "cargo_owner_id": Shipment.cargo_owner_id,
            "transporter_id": Shipment.transporter_id,
        }

    def exists_for_quote(self, quote_id: int) -> bool:
        """Return ``True`` when a shipment already references ``quote_id``."""
        return self.exists(quote_id=quote_id)

    def get_by_quote(self, quote_id: int) -> Shipment | None:
        """Return the shipment created from ``quote_id``, if any."""
        stmt = select(Shipment).where(Shipment.quote_id == quote_id)
        return cast(Shipment | None, self.session.execute(stmt).scalars().first())
