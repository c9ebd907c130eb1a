"""Quote and bid repositories."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from freightmarket.models.quote import Bid, Quote
from freightmarket.repositories.base import BaseRepository


class QuoteRepository(BaseRepository[Quote]):
    """Persistence-only repository for :class:`Quote`."""

    model = Quote


class BidRepository(BaseRepository[Bid]):
    """Persistence-only repository for :class:`Bid`."""

    model = Bid

    def _filterable_fields(self):
        return {
            "quote_id": Bid.quote_id,
            "transporter_id": Bid.transporter_id,
        }

    def get_in_quote(self, quote_id: int, bid_id: int) -> Bid | None:
        """Return bid ``bid_id`` only if it belongs to quote ``quote_id``."""
        stmt = select(Bid).where(Bid.id == bid_id, Bid.quote_id == quote_id)
        return cast(Bid | None, self.session.execute(stmt).scalars().first())

    def has_bid_from(self, quote_id: int, transporter_id: int) -> bool:
        """Return ``True`` when ``transporter_id`` already bid on ``quote_id``."""
        return self.exists(quote_id=quote_id, transporter_id=transporter_id)
