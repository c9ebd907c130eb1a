from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class BidPlaceIn:
    """
    Input DTO for a transporter's bid.

    :param amount: Offered price (> 0).
    :param estimated_days: Estimated transit time in days (>= 1).
    :param notes: Optional free text.
    """

    amount: Decimal
    estimated_days: int
    notes: str | None = None
