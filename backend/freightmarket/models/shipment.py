"""Shipment snapshot produced when a bid is accepted."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint
from sqlalchemy import Enum as SAEnum
from sqlalchemy import ForeignKey, Index, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from freightmarket.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin, UTCDateTime

if TYPE_CHECKING:
    from .quote import Quote
    from .user import User


class ShipmentStatus(str, Enum):
    """Tracking states of a shipment."""

    PENDING_PICKUP = "PENDING_PICKUP"
    IN_TRANSIT = "IN_TRANSIT"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class Shipment(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """
    Passive record of an accepted deal.

    Cargo, route and measurements are copied from the quote at acceptance
    time so later edits to the quote never rewrite history. ``quote_id`` is
    unique: one quote yields at most one shipment.
    """

    __tablename__ = "shipments"

    quote_id: Mapped[int] = mapped_column(
        ForeignKey("quotes.id", ondelete="RESTRICT"), nullable=False
    )
    cargo_owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )
    transporter_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )

    cargo: Mapped[str] = mapped_column(String(160), nullable=False)
    cargo_description: Mapped[str | None] = mapped_column(Text)
    from_location: Mapped[str] = mapped_column(String(160), nullable=False)
    from_address: Mapped[str | None] = mapped_column(String(255))
    to_location: Mapped[str] = mapped_column(String(160), nullable=False)
    to_address: Mapped[str | None] = mapped_column(String(255))
    weight: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    distance: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    dimensions: Mapped[str | None] = mapped_column(String(120))

    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    eta: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    pickup_date: Mapped[datetime | None] = mapped_column(UTCDateTime())
    status: Mapped[ShipmentStatus] = mapped_column(
        SAEnum(
            ShipmentStatus, name="enum_shipment_status", native_enum=True, create_constraint=True
        ),
        nullable=False,
        default=ShipmentStatus.PENDING_PICKUP,
    )
    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    __table_args__ = (
        UniqueConstraint("quote_id", name="uq_shipments_quote_id"),
        CheckConstraint("progress BETWEEN 0 AND 100", name="progress_range"),
        Index("ix_shipments_cargo_owner_id", "cargo_owner_id"),
        Index("ix_shipments_transporter_id", "transporter_id"),
    )

    quote: Mapped[Quote] = relationship("Quote", back_populates="shipment")
    cargo_owner: Mapped[User] = relationship(
        "User", foreign_keys=[cargo_owner_id], lazy="selectin"
    )
    transporter: Mapped[User] = relationship(
        "User", foreign_keys=[transporter_id], lazy="selectin"
    )
