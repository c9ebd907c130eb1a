"""Quote requests and the bids transporters place on them."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint
from sqlalchemy import Enum as SAEnum
from sqlalchemy import ForeignKey, Index, Integer, Numeric, String, Text, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from freightmarket.core.clock import utcnow
from freightmarket.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin, UTCDateTime

if TYPE_CHECKING:
    from .shipment import Shipment
    from .user import User

PLATFORM_FEE_RATE = Decimal("0.20")
_CENT = Decimal("0.01")


class QuoteStatus(str, Enum):
    """Stored quote statuses.

    ``EXPIRED`` is never persisted; it is derived at read time from
    ``expires_at`` (see :meth:`Quote.effective_status`).
    """

    ACTIVE = "ACTIVE"
    ACCEPTED = "ACCEPTED"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"


class Quote(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """
    Shipping request posted by a cargo owner.

    Notes
    -----
    - ``ACTIVE -> ACCEPTED`` via bid acceptance, ``ACTIVE -> CANCELLED`` via
      owner cancellation. Both targets are terminal.
    - ``distance`` is nullable: ``None`` means the distance is unknown.
    """

    __tablename__ = "quotes"

    cargo_owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    cargo: Mapped[str] = mapped_column(String(160), nullable=False)
    cargo_type: Mapped[str | None] = mapped_column(String(80))
    cargo_description: Mapped[str | None] = mapped_column(Text)
    from_location: Mapped[str] = mapped_column(String(160), nullable=False)
    from_address: Mapped[str | None] = mapped_column(String(255))
    to_location: Mapped[str] = mapped_column(String(160), nullable=False)
    to_address: Mapped[str | None] = mapped_column(String(255))
    weight: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    distance: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    dimensions: Mapped[str | None] = mapped_column(String(120))
    estimated_value: Mapped[Decimal | None] = mapped_column(Numeric(14, 2))
    insurance_required: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="false"
    )
    special_instructions: Mapped[str | None] = mapped_column(Text)
    pickup_date: Mapped[datetime | None] = mapped_column(UTCDateTime())
    delivery_date: Mapped[datetime | None] = mapped_column(UTCDateTime())
    status: Mapped[QuoteStatus] = mapped_column(
        SAEnum(QuoteStatus, name="enum_quote_status", native_enum=True, create_constraint=True),
        nullable=False,
        default=QuoteStatus.ACTIVE,
    )
    expires_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)

    __table_args__ = (
        CheckConstraint("weight > 0", name="weight_positive"),
        CheckConstraint("status <> 'EXPIRED'", name="status_not_expired"),
        Index("ix_quotes_cargo_owner_id", "cargo_owner_id"),
        Index("ix_quotes_status_expires_at", "status", "expires_at"),
    )

    # Relationships
    cargo_owner: Mapped[User] = relationship("User", passive_deletes=True, lazy="selectin")
    bids: Mapped[list[Bid]] = relationship(
        "Bid",
        back_populates="quote",
        cascade="all, delete-orphan",
        order_by="Bid.created_at",
        lazy="selectin",
    )
    shipment: Mapped[Shipment | None] = relationship(
        "Shipment", back_populates="quote", uselist=False, lazy="selectin"
    )

    def is_expired(self, now: datetime | None = None) -> bool:
        """Return ``True`` once ``expires_at`` lies in the past."""
        return self.expires_at < (now or utcnow())

    def effective_status(self, now: datetime | None = None) -> QuoteStatus:
        """
        Status as observed at ``now``.

        :returns: ``EXPIRED`` for an ``ACTIVE`` quote past its expiry, the
            stored status otherwise.
        """
        if self.status == QuoteStatus.ACTIVE and self.is_expired(now):
            return QuoteStatus.EXPIRED
        return self.status


class Bid(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """
    Transporter offer on a quote.

    At most one bid per (quote, transporter); at most one accepted bid per
    quote (partial unique index).
    """

    __tablename__ = "bids"

    quote_id: Mapped[int] = mapped_column(
        ForeignKey("quotes.id", ondelete="CASCADE"), nullable=False
    )
    transporter_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    estimated_days: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
    is_accepted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="false"
    )

    __table_args__ = (
        UniqueConstraint("quote_id", "transporter_id", name="uq_bids_quote_transporter"),
        CheckConstraint("amount > 0", name="amount_positive"),
        CheckConstraint("estimated_days >= 1", name="estimated_days_positive"),
        Index(
            "uq_bids_quote_accepted",
            "quote_id",
            unique=True,
            postgresql_where=text("is_accepted"),
            sqlite_where=text("is_accepted = 1"),
        ),
        Index("ix_bids_transporter_id", "transporter_id"),
    )

    quote: Mapped[Quote] = relationship("Quote", back_populates="bids", passive_deletes=True)
    transporter: Mapped[User] = relationship("User", passive_deletes=True, lazy="selectin")

    @property
    def platform_fee(self) -> Decimal:
        """Flat platform commission on the bid amount."""
        return (Decimal(self.amount) * PLATFORM_FEE_RATE).quantize(_CENT)

    @property
    def transporter_payout(self) -> Decimal:
        """Amount left for the transporter after the platform fee."""
        return Decimal(self.amount) - self.platform_fee
