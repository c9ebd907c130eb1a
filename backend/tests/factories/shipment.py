"""Factory for :class:`freightmarket.models.shipment.Shipment`."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

import factory

from freightmarket.core.clock import utcnow
from freightmarket.models.shipment import Shipment, ShipmentStatus
from tests.factories import BaseFactory
from tests.factories.quote import QuoteFactory
from tests.factories.user import TransporterFactory


class ShipmentFactory(BaseFactory):
    """Shipment snapshotting its quote; used to pre-seed conflicting rows."""

    class Meta:
        model = Shipment

    id = None
    quote = factory.SubFactory(QuoteFactory)
    cargo_owner = factory.SelfAttribute("quote.cargo_owner")
    transporter = factory.SubFactory(TransporterFactory)
    cargo = factory.SelfAttribute("quote.cargo")
    from_location = factory.SelfAttribute("quote.from_location")
    to_location = factory.SelfAttribute("quote.to_location")
    weight = factory.SelfAttribute("quote.weight")
    amount = Decimal("1000.00")
    eta = factory.LazyFunction(lambda: utcnow() + timedelta(days=3))
    status = ShipmentStatus.PENDING_PICKUP
    progress = 0
