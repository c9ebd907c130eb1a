from freightmarket.models.quote import Bid, Quote, QuoteStatus
from freightmarket.models.session import RefreshSession
from freightmarket.models.shipment import Shipment, ShipmentStatus
from freightmarket.models.user import Role, User

__all__ = [
    "Bid",
    "Quote",
    "QuoteStatus",
    "RefreshSession",
    "Role",
    "Shipment",
    "ShipmentStatus",
    "User",
]
