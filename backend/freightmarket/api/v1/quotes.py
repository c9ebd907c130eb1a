"""Quote, bid and acceptance endpoints."""

from __future__ import annotations

from flask import Blueprint

from freightmarket.api.deps import (
    bidding_service,
    current_principal,
    json_body,
    json_response,
    quote_board,
    require_auth,
    require_roles,
    timing,
)
from freightmarket.models.user import Role
from freightmarket.schemas import (
    BidCreateSchema,
    BidSchema,
    QuoteCreateSchema,
    QuoteSchema,
    ShipmentSchema,
)
from freightmarket.services import BidPlaceIn, QuoteOpenIn

bp = Blueprint("quotes", __name__, url_prefix="/quotes")

quote_create_schema = QuoteCreateSchema()
quote_schema = QuoteSchema()
bid_create_schema = BidCreateSchema()
bid_schema = BidSchema()
shipment_schema = ShipmentSchema()


@bp.post("")
@require_roles(Role.CARGO_OWNER, Role.ADMIN)
@timing
def open_quote():
    """Post a new quote request."""

    data = quote_create_schema.load(json_body())
    quote = quote_board().open_quote(current_principal(), QuoteOpenIn(**data))
    return json_response({"data": quote_schema.dump(quote)}, status=201)


@bp.get("/<int:quote_id>")
@require_auth
@timing
def get_quote(quote_id: int):
    """Return one quote with its bids, subject to role visibility."""

    quote = quote_board().get_quote(quote_id, current_principal())
    return json_response({"data": quote_schema.dump(quote)})


@bp.delete("/<int:quote_id>")
@require_auth
@timing
def cancel_quote(quote_id: int):
    """Cancel an active quote (owner only)."""

    quote = quote_board().cancel_quote(quote_id, current_principal().user_id)
    return json_response({"data": quote_schema.dump(quote)})


@bp.get("/<int:quote_id>/shipment")
@require_auth
@timing
def get_quote_shipment(quote_id: int):
    """Return the shipment created from the quote, or ``null`` when none exists."""

    shipment = quote_board().get_quote_shipment(quote_id, current_principal().user_id)
    body = shipment_schema.dump(shipment) if shipment is not None else None
    return json_response({"data": body})


@bp.post("/<int:quote_id>/bids")
@require_roles(Role.TRANSPORTER)
@timing
def create_bid(quote_id: int):
    """Place a bid on an active quote."""

    data = bid_create_schema.load(json_body())
    bid = bidding_service().create_bid(quote_id, current_principal(), BidPlaceIn(**data))
    return json_response({"data": bid_schema.dump(bid)}, status=201)


@bp.post("/<int:quote_id>/bids/<int:bid_id>/accept")
@require_auth
@timing
def accept_bid(quote_id: int, bid_id: int):
    """Accept a bid and return the resulting shipment."""

    shipment = bidding_service().accept_bid(quote_id, bid_id, current_principal().user_id)
    return json_response({"data": shipment_schema.dump(shipment)})
