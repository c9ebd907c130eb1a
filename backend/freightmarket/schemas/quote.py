"""Quote, bid and shipment schemas."""

from __future__ import annotations

from datetime import timezone
from decimal import Decimal

from marshmallow import Schema, fields, validate

from freightmarket.models.quote import QuoteStatus
from freightmarket.models.shipment import ShipmentStatus

from .user import UserPublicSchema

# Largest values the Numeric(12, 2) and Numeric(14, 2) columns hold.
MAX_MONEY = Decimal("9999999999.99")
MAX_DECLARED_VALUE = Decimal("999999999999.99")
MAX_ESTIMATED_DAYS = 365

_POSITIVE = validate.Range(min=0, max=MAX_MONEY, min_inclusive=False)


class QuoteCreateSchema(Schema):
    """Payload for posting a quote request."""

    cargo = fields.String(required=True, validate=validate.Length(min=1, max=160))
    cargo_type = fields.String(
        load_default=None, data_key="cargoType", validate=validate.Length(max=80)
    )
    cargo_description = fields.String(load_default=None, data_key="cargoDescription")
    from_location = fields.String(
        required=True, data_key="fromLocation", validate=validate.Length(min=1, max=160)
    )
    from_address = fields.String(
        load_default=None, data_key="fromAddress", validate=validate.Length(max=255)
    )
    to_location = fields.String(
        required=True, data_key="toLocation", validate=validate.Length(min=1, max=160)
    )
    to_address = fields.String(
        load_default=None, data_key="toAddress", validate=validate.Length(max=255)
    )
    weight = fields.Decimal(required=True, places=2, validate=_POSITIVE)
    distance = fields.Decimal(
        load_default=None,
        places=2,
        validate=validate.Range(min=0, max=MAX_MONEY),
        allow_none=True,
    )
    dimensions = fields.String(load_default=None, validate=validate.Length(max=120))
    estimated_value = fields.Decimal(
        load_default=None,
        places=2,
        data_key="estimatedValue",
        validate=validate.Range(min=0, max=MAX_DECLARED_VALUE),
        allow_none=True,
    )
    insurance_required = fields.Boolean(load_default=False, data_key="insuranceRequired")
    special_instructions = fields.String(load_default=None, data_key="specialInstructions")
    pickup_date = fields.AwareDateTime(
        load_default=None, data_key="pickupDate", default_timezone=timezone.utc, allow_none=True
    )
    delivery_date = fields.AwareDateTime(
        load_default=None, data_key="deliveryDate", default_timezone=timezone.utc, allow_none=True
    )
    expires_at = fields.AwareDateTime(
        load_default=None, data_key="expiresAt", default_timezone=timezone.utc, allow_none=True
    )


class BidCreateSchema(Schema):
    """Payload for placing a bid."""

    amount = fields.Decimal(required=True, places=2, validate=_POSITIVE)
    estimated_days = fields.Integer(
        required=True,
        data_key="estimatedDays",
        validate=validate.Range(min=1, max=MAX_ESTIMATED_DAYS),
    )
    notes = fields.String(load_default=None, validate=validate.Length(max=2000))


class BidSchema(Schema):
    """Representation of a bid, including the platform fee split."""

    id = fields.Integer(required=True)
    quote_id = fields.Integer(data_key="quoteId")
    transporter_id = fields.Integer(data_key="transporterId")
    amount = fields.Decimal(as_string=True)
    estimated_days = fields.Integer(data_key="estimatedDays")
    notes = fields.String(allow_none=True)
    is_accepted = fields.Boolean(data_key="isAccepted")
    platform_fee = fields.Decimal(as_string=True, data_key="platformFee")
    transporter_payout = fields.Decimal(as_string=True, data_key="transporterPayout")
    created_at = fields.DateTime(data_key="createdAt")
    transporter = fields.Nested(UserPublicSchema, allow_none=True)


class QuoteSchema(Schema):
    """Representation of a quote; ``status`` is the effective (read-time) status."""

    id = fields.Integer(required=True)
    cargo_owner_id = fields.Integer(data_key="cargoOwnerId")
    cargo = fields.String()
    cargo_type = fields.String(allow_none=True, data_key="cargoType")
    cargo_description = fields.String(allow_none=True, data_key="cargoDescription")
    from_location = fields.String(data_key="fromLocation")
    from_address = fields.String(allow_none=True, data_key="fromAddress")
    to_location = fields.String(data_key="toLocation")
    to_address = fields.String(allow_none=True, data_key="toAddress")
    weight = fields.Decimal(as_string=True)
    distance = fields.Decimal(as_string=True, allow_none=True)
    dimensions = fields.String(allow_none=True)
    estimated_value = fields.Decimal(as_string=True, allow_none=True, data_key="estimatedValue")
    insurance_required = fields.Boolean(data_key="insuranceRequired")
    special_instructions = fields.String(allow_none=True, data_key="specialInstructions")
    pickup_date = fields.DateTime(allow_none=True, data_key="pickupDate")
    delivery_date = fields.DateTime(allow_none=True, data_key="deliveryDate")
    status = fields.Enum(QuoteStatus, by_value=True)
    expires_at = fields.DateTime(data_key="expiresAt")
    created_at = fields.DateTime(data_key="createdAt")
    bids = fields.List(fields.Nested(BidSchema))


class ShipmentSchema(Schema):
    """Representation of a shipment with both counterparties."""

    id = fields.Integer(required=True)
    quote_id = fields.Integer(data_key="quoteId")
    cargo = fields.String()
    cargo_description = fields.String(allow_none=True, data_key="cargoDescription")
    from_location = fields.String(data_key="fromLocation")
    from_address = fields.String(allow_none=True, data_key="fromAddress")
    to_location = fields.String(data_key="toLocation")
    to_address = fields.String(allow_none=True, data_key="toAddress")
    weight = fields.Decimal(as_string=True)
    distance = fields.Decimal(as_string=True, allow_none=True)
    dimensions = fields.String(allow_none=True)
    amount = fields.Decimal(as_string=True)
    eta = fields.DateTime()
    pickup_date = fields.DateTime(allow_none=True, data_key="pickupDate")
    status = fields.Enum(ShipmentStatus, by_value=True)
    progress = fields.Integer()
    created_at = fields.DateTime(data_key="createdAt")
    cargo_owner = fields.Nested(UserPublicSchema, data_key="cargoOwner")
    transporter = fields.Nested(UserPublicSchema)
