"""Unit tests for QuoteBoard: opening, cancelling and role-aware reads."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

import pytest

from freightmarket.core.clock import utcnow
from freightmarket.models import QuoteStatus
from freightmarket.services import QuoteBoard, QuoteOpenIn
from freightmarket.services._shared.errors import (
    AuthorizationError,
    BusinessRuleError,
    NotFoundError,
)
from tests.factories.quote import BidFactory, QuoteFactory
from tests.factories.shipment import ShipmentFactory
from tests.factories.user import AdminFactory, TransporterFactory, UserFactory


@pytest.fixture()
def board(session) -> QuoteBoard:
    return QuoteBoard(session=session, quote_ttl=timedelta(days=7))


def _open_dto(**overrides) -> QuoteOpenIn:
    fields = {
        "cargo": "Steel coils",
        "from_location": "Bilbao",
        "to_location": "Madrid",
        "weight": Decimal("18000.00"),
    }
    fields.update(overrides)
    return QuoteOpenIn(**fields)


class TestOpenQuote:
    def test_owner_opens_active_quote_with_default_ttl(self, board, principal_for):
        owner = UserFactory()
        before = utcnow()

        out = board.open_quote(principal_for(owner), _open_dto())

        assert out.status is QuoteStatus.ACTIVE
        assert out.cargo_owner_id == owner.id
        assert out.bids == []
        assert out.distance is None
        assert before + timedelta(days=7) <= out.expires_at <= utcnow() + timedelta(days=7)

    def test_explicit_expiry_is_kept(self, board, principal_for):
        owner = UserFactory()
        expires_at = utcnow() + timedelta(hours=6)

        out = board.open_quote(principal_for(owner), _open_dto(expires_at=expires_at))

        assert out.expires_at == expires_at

    def test_expiry_in_the_past_is_rejected(self, board, principal_for):
        owner = UserFactory()
        with pytest.raises(BusinessRuleError):
            board.open_quote(
                principal_for(owner), _open_dto(expires_at=utcnow() - timedelta(minutes=1))
            )

    def test_admin_may_open_quotes(self, board, principal_for):
        admin = AdminFactory()
        assert board.open_quote(principal_for(admin), _open_dto()).cargo_owner_id == admin.id

    def test_transporter_may_not_open_quotes(self, board, principal_for):
        with pytest.raises(AuthorizationError):
            board.open_quote(principal_for(TransporterFactory()), _open_dto())

    def test_quote_expires_once_ttl_elapses(self, board, principal_for, freeze_time):
        owner = UserFactory()
        with freeze_time("2030-01-01 12:00:00"):
            out = board.open_quote(principal_for(owner), _open_dto())
        with freeze_time("2030-01-08 12:00:01"):
            assert board.get_quote(out.id, principal_for(owner)).status is QuoteStatus.EXPIRED


class TestCancelQuote:
    def test_owner_cancels_active_quote(self, board):
        quote = QuoteFactory()

        out = board.cancel_quote(quote.id, quote.cargo_owner_id)

        assert out.status is QuoteStatus.CANCELLED

    def test_non_owner_is_forbidden(self, board):
        quote = QuoteFactory()
        with pytest.raises(AuthorizationError):
            board.cancel_quote(quote.id, UserFactory().id)

    @pytest.mark.parametrize(
        "factory_kwargs",
        [{"status": QuoteStatus.ACCEPTED}, {"status": QuoteStatus.CANCELLED}, {"expired": True}],
    )
    def test_only_active_quotes_can_be_cancelled(self, board, factory_kwargs):
        quote = QuoteFactory(**factory_kwargs)
        with pytest.raises(BusinessRuleError, match="Only active quotes"):
            board.cancel_quote(quote.id, quote.cargo_owner_id)

    def test_missing_quote(self, board):
        with pytest.raises(NotFoundError):
            board.cancel_quote(999_999, 1)


class TestGetQuote:
    def test_owner_sees_own_quote_with_bids(self, board, principal_for):
        quote = QuoteFactory()
        BidFactory.create_batch(2, quote=quote)

        out = board.get_quote(quote.id, principal_for(quote.cargo_owner))

        assert len(out.bids) == 2
        assert all(bid.transporter is not None for bid in out.bids)
        assert out.bids[0].platform_fee == Decimal("200.00")

    def test_other_cargo_owner_is_forbidden(self, board, principal_for):
        quote = QuoteFactory()
        with pytest.raises(AuthorizationError):
            board.get_quote(quote.id, principal_for(UserFactory()))

    def test_transporter_sees_active_quote(self, board, principal_for):
        quote = QuoteFactory()
        out = board.get_quote(quote.id, principal_for(TransporterFactory()))
        assert out.id == quote.id

    @pytest.mark.parametrize(
        "factory_kwargs",
        [{"status": QuoteStatus.ACCEPTED}, {"status": QuoteStatus.CANCELLED}, {"expired": True}],
    )
    def test_transporter_cannot_see_inactive_quote(self, board, principal_for, factory_kwargs):
        quote = QuoteFactory(**factory_kwargs)
        with pytest.raises(AuthorizationError, match="no longer active"):
            board.get_quote(quote.id, principal_for(TransporterFactory()))

    def test_admin_sees_everything(self, board, principal_for):
        quote = QuoteFactory(status=QuoteStatus.CANCELLED)
        out = board.get_quote(quote.id, principal_for(AdminFactory()))
        assert out.status is QuoteStatus.CANCELLED

    def test_expired_is_reported_not_stored(self, board, principal_for, session):
        quote = QuoteFactory(expired=True)

        out = board.get_quote(quote.id, principal_for(quote.cargo_owner))

        assert out.status is QuoteStatus.EXPIRED
        session.expire_all()
        assert quote.status is QuoteStatus.ACTIVE

    def test_missing_quote(self, board, principal_for):
        with pytest.raises(NotFoundError):
            board.get_quote(999_999, principal_for(AdminFactory()))


class TestGetQuoteShipment:
    def test_none_before_acceptance(self, board):
        quote = QuoteFactory()
        assert board.get_quote_shipment(quote.id, quote.cargo_owner_id) is None

    def test_owner_reads_shipment(self, board):
        shipment = ShipmentFactory()
        out = board.get_quote_shipment(shipment.quote_id, shipment.cargo_owner_id)
        assert out.id == shipment.id
        assert out.transporter.id == shipment.transporter_id

    def test_non_owner_is_forbidden(self, board):
        shipment = ShipmentFactory()
        with pytest.raises(AuthorizationError):
            board.get_quote_shipment(shipment.quote_id, shipment.transporter_id)
