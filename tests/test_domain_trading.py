"""
Tests for the trading domain layer.

Tests domain entities, value conversion and error classes in isolation.
No external dependencies or IO required.
"""

from decimal import Decimal

import pytest

from sharetrade.domain.trading.entities import (
    Bid,
    RequestStatus,
    SellRequest,
    Trade,
    TradeStatus,
    same_address,
)
from sharetrade.domain.trading.errors import (
    InsufficientHoldingError,
    InvalidAmountError,
    InvalidBidderError,
    InvalidQuantityError,
    InvalidTransitionError,
    TradingDomainError,
    TransactionRejectedError,
)
from sharetrade.domain.trading.units import (
    BASE_UNITS_PER_DISPLAY_UNIT,
    from_base_units,
    to_base_units,
)

SELLER = "0x" + "a" * 40
BIDDER = "0x" + "b" * 40
OTHER = "0x" + "c" * 40


def _open_request(*bids: Bid) -> SellRequest:
    return SellRequest(request_id=1, seller=SELLER, quantity=2, bids=tuple(bids))


class TestUnitConversion:
    """Display amount <-> base unit conversion."""

    def test_whole_amount(self) -> None:
        assert to_base_units("2") == 2 * BASE_UNITS_PER_DISPLAY_UNIT

    def test_fractional_amount(self) -> None:
        assert to_base_units("1.5") == 1_500_000_000_000_000_000

    def test_int_and_decimal_inputs(self) -> None:
        assert to_base_units(3) == 3 * 10**18
        assert to_base_units(Decimal("0.25")) == 25 * 10**16

    def test_smallest_unit(self) -> None:
        assert to_base_units("0.000000000000000001") == 1

    @pytest.mark.parametrize("display", ["2", "1.5", "0.000000000000000001", "123456789.987654321"])
    def test_round_trip_is_exact(self, display: str) -> None:
        assert from_base_units(to_base_units(display)) == display

    def test_large_values_keep_precision(self) -> None:
        display = "98765432109876543210.123456789012345678"
        assert from_base_units(to_base_units(display)) == display

    def test_trailing_zeros_normalised(self) -> None:
        assert from_base_units(to_base_units("2.500")) == "2.5"
        assert from_base_units(0) == "0"

    @pytest.mark.parametrize(
        "bad", ["", "abc", "-1", "1.0000000000000000001", "NaN", "Infinity", 1.5, True]
    )
    def test_invalid_amounts_rejected(self, bad: object) -> None:
        with pytest.raises(InvalidAmountError):
            to_base_units(bad)


class TestSellRequestTransitions:
    """State machine of a sell request."""

    def test_new_request_is_open(self) -> None:
        request = _open_request()
        assert request.status is RequestStatus.OPEN
        assert request.is_open
        assert request.bids == ()

    def test_bids_accumulate_while_open(self) -> None:
        request = _open_request()
        request = request.with_bid(Bid(request_id=1, bidder=BIDDER, amount=10))
        request = request.with_bid(Bid(request_id=1, bidder=OTHER, amount=20))
        assert request.is_open
        assert [b.bidder for b in request.bids] == [BIDDER, OTHER]

    def test_with_bid_returns_new_record(self) -> None:
        request = _open_request()
        updated = request.with_bid(Bid(request_id=1, bidder=BIDDER, amount=10))
        assert request.bids == ()
        assert len(updated.bids) == 1

    def test_confirm_buyer_flags_winning_bid(self) -> None:
        request = _open_request(
            Bid(request_id=1, bidder=BIDDER, amount=10),
            Bid(request_id=1, bidder=OTHER, amount=20),
        )
        confirmed = request.confirm_buyer(OTHER)
        assert confirmed.status is RequestStatus.BUYER_CONFIRMED
        assert confirmed.buyer == OTHER
        assert [b.confirmed for b in confirmed.bids] == [False, True]

    def test_confirm_unknown_bidder_rejected(self) -> None:
        request = _open_request(Bid(request_id=1, bidder=BIDDER, amount=10))
        with pytest.raises(InvalidTransitionError):
            request.confirm_buyer(OTHER)

    def test_bid_after_confirmation_rejected(self) -> None:
        request = _open_request(Bid(request_id=1, bidder=BIDDER, amount=10))
        confirmed = request.confirm_buyer(BIDDER)
        with pytest.raises(InvalidTransitionError):
            confirmed.with_bid(Bid(request_id=1, bidder=OTHER, amount=99))

    def test_complete_requires_confirmed_buyer(self) -> None:
        with pytest.raises(InvalidTransitionError):
            _open_request().complete()

    def test_full_lifecycle(self) -> None:
        request = _open_request(Bid(request_id=1, bidder=BIDDER, amount=10))
        done = request.confirm_buyer(BIDDER).complete()
        assert done.status is RequestStatus.COMPLETED
        with pytest.raises(InvalidTransitionError):
            done.complete()

    def test_cancelled_request_is_terminal(self) -> None:
        request = SellRequest(
            request_id=1,
            seller=SELLER,
            quantity=2,
            status=RequestStatus.CANCELLED,
            bids=(Bid(request_id=1, bidder=BIDDER, amount=10),),
        )
        assert not request.is_open
        with pytest.raises(InvalidTransitionError):
            request.with_bid(Bid(request_id=1, bidder=OTHER, amount=20))
        with pytest.raises(InvalidTransitionError):
            request.confirm_buyer(BIDDER)

    def test_bidder_lookup_ignores_case(self) -> None:
        request = _open_request(Bid(request_id=1, bidder=BIDDER, amount=10))
        assert request.bid_from(BIDDER.upper().replace("0X", "0x")) is not None
        assert request.bid_from(OTHER) is None

    def test_bid_display_amount(self) -> None:
        bid = Bid(request_id=1, bidder=BIDDER, amount=to_base_units("1.5"))
        assert bid.display_amount == "1.5"


class TestTradeTransitions:
    """State machine of a trade."""

    def test_trade_completes_once(self) -> None:
        trade = Trade(trade_id=7, request_id=1, buyer=BIDDER, amount=10)
        assert trade.status is TradeStatus.BUYER_CONFIRMED
        done = trade.complete()
        assert done.status is TradeStatus.COMPLETED
        with pytest.raises(InvalidTransitionError):
            done.complete()


class TestDomainErrors:
    """Tests for domain error classes."""

    def test_all_errors_share_base(self) -> None:
        assert issubclass(InvalidQuantityError, TradingDomainError)
        assert issubclass(TransactionRejectedError, TradingDomainError)

    def test_invalid_quantity_message(self) -> None:
        exc = InvalidQuantityError(9, 1, 5)
        assert "9" in exc.message
        assert "between 1 and 5" in exc.message

    def test_insufficient_holding_message(self) -> None:
        exc = InsufficientHoldingError(requested=4, available=2)
        assert exc.requested == 4
        assert "available 2" in exc.message

    def test_invalid_bidder_keeps_address(self) -> None:
        exc = InvalidBidderError(3, OTHER)
        assert exc.bidder == OTHER
        assert exc.request_id == 3

    def test_rejection_keeps_reason_verbatim(self) -> None:
        exc = TransactionRejectedError("Incorrect payment amount", tx_hash="0x01")
        assert exc.reason == "Incorrect payment amount"
        assert exc.tx_hash == "0x01"


def test_same_address_ignores_case_and_whitespace() -> None:
    assert same_address(" 0xABC ", "0xabc")
    assert not same_address("0xabc", "0xabd")
