"""Tests for buy/sell classification and event type inference."""

from types import SimpleNamespace

import pytest

from pure_market.services.classifier import (
    Classification,
    classification_label,
    classify,
    determine_event_type,
)


def _tx(event_type=None, variant_label="Standard"):
    return SimpleNamespace(event_type=event_type, variant_label=variant_label)


class TestClassify:
    def test_pure_priority_overrides_stored_sell(self):
        assert classify(_tx("sell", "Pure Priority")) is Classification.BUY

    def test_pure_priority_without_event_type_is_buy(self):
        assert classify(_tx(None, "Pure Priority")) is Classification.BUY

    @pytest.mark.parametrize(
        "event_type, expected",
        [
            ("buy", Classification.BUY),
            ("sell", Classification.SELL),
            (None, Classification.UNKNOWN),
            ("unknown", Classification.UNKNOWN),
            ("BUY", Classification.UNKNOWN),
        ],
    )
    def test_stored_event_type(self, event_type, expected):
        assert classify(_tx(event_type)) is expected

    def test_works_on_transaction_records(self, make_record):
        assert classify(make_record(event_type="sell")) is Classification.SELL

    def test_label_text(self):
        assert classification_label(_tx("sell", "Pure Priority")) == "BUY"
        assert classification_label(_tx("sell")) == "SELL"
        assert classification_label(_tx(None)) is None


class TestDetermineEventType:
    def test_closer_to_listing_is_buy(self):
        assert determine_event_type(5.0, 2.0, 6.0) == "buy"

    def test_closer_to_offer_is_sell(self):
        assert determine_event_type(3.0, 2.0, 6.0) == "sell"

    def test_equidistant_is_sell(self):
        assert determine_event_type(4.0, 2.0, 6.0) == "sell"

    def test_missing_offer(self):
        assert determine_event_type(5.0, None, 6.0) == "unknown"

    def test_missing_listing(self):
        assert determine_event_type(5.0, 2.0, None) == "unknown"

    def test_both_missing(self):
        assert determine_event_type(5.0, None, None) == "unknown"
