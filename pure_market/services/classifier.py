"""Buy/sell classification of transaction records.

Every place that renders or aggregates a buy/sell distinction goes through
``classify`` so the badge, the demand chart and the stats agree.
"""

from enum import Enum
from typing import Protocol

from pure_market.utils.constants import PURE_PRIORITY_LABEL


class Classification(str, Enum):
    BUY = "buy"
    SELL = "sell"
    UNKNOWN = "unknown"


class Classifiable(Protocol):
    variant_label: str
    event_type: str | None


def classify(record: Classifiable) -> Classification:
    """Effective label for a record.

    The Pure Priority variant is always a buy, whatever ``event_type`` says.
    """
    if record.variant_label == PURE_PRIORITY_LABEL:
        return Classification.BUY
    if record.event_type == Classification.BUY.value:
        return Classification.BUY
    if record.event_type == Classification.SELL.value:
        return Classification.SELL
    return Classification.UNKNOWN


def classification_label(record: Classifiable) -> str | None:
    """Badge text ('BUY' / 'SELL'), or None when nothing is shown."""
    result = classify(record)
    if result is Classification.UNKNOWN:
        return None
    return result.value.upper()


def determine_event_type(
    transaction_premium: float,
    highest_offer_premium: float | None,
    lowest_listing_premium: float | None,
) -> str:
    """Infer the stored event type from market premiums at sync time.

    A trade priced closer to the lowest listing was a buy (someone took an
    ask); closer to the highest offer it was a sell. Ties count as sells.
    Without both market premiums the type is "unknown".
    """
    if highest_offer_premium is None or lowest_listing_premium is None:
        return Classification.UNKNOWN.value

    dist_to_offer = abs(transaction_premium - highest_offer_premium)
    dist_to_listing = abs(transaction_premium - lowest_listing_premium)
    if dist_to_listing < dist_to_offer:
        return Classification.BUY.value
    return Classification.SELL.value
