"""Daily buy/sell demand series for charting.

Amounts here are dollars, not cents: the chart plots dollar values.
"""

from decimal import Decimal
from typing import Iterable

from pure_market.schemas.stats import DailyBucket
from pure_market.schemas.transaction import TransactionRecord
from pure_market.services.classifier import Classification, classify
from pure_market.services.money import cents_to_dollars, gross_amount


def day_key(record: TransactionRecord) -> str:
    """Calendar date of the event as recorded, without timezone conversion."""
    return record.event_time.date().isoformat()


def bucket_by_day(records: Iterable[TransactionRecord]) -> list[DailyBucket]:
    """Sum classified gross amounts per calendar day, oldest day first.

    Unknown-classified records add nothing and do not open a bucket on their
    own. Each amount is rounded once, after summation.
    """
    days: dict[str, dict[Classification, Decimal]] = {}

    for record in records:
        label = classify(record)
        if label is Classification.UNKNOWN:
            continue
        totals = days.setdefault(
            day_key(record),
            {Classification.BUY: Decimal(0), Classification.SELL: Decimal(0)},
        )
        totals[label] += gross_amount(record.price, record.quantity)

    return [
        DailyBucket(
            date=day,
            buy_amount=float(cents_to_dollars(days[day][Classification.BUY])),
            sell_amount=float(cents_to_dollars(days[day][Classification.SELL])),
        )
        for day in sorted(days)
    ]
