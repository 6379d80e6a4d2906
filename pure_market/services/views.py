"""View composition: filter, aggregate, classify and sort for each screen.

Each ``compose_*`` call is a pure function of its arguments. Callers pass
an explicit view state every time; nothing is remembered between calls.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable

from pure_market.schemas.stats import ProductStats
from pure_market.schemas.transaction import ProductVariant, TransactionRecord, TransactionRow
from pure_market.schemas.views import (
    DetailSummary,
    DetailViewState,
    ProductDetailView,
    ProductStatsView,
    StatsSummary,
    StatsViewState,
    TransactionListView,
    TransactionSummary,
    TransactionViewState,
)
from pure_market.services.aggregator import GroupKey, aggregate
from pure_market.services.bucketing import bucket_by_day
from pure_market.services.classifier import classify
from pure_market.services.filters import filter_rows, unique_materials
from pure_market.services.money import (
    cents_to_dollars,
    gross_amount,
    material_family,
    to_decimal,
    to_number,
)
from pure_market.services.sorting import epoch_ms, sort_rows
from pure_market.utils.constants import MS_PER_DAY, PRODUCT_URL_TEMPLATE

logger = logging.getLogger(__name__)


def to_row(record: TransactionRecord) -> TransactionRow:
    """Display row with the computed total, classification and badge family."""
    return TransactionRow(
        **record.model_dump(),
        total=to_number(gross_amount(record.price, record.quantity)),
        classification=classify(record).value,
        material_family=material_family(record.material),
    )


def volume_cents(records: Iterable[TransactionRecord]) -> Decimal:
    """Exact summed gross amount of the records, in cents."""
    return sum((gross_amount(r.price, r.quantity) for r in records), Decimal(0))


def volume_dollars(records: Iterable[TransactionRecord]) -> float:
    """Summed gross amount of the records, in dollars."""
    return float(cents_to_dollars(volume_cents(records)))


def days_scanned(records: Iterable[TransactionRecord], now: datetime | None = None) -> int:
    """Whole days elapsed since the earliest event, floored. 0 when empty."""
    times = [epoch_ms(r.event_time) for r in records]
    if not times:
        return 0
    now = now or datetime.now(timezone.utc)
    return (epoch_ms(now) - min(times)) // MS_PER_DAY


def compose_transaction_list(
    records: Iterable[TransactionRecord],
    state: TransactionViewState | None = None,
    now: datetime | None = None,
) -> TransactionListView:
    """Every transaction as a display row, filtered and sorted per ``state``.

    ``days_scanned`` and ``total_count`` describe the unfiltered set; the
    volume describes the rows shown.
    """
    state = state or TransactionViewState()
    records = list(records)

    filtered = filter_rows(records, state.query, state.materials)
    rows = sort_rows((to_row(r) for r in filtered), state.sort_column, state.sort_direction)
    logger.debug(
        f"Transaction list: {len(rows)}/{len(records)} rows by "
        f"{state.sort_column.value} {state.sort_direction.value}"
    )

    return TransactionListView(
        rows=rows,
        summary=TransactionSummary(
            row_count=len(rows),
            total_count=len(records),
            total_volume=volume_dollars(filtered),
            days_scanned=days_scanned(records, now),
            materials=unique_materials(records),
        ),
    )


def compose_product_stats(
    records: Iterable[TransactionRecord],
    state: StatsViewState | None = None,
    products: Iterable[ProductVariant] = (),
) -> ProductStatsView:
    """Per-SKU statistics, filtered and sorted per ``state``."""
    state = state or StatsViewState()

    stats = aggregate(records, GroupKey.SKU, products)
    filtered = filter_rows(stats, state.query, state.materials)
    rows = sort_rows(filtered, state.sort_column, state.sort_direction)
    logger.debug(
        f"Product stats: {len(rows)}/{len(stats)} products by "
        f"{state.sort_column.value} {state.sort_direction.value}"
    )

    return ProductStatsView(
        rows=rows,
        summary=StatsSummary(
            row_count=len(rows),
            total_count=len(stats),
            transaction_count=sum(s.transaction_count for s in filtered),
            total_volume=_stats_volume_dollars(filtered),
            materials=unique_materials(stats),
        ),
    )


def _stats_volume_dollars(stats: Iterable[ProductStats]) -> float:
    cents = sum(
        (to_decimal(s.total_volume) for s in stats if s.total_volume is not None),
        Decimal(0),
    )
    return float(cents_to_dollars(cents))


def compose_product_detail(
    sku: str,
    variants: Iterable[ProductVariant],
    records: Iterable[TransactionRecord],
    state: DetailViewState | None = None,
) -> ProductDetailView:
    """One product's variants, transaction history, per-variant stats and demand.

    ``records`` may hold other products; only those with ``sku`` are used.
    The first variant is the one shown in the product header.
    """
    state = state or DetailViewState()
    variants = [v for v in variants if v.sku == sku]
    if not variants:
        raise ValueError(f"No variants for SKU {sku!r}")

    scoped = [r for r in records if r.sku == sku]
    filtered = filter_rows(scoped, state.query, state.materials)
    rows = sort_rows((to_row(r) for r in filtered), state.sort_column, state.sort_direction)
    logger.debug(f"Product detail {sku}: {len(rows)} rows, {len(variants)} variants")

    return ProductDetailView(
        product=variants[0],
        product_url=PRODUCT_URL_TEMPLATE.format(sku=sku),
        variants=variants,
        rows=rows,
        stats=aggregate(filtered, GroupKey.VARIANT, variants),
        daily=bucket_by_day(filtered),
        summary=DetailSummary(
            row_count=len(rows),
            transaction_count=len(scoped),
            total_quantity=sum(r.quantity for r in filtered),
            total_volume=volume_dollars(filtered),
        ),
    )
