"""Per-product statistics folded from transaction records.

All functions are pure computation: no I/O, no database access, no state
kept between calls. Output does not depend on the order of the input.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Iterable

from pure_market.schemas.stats import ProductStats
from pure_market.schemas.transaction import ProductVariant, TransactionRecord
from pure_market.services.classifier import Classification, classify
from pure_market.services.money import gross_amount, to_number

logger = logging.getLogger(__name__)


class GroupKey(str, Enum):
    VARIANT = "variant"  # (product id, variant id): transaction and detail views
    SKU = "sku"  # across variants sharing a SKU: stats view


def group_key(item: TransactionRecord | ProductVariant, group_by: GroupKey) -> tuple[str, ...]:
    if group_by is GroupKey.SKU:
        return (item.sku,)
    return (item.pure_product_id, item.pure_variant_id)


def _variant_of(item: TransactionRecord | ProductVariant) -> ProductVariant:
    if isinstance(item, ProductVariant):
        return item
    return item.variant()


@dataclass
class _GroupTotals:
    identity: ProductVariant
    transaction_count: int = 0
    buy_count: int = 0
    sell_count: int = 0
    volume: Decimal = field(default_factory=Decimal)
    buy_quantity: int = 0
    sell_quantity: int = 0
    buy_amount: Decimal = field(default_factory=Decimal)
    sell_amount: Decimal = field(default_factory=Decimal)

    def claim_identity(self, variant: ProductVariant) -> None:
        # Lowest (product id, variant id) names the group, whatever the input order
        current = (self.identity.pure_product_id, self.identity.pure_variant_id)
        if (variant.pure_product_id, variant.pure_variant_id) < current:
            self.identity = variant

    def add(self, record: TransactionRecord) -> None:
        amount = gross_amount(record.price, record.quantity)
        self.transaction_count += 1
        self.volume += amount

        label = classify(record)
        if label is Classification.BUY:
            self.buy_count += 1
            self.buy_quantity += record.quantity
            self.buy_amount += amount
        elif label is Classification.SELL:
            self.sell_count += 1
            self.sell_quantity += record.quantity
            self.sell_amount += amount

    def to_stats(self, group_by: GroupKey) -> ProductStats:
        per_variant = group_by is GroupKey.VARIANT
        has_buys = self.buy_count > 0
        has_sells = self.sell_count > 0
        return ProductStats(
            pure_product_id=self.identity.pure_product_id,
            pure_variant_id=self.identity.pure_variant_id if per_variant else None,
            sku=self.identity.sku,
            name=self.identity.name,
            material=self.identity.material,
            variant_label=self.identity.variant_label if per_variant else None,
            transaction_count=self.transaction_count,
            buy_count=self.buy_count,
            sell_count=self.sell_count,
            buy_sell_ratio=buy_sell_ratio(self.buy_count, self.sell_count),
            total_volume=to_number(self.volume) if self.transaction_count else None,
            total_buy_quantity=self.buy_quantity if has_buys else None,
            total_sell_quantity=self.sell_quantity if has_sells else None,
            total_buy_amount=to_number(self.buy_amount) if has_buys else None,
            total_sell_amount=to_number(self.sell_amount) if has_sells else None,
        )


def buy_sell_ratio(buy_count: int, sell_count: int) -> float | None:
    """buys / sells, or None when there are no sells."""
    if sell_count <= 0:
        return None
    return buy_count / sell_count


def aggregate(
    records: Iterable[TransactionRecord],
    group_by: GroupKey = GroupKey.VARIANT,
    products: Iterable[ProductVariant] = (),
) -> list[ProductStats]:
    """Fold records into one ProductStats per group, sorted by group key.

    ``products`` seeds known groups, so a product without transactions still
    gets a row of zero counts and null totals.
    """
    groups: dict[tuple[str, ...], _GroupTotals] = {}

    def _group_for(item: TransactionRecord | ProductVariant) -> _GroupTotals:
        key = group_key(item, group_by)
        variant = _variant_of(item)
        totals = groups.get(key)
        if totals is None:
            totals = groups[key] = _GroupTotals(identity=variant)
        else:
            totals.claim_identity(variant)
        return totals

    for product in products:
        _group_for(product)

    record_count = 0
    for record in records:
        _group_for(record).add(record)
        record_count += 1

    logger.debug(
        f"Aggregated {record_count} records into {len(groups)} groups by {group_by.value}"
    )
    return [groups[key].to_stats(group_by) for key in sorted(groups)]
