"""Comparator registry for sortable table columns.

Each column is tagged with a kind that fixes how its value is extracted and
compared. Nullable kinds place missing values last in both directions.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from functools import cmp_to_key
from typing import Any, Callable, Iterable, TypeVar

from pure_market.services.classifier import Classification, classify
from pure_market.services.money import gross_amount

Row = TypeVar("Row")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class ColumnKind(str, Enum):
    DATE = "date"
    STRING = "string"
    NUMBER = "number"
    NULLABLE_NUMBER = "nullable_number"
    NULLABLE_CATEGORY = "nullable_category"


NULLABLE_KINDS = frozenset({ColumnKind.NULLABLE_NUMBER, ColumnKind.NULLABLE_CATEGORY})


@dataclass(frozen=True)
class ColumnSpec:
    kind: ColumnKind
    extract: Callable[[Any], Any]


class TransactionColumn(str, Enum):
    EVENT_TIME = "event_time"
    MATERIAL = "material"
    NAME = "name"
    QUANTITY = "quantity"
    PRICE = "price"
    TOTAL = "total"
    SPOT_PREMIUM_PERCENTAGE = "spot_premium_percentage"
    SPOT_PREMIUM_DOLLAR = "spot_premium_dollar"
    EVENT_TYPE = "event_type"


class StatsColumn(str, Enum):
    MATERIAL = "material"
    NAME = "name"
    TRANSACTION_COUNT = "transaction_count"
    BUY_COUNT = "buy_count"
    SELL_COUNT = "sell_count"
    BUY_SELL_RATIO = "buy_sell_ratio"
    TOTAL_VOLUME = "total_volume"
    TOTAL_BUY_QUANTITY = "total_buy_quantity"
    TOTAL_SELL_QUANTITY = "total_sell_quantity"
    TOTAL_BUY_AMOUNT = "total_buy_amount"
    TOTAL_SELL_AMOUNT = "total_sell_amount"


# The product detail table has no material/name columns
DETAIL_COLUMNS = tuple(
    c for c in TransactionColumn
    if c not in (TransactionColumn.MATERIAL, TransactionColumn.NAME)
)


def epoch_ms(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - _EPOCH) // _ONE_MS


def _lowered(attr: str) -> Callable[[Any], str]:
    return lambda row: getattr(row, attr).lower()


def _attr(attr: str) -> Callable[[Any], Any]:
    return lambda row: getattr(row, attr)


def _category(row: Any) -> str | None:
    label = classify(row)
    if label is Classification.UNKNOWN:
        return None
    return label.value


TRANSACTION_COLUMNS: dict[TransactionColumn, ColumnSpec] = {
    TransactionColumn.EVENT_TIME: ColumnSpec(ColumnKind.DATE, lambda row: epoch_ms(row.event_time)),
    TransactionColumn.MATERIAL: ColumnSpec(ColumnKind.STRING, _lowered("material")),
    TransactionColumn.NAME: ColumnSpec(ColumnKind.STRING, _lowered("name")),
    TransactionColumn.QUANTITY: ColumnSpec(ColumnKind.NUMBER, _attr("quantity")),
    TransactionColumn.PRICE: ColumnSpec(ColumnKind.NUMBER, _attr("price")),
    TransactionColumn.TOTAL: ColumnSpec(
        ColumnKind.NUMBER, lambda row: gross_amount(row.price, row.quantity)
    ),
    TransactionColumn.SPOT_PREMIUM_PERCENTAGE: ColumnSpec(
        ColumnKind.NUMBER, _attr("spot_premium_percentage")
    ),
    TransactionColumn.SPOT_PREMIUM_DOLLAR: ColumnSpec(ColumnKind.NUMBER, _attr("spot_premium_dollar")),
    TransactionColumn.EVENT_TYPE: ColumnSpec(ColumnKind.NULLABLE_CATEGORY, _category),
}

STATS_COLUMNS: dict[StatsColumn, ColumnSpec] = {
    StatsColumn.MATERIAL: ColumnSpec(ColumnKind.STRING, _lowered("material")),
    StatsColumn.NAME: ColumnSpec(ColumnKind.STRING, _lowered("name")),
    StatsColumn.TRANSACTION_COUNT: ColumnSpec(ColumnKind.NUMBER, _attr("transaction_count")),
    StatsColumn.BUY_COUNT: ColumnSpec(ColumnKind.NUMBER, _attr("buy_count")),
    StatsColumn.SELL_COUNT: ColumnSpec(ColumnKind.NUMBER, _attr("sell_count")),
    StatsColumn.BUY_SELL_RATIO: ColumnSpec(ColumnKind.NULLABLE_NUMBER, _attr("buy_sell_ratio")),
    StatsColumn.TOTAL_VOLUME: ColumnSpec(ColumnKind.NULLABLE_NUMBER, _attr("total_volume")),
    StatsColumn.TOTAL_BUY_QUANTITY: ColumnSpec(ColumnKind.NULLABLE_NUMBER, _attr("total_buy_quantity")),
    StatsColumn.TOTAL_SELL_QUANTITY: ColumnSpec(ColumnKind.NULLABLE_NUMBER, _attr("total_sell_quantity")),
    StatsColumn.TOTAL_BUY_AMOUNT: ColumnSpec(ColumnKind.NULLABLE_NUMBER, _attr("total_buy_amount")),
    StatsColumn.TOTAL_SELL_AMOUNT: ColumnSpec(ColumnKind.NULLABLE_NUMBER, _attr("total_sell_amount")),
}

_REGISTRIES: dict[type, dict] = {
    TransactionColumn: TRANSACTION_COLUMNS,
    StatsColumn: STATS_COLUMNS,
}


def column_spec(column: TransactionColumn | StatsColumn) -> ColumnSpec:
    registry = _REGISTRIES.get(type(column))
    if registry is None or column not in registry:
        raise ValueError(f"Unsortable column: {column!r}")
    return registry[column]


def _three_way(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def comparator(
    column: TransactionColumn | StatsColumn,
    direction: SortDirection,
) -> Callable[[Any, Any], int]:
    """Three-way comparator for one column in one direction.

    Equal values compare as 0, so a stable sort keeps their input order.
    """
    spec = column_spec(column)
    sign = 1 if direction is SortDirection.ASC else -1
    nullable = spec.kind in NULLABLE_KINDS

    def compare(a: Any, b: Any) -> int:
        value_a = spec.extract(a)
        value_b = spec.extract(b)
        if nullable:
            # Missing values go last whichever way the column is sorted
            if value_a is None or value_b is None:
                return (value_a is None) - (value_b is None)
        return sign * _three_way(value_a, value_b)

    return compare


def sort_rows(
    rows: Iterable[Row],
    column: TransactionColumn | StatsColumn,
    direction: SortDirection,
) -> list[Row]:
    """Stable sort of rows by column, returning a new list."""
    return sorted(rows, key=cmp_to_key(comparator(column, direction)))


def next_sort(
    current_column: TransactionColumn | StatsColumn,
    current_direction: SortDirection,
    clicked: TransactionColumn | StatsColumn,
) -> tuple[TransactionColumn | StatsColumn, SortDirection]:
    """Header-click rule: same column flips direction, a new column starts ascending."""
    if clicked == current_column and type(clicked) is type(current_column):
        return current_column, current_direction.toggled()
    return clicked, SortDirection.ASC
