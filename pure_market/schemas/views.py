"""Pydantic schemas for view state and composed views."""

from pydantic import BaseModel, Field, field_validator

from pure_market.schemas.stats import DailyBucket, ProductStats
from pure_market.schemas.transaction import ProductVariant, TransactionRow
from pure_market.services.filters import MaterialSelection
from pure_market.services.sorting import (
    DETAIL_COLUMNS,
    SortDirection,
    StatsColumn,
    TransactionColumn,
    next_sort,
)


# ---------------------------------------------------------------------------
# View state: everything a table screen needs to recompute its rows
# ---------------------------------------------------------------------------

class ViewState(BaseModel):
    query: str = ""
    materials: frozenset[str] = Field(default_factory=frozenset)
    sort_direction: SortDirection = SortDirection.DESC

    model_config = {"frozen": True}

    def with_sort(self, clicked):
        column, direction = next_sort(self.sort_column, self.sort_direction, clicked)
        return self.model_validate(
            {**self.model_dump(), "sort_column": column, "sort_direction": direction}
        )

    def with_query(self, query: str):
        return self.model_copy(update={"query": query})

    def with_material_toggled(self, material: str):
        selection = MaterialSelection(self.materials).toggle(material)
        return self.model_copy(update={"materials": selection.materials})

    def with_materials_cleared(self):
        return self.model_copy(update={"materials": frozenset()})


class TransactionViewState(ViewState):
    sort_column: TransactionColumn = TransactionColumn.EVENT_TIME


class DetailViewState(TransactionViewState):
    @field_validator("sort_column")
    @classmethod
    def _validate_detail_column(cls, value: TransactionColumn) -> TransactionColumn:
        if value not in DETAIL_COLUMNS:
            allowed = ", ".join(c.value for c in DETAIL_COLUMNS)
            raise ValueError(f"must be one of: {allowed}")
        return value


class StatsViewState(ViewState):
    sort_column: StatsColumn = StatsColumn.TOTAL_VOLUME


# ---------------------------------------------------------------------------
# Composed views
# ---------------------------------------------------------------------------

class TransactionSummary(BaseModel):
    row_count: int
    total_count: int
    total_volume: float  # dollars, filtered rows
    days_scanned: int
    materials: list[str]


class TransactionListView(BaseModel):
    rows: list[TransactionRow]
    summary: TransactionSummary


class StatsSummary(BaseModel):
    row_count: int
    total_count: int
    transaction_count: int
    total_volume: float  # dollars, filtered rows
    materials: list[str]


class ProductStatsView(BaseModel):
    rows: list[ProductStats]
    summary: StatsSummary


class DetailSummary(BaseModel):
    row_count: int
    transaction_count: int
    total_quantity: int
    total_volume: float  # dollars


class ProductDetailView(BaseModel):
    product: ProductVariant
    product_url: str
    variants: list[ProductVariant]
    rows: list[TransactionRow]
    stats: list[ProductStats]
    daily: list[DailyBucket]
    summary: DetailSummary
