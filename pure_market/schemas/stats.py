"""Pydantic schemas for derived statistics and chart series."""

from pydantic import BaseModel


class ProductStats(BaseModel):
    """Per-group statistics, recomputed on every aggregation call.

    ``pure_variant_id`` and ``variant_label`` are ``None`` when rows are
    grouped by SKU across variants.
    """

    pure_product_id: str
    pure_variant_id: str | None = None
    sku: str
    name: str
    material: str
    variant_label: str | None = None

    transaction_count: int = 0
    buy_count: int = 0
    sell_count: int = 0
    buy_sell_ratio: float | None = None
    total_volume: int | float | None = None
    total_buy_quantity: int | None = None
    total_sell_quantity: int | None = None
    total_buy_amount: int | float | None = None
    total_sell_amount: int | float | None = None


class DailyBucket(BaseModel):
    date: str  # YYYY-MM-DD
    buy_amount: float = 0.0  # dollars
    sell_amount: float = 0.0
