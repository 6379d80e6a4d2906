"""Product model: one row per (product, variant) listed on the marketplace."""

from datetime import datetime, timezone

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    __tablename__ = "products"
    __table_args__ = (UniqueConstraint("pure_product_id", "pure_variant_id"),)

    id: int | None = Field(default=None, primary_key=True)
    pure_product_id: str = Field(max_length=255, index=True)
    pure_variant_id: str = Field(max_length=255)
    name: str = Field(max_length=500)
    sku: str = Field(max_length=255, index=True)
    material: str = Field(max_length=100)
    variant_label: str = Field(max_length=255)  # e.g. "Pure Priority"

    # Market snapshot used to infer transaction event types
    highest_offer_spot_premium: float | None = None
    lowest_listing_spot_premium: float | None = None
    market_data_updated_at: datetime | None = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
