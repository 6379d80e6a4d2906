"""Transaction model: immutable record of a marketplace buy/sell event."""

from datetime import datetime, timezone

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class Transaction(SQLModel, table=True):
    __tablename__ = "transactions"
    __table_args__ = (UniqueConstraint("event_time", "pure_product_id", "pure_variant_id"),)

    id: int | None = Field(default=None, primary_key=True)
    product_id: int = Field(foreign_key="products.id", index=True)
    pure_product_id: str = Field(max_length=255)
    pure_variant_id: str = Field(max_length=255)
    price: float  # cents
    quantity: int
    spot_premium_percentage: float
    spot_premium_dollar: float  # cents
    event_time: datetime = Field(index=True)
    event_type: str | None = None  # "buy", "sell", "unknown"; None on legacy rows
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
