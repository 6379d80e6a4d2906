"""Pydantic schemas for transaction records crossing the inbound boundary."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator


class ProductVariant(BaseModel):
    """One purchasable variant of a product, keyed by (product id, variant id)."""

    pure_product_id: str
    pure_variant_id: str
    name: str
    sku: str
    material: str
    variant_label: str

    model_config = {"frozen": True, "from_attributes": True}


class TransactionRecord(BaseModel):
    """A single marketplace buy/sell event with denormalized product fields.

    Money fields are in cents. ``price`` is integral in practice but the
    upstream column is ``DECIMAL(12,2)``, so fractional cents are accepted.
    """

    pure_product_id: str
    pure_variant_id: str
    name: str
    sku: str
    material: str
    variant_label: str
    event_time: datetime
    quantity: int = Field(ge=0)
    price: int | float
    spot_premium_percentage: float
    spot_premium_dollar: int | float
    event_type: str | None = None

    model_config = {"frozen": True, "from_attributes": True}

    @field_validator("price")
    @classmethod
    def _non_negative_price(cls, value: int | float) -> int | float:
        if value < 0:
            raise ValueError("must be >= 0")
        return value

    @field_validator("event_time")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def variant(self) -> ProductVariant:
        return ProductVariant(
            pure_product_id=self.pure_product_id,
            pure_variant_id=self.pure_variant_id,
            name=self.name,
            sku=self.sku,
            material=self.material,
            variant_label=self.variant_label,
        )


class TransactionRow(TransactionRecord):
    """Display row: the record plus fields derived for presentation."""

    total: int | float  # price * quantity, cents
    classification: str
    material_family: str
