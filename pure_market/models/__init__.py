"""Database models."""

from pure_market.models.product import Product
from pure_market.models.transaction import Transaction

__all__ = [
    "Product",
    "Transaction",
]
