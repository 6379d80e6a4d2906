"""Shared fixtures: record factories and an in-memory database."""

from datetime import datetime, timezone

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from pure_market.database import create_db_and_tables
from pure_market.models import Product, Transaction
from pure_market.schemas.transaction import ProductVariant, TransactionRecord


def _record(**overrides) -> TransactionRecord:
    data = {
        "pure_product_id": "p1",
        "pure_variant_id": "v1",
        "name": "Gold Eagle 1oz",
        "sku": "GE-1",
        "material": "Gold",
        "variant_label": "Standard",
        "event_time": "2025-01-15T10:00:00Z",
        "quantity": 1,
        "price": 250000,
        "spot_premium_percentage": 3.5,
        "spot_premium_dollar": 8000,
        "event_type": "buy",
    }
    data.update(overrides)
    return TransactionRecord(**data)


def _variant(**overrides) -> ProductVariant:
    data = {
        "pure_product_id": "p1",
        "pure_variant_id": "v1",
        "name": "Gold Eagle 1oz",
        "sku": "GE-1",
        "material": "Gold",
        "variant_label": "Standard",
    }
    data.update(overrides)
    return ProductVariant(**data)


@pytest.fixture
def make_record():
    return _record


@pytest.fixture
def make_variant():
    return _variant


@pytest.fixture
def engine():
    """Fresh in-memory SQLite engine shared across connections."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_db_and_tables(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture
def seeded(session):
    """Two SKUs: a gold coin with two variants and a silver bar."""
    gold_std = Product(
        pure_product_id="p1", pure_variant_id="v1", name="Gold Eagle 1oz", sku="GE-1",
        material="Gold", variant_label="Standard",
        highest_offer_spot_premium=2.0, lowest_listing_spot_premium=6.0,
    )
    gold_priority = Product(
        pure_product_id="p1", pure_variant_id="v2", name="Gold Eagle 1oz", sku="GE-1",
        material="Gold", variant_label="Pure Priority",
    )
    silver = Product(
        pure_product_id="p2", pure_variant_id="v1", name="Silver Bar 10oz", sku="SB-10",
        material="Silver", variant_label="Standard",
        highest_offer_spot_premium=1.0, lowest_listing_spot_premium=9.0,
    )
    session.add_all([gold_std, gold_priority, silver])
    session.commit()

    def tx(product: Product, when: str, price: float, quantity: int, premium: float, event_type):
        return Transaction(
            product_id=product.id,
            pure_product_id=product.pure_product_id,
            pure_variant_id=product.pure_variant_id,
            price=price,
            quantity=quantity,
            spot_premium_percentage=premium,
            spot_premium_dollar=500,
            event_time=datetime.fromisoformat(when).replace(tzinfo=timezone.utc),
            event_type=event_type,
        )

    session.add_all([
        tx(gold_std, "2025-01-10T09:00:00", 250000, 2, 5.0, "buy"),
        tx(gold_std, "2025-01-11T09:00:00", 240000, 1, 3.0, "sell"),
        tx(gold_priority, "2025-01-11T15:00:00", 260000, 1, 4.0, "sell"),
        tx(silver, "2025-01-12T09:00:00", 30000, 3, 8.0, None),
        tx(silver, "2025-01-13T09:00:00", 31000, 1, 2.0, "sell"),
    ])
    session.commit()
    return {"gold_std": gold_std, "gold_priority": gold_priority, "silver": silver}
