"""Database reads that feed the analytics layer.

Rows are converted to TransactionRecord / ProductVariant here so nothing
downstream touches the ORM.
"""

import logging
from datetime import datetime, timezone

from sqlmodel import Session, select

from pure_market.models.product import Product
from pure_market.models.transaction import Transaction
from pure_market.schemas.transaction import ProductVariant, TransactionRecord
from pure_market.services.classifier import determine_event_type

logger = logging.getLogger(__name__)


def _to_record(tx: Transaction, product: Product) -> TransactionRecord:
    return TransactionRecord(
        pure_product_id=tx.pure_product_id,
        pure_variant_id=tx.pure_variant_id,
        name=product.name,
        sku=product.sku,
        material=product.material,
        variant_label=product.variant_label,
        event_time=tx.event_time,
        quantity=tx.quantity,
        price=tx.price,
        spot_premium_percentage=tx.spot_premium_percentage,
        spot_premium_dollar=tx.spot_premium_dollar,
        event_type=tx.event_type,
    )


def load_transactions(session: Session, sku: str | None = None) -> list[TransactionRecord]:
    """Transactions joined with their product, newest first."""
    stmt = (
        select(Transaction, Product)
        .join(Product, Transaction.product_id == Product.id)
        .order_by(Transaction.event_time.desc(), Transaction.id)
    )
    if sku is not None:
        stmt = stmt.where(Product.sku == sku)
    return [_to_record(tx, product) for tx, product in session.exec(stmt).all()]


def load_variants(session: Session, sku: str | None = None) -> list[ProductVariant]:
    """Known product variants, ordered by (product id, variant id)."""
    stmt = select(Product).order_by(Product.pure_product_id, Product.pure_variant_id)
    if sku is not None:
        stmt = stmt.where(Product.sku == sku)
    return [ProductVariant.model_validate(p) for p in session.exec(stmt).all()]


def backfill_event_types(session: Session, batch_size: int = 1000) -> int:
    """Recompute every transaction's event_type from its product's market premiums.

    Returns the number of transactions updated. Transactions whose product is
    missing are logged and left untouched.
    """
    products = session.exec(select(Product)).all()
    product_map = {(p.pure_product_id, p.pure_variant_id): p for p in products}
    logger.info(f"Backfill: {len(product_map)} products loaded")

    updated = 0
    offset = 0
    while True:
        batch = session.exec(
            select(Transaction).order_by(Transaction.id).offset(offset).limit(batch_size)
        ).all()
        if not batch:
            break

        now = datetime.now(timezone.utc)
        for tx in batch:
            product = product_map.get((tx.pure_product_id, tx.pure_variant_id))
            if product is None:
                logger.error(
                    f"Product not found for transaction {tx.id}: "
                    f"product_id={tx.pure_product_id}, variant_id={tx.pure_variant_id}"
                )
                continue
            tx.event_type = determine_event_type(
                tx.spot_premium_percentage,
                product.highest_offer_spot_premium,
                product.lowest_listing_spot_premium,
            )
            tx.updated_at = now
            session.add(tx)
            updated += 1

        session.commit()
        offset += batch_size
        logger.info(f"Backfill progress: {updated} transactions updated")

    logger.info(f"Backfill completed: {updated} transactions updated")
    return updated
