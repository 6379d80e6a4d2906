"""Product statistics and product detail API."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError
from sqlmodel import Session

from pure_market.database import get_session
from pure_market.schemas.stats import DailyBucket
from pure_market.schemas.views import (
    DetailViewState,
    ProductDetailView,
    ProductStatsView,
    StatsViewState,
)
from pure_market.services.bucketing import bucket_by_day
from pure_market.services.repository import load_transactions, load_variants
from pure_market.services.sorting import SortDirection, StatsColumn, TransactionColumn
from pure_market.services.views import compose_product_detail, compose_product_stats

logger = logging.getLogger(__name__)

router = APIRouter(tags=["products"])


@router.get("/products/stats", response_model=ProductStatsView)
def product_stats(
    sort: StatsColumn = StatsColumn.TOTAL_VOLUME,
    direction: SortDirection = SortDirection.DESC,
    q: str = "",
    material: list[str] = Query(default=[]),
    session: Session = Depends(get_session),
):
    """Per-SKU statistics across all variants."""
    state = StatsViewState(
        sort_column=sort, sort_direction=direction, query=q, materials=frozenset(material)
    )
    records = load_transactions(session)
    products = load_variants(session)
    logger.info(f"Aggregating {len(records)} transactions over {len(products)} variants")
    return compose_product_stats(records, state, products)


@router.get("/product/{sku}", response_model=ProductDetailView)
def product_detail(
    sku: str,
    sort: TransactionColumn = TransactionColumn.EVENT_TIME,
    direction: SortDirection = SortDirection.DESC,
    session: Session = Depends(get_session),
):
    """Variants, transaction history, per-variant stats and daily demand for a SKU."""
    try:
        state = DetailViewState(sort_column=sort, sort_direction=direction)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))

    variants = load_variants(session, sku=sku)
    if not variants:
        logger.warning(f"Product detail requested for unknown SKU {sku}")
        raise HTTPException(status_code=404, detail="Product not found")

    records = load_transactions(session, sku=sku)
    return compose_product_detail(sku, variants, records, state)


@router.get("/product/{sku}/demand", response_model=list[DailyBucket])
def product_demand(sku: str, session: Session = Depends(get_session)):
    """Daily buy/sell dollar amounts for a SKU, oldest day first."""
    if not load_variants(session, sku=sku):
        raise HTTPException(status_code=404, detail="Product not found")
    return bucket_by_day(load_transactions(session, sku=sku))
