"""Transaction list API."""

import logging

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from pure_market.database import get_session
from pure_market.schemas.views import TransactionListView, TransactionViewState
from pure_market.services.repository import load_transactions
from pure_market.services.sorting import SortDirection, TransactionColumn
from pure_market.services.views import compose_transaction_list

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("", response_model=TransactionListView)
def list_transactions(
    sort: TransactionColumn = TransactionColumn.EVENT_TIME,
    direction: SortDirection = SortDirection.DESC,
    q: str = "",
    material: list[str] = Query(default=[]),
    session: Session = Depends(get_session),
):
    state = TransactionViewState(
        sort_column=sort, sort_direction=direction, query=q, materials=frozenset(material)
    )
    records = load_transactions(session)
    logger.info(f"Serving {len(records)} transactions sorted by {sort.value} {direction.value}")
    return compose_transaction_list(records, state)
