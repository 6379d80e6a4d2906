"""CLI tool for admin operations.

Usage:
    python -m pure_market.cli backfill-event-types
    python -m pure_market.cli summary
    python -m pure_market.cli products
    python -m pure_market.cli transactions [limit]
"""

import logging
import sys

from sqlmodel import Session

from pure_market.database import engine, create_db_and_tables
from pure_market.services.classifier import classification_label
from pure_market.services.money import (
    format_currency,
    format_percentage,
    format_quantity,
    format_ratio,
)
from pure_market.services.repository import backfill_event_types, load_transactions, load_variants
from pure_market.services.views import (
    compose_product_stats,
    compose_transaction_list,
    volume_cents,
)
from pure_market.utils.logging import setup_logging

logger = logging.getLogger(__name__)

COMMANDS = ("backfill-event-types", "summary", "products", "transactions")
DEFAULT_TRANSACTION_LIMIT = 20


def run_backfill(bind=None) -> int:
    """Recompute stored event types from product market premiums."""
    create_db_and_tables(bind)
    with Session(bind or engine) as session:
        updated = backfill_event_types(session)
    print(f"Updated {updated} transactions with event_type.")
    return updated


def print_summary(bind=None):
    """Print transaction count, total volume and days scanned."""
    create_db_and_tables(bind)
    with Session(bind or engine) as session:
        records = load_transactions(session)

    summary = compose_transaction_list(records).summary
    print(f"Total Transactions: {summary.total_count}")
    print(f"Total Volume: {format_currency(volume_cents(records))}")
    print(f"Days Scanned: {summary.days_scanned}")


def print_products(bind=None):
    """Print per-SKU statistics, highest volume first."""
    create_db_and_tables(bind)
    with Session(bind or engine) as session:
        records = load_transactions(session)
        products = load_variants(session)

    for stats in compose_product_stats(records, products=products).rows:
        print(
            f"{stats.sku:<16} {stats.name:<32} "
            f"tx={stats.transaction_count} "
            f"buy={format_quantity(stats.total_buy_quantity)} "
            f"sell={format_quantity(stats.total_sell_quantity)} "
            f"ratio={format_ratio(stats.buy_sell_ratio)} "
            f"volume={format_currency(stats.total_volume)}"
        )


def print_transactions(bind=None, limit: int = DEFAULT_TRANSACTION_LIMIT):
    """Print the most recent transactions."""
    create_db_and_tables(bind)
    with Session(bind or engine) as session:
        records = load_transactions(session)

    for row in compose_transaction_list(records).rows[:limit]:
        label = classification_label(row) or "-"
        print(
            f"{row.event_time:%Y-%m-%d %H:%M} {label:<4} {row.sku:<16} "
            f"qty={format_quantity(row.quantity)} "
            f"price={format_currency(row.price)} "
            f"total={format_currency(row.total)} "
            f"premium={format_percentage(row.spot_premium_percentage)}"
        )


def main(argv: list[str] | None = None):
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print("Usage: python -m pure_market.cli <command>")
        print(f"Commands: {', '.join(COMMANDS)}")
        sys.exit(1)

    setup_logging()
    command = argv[0]
    if command == "backfill-event-types":
        run_backfill()
    elif command == "summary":
        print_summary()
    elif command == "products":
        print_products()
    elif command == "transactions":
        if len(argv) > 1 and not argv[1].isdigit():
            print(f"Invalid limit: {argv[1]}")
            sys.exit(1)
        limit = int(argv[1]) if len(argv) > 1 else DEFAULT_TRANSACTION_LIMIT
        print_transactions(limit=limit)
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()
