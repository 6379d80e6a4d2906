"""Tests for database loading, event type backfill, migrations and the CLI."""

from datetime import datetime, timezone

import pytest
from sqlalchemy import inspect, text
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine, select

from pure_market import cli
from pure_market.database import create_db_and_tables
from pure_market.models import Transaction
from pure_market.services.repository import (
    backfill_event_types,
    load_transactions,
    load_variants,
)


class TestLoading:
    def test_transactions_newest_first_with_product_fields(self, session, seeded):
        records = load_transactions(session)
        assert len(records) == 5
        assert records[0].sku == "SB-10"
        assert records[0].material == "Silver"
        assert records[-1].event_time.day == 10

    def test_event_times_are_utc(self, session, seeded):
        records = load_transactions(session)
        assert all(r.event_time.tzinfo == timezone.utc for r in records)

    def test_scoped_by_sku(self, session, seeded):
        assert {r.sku for r in load_transactions(session, sku="GE-1")} == {"GE-1"}

    def test_variants_ordered(self, session, seeded):
        variants = load_variants(session)
        assert [(v.pure_product_id, v.pure_variant_id) for v in variants] == [
            ("p1", "v1"), ("p1", "v2"), ("p2", "v1"),
        ]
        assert load_variants(session, sku="NOPE") == []


class TestBackfill:
    def test_recomputes_event_types(self, session, seeded):
        updated = backfill_event_types(session, batch_size=2)
        assert updated == 5

        by_day = {
            (tx.event_time.day, tx.pure_variant_id): tx.event_type
            for tx in session.exec(select(Transaction)).all()
        }
        assert by_day == {
            (10, "v1"): "buy",
            (11, "v1"): "sell",
            (11, "v2"): "unknown",  # no market premiums stored
            (12, "v1"): "buy",
            (13, "v1"): "sell",
        }

    def test_skips_transactions_without_product(self, session, seeded):
        orphan = session.exec(select(Transaction)).first()
        orphan.pure_variant_id = "missing"
        session.add(orphan)
        session.commit()

        assert backfill_event_types(session) == 4


def test_migration_adds_event_type_column():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    with engine.connect() as conn:
        conn.execute(text(
            "CREATE TABLE transactions (id INTEGER PRIMARY KEY, product_id INTEGER, "
            "pure_product_id VARCHAR, pure_variant_id VARCHAR, price FLOAT, quantity INTEGER, "
            "spot_premium_percentage FLOAT, spot_premium_dollar FLOAT, event_time DATETIME, "
            "created_at DATETIME, updated_at DATETIME)"
        ))
        conn.commit()

    create_db_and_tables(engine)

    columns = {col["name"] for col in inspect(engine).get_columns("transactions")}
    assert "event_type" in columns


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

class TestCli:
    def test_summary(self, engine, seeded, capsys):
        cli.print_summary(engine)
        out = capsys.readouterr().out
        assert "Total Transactions: 5" in out
        assert "Total Volume: $11,210.00" in out

    def test_summary_formats_exact_decimal_cents(self, engine, session, seeded, capsys):
        silver = seeded["silver"]
        session.add(Transaction(
            product_id=silver.id, pure_product_id="p2", pure_variant_id="v1",
            price=1000.05, quantity=10, spot_premium_percentage=1.0, spot_premium_dollar=0,
            event_time=datetime(2025, 1, 14, 9, tzinfo=timezone.utc), event_type="buy",
        ))
        session.commit()
        cli.print_summary(engine)
        assert "Total Volume: $11,310.01" in capsys.readouterr().out

    def test_products_lists_formatted_stats_by_volume(self, engine, seeded, capsys):
        cli.print_products(engine)
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 2
        assert lines[0].startswith("GE-1")
        assert "buy=3 sell=1 ratio=2.00 volume=$10,000.00" in lines[0]
        assert lines[1].startswith("SB-10")
        assert "buy=0 sell=1 ratio=0.00 volume=$1,210.00" in lines[1]

    def test_transactions_newest_first_with_labels(self, engine, seeded, capsys):
        cli.print_transactions(engine, limit=2)
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 2
        assert lines[0].startswith("2025-01-13 09:00 SELL SB-10")
        assert "qty=1 price=$310.00 total=$310.00 premium=2.00%" in lines[0]
        assert lines[1].startswith("2025-01-12 09:00 -    SB-10")

    def test_transactions_rejects_bad_limit(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main(["transactions", "ten"])
        assert exc.value.code == 1
        assert "Invalid limit: ten" in capsys.readouterr().out

    def test_backfill(self, engine, seeded, capsys):
        assert cli.run_backfill(engine) == 5
        assert "Updated 5 transactions" in capsys.readouterr().out

    def test_unknown_command_exits(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main(["nope"])
        assert exc.value.code == 1
        assert "Unknown command: nope" in capsys.readouterr().out

    def test_no_command_prints_usage(self, capsys):
        with pytest.raises(SystemExit):
            cli.main([])
        assert "backfill-event-types" in capsys.readouterr().out
