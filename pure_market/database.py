"""SQLModel database engine and session management."""

import logging

from sqlalchemy import inspect
from sqlmodel import SQLModel, create_engine, Session

from pure_market.config import settings

logger = logging.getLogger(__name__)

# SQLite needs check_same_thread=False; PostgreSQL does not
connect_args = {}
if settings.database_url.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.database_url,
    echo=False,
    connect_args=connect_args,
)


def _run_migrations(bind=None):
    """Lightweight schema migrations for tables created by older releases."""
    from sqlalchemy import text

    bind = bind or engine
    inspector = inspect(bind)

    if "transactions" not in inspector.get_table_names():
        return

    columns = {col["name"] for col in inspector.get_columns("transactions")}
    if "event_type" not in columns:
        logger.info("Migrating: adding transactions.event_type")
        with bind.connect() as conn:
            conn.execute(text("ALTER TABLE transactions ADD COLUMN event_type VARCHAR(10)"))
            conn.commit()

    columns = {col["name"] for col in inspector.get_columns("products")}
    for column, ddl_type in (
        ("highest_offer_spot_premium", "DOUBLE PRECISION"),
        ("lowest_listing_spot_premium", "DOUBLE PRECISION"),
        ("market_data_updated_at", "TIMESTAMP"),
    ):
        if column not in columns:
            logger.info(f"Migrating: adding products.{column}")
            with bind.connect() as conn:
                conn.execute(text(f"ALTER TABLE products ADD COLUMN {column} {ddl_type}"))
                conn.commit()


def create_db_and_tables(bind=None):
    """Create all tables. Called on startup."""
    import pure_market.models  # noqa: F401  (registers tables on the metadata)

    bind = bind or engine
    SQLModel.metadata.create_all(bind)
    _run_migrations(bind)


def get_session() -> Session:
    """Dependency that yields a database session."""
    with Session(engine) as session:
        yield session
