"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pure_market.config import settings
from pure_market.database import create_db_and_tables
from pure_market.utils.logging import setup_logging
from pure_market.api import system, transactions, products


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    setup_logging()
    create_db_and_tables()
    yield


app = FastAPI(
    title="Pure Market Analytics",
    description="Sortable transaction tables and per-product statistics for the Pure marketplace",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount routers
app.include_router(system.router)
app.include_router(transactions.router)
app.include_router(products.router)
