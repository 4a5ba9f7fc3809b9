# backend/tradelink/main.py

# import logger first so handlers attach before anything logs
from tradelink.core.logger import logger

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tradelink.core.config import settings
from tradelink.core.database import create_tables
from tradelink.core.exceptions import register_exception_handlers
from tradelink.core.request_middleware import RequestLoggingMiddleware
from tradelink.core.error_middleware import ExceptionLoggingMiddleware

from tradelink.api import (
    buyers,
    documents,
    export_companies,
    farmers,
    health,
    listings,
    matches,
    negotiations,
    payments,
    supplier_networks,
    transactions,
    users,
)

# ---------------------------------------------------
# App
# ---------------------------------------------------
app = FastAPI(title="TradeLink API", version="1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------
# Logging middlewares + domain error handlers
# ---------------------------------------------------
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(ExceptionLoggingMiddleware)
register_exception_handlers(app)

# ---------------------------------------------------
# Routers
# ---------------------------------------------------
app.include_router(health.router)
app.include_router(users.router)
app.include_router(farmers.router)
app.include_router(buyers.router)
app.include_router(listings.router)
app.include_router(matches.router)
app.include_router(negotiations.router)
app.include_router(transactions.router)
app.include_router(payments.router)
app.include_router(export_companies.router)
app.include_router(supplier_networks.router)
app.include_router(documents.router)


@app.on_event("startup")
async def startup_event():
    if settings.AUTO_CREATE_TABLES:
        await create_tables()
        logger.info("Database tables ensured")
    logger.info("TradeLink backend started")


@app.get("/")
def root():
    return {"message": "TradeLink API running"}
