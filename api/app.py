"""
Module 08 - FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.deps import get_config
from api.errors import APIError, api_error_handler, generic_error_handler, ledger_error_handler
from api.routes import commitments, health, merkle, transactions
from core.schemas.errors import LedgerException


def _resolve_log_level() -> int:
    """Resolve log level from SHIELDED_LOG_LEVEL or shielded.json, defaulting to INFO."""
    return getattr(logging, get_config().logging.level.upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Shielded Ledger API",
        description="""
HTTP API for the shielded ledger.

## Endpoints

- **POST /transactions** - Create a public or shielded transaction
- **GET /transactions/{id}/verify** - Check a transaction id
- **GET /merkle** - Merkle tree snapshot
- **GET /merkle/proof/{leaf_index}** - Inclusion proof for a leaf
- **POST /merkle/verify** - Check an inclusion proof
- **POST /commitments** - Commit to an amount
- **POST /proofs/range**, **POST /proofs/balance** - Placeholder proofs
- **GET /health** - Health check

All transactions share one store and one Merkle accumulator per process.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(LedgerException, ledger_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(transactions.router)
    app.include_router(merkle.router)
    app.include_router(commitments.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    config = get_config()
    uvicorn.run(app, host=config.api.host, port=config.api.port)
