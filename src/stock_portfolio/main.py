"""Main module for the stock portfolio service."""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from stock_portfolio.auth import AccessGateMiddleware
from stock_portfolio.container import Container
from stock_portfolio.db.sessions import init_db
from stock_portfolio.errors import register_error_handlers
from stock_portfolio.routers import (analyst_router, auth_router,
                                     insights_router, investor_router,
                                     pages_router, portfolio_router,
                                     stocks_router)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    """Create tables and build the gate at startup; close providers on shutdown."""
    container: Container = fastapi_app.state.container
    settings = container.settings()
    logging.basicConfig(level=settings.log_level)

    init_db(container.engine())
    # Fail at startup, not on the first request, when JWT_SECRET is missing.
    container.access_gate()
    logger.info("Stock portfolio service started (%s)", settings.environment)

    yield

    # Close provider resources (e.g. httpx clients)
    for service in (container.stocks_service, container.insights_service):
        try:
            await service().close()
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("Error closing %s: %s", service, exc)


def create_app(container: Container | None = None) -> FastAPI:
    """Build the application around a container (a fresh one by default)."""
    container = container or Container()

    fastapi_app = FastAPI(
        title="Stock Portfolio",
        description="Role-gated stock portfolio tracker with market data and AI insights",
        version="0.1.0",
        lifespan=lifespan,
    )
    fastapi_app.state.container = container

    register_error_handlers(fastapi_app)
    fastapi_app.add_middleware(AccessGateMiddleware, gate_factory=container.access_gate)

    fastapi_app.include_router(pages_router)
    fastapi_app.include_router(auth_router)
    fastapi_app.include_router(portfolio_router)
    fastapi_app.include_router(stocks_router)
    fastapi_app.include_router(insights_router)
    fastapi_app.include_router(investor_router)
    fastapi_app.include_router(analyst_router)
    return fastapi_app


app = create_app()


def run():
    """Run the server (uvicorn). Use for `poetry run start`."""
    uvicorn.run("stock_portfolio.main:app", host="127.0.0.1", port=8001)


def run_dev():
    """Run the development server with auto-reload."""
    uvicorn.run("stock_portfolio.main:app", host="0.0.0.0", port=8000, reload=True)
