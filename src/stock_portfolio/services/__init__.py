"""Service layer: provider orchestration and exception-to-AppError mapping."""
from stock_portfolio.services.insights import InsightsService
from stock_portfolio.services.stocks import StocksService

__all__ = [
    "InsightsService",
    "StocksService",
]
