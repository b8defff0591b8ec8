"""Factories that pick provider implementations from the configured API keys."""
import logging

from stock_portfolio.config import Settings
from stock_portfolio.providers import (AlphaVantageProvider, FinnhubProvider,
                                       GeminiProvider, TwelveDataProvider,
                                       YFinanceProvider)
from stock_portfolio.providers.core import MarketProviderABC
from stock_portfolio.services.insights import InsightsService
from stock_portfolio.services.stocks import StocksService

logger = logging.getLogger(__name__)


def create_stocks_service(settings: Settings) -> StocksService:
    """Create a StocksService wired to the keyed providers, falling back to yfinance.

    Args:
        settings: Application settings (API keys, timeouts, board config).

    Returns:
        A configured StocksService instance.
    """
    timeout = settings.http_timeout_seconds
    fallback = YFinanceProvider()

    quotes: MarketProviderABC = fallback
    if settings.finnhub_api_key:
        quotes = FinnhubProvider(settings.finnhub_api_key, timeout=timeout)

    history: MarketProviderABC = fallback
    if settings.twelve_data_api_key:
        history = TwelveDataProvider(settings.twelve_data_api_key, timeout=timeout)

    board: MarketProviderABC = quotes
    spacing = 0.0
    if settings.alpha_vantage_api_key:
        board = AlphaVantageProvider(settings.alpha_vantage_api_key, timeout=timeout)
        spacing = settings.alpha_vantage_spacing_seconds

    logger.info(
        "Stock providers: quotes=%s history=%s board=%s",
        quotes.name, history.name, board.name,
    )
    return StocksService(
        quotes,
        profiles=quotes,
        history=history,
        board=board,
        tracked_symbols=settings.tracked_symbols,
        board_spacing_seconds=spacing,
    )


def create_insights_service(settings: Settings) -> InsightsService:
    """Create an InsightsService backed by Gemini."""
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set; AI insights will return 503")
    provider = GeminiProvider(
        settings.gemini_api_key,
        model=settings.gemini_model,
        timeout=max(settings.http_timeout_seconds, 30.0),
    )
    return InsightsService(provider)
