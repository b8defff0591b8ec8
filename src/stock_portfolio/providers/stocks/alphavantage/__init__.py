"""Alpha Vantage provider (spot quotes)."""
from stock_portfolio.providers.stocks.alphavantage.alpha_vantage_provider import (
    RATE_LIMIT_MESSAGE, AlphaVantageProvider)

__all__ = ["AlphaVantageProvider", "RATE_LIMIT_MESSAGE"]
