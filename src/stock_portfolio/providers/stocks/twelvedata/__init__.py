"""Twelve Data provider (daily history)."""
from stock_portfolio.providers.stocks.twelvedata.twelve_data_provider import TwelveDataProvider

__all__ = ["TwelveDataProvider"]
