"""Finnhub provider (quotes, company profiles)."""
from stock_portfolio.providers.stocks.finnhub.finnhub_provider import FinnhubProvider

__all__ = ["FinnhubProvider"]
