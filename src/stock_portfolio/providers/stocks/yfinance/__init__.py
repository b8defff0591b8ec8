"""Yahoo Finance provider (keyless quotes, profiles, history)."""
from stock_portfolio.providers.stocks.yfinance.y_finance_provider import YFinanceProvider

__all__ = ["YFinanceProvider"]
