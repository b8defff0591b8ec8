"""Stock market data providers."""
from stock_portfolio.providers.stocks.alphavantage import AlphaVantageProvider
from stock_portfolio.providers.stocks.finnhub import FinnhubProvider
from stock_portfolio.providers.stocks.twelvedata import TwelveDataProvider
from stock_portfolio.providers.stocks.yfinance import YFinanceProvider

__all__ = [
    "AlphaVantageProvider",
    "FinnhubProvider",
    "TwelveDataProvider",
    "YFinanceProvider",
]
