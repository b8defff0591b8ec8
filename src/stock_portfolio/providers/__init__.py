"""Market data and AI providers.

This module provides a unified interface (MarketProviderABC) for fetching
stock data from several sources, each used for what it does best:

- FinnhubProvider: quotes and company profiles
- TwelveDataProvider: daily close history
- AlphaVantageProvider: spot quotes for the tracked-symbols board
- YFinanceProvider: keyless fallback for quotes, profiles and history

GeminiProvider sends prompts to Google's Gemini model.

Example:
    async with FinnhubProvider(api_key) as provider:
        quote = await provider.get_quote("AAPL")
        print(f"{quote.symbol}: ${quote.price}")
"""
from stock_portfolio.providers.ai import GeminiProvider
from stock_portfolio.providers.core import (MarketProviderABC, ProviderError,
                                            ProviderErrorMapper)
from stock_portfolio.providers.stocks import (AlphaVantageProvider,
                                              FinnhubProvider,
                                              TwelveDataProvider,
                                              YFinanceProvider)

__all__ = [
    "AlphaVantageProvider",
    "FinnhubProvider",
    "GeminiProvider",
    "MarketProviderABC",
    "ProviderError",
    "ProviderErrorMapper",
    "TwelveDataProvider",
    "YFinanceProvider",
]
