"""Finnhub market data provider (quotes and company profiles)."""
from datetime import datetime, timezone

import httpx

from stock_portfolio.providers.core import (MarketProviderABC,
                                            ProviderNotConfigured,
                                            normalize_stock_symbol, round2)
from stock_portfolio.providers.stocks.finnhub.models import (FinnhubProfile,
                                                             FinnhubQuote)
from stock_portfolio.schemas import CompanyProfile, StockQuote


class FinnhubProvider(MarketProviderABC):
    """Market data provider for stocks via the Finnhub REST API.

    Supports US tickers and exchange-suffixed symbols (``RELIANCE.NS``).
    Requires an API key, sent as the ``token`` query parameter.
    """

    name = "finnhub"
    BASE_URL = "https://finnhub.io/api/v1"

    def __init__(self, api_key: str | None, timeout: float = 10.0) -> None:
        """Initialize the Finnhub provider.

        Args:
            api_key: Finnhub API key.
            timeout: Per-request timeout in seconds.
        """
        self._api_key = api_key
        self._client = httpx.AsyncClient(
            base_url=self.BASE_URL,
            headers={"Accept": "application/json"},
            timeout=timeout,
        )

    async def _get(self, path: str, symbol: str) -> dict:
        if not self._api_key:
            raise ProviderNotConfigured("Finnhub API")
        response = await self._client.get(path, params={"symbol": symbol, "token": self._api_key})
        response.raise_for_status()
        return response.json()

    async def get_quote(self, symbol: str) -> StockQuote:
        """Fetch the current quote for a stock symbol."""
        sym = normalize_stock_symbol(symbol)
        quote = FinnhubQuote.model_validate(await self._get("/quote", sym))
        if quote.is_empty:
            raise ValueError(f"Stock '{sym}' not found")
        return StockQuote(
            symbol=sym,
            price=round2(quote.current),
            change=round2(quote.change),
            change_percent=round2(quote.change_percent),
            open=round2(quote.open),
            high=round2(quote.high),
            low=round2(quote.low),
            previous_close=round2(quote.previous_close),
            timestamp=datetime.fromtimestamp(quote.timestamp, timezone.utc),
            provider=self.name,
        )

    async def get_profile(self, symbol: str) -> CompanyProfile:
        """Fetch name, exchange, industry and logo for a stock symbol."""
        sym = normalize_stock_symbol(symbol)
        data = await self._get("/stock/profile2", sym)
        if not data:
            raise ValueError(f"Profile for '{sym}' not found")
        profile = FinnhubProfile.model_validate(data)
        return CompanyProfile(
            symbol=sym,
            name=profile.name,
            exchange=profile.exchange,
            industry=profile.finnhub_industry,
            country=profile.country,
            currency=profile.currency,
            market_cap=round2(profile.market_capitalization),
            logo=profile.logo or None,
            website=profile.weburl or None,
            provider=self.name,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
