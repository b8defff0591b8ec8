"""Alpha Vantage provider for spot quotes (GLOBAL_QUOTE)."""
import httpx

from stock_portfolio.providers.core import (MarketProviderABC, ProviderError,
                                            ProviderNotConfigured,
                                            normalize_stock_symbol, round2,
                                            to_float)
from stock_portfolio.schemas import StockQuote

RATE_LIMIT_MESSAGE = "Alpha Vantage API rate limit exceeded. Please wait."


class AlphaVantageProvider(MarketProviderABC):
    """Quotes via Alpha Vantage.

    The free tier allows a handful of calls per minute; when exceeded the API
    answers 200 with a ``Note`` (or ``Information``) field instead of data.
    Callers that loop over symbols are expected to space their calls.
    """

    name = "alphavantage"
    BASE_URL = "https://www.alphavantage.co"

    def __init__(self, api_key: str | None, timeout: float = 10.0) -> None:
        self._api_key = api_key
        self._client = httpx.AsyncClient(base_url=self.BASE_URL, timeout=timeout)

    async def get_quote(self, symbol: str) -> StockQuote:
        """Fetch the current quote for a stock symbol.

        Raises:
            ProviderError: 429 when the API reports a rate limit.
            ValueError: The response carries no price for the symbol.
        """
        if not self._api_key:
            raise ProviderNotConfigured("Alpha Vantage API")
        sym = normalize_stock_symbol(symbol)
        params = {"function": "GLOBAL_QUOTE", "symbol": sym, "apikey": self._api_key}
        response = await self._client.get("/query", params=params)
        response.raise_for_status()
        data = response.json()

        if data.get("Note") or data.get("Information"):
            raise ProviderError(RATE_LIMIT_MESSAGE, status_code=429)
        row = data.get("Global Quote") or {}
        price = to_float(row.get("05. price"))
        if price is None:
            raise ValueError(f"Stock '{sym}' not found")
        change_percent = (row.get("10. change percent") or "").rstrip("%")
        return StockQuote(
            symbol=sym,
            price=round2(price),
            change=round2(to_float(row.get("09. change"))),
            change_percent=round2(to_float(change_percent)),
            open=round2(to_float(row.get("02. open"))),
            high=round2(to_float(row.get("03. high"))),
            low=round2(to_float(row.get("04. low"))),
            previous_close=round2(to_float(row.get("08. previous close"))),
            volume=to_float(row.get("06. volume")),
            provider=self.name,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
