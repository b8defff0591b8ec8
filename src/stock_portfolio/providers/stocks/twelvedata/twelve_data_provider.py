"""Twelve Data provider for daily price history."""
import logging

import httpx

from stock_portfolio.providers.core import (MarketProviderABC, ProviderError,
                                            ProviderNotConfigured,
                                            normalize_stock_symbol, round2)
from stock_portfolio.providers.stocks.twelvedata.models import (
    TwelveDataTimeSeriesParams, TwelveDataValue)
from stock_portfolio.schemas import HistoryPoint, StockQuote

logger = logging.getLogger(__name__)


class TwelveDataProvider(MarketProviderABC):
    """Daily close history via the Twelve Data /time_series endpoint.

    Twelve Data returns bars newest first; this provider returns them oldest
    first so they can be charted directly.
    """

    name = "twelvedata"
    BASE_URL = "https://api.twelvedata.com"

    def __init__(self, api_key: str | None, timeout: float = 10.0) -> None:
        self._api_key = api_key
        self._client = httpx.AsyncClient(base_url=self.BASE_URL, timeout=timeout)

    async def get_quote(self, symbol: str) -> StockQuote:
        raise NotImplementedError("twelvedata is only used for history")

    async def get_history(self, symbol: str, days: int = 30) -> list[HistoryPoint]:
        """Fetch the last ``days`` daily closes for a stock, oldest first.

        Raises:
            ProviderError: 400 when Twelve Data reports an error payload (e.g. an
                unknown symbol), 502 when the payload has no ``values`` list.
            httpx.HTTPStatusError: Non-2xx response.
        """
        if not self._api_key:
            raise ProviderNotConfigured("Twelve Data API")
        sym = normalize_stock_symbol(symbol)
        params = TwelveDataTimeSeriesParams(outputsize=days).model_dump() | {
            "symbol": sym,
            "apikey": self._api_key,
        }
        response = await self._client.get("/time_series", params=params)
        response.raise_for_status()
        data = response.json()

        if data.get("status") == "error":
            raise ProviderError(data.get("message") or "API error", status_code=400)
        values = data.get("values")
        if not isinstance(values, list):
            raise ProviderError("Invalid data format from API", status_code=502)

        try:
            bars = [TwelveDataValue.model_validate(v) for v in values]
            history = [HistoryPoint(date=b.datetime, price=round2(float(b.close))) for b in bars]
        except ValueError as exc:
            logger.warning("Malformed Twelve Data bar for %s: %s", sym, exc)
            raise ProviderError("Invalid data format from API", status_code=502) from exc
        history.reverse()
        return history

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
