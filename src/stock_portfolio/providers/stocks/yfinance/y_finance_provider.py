"""Yahoo Finance market data provider for stocks."""
import asyncio
from datetime import datetime, timedelta, timezone

import yfinance as yf

from stock_portfolio.providers.core import (MarketProviderABC,
                                            normalize_stock_symbol, round2)
from stock_portfolio.providers.stocks.yfinance.models import YFinanceInfo
from stock_portfolio.schemas import CompanyProfile, HistoryPoint, StockQuote


class YFinanceProvider(MarketProviderABC):
    """Market data provider for stocks via Yahoo Finance.

    Uses the yfinance library for quotes, profiles and historical data.
    No API key required, so it backs every call whose keyed provider is not
    configured. yfinance is synchronous; calls run in a worker thread.
    """

    name = "yfinance"

    def _extract_price_volume(
        self, ticker: yf.Ticker, symbol: str
    ) -> tuple[float, float | None, float | None]:
        """Extract price, volume and previous close; raises if price unavailable."""
        info = getattr(ticker, "fast_info", None)
        if info and (price := info.get("lastPrice") or info.get("regularMarketPrice")):
            vol = info.get("lastVolume")
            prev = info.get("previousClose")
            return float(price), float(vol) if vol is not None else None, prev
        full = ticker.info
        price = full.get("currentPrice") or full.get("regularMarketPrice")
        if price is None:
            raise ValueError(f"Stock '{symbol}' not found or has no price data")
        vol = full.get("volume")
        return float(price), float(vol) if vol is not None else None, full.get("previousClose")

    def _fetch_quote_sync(self, symbol: str) -> StockQuote:
        """Fetch a single quote synchronously (run in thread)."""
        ticker = yf.Ticker(symbol)
        try:
            price, volume, previous_close = self._extract_price_volume(ticker, symbol)
        except ValueError:
            raise
        except Exception as e:
            raise ValueError(f"Failed to fetch quote for '{symbol}': {e}") from e
        change = change_percent = None
        if previous_close:
            change = price - float(previous_close)
            change_percent = change / float(previous_close) * 100
        return StockQuote(
            symbol=symbol,
            price=round2(price),
            change=round2(change),
            change_percent=round2(change_percent),
            previous_close=round2(previous_close),
            volume=round2(volume),
            timestamp=datetime.now(timezone.utc),
            provider=self.name,
        )

    async def get_quote(self, symbol: str) -> StockQuote:
        """Fetch the current quote for a stock symbol."""
        sym = normalize_stock_symbol(symbol)
        return await asyncio.to_thread(self._fetch_quote_sync, sym)

    def _fetch_profile_sync(self, symbol: str) -> CompanyProfile:
        try:
            info = YFinanceInfo.model_validate(yf.Ticker(symbol).info or {})
        except Exception as e:
            raise ValueError(f"Failed to fetch profile for '{symbol}': {e}") from e
        name = info.long_name or info.short_name
        if name is None:
            raise ValueError(f"Profile for '{symbol}' not found")
        return CompanyProfile(
            symbol=symbol,
            name=name,
            exchange=info.exchange,
            industry=info.industry,
            country=info.country,
            currency=info.currency,
            market_cap=info.market_cap,
            website=info.website,
            provider=self.name,
        )

    async def get_profile(self, symbol: str) -> CompanyProfile:
        """Fetch the company profile for a stock symbol."""
        sym = normalize_stock_symbol(symbol)
        return await asyncio.to_thread(self._fetch_profile_sync, sym)

    async def get_history(self, symbol: str, days: int = 30) -> list[HistoryPoint]:
        """Fetch the last ``days`` daily closes for a stock, oldest first."""
        sym = normalize_stock_symbol(symbol)
        end = datetime.now(timezone.utc)
        # Calendar window wide enough to hold ``days`` trading sessions.
        start = end - timedelta(days=days * 2 + 7)
        try:
            df = await asyncio.to_thread(
                lambda: yf.Ticker(sym).history(start=start, end=end, interval="1d")
            )
        except Exception as e:
            raise ValueError(f"Failed to fetch history for '{sym}': {e}") from e
        if df.empty:
            return []
        df = df.dropna(subset=["Close"]).tail(days)
        return [
            HistoryPoint(date=ts.strftime("%Y-%m-%d"), price=round2(float(row["Close"])))
            for ts, row in df.iterrows()
        ]
