"""Tests for YFinanceProvider with yfinance.Ticker patched out."""
import pandas as pd
import pytest

from stock_portfolio.providers import YFinanceProvider
from stock_portfolio.providers.stocks.yfinance import y_finance_provider


class FakeTicker:
    def __init__(self, fast_info=None, info=None, history=None):
        self.fast_info = fast_info or {}
        self.info = info or {}
        self._history = history

    def history(self, start=None, end=None, interval="1d"):
        return self._history if self._history is not None else pd.DataFrame()


@pytest.fixture
def patch_ticker(monkeypatch):
    def _patch(ticker: FakeTicker) -> None:
        monkeypatch.setattr(y_finance_provider.yf, "Ticker", lambda symbol: ticker)

    return _patch


async def test_quote_from_fast_info(patch_ticker):
    patch_ticker(FakeTicker(fast_info={"lastPrice": 200.0, "lastVolume": 1000, "previousClose": 190.0}))
    quote = await YFinanceProvider().get_quote("aapl")
    assert quote.symbol == "AAPL"
    assert quote.price == 200.0
    assert quote.change == 10.0
    assert quote.change_percent == 5.26
    assert quote.provider == "yfinance"


async def test_quote_falls_back_to_info(patch_ticker):
    patch_ticker(FakeTicker(info={"currentPrice": 99.5, "volume": 10}))
    quote = await YFinanceProvider().get_quote("XYZ")
    assert quote.price == 99.5
    assert quote.change is None


async def test_quote_without_price_is_value_error(patch_ticker):
    patch_ticker(FakeTicker())
    with pytest.raises(ValueError):
        await YFinanceProvider().get_quote("NOPE")


async def test_profile(patch_ticker):
    patch_ticker(FakeTicker(info={"longName": "Apple Inc.", "exchange": "NMS", "industry": "Consumer Electronics"}))
    profile = await YFinanceProvider().get_profile("AAPL")
    assert profile.name == "Apple Inc."
    assert profile.exchange == "NMS"


async def test_profile_without_name_is_value_error(patch_ticker):
    patch_ticker(FakeTicker(info={"exchange": "NMS"}))
    with pytest.raises(ValueError):
        await YFinanceProvider().get_profile("NOPE")


async def test_history_keeps_last_days_oldest_first(patch_ticker):
    index = pd.date_range("2024-01-01", periods=5, freq="D")
    frame = pd.DataFrame({"Close": [1.0, 2.0, None, 4.0, 5.123]}, index=index)
    patch_ticker(FakeTicker(history=frame))
    history = await YFinanceProvider().get_history("AAPL", days=3)
    assert [p.date for p in history] == ["2024-01-02", "2024-01-04", "2024-01-05"]
    assert history[-1].price == 5.12


async def test_empty_history(patch_ticker):
    patch_ticker(FakeTicker())
    assert await YFinanceProvider().get_history("AAPL") == []
