"""Tests for the HTTP-backed providers (Finnhub, Twelve Data, Alpha Vantage, Gemini)."""
from datetime import datetime, timezone

import httpx
import pytest

from stock_portfolio.providers import (AlphaVantageProvider, FinnhubProvider,
                                       GeminiProvider, TwelveDataProvider)
from stock_portfolio.providers.core import ProviderError, ProviderNotConfigured
from stock_portfolio.providers.stocks.alphavantage.alpha_vantage_provider import \
    RATE_LIMIT_MESSAGE

FINNHUB_URL = "https://finnhub.io/api/v1"
TWELVE_URL = "https://api.twelvedata.com"
ALPHA_URL = "https://www.alphavantage.co"
GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta"


@pytest.fixture
async def finnhub():
    async with FinnhubProvider("fh-key") as provider:
        yield provider


@pytest.fixture
async def twelve():
    async with TwelveDataProvider("td-key") as provider:
        yield provider


@pytest.fixture
async def alpha():
    async with AlphaVantageProvider("av-key") as provider:
        yield provider


@pytest.mark.respx(base_url=FINNHUB_URL)
async def test_finnhub_quote(respx_mock, finnhub):
    route = respx_mock.get("/quote").mock(
        return_value=httpx.Response(
            200,
            json={"c": 190.456, "d": 1.2, "dp": 0.63, "h": 191.0, "l": 188.1, "o": 189.0, "pc": 189.25, "t": 1700000000},
        )
    )
    quote = await finnhub.get_quote(" aapl ")
    assert quote.symbol == "AAPL"
    assert quote.price == 190.46
    assert quote.previous_close == 189.25
    assert quote.provider == "finnhub"
    assert quote.timestamp == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)
    params = route.calls[0].request.url.params
    assert params["symbol"] == "AAPL"
    assert params["token"] == "fh-key"


@pytest.mark.respx(base_url=FINNHUB_URL)
async def test_finnhub_unknown_symbol_is_value_error(respx_mock, finnhub):
    respx_mock.get("/quote").mock(
        return_value=httpx.Response(200, json={"c": 0, "d": None, "dp": None, "h": 0, "l": 0, "o": 0, "pc": 0, "t": 0})
    )
    with pytest.raises(ValueError):
        await finnhub.get_quote("NOPE")


@pytest.mark.respx(base_url=FINNHUB_URL)
async def test_finnhub_profile(respx_mock, finnhub):
    respx_mock.get("/stock/profile2").mock(
        return_value=httpx.Response(
            200,
            json={
                "name": "Apple Inc",
                "exchange": "NASDAQ NMS - GLOBAL MARKET",
                "finnhubIndustry": "Technology",
                "country": "US",
                "currency": "USD",
                "marketCapitalization": 2950000.5,
                "logo": "https://static.finnhub.io/logo/aapl.png",
                "weburl": "https://www.apple.com/",
            },
        )
    )
    profile = await finnhub.get_profile("AAPL")
    assert profile.name == "Apple Inc"
    assert profile.industry == "Technology"
    assert profile.website == "https://www.apple.com/"


@pytest.mark.respx(base_url=FINNHUB_URL)
async def test_finnhub_empty_profile_is_value_error(respx_mock, finnhub):
    respx_mock.get("/stock/profile2").mock(return_value=httpx.Response(200, json={}))
    with pytest.raises(ValueError):
        await finnhub.get_profile("NOPE")


async def test_finnhub_without_key_is_not_configured():
    async with FinnhubProvider(None) as provider:
        with pytest.raises(ProviderNotConfigured) as exc_info:
            await provider.get_quote("AAPL")
    assert exc_info.value.status_code == 503


@pytest.mark.respx(base_url=TWELVE_URL)
async def test_twelve_data_history_is_oldest_first(respx_mock, twelve):
    route = respx_mock.get("/time_series").mock(
        return_value=httpx.Response(
            200,
            json={
                "status": "ok",
                "values": [
                    {"datetime": "2024-01-03", "close": "187.1000"},
                    {"datetime": "2024-01-02", "close": "185.6400"},
                    {"datetime": "2024-01-01", "close": "184.2500"},
                ],
            },
        )
    )
    history = await twelve.get_history("aapl")
    assert [p.date for p in history] == ["2024-01-01", "2024-01-02", "2024-01-03"]
    assert history[-1].price == 187.1
    params = route.calls[0].request.url.params
    assert params["symbol"] == "AAPL"
    assert params["interval"] == "1day"
    assert params["outputsize"] == "30"
    assert params["apikey"] == "td-key"


@pytest.mark.respx(base_url=TWELVE_URL)
async def test_twelve_data_error_payload_is_400(respx_mock, twelve):
    respx_mock.get("/time_series").mock(
        return_value=httpx.Response(200, json={"status": "error", "code": 400, "message": "symbol not found"})
    )
    with pytest.raises(ProviderError) as exc_info:
        await twelve.get_history("NOPE")
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "symbol not found"


@pytest.mark.respx(base_url=TWELVE_URL)
async def test_twelve_data_malformed_payload_is_502(respx_mock, twelve):
    respx_mock.get("/time_series").mock(return_value=httpx.Response(200, json={"values": "oops"}))
    with pytest.raises(ProviderError) as exc_info:
        await twelve.get_history("AAPL")
    assert exc_info.value.status_code == 502
    assert exc_info.value.message == "Invalid data format from API"


@pytest.mark.respx(base_url=ALPHA_URL)
async def test_alpha_vantage_quote(respx_mock, alpha):
    respx_mock.get("/query").mock(
        return_value=httpx.Response(
            200,
            json={
                "Global Quote": {
                    "01. symbol": "MSFT",
                    "02. open": "409.0000",
                    "05. price": "410.2500",
                    "06. volume": "19000000",
                    "08. previous close": "405.0000",
                    "09. change": "5.2500",
                    "10. change percent": "1.2963%",
                }
            },
        )
    )
    quote = await alpha.get_quote("MSFT")
    assert quote.price == 410.25
    assert quote.change_percent == 1.3
    assert quote.volume == 19000000


@pytest.mark.respx(base_url=ALPHA_URL)
async def test_alpha_vantage_rate_limit_note(respx_mock, alpha):
    respx_mock.get("/query").mock(
        return_value=httpx.Response(200, json={"Note": "Thank you for using Alpha Vantage!"})
    )
    with pytest.raises(ProviderError) as exc_info:
        await alpha.get_quote("MSFT")
    assert exc_info.value.status_code == 429
    assert exc_info.value.message == RATE_LIMIT_MESSAGE


@pytest.mark.respx(base_url=ALPHA_URL)
async def test_alpha_vantage_empty_quote_is_value_error(respx_mock, alpha):
    respx_mock.get("/query").mock(return_value=httpx.Response(200, json={"Global Quote": {}}))
    with pytest.raises(ValueError):
        await alpha.get_quote("NOPE")


@pytest.mark.respx(base_url=GEMINI_URL)
async def test_gemini_generate(respx_mock):
    route = respx_mock.post("/models/gemini-2.0-flash:generateContent").mock(
        return_value=httpx.Response(
            200, json={"candidates": [{"content": {"parts": [{"text": "  BUY\n"}]}}]}
        )
    )
    provider = GeminiProvider("gm-key")
    try:
        assert await provider.generate("Should I buy?") == "BUY"
    finally:
        await provider.close()
    request = route.calls[0].request
    assert request.url.params["key"] == "gm-key"
    assert b"Should I buy?" in request.content


@pytest.mark.respx(base_url=GEMINI_URL)
async def test_gemini_without_candidates_is_empty(respx_mock):
    respx_mock.post("/models/gemini-2.0-flash:generateContent").mock(
        return_value=httpx.Response(200, json={"candidates": []})
    )
    provider = GeminiProvider("gm-key")
    try:
        assert await provider.generate("hello") == ""
    finally:
        await provider.close()


@pytest.mark.respx(base_url=GEMINI_URL)
async def test_gemini_invalid_reply_is_provider_error(respx_mock):
    respx_mock.post("/models/gemini-2.0-flash:generateContent").mock(
        return_value=httpx.Response(200, json={"candidates": "nope"})
    )
    provider = GeminiProvider("gm-key")
    try:
        with pytest.raises(ProviderError) as exc_info:
            await provider.generate("hello")
    finally:
        await provider.close()
    assert exc_info.value.status_code == 502


async def test_gemini_without_key_is_not_configured():
    provider = GeminiProvider(None)
    try:
        with pytest.raises(ProviderNotConfigured):
            await provider.generate("hello")
    finally:
        await provider.close()
