"""AI insights: investment summaries, popular symbols and buy/hold/sell calls."""
import asyncio
import json
import logging
import re

import httpx

from stock_portfolio.errors import UpstreamError, ValidationError
from stock_portfolio.providers.ai import GeminiProvider
from stock_portfolio.providers.core import ProviderError, ProviderErrorMapper
from stock_portfolio.schemas import PricedSymbol, Recommendation

logger = logging.getLogger(__name__)

SUMMARY_PROMPT = """\
You are a financial analyst. Provide a concise, professional investment summary for the stock symbol {symbol}.
Include the following:
- Recent price trends and key recent events impacting the stock
- A reasoned price outlook for the next 1 month with possible risks
- Clear buy, hold, or sell recommendation with rationale
- Suggested portfolio allocation percentage based on risk profile
Use precise language, avoid jargon, and keep it engaging for investors seeking actionable insights.
"""

POPULAR_STOCKS_PROMPT = """\
You are a financial assistant. List 10 popular or trending Indian stock symbols that retail investors are currently interested in.
Return only the stock symbols in valid Finnhub-compatible format: use ".NS" for NSE stocks or ".BO" for BSE stocks.
Return only a JSON array like ["RELIANCE.NS", "TCS.NS", "INFY.NS"] with no explanation or extra text.
"""

RECOMMENDATION_LINE = (
    'You are a financial advisor. Given the stock symbol "{symbol}" and its current '
    "price ${price:.2f}, respond with exactly one word: BUY, HOLD, or SELL."
)

VERDICTS = ("BUY", "HOLD", "SELL")
DEFAULT_VERDICT = "HOLD"

_HEADER_MARKS = re.compile(r"^\s*#+\s*", re.MULTILINE)
_BOLD_MARKS = re.compile(r"\*\*")
_JSON_ARRAY = re.compile(r"\[.*\]", re.DOTALL)

_PROVIDER_EXCEPTIONS: tuple[type[Exception], ...] = (
    asyncio.TimeoutError,
    httpx.HTTPError,
    ProviderError,
)


def strip_markdown(text: str) -> str:
    """Drop markdown headers and bold markers so the text reads as plain prose."""
    text = _HEADER_MARKS.sub("", text)
    text = _BOLD_MARKS.sub("", text)
    return text.strip()


def parse_symbol_array(text: str) -> list[str]:
    """First JSON array in the reply, keeping string items; [] if none parses."""
    match = _JSON_ARRAY.search(text)
    if not match:
        return []
    try:
        items = json.loads(match.group(0))
    except json.JSONDecodeError:
        logger.warning("Model returned an unparsable symbol list")
        return []
    if not isinstance(items, list):
        return []
    return [item.strip().upper() for item in items if isinstance(item, str) and item.strip()]


def parse_verdicts(text: str) -> list[str]:
    """Reply lines that are exactly BUY, HOLD or SELL, in order."""
    lines = (line.strip().upper() for line in text.splitlines())
    return [line for line in lines if line in VERDICTS]


class InsightsService:
    """Prompts the language model and post-processes its replies."""

    def __init__(self, provider: GeminiProvider) -> None:
        self._provider = provider
        self._errors = ProviderErrorMapper("Summary", "Gemini API")

    async def _generate(self, prompt: str, symbol: str | None = None) -> str:
        try:
            return await self._provider.generate(prompt)
        except _PROVIDER_EXCEPTIONS as e:
            self._errors.raise_error(e, symbol=symbol)

    async def summarize(self, symbol: str | None) -> str:
        """Plain-text investment summary for one symbol."""
        if not symbol or not isinstance(symbol, str) or not symbol.strip():
            raise ValidationError("Missing or invalid symbol")
        symbol = symbol.strip().upper()
        raw = await self._generate(SUMMARY_PROMPT.format(symbol=symbol), symbol=symbol)
        summary = strip_markdown(raw)
        if not summary:
            raise UpstreamError("No summary generated", status_code=500)
        return summary

    async def popular_stocks(self) -> list[str]:
        """Symbols the model reports as currently popular."""
        return parse_symbol_array(await self._generate(POPULAR_STOCKS_PROMPT))

    async def recommend(self, stocks: list[PricedSymbol] | None) -> list[Recommendation]:
        """One BUY/HOLD/SELL per stock, matched by position; HOLD when missing."""
        if not stocks:
            raise ValidationError("stocks array is required in the body")
        prompt = "\n".join(
            RECOMMENDATION_LINE.format(symbol=s.symbol, price=s.price) for s in stocks
        )
        verdicts = parse_verdicts(await self._generate(prompt))
        if len(verdicts) < len(stocks):
            logger.info("Model returned %d verdicts for %d stocks", len(verdicts), len(stocks))
        return [
            Recommendation(
                symbol=stock.symbol,
                price=stock.price,
                recommendation=verdicts[i] if i < len(verdicts) else DEFAULT_VERDICT,
            )
            for i, stock in enumerate(stocks)
        ]

    async def close(self) -> None:
        await self._provider.close()
