"""Stocks service: quotes, profiles, history and the tracked-symbols board.

StocksService composes one provider per concern (quotes, profiles, history,
board) and maps provider errors to application errors, so routers only call
the service and return responses.
"""
import asyncio
import logging

import httpx

from stock_portfolio.errors import NotFoundError, ValidationError
from stock_portfolio.providers.core import (MarketProviderABC, ProviderError,
                                            ProviderErrorMapper,
                                            normalize_stock_symbol)
from stock_portfolio.schemas import CompanyProfile, HistoryPoint, StockQuote

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"

# Exceptions from providers we map to AppError; all others propagate (e.g. bugs).
_PROVIDER_EXCEPTIONS: tuple[type[Exception], ...] = (
    ValueError,
    KeyError,
    TypeError,
    TimeoutError,
    OSError,
    NotImplementedError,
    asyncio.TimeoutError,
    httpx.HTTPError,
    ProviderError,
)


def _api_name(provider: MarketProviderABC) -> str:
    return {
        "finnhub": "Finnhub API",
        "twelvedata": "Twelve Data API",
        "alphavantage": "Alpha Vantage API",
        "yfinance": "Yahoo Finance",
    }.get(provider.name, "Stocks API")


class StocksService:
    """Thin service over the stock providers; maps provider errors to AppError."""

    def __init__(
        self,
        quotes: MarketProviderABC,
        profiles: MarketProviderABC,
        history: MarketProviderABC,
        board: MarketProviderABC | None = None,
        *,
        tracked_symbols: tuple[str, ...] = (),
        board_spacing_seconds: float = 0.0,
    ) -> None:
        """Initialize with providers and board config.

        Args:
            quotes: Provider for current quotes.
            profiles: Provider for company profiles.
            history: Provider for daily close history.
            board: Provider for the tracked-symbols board (defaults to ``quotes``).
            tracked_symbols: Symbols shown on the board.
            board_spacing_seconds: Pause between board calls (free-tier rate limits).
        """
        self._quotes = quotes
        self._profiles = profiles
        self._history = history
        self._board = board or quotes
        self._tracked = tracked_symbols
        self._spacing = board_spacing_seconds
        self._quote_errors = ProviderErrorMapper("Stock", _api_name(quotes))
        self._profile_errors = ProviderErrorMapper("Profile for stock", _api_name(profiles))
        self._history_errors = ProviderErrorMapper("History for stock", _api_name(history))
        self._board_errors = ProviderErrorMapper("Stock", _api_name(self._board))

    @staticmethod
    def _normalize_symbol(symbol: str | None) -> str:
        if not symbol or not symbol.strip():
            raise ValidationError("Missing symbol")
        return normalize_stock_symbol(symbol)

    async def get_quote(self, symbol: str) -> StockQuote:
        """Get current quote. Raises AppError on provider errors."""
        norm = self._normalize_symbol(symbol)
        try:
            return await self._quotes.get_quote(norm)
        except _PROVIDER_EXCEPTIONS as e:
            self._quote_errors.raise_error(e, symbol=norm)

    async def get_profile(self, symbol: str) -> CompanyProfile:
        """Get company profile. Raises AppError on provider errors."""
        norm = self._normalize_symbol(symbol)
        try:
            return await self._profiles.get_profile(norm)
        except _PROVIDER_EXCEPTIONS as e:
            self._profile_errors.raise_error(e, symbol=norm)

    async def get_history(self, symbol: str, days: int = 30) -> list[HistoryPoint]:
        """Get daily closes, oldest first. Raises AppError on provider errors."""
        norm = self._normalize_symbol(symbol)
        try:
            return await self._history.get_history(norm, days)
        except _PROVIDER_EXCEPTIONS as e:
            self._history_errors.raise_error(e, symbol=norm)

    async def get_quotes(self, symbols: list[str]) -> dict[str, StockQuote]:
        """Quotes for several symbols in parallel; failed symbols are omitted."""
        normalized = [self._normalize_symbol(s) for s in symbols]
        results = await asyncio.gather(
            *[self._quotes.get_quote(s) for s in normalized],
            return_exceptions=True,
        )
        quotes: dict[str, StockQuote] = {}
        for symbol, result in zip(normalized, results):
            if isinstance(result, Exception):
                logger.warning("Quote for %s failed: %s", symbol, result)
                continue
            quotes[symbol] = result
        return quotes

    async def get_board(self) -> dict[str, str]:
        """Prices for the tracked symbols as two-decimal strings ("N/A" if unknown).

        Calls are sequential and spaced; a rate-limit or transport failure
        aborts the whole board.
        """
        board: dict[str, str] = {}
        for index, symbol in enumerate(self._tracked):
            if index and self._spacing:
                await asyncio.sleep(self._spacing)
            try:
                quote = await self._board.get_quote(symbol)
            except _PROVIDER_EXCEPTIONS as e:
                error = self._board_errors.to_error(e, symbol=symbol)
                if isinstance(error, NotFoundError):
                    board[symbol] = NOT_AVAILABLE
                    continue
                raise error from e
            board[symbol] = f"{quote.price:.2f}"
        return board

    async def close(self) -> None:
        """Close each distinct provider once."""
        seen: set[int] = set()
        for provider in (self._quotes, self._profiles, self._history, self._board):
            if id(provider) in seen:
                continue
            seen.add(id(provider))
            try:
                await provider.close()
            except Exception as exc:  # pylint: disable=broad-except
                logger.warning("Error closing provider %s: %s", type(provider).__name__, exc)
