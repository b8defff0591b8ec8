"""Abstract base class for market data providers."""
from abc import ABC, abstractmethod

from stock_portfolio.schemas import CompanyProfile, HistoryPoint, StockQuote


class MarketProviderABC(ABC):
    """Base interface for all stock market data providers.

    Each provider implements the calls its upstream API supports; the others
    raise NotImplementedError so the stocks service can compose providers
    (e.g. Finnhub for quotes, Twelve Data for history).
    """

    name: str = "provider"

    @abstractmethod
    async def get_quote(self, symbol: str) -> StockQuote:
        """Fetch the current quote for a symbol.

        Args:
            symbol: Normalized ticker (e.g. "AAPL", "RELIANCE.NS").

        Raises:
            ValueError: The provider has no data for the symbol.
        """

    async def get_profile(self, symbol: str) -> CompanyProfile:
        """Fetch the company profile for a symbol."""
        raise NotImplementedError(f"{self.name} does not provide company profiles")

    async def get_history(self, symbol: str, days: int) -> list[HistoryPoint]:
        """Fetch the last ``days`` daily closes, oldest first."""
        raise NotImplementedError(f"{self.name} does not provide historical data")

    async def close(self) -> None:
        """Clean up resources (connections, clients).

        Override in subclasses if cleanup is needed.
        """

    async def __aenter__(self) -> "MarketProviderABC":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        """Async context manager exit - calls close()."""
        await self.close()
