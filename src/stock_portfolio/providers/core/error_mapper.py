"""Domain concept for mapping provider exceptions to application errors."""
import asyncio
import json
import logging
from dataclasses import dataclass

import httpx

from stock_portfolio.errors import (AppError, NotFoundError, UpstreamError,
                                    ValidationError)
from stock_portfolio.providers.core.exceptions import ProviderError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderErrorMapper:
    """Maps provider/backend exceptions to AppError (status code + client-safe message).

    Inject this into services to centralize error mapping per upstream
    (e.g. Finnhub quotes, Twelve Data history, Gemini) with appropriate
    resource and API names. Detail goes to the log, not the message.
    """

    resource_name: str = "Resource"
    api_name: str = "API"

    def to_error(
        self,
        exc: Exception,
        symbol: str | None = None,
    ) -> AppError:
        """Map a provider exception to an AppError.

        Args:
            exc: The exception raised by the provider or service.
            symbol: Optional symbol/identifier to include in detail (e.g. "AAPL").
        """
        if isinstance(exc, AppError):
            return exc
        if isinstance(exc, ProviderError):
            logger.warning("%s error for %s: %s", self.api_name, symbol, exc.message)
            if exc.status_code == 400:
                return ValidationError(exc.message)
            if exc.status_code == 404:
                return NotFoundError(exc.message)
            return UpstreamError(exc.message, status_code=exc.status_code)
        if isinstance(exc, NotImplementedError):
            return UpstreamError(str(exc), status_code=501)
        if isinstance(exc, json.JSONDecodeError):
            logger.warning("%s sent an unparsable body for %s: %s", self.api_name, symbol, exc)
            return UpstreamError(f"{self.api_name} error", status_code=502)
        if isinstance(exc, (ValueError, KeyError, TypeError)):
            return NotFoundError(self._not_found(symbol))
        if isinstance(exc, httpx.HTTPStatusError):
            status = exc.response.status_code
            logger.warning("%s returned %s for %s: %s", self.api_name, status, symbol, exc.response.text[:200])
            if status == 404:
                return NotFoundError(self._not_found(symbol))
            if status >= 500:
                return UpstreamError(f"{self.api_name} error", status_code=502)
            return UpstreamError(f"{self.api_name} error: {status}", status_code=status)
        if isinstance(exc, (asyncio.TimeoutError, TimeoutError, httpx.TimeoutException)):
            detail = "Request timed out"
            if symbol is not None:
                detail = f"Request to {self.api_name} timed out for '{symbol}'"
            return UpstreamError(detail, status_code=504)
        if isinstance(exc, (httpx.HTTPError, OSError)):
            logger.warning("%s unreachable: %s", self.api_name, exc)
            return UpstreamError(f"{self.api_name} unavailable", status_code=502)
        logger.exception("Unexpected %s failure", self.api_name, exc_info=exc)
        return UpstreamError("Internal server error", status_code=500)

    def raise_error(
        self,
        exc: Exception,
        symbol: str | None = None,
    ) -> None:
        """Map provider exception to an AppError and raise it. Never returns."""
        raise self.to_error(exc, symbol=symbol) from exc

    def _not_found(self, symbol: str | None) -> str:
        if symbol is None:
            return f"{self.resource_name} not found"
        return f"{self.resource_name} '{symbol}' not found"
