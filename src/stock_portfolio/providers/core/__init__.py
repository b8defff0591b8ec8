"""Core provider abstractions."""
from stock_portfolio.providers.core.error_mapper import ProviderErrorMapper
from stock_portfolio.providers.core.exceptions import (ProviderError,
                                                       ProviderNotConfigured)
from stock_portfolio.providers.core.market_provider_abc import MarketProviderABC
from stock_portfolio.providers.core.utils import (normalize_stock_symbol,
                                                  round2, to_float)

__all__ = [
    "MarketProviderABC",
    "ProviderError",
    "ProviderErrorMapper",
    "ProviderNotConfigured",
    "normalize_stock_symbol",
    "round2",
    "to_float",
]
