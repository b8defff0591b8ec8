"""Investor pages: home, portfolio overview and symbol detail.

Every path here sits behind the access gate with the investor role, so the
identity dependency always resolves. Each page collects its parts in parallel
and degrades a failed part to null instead of failing the whole page.
"""
import asyncio
import logging
from typing import Any

from fastapi import APIRouter

from stock_portfolio.deps import (Identity, InsightsServiceDep,
                                  PortfolioStoreDep, SettingsDep,
                                  StocksServiceDep)
from stock_portfolio.errors import AppError
from stock_portfolio.schemas import PricedSymbol, Recommendation
from stock_portfolio.services.insights import DEFAULT_VERDICT

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/investor", tags=["investor"])


def _part_or_none(name: str, symbol: str, result: Any) -> Any:
    """Unwrap a gather() result; AppError becomes None, anything else re-raises."""
    if isinstance(result, AppError):
        logger.warning("%s for %s unavailable: %s", name, symbol, result.message)
        return None
    if isinstance(result, BaseException):
        raise result
    return result


@router.get("")
async def investor_home(
    identity: Identity,
    stocks: StocksServiceDep,
    insights: InsightsServiceDep,
    settings: SettingsDep,
) -> dict[str, Any]:
    """Featured quotes with a BUY/HOLD/SELL call each."""
    quotes = await stocks.get_quotes(list(settings.featured_symbols))
    priced = [PricedSymbol(symbol=s, price=q.price) for s, q in quotes.items()]
    recommendations: list[Recommendation] = []
    if priced:
        try:
            recommendations = await insights.recommend(priced)
        except AppError as exc:
            logger.warning("Recommendations unavailable: %s", exc.message)
            recommendations = [
                Recommendation(symbol=p.symbol, price=p.price, recommendation=DEFAULT_VERDICT)
                for p in priced
            ]
    verdicts = {r.symbol: r.recommendation for r in recommendations}
    return {
        "user": identity,
        "stocks": [
            {
                "symbol": symbol,
                "price": quote.price,
                "change_percent": quote.change_percent,
                "recommendation": verdicts.get(symbol, DEFAULT_VERDICT),
            }
            for symbol, quote in quotes.items()
        ],
    }


@router.get("/portfolio")
async def investor_portfolio(
    identity: Identity,
    store: PortfolioStoreDep,
    stocks: StocksServiceDep,
) -> dict[str, Any]:
    """Held symbols with the current quote and company profile of each."""
    symbols = await asyncio.to_thread(store.list_symbols, identity.email)
    quotes, profiles = await asyncio.gather(
        stocks.get_quotes(symbols),
        asyncio.gather(*[stocks.get_profile(s) for s in symbols], return_exceptions=True),
    )
    return {
        "user": identity,
        "stocks": [
            {
                "symbol": symbol,
                "quote": quotes.get(symbol),
                "profile": _part_or_none("Profile", symbol, profile),
            }
            for symbol, profile in zip(symbols, profiles)
        ],
    }


@router.get("/{symbol}")
async def investor_stock_detail(
    symbol: str,
    identity: Identity,
    store: PortfolioStoreDep,
    stocks: StocksServiceDep,
) -> dict[str, Any]:
    """Profile, quote and 30-day history for one symbol, plus whether it is held."""
    symbol = symbol.strip().upper()
    profile, quote, history, held = await asyncio.gather(
        stocks.get_profile(symbol),
        stocks.get_quote(symbol),
        stocks.get_history(symbol),
        asyncio.to_thread(store.list_symbols, identity.email),
        return_exceptions=True,
    )
    return {
        "symbol": symbol,
        "profile": _part_or_none("Profile", symbol, profile),
        "quote": _part_or_none("Quote", symbol, quote),
        "history": _part_or_none("History", symbol, history) or [],
        "in_portfolio": symbol in (_part_or_none("Portfolio", symbol, held) or []),
    }
