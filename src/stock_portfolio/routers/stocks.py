"""Stock market data routes.

Provider selection and error mapping live in StocksService; these handlers
only validate input and shape the response.
"""
from fastapi import APIRouter, Query

from stock_portfolio.deps import StocksServiceDep
from stock_portfolio.schemas import CompanyProfile, HistoryResponse, StockQuote

router = APIRouter(prefix="/api", tags=["stocks"])


@router.get("/history", response_model=HistoryResponse)
async def get_history(
    stocks: StocksServiceDep,
    symbol: str | None = Query(default=None, description="Stock ticker"),
    days: int = Query(default=30, ge=1, le=365, description="Number of daily closes"),
) -> HistoryResponse:
    """Daily closes for a symbol, oldest first.

    Args:
        symbol: Stock ticker (e.g., "AAPL").
        days: Number of trading days (default: 30).
    """
    return HistoryResponse(history=await stocks.get_history(symbol, days=days))


@router.get("/stocks")
async def get_tracked_stocks(stocks: StocksServiceDep) -> dict[str, dict[str, str]]:
    """Latest price per tracked symbol as a two-decimal string, or "N/A"."""
    return {"stockData": await stocks.get_board()}


@router.get("/quote/{symbol}", response_model=StockQuote)
async def get_stock_quote(symbol: str, stocks: StocksServiceDep) -> StockQuote:
    return await stocks.get_quote(symbol)


@router.get("/profile/{symbol}", response_model=CompanyProfile)
async def get_company_profile(symbol: str, stocks: StocksServiceDep) -> CompanyProfile:
    return await stocks.get_profile(symbol)
