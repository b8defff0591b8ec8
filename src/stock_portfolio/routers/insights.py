"""AI insight routes backed by the language model."""
from fastapi import APIRouter

from stock_portfolio.deps import InsightsServiceDep
from stock_portfolio.schemas import (Recommendation, RecommendationRequest,
                                     SummaryRequest)

router = APIRouter(prefix="/api", tags=["insights"])


@router.post("/gemini-summary")
async def gemini_summary(body: SummaryRequest, insights: InsightsServiceDep) -> dict[str, str]:
    """Plain-text investment summary for one symbol."""
    return {"summary": await insights.summarize(body.symbol)}


@router.get("/popular-stocks")
async def popular_stocks(insights: InsightsServiceDep) -> dict[str, list[str]]:
    return {"stocks": await insights.popular_stocks()}


@router.post("/recommendation")
async def recommendation(
    body: RecommendationRequest,
    insights: InsightsServiceDep,
) -> dict[str, list[Recommendation]]:
    """BUY, HOLD or SELL for each priced symbol in the body."""
    return {"results": await insights.recommend(body.stocks)}
