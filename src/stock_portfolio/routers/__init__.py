"""API routers.

Includes routes for:
- /, /login, /signup - Public pages
- /api/auth - Signup, login, signout, current identity
- /api/portfolio - The signed-in user's symbols
- /api/history, /api/stocks, /api/quote, /api/profile - Market data
- /api/gemini-summary, /api/popular-stocks, /api/recommendation - AI insights
- /investor, /analyst - Role-gated pages
"""
from stock_portfolio.routers.analyst import router as analyst_router
from stock_portfolio.routers.auth import router as auth_router
from stock_portfolio.routers.insights import router as insights_router
from stock_portfolio.routers.investor import router as investor_router
from stock_portfolio.routers.pages import router as pages_router
from stock_portfolio.routers.portfolio import router as portfolio_router
from stock_portfolio.routers.stocks import router as stocks_router

__all__ = [
    "pages_router",
    "auth_router",
    "portfolio_router",
    "stocks_router",
    "insights_router",
    "investor_router",
    "analyst_router",
]
