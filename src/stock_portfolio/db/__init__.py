"""Database package: models and session management."""
from stock_portfolio.db.models import Portfolio, PortfolioStock, Role, User

__all__ = ["Portfolio", "PortfolioStock", "Role", "User"]
