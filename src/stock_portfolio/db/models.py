"""Database models for the stock portfolio service.

Only user/application state is persisted. Quotes, history and AI summaries are
fetched on demand from the providers and never stored.
"""
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Role(str, Enum):
    """Closed set of account roles."""

    INVESTOR = "investor"
    ANALYST = "analyst"
    ADMIN = "admin"


class User(SQLModel, table=True):
    """User account for authentication and role-based routing."""

    id: int | None = Field(default=None, primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)  # stored lower-cased
    hashed_password: str
    role: Role = Field(default=Role.INVESTOR)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))


class Portfolio(SQLModel, table=True):
    """One portfolio per user, keyed by the owner's email (no cascade)."""

    id: int | None = Field(default=None, primary_key=True)
    owner_email: str = Field(unique=True, index=True)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))


class PortfolioStock(SQLModel, table=True):
    """A ticker symbol held in a portfolio. The pair is unique (set semantics)."""

    __table_args__ = (UniqueConstraint("portfolio_id", "symbol"),)

    id: int | None = Field(default=None, primary_key=True)
    portfolio_id: int = Field(foreign_key="portfolio.id", index=True)
    symbol: str
    added_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
