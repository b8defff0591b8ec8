"""Pydantic schemas for API and runtime use. Not persisted to DB."""
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from stock_portfolio.db import Role


class IdentityClaims(BaseModel):
    """Verified identity carried by an access token."""

    model_config = ConfigDict(frozen=True)

    subject_id: str
    email: str
    role: Role


class UserOut(BaseModel):
    id: str
    name: str
    email: str
    role: Role


class SignupRequest(BaseModel):
    """All fields optional so missing ones surface as our 400, not a 422."""

    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class AuthResponse(BaseModel):
    user: UserOut


class PortfolioView(BaseModel):
    """A user's portfolio as a set of symbols in insertion order."""

    owner_email: str
    stocks: list[str] = Field(default_factory=list)


class SymbolRequest(BaseModel):
    """Body for portfolio add/remove. Accepts ``stockSymbol`` or ``symbol``."""

    model_config = ConfigDict(populate_by_name=True)

    symbol: str | None = Field(default=None, alias="stockSymbol")


class StockQuote(BaseModel):
    """Current quote for a ticker."""

    symbol: str
    price: float
    change: float | None = None
    change_percent: float | None = None
    open: float | None = None
    high: float | None = None
    low: float | None = None
    previous_close: float | None = None
    volume: float | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    provider: str


class CompanyProfile(BaseModel):
    symbol: str
    name: str | None = None
    exchange: str | None = None
    industry: str | None = None
    country: str | None = None
    currency: str | None = None
    market_cap: float | None = None
    logo: str | None = None
    website: str | None = None
    provider: str


class HistoryPoint(BaseModel):
    """One daily close; ``date`` is the provider's date string (YYYY-MM-DD)."""

    date: str
    price: float


class HistoryResponse(BaseModel):
    history: list[HistoryPoint]


class SummaryRequest(BaseModel):
    symbol: str | None = None


class PricedSymbol(BaseModel):
    symbol: str
    price: float


class RecommendationRequest(BaseModel):
    stocks: list[PricedSymbol] | None = None


class Recommendation(BaseModel):
    symbol: str
    price: float
    recommendation: str


__all__ = [
    "AuthResponse",
    "CompanyProfile",
    "HistoryPoint",
    "HistoryResponse",
    "IdentityClaims",
    "LoginRequest",
    "PortfolioView",
    "PricedSymbol",
    "Recommendation",
    "RecommendationRequest",
    "SignupRequest",
    "StockQuote",
    "SummaryRequest",
    "SymbolRequest",
    "UserOut",
]
