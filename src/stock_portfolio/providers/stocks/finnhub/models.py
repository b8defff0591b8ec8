"""Models for the Finnhub provider (API payloads)."""
from pydantic import BaseModel, Field


class FinnhubQuote(BaseModel):
    """/quote response. Unknown symbols come back as all zeros."""

    current: float = Field(default=0.0, alias="c")
    change: float | None = Field(default=None, alias="d")
    change_percent: float | None = Field(default=None, alias="dp")
    high: float | None = Field(default=None, alias="h")
    low: float | None = Field(default=None, alias="l")
    open: float | None = Field(default=None, alias="o")
    previous_close: float | None = Field(default=None, alias="pc")
    timestamp: int = Field(default=0, alias="t")

    @property
    def is_empty(self) -> bool:
        return not self.current and not self.timestamp


class FinnhubProfile(BaseModel):
    """/stock/profile2 response. Unknown symbols come back as ``{}``."""

    ticker: str | None = None
    name: str | None = None
    exchange: str | None = None
    finnhub_industry: str | None = Field(default=None, alias="finnhubIndustry")
    country: str | None = None
    currency: str | None = None
    market_capitalization: float | None = Field(default=None, alias="marketCapitalization")
    logo: str | None = None
    weburl: str | None = None
