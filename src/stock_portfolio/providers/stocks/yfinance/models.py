"""Models for YFinance provider (fields read from ``Ticker.info``)."""
from pydantic import BaseModel, ConfigDict, Field


class YFinanceInfo(BaseModel):
    """Subset of ``Ticker.info`` used for profiles; extra keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    long_name: str | None = Field(default=None, alias="longName")
    short_name: str | None = Field(default=None, alias="shortName")
    exchange: str | None = None
    industry: str | None = None
    country: str | None = None
    currency: str | None = None
    market_cap: float | None = Field(default=None, alias="marketCap")
    website: str | None = None
