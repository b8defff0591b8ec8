"""Models for the Twelve Data provider (API params and payloads)."""
from pydantic import BaseModel


class TwelveDataTimeSeriesParams(BaseModel):
    """Params for /time_series. Merge with 'symbol' and 'apikey' at call site."""

    interval: str = "1day"
    outputsize: int = 30
    format: str = "JSON"


class TwelveDataValue(BaseModel):
    """One bar of a /time_series response; prices arrive as strings."""

    datetime: str
    close: str
