"""Application settings read from the environment (and an optional .env file)."""
import os
from dataclasses import dataclass, field

from dotenv import find_dotenv, load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///./stock_portfolio.db"
DEFAULT_TRACKED_SYMBOLS = ("AAPL", "GOOGL", "MSFT")
DEFAULT_FEATURED_SYMBOLS = ("AAPL", "MSFT", "GOOGL", "AMZN", "NVDA", "TSLA")


def _getbool(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "y")


def _getint(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw else default


def _getfloat(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw else default


def _getsymbols(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    return tuple(s.strip().upper() for s in raw.split(",") if s.strip())


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration. Built once and injected by the container."""

    jwt_secret: str = ""
    token_ttl_days: int = 7
    database_url: str = DEFAULT_DATABASE_URL
    sql_echo: bool = False
    bcrypt_rounds: int = 10
    environment: str = "development"
    log_level: str = "INFO"

    finnhub_api_key: str | None = None
    twelve_data_api_key: str | None = None
    alpha_vantage_api_key: str | None = None
    alpha_vantage_spacing_seconds: float = 15.0
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.0-flash"
    http_timeout_seconds: float = 10.0

    tracked_symbols: tuple[str, ...] = DEFAULT_TRACKED_SYMBOLS
    featured_symbols: tuple[str, ...] = field(default=DEFAULT_FEATURED_SYMBOLS)

    @property
    def secure_cookies(self) -> bool:
        """Cookies carry the Secure flag only in production."""
        return self.environment == "production"

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables, reading .env from the working directory first."""
        load_dotenv(find_dotenv(usecwd=True))
        return cls(
            jwt_secret=os.getenv("JWT_SECRET", ""),
            token_ttl_days=_getint("TOKEN_TTL_DAYS", 7),
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            sql_echo=_getbool("SQL_ECHO"),
            bcrypt_rounds=_getint("BCRYPT_ROUNDS", 10),
            environment=os.getenv("APP_ENV", "development"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            finnhub_api_key=os.getenv("FINNHUB_API_KEY") or None,
            twelve_data_api_key=os.getenv("TWELVE_DATA_API_KEY") or None,
            alpha_vantage_api_key=os.getenv("ALPHA_VANTAGE_API_KEY") or None,
            alpha_vantage_spacing_seconds=_getfloat("ALPHA_VANTAGE_SPACING_SECONDS", 15.0),
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.0-flash"),
            http_timeout_seconds=_getfloat("HTTP_TIMEOUT_SECONDS", 10.0),
            tracked_symbols=_getsymbols("TRACKED_SYMBOLS", DEFAULT_TRACKED_SYMBOLS),
            featured_symbols=_getsymbols("FEATURED_SYMBOLS", DEFAULT_FEATURED_SYMBOLS),
        )
