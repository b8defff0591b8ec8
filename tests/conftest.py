"""Shared test fixtures for stock_portfolio tests."""
import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from stock_portfolio.auth import TokenService
from stock_portfolio.config import Settings
from stock_portfolio.container import init_container
from stock_portfolio.db import Role
from stock_portfolio.db.sessions import create_db_engine, init_db
from stock_portfolio.db.stores import PortfolioStore, UserStore
from stock_portfolio.main import create_app
from stock_portfolio.providers.core import MarketProviderABC
from stock_portfolio.schemas import (CompanyProfile, HistoryPoint,
                                     IdentityClaims, StockQuote)
from stock_portfolio.services import InsightsService, StocksService

JWT_SECRET = "test-secret-key-that-is-at-least-32-bytes-long"

PRICES = {"AAPL": 190.5, "MSFT": 410.25, "GOOGL": 150.0}


class FakeMarketProvider(MarketProviderABC):
    """In-memory provider: knows PRICES, raises ValueError for anything else."""

    name = "fake"

    def __init__(self, prices: dict[str, float] | None = None) -> None:
        self.prices = dict(PRICES if prices is None else prices)
        self.quote_calls: list[str] = []
        self.closed = False

    async def get_quote(self, symbol: str) -> StockQuote:
        self.quote_calls.append(symbol)
        if symbol not in self.prices:
            raise ValueError(f"Stock '{symbol}' not found")
        return StockQuote(symbol=symbol, price=self.prices[symbol], change_percent=1.5, provider=self.name)

    async def get_profile(self, symbol: str) -> CompanyProfile:
        if symbol not in self.prices:
            raise ValueError(f"Profile for '{symbol}' not found")
        return CompanyProfile(symbol=symbol, name=f"{symbol} Inc.", exchange="NASDAQ", provider=self.name)

    async def get_history(self, symbol: str, days: int = 30) -> list[HistoryPoint]:
        if symbol not in self.prices:
            raise ValueError(f"History for '{symbol}' not found")
        price = self.prices[symbol]
        return [HistoryPoint(date=f"2024-01-{i + 1:02d}", price=price + i) for i in range(days)]

    async def close(self) -> None:
        self.closed = True


class FakeGenerator:
    """Stands in for GeminiProvider: returns a canned reply, records prompts."""

    def __init__(self, reply: str = "", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []
        self.closed = False

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings() -> Settings:
    return Settings(
        jwt_secret=JWT_SECRET,
        database_url="sqlite://",
        bcrypt_rounds=4,
        alpha_vantage_spacing_seconds=0.0,
        tracked_symbols=("AAPL", "GOOGL", "MSFT"),
        featured_symbols=("AAPL", "MSFT"),
    )


@pytest.fixture
def token_service(settings) -> TokenService:
    return TokenService(settings.jwt_secret)


@pytest.fixture
def engine():
    """Fresh in-memory database with all tables."""
    db_engine = create_db_engine("sqlite://")
    init_db(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def user_store(engine) -> UserStore:
    return UserStore(engine)


@pytest.fixture
def portfolio_store(engine) -> PortfolioStore:
    return PortfolioStore(engine)


@pytest.fixture
def market_provider() -> FakeMarketProvider:
    return FakeMarketProvider()


@pytest.fixture
def stocks_service(market_provider, settings) -> StocksService:
    return StocksService(
        market_provider,
        market_provider,
        market_provider,
        tracked_symbols=settings.tracked_symbols,
    )


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator(reply="BUY\nSELL")


@pytest.fixture
def insights_service(generator) -> InsightsService:
    return InsightsService(generator)


@pytest.fixture
def container(settings, stocks_service, insights_service):
    """App container on test settings with fake market and AI services."""
    app_container = init_container(settings)
    app_container.stocks_service.override(providers.Object(stocks_service))
    app_container.insights_service.override(providers.Object(insights_service))
    return app_container


@pytest.fixture
def client(container):
    """TestClient that does not follow redirects, so gate decisions are visible."""
    with TestClient(create_app(container), follow_redirects=False) as tc:
        yield tc


def identity(role: Role = Role.INVESTOR, email: str = "ada@example.com", subject_id: str = "1") -> IdentityClaims:
    return IdentityClaims(subject_id=subject_id, email=email, role=role)


@pytest.fixture
def login_as(client, token_service):
    """Put a valid token cookie for the given role on the test client."""

    def _login(role: Role = Role.INVESTOR, email: str = "ada@example.com") -> IdentityClaims:
        claims = identity(role, email)
        client.cookies.set("token", token_service.issue(claims))
        return claims

    return _login

