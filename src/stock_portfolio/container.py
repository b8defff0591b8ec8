"""DI container. Process-wide singletons are built lazily on first use.

create_app() stores the container on app.state; deps.py resolves services from
it per request. Tests override ``settings`` (or any service) before startup.
"""
from datetime import timedelta

from dependency_injector import containers, providers

from stock_portfolio.auth import (AccessGate, CredentialVerifier, GatePolicy,
                                  PasswordHasher, TokenService)
from stock_portfolio.config import Settings
from stock_portfolio.db.sessions import create_db_engine
from stock_portfolio.db.stores import PortfolioStore, UserStore
from stock_portfolio.services.market_factory import (create_insights_service,
                                                     create_stocks_service)


def _days(days: int) -> timedelta:
    return timedelta(days=days)


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(Settings.from_env)

    engine = providers.Singleton(
        create_db_engine,
        settings.provided.database_url,
        echo=settings.provided.sql_echo,
    )

    token_service = providers.Singleton(
        TokenService,
        secret=settings.provided.jwt_secret,
        ttl=providers.Callable(_days, settings.provided.token_ttl_days),
    )
    password_hasher = providers.Singleton(
        PasswordHasher, rounds=settings.provided.bcrypt_rounds
    )

    user_store = providers.Singleton(UserStore, engine)
    portfolio_store = providers.Singleton(PortfolioStore, engine)
    credentials = providers.Singleton(CredentialVerifier, user_store, password_hasher)

    gate_policy = providers.Singleton(GatePolicy)
    access_gate = providers.Singleton(AccessGate, token_service, gate_policy)

    stocks_service = providers.Singleton(create_stocks_service, settings)
    insights_service = providers.Singleton(create_insights_service, settings)


def init_container(settings: Settings | None = None) -> Container:
    """Create a container, optionally pinned to explicit settings."""
    container = Container()
    if settings is not None:
        container.settings.override(providers.Object(settings))
    return container
