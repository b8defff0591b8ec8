"""FastAPI dependency injection: app.state holds the container; Depends() resolves from it.

The identity dependency reads what the access gate published on the request;
it never looks at cookies or re-verifies tokens itself.
"""
from typing import Annotated

from fastapi import Depends, Request

from stock_portfolio.auth import CredentialVerifier, TokenService
from stock_portfolio.config import Settings
from stock_portfolio.container import Container
from stock_portfolio.db.stores import PortfolioStore
from stock_portfolio.errors import AuthenticationFailure
from stock_portfolio.schemas import IdentityClaims
from stock_portfolio.services import InsightsService, StocksService


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_settings(request: Request) -> Settings:
    return get_container(request).settings()


def get_token_service(request: Request) -> TokenService:
    return get_container(request).token_service()


def get_credentials(request: Request) -> CredentialVerifier:
    return get_container(request).credentials()


def get_portfolio_store(request: Request) -> PortfolioStore:
    return get_container(request).portfolio_store()


def get_stocks_service(request: Request) -> StocksService:
    """Resolve the StocksService singleton (created on first use)."""
    return get_container(request).stocks_service()


def get_insights_service(request: Request) -> InsightsService:
    """Resolve the InsightsService singleton (created on first use)."""
    return get_container(request).insights_service()


def current_identity(request: Request) -> IdentityClaims:
    """Identity verified by the access gate for this request."""
    identity = getattr(request.state, "identity", None)
    if identity is None:
        raise AuthenticationFailure()
    return identity


# Type aliases for route injection
SettingsDep = Annotated[Settings, Depends(get_settings)]
TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]
CredentialsDep = Annotated[CredentialVerifier, Depends(get_credentials)]
PortfolioStoreDep = Annotated[PortfolioStore, Depends(get_portfolio_store)]
StocksServiceDep = Annotated[StocksService, Depends(get_stocks_service)]
InsightsServiceDep = Annotated[InsightsService, Depends(get_insights_service)]
Identity = Annotated[IdentityClaims, Depends(current_identity)]
