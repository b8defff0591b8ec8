"""Portfolio routes, always scoped to the identity verified by the access gate."""
from fastapi import APIRouter

from stock_portfolio.deps import Identity, PortfolioStoreDep
from stock_portfolio.schemas import PortfolioView, SymbolRequest

router = APIRouter(prefix="/api/portfolio", tags=["portfolio"])


@router.get("")
def list_portfolio(identity: Identity, store: PortfolioStoreDep) -> dict[str, list[str]]:
    """Symbols held by the current user, in the order they were added."""
    return {"stocks": store.list_symbols(identity.email)}


@router.post("")
def add_stock(
    body: SymbolRequest,
    identity: Identity,
    store: PortfolioStoreDep,
) -> dict[str, str | PortfolioView]:
    """Add a symbol. Adding one already held is a no-op."""
    portfolio = store.add_symbol(identity.email, body.symbol)
    return {"message": "Stock added to portfolio", "portfolio": portfolio}


@router.delete("")
def remove_stock(
    body: SymbolRequest,
    identity: Identity,
    store: PortfolioStoreDep,
) -> dict[str, str | PortfolioView]:
    """Remove a symbol. Removing one not held is a no-op."""
    portfolio = store.remove_symbol(identity.email, body.symbol)
    return {"message": "Stock removed from portfolio", "portfolio": portfolio}
