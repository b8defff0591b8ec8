"""User and portfolio persistence over SQLModel sessions.

Set semantics for portfolios come from the unique (portfolio_id, symbol)
constraint: concurrent adds of the same symbol cannot both land, and the loser
is treated as already present.
"""
import logging

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from stock_portfolio.db.models import Portfolio, PortfolioStock, Role, User
from stock_portfolio.db.sessions import get_session
from stock_portfolio.errors import ConflictError, ValidationError
from stock_portfolio.schemas import PortfolioView

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Canonical form used for storage and lookup."""
    return email.strip().lower()


def normalize_symbol(symbol: str | None) -> str:
    """Trimmed, upper-cased ticker. Raises ValidationError when empty."""
    symbol = (symbol or "").strip().upper()
    if not symbol:
        raise ValidationError("Stock symbol is required")
    return symbol


class UserStore:
    """Create and look up user accounts."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_by_email(self, email: str) -> User | None:
        with get_session(self._engine) as session:
            return session.exec(
                select(User).where(User.email == normalize_email(email))
            ).first()

    def get_by_id(self, user_id: int) -> User | None:
        with get_session(self._engine) as session:
            return session.get(User, user_id)

    def create(self, name: str, email: str, hashed_password: str, role: Role) -> User:
        """Insert a user. Raises ConflictError if the email is taken."""
        user = User(
            name=name,
            email=normalize_email(email),
            hashed_password=hashed_password,
            role=role,
        )
        try:
            with get_session(self._engine) as session:
                session.add(user)
                session.flush()
                session.refresh(user)
        except IntegrityError as exc:
            raise ConflictError("User already exists") from exc
        logger.info("Created %s account id=%s", user.role.value, user.id)
        return user


class PortfolioStore:
    """Per-user symbol sets keyed by owner email."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def list_symbols(self, owner_email: str) -> list[str]:
        """Symbols in insertion order; empty if the user has no portfolio yet."""
        with get_session(self._engine) as session:
            rows = session.exec(
                select(PortfolioStock.symbol)
                .join(Portfolio, col(Portfolio.id) == col(PortfolioStock.portfolio_id))
                .where(Portfolio.owner_email == normalize_email(owner_email))
                .order_by(col(PortfolioStock.id))
            ).all()
        return list(rows)

    def get(self, owner_email: str) -> PortfolioView:
        return PortfolioView(
            owner_email=normalize_email(owner_email),
            stocks=self.list_symbols(owner_email),
        )

    def add_symbol(self, owner_email: str, symbol: str) -> PortfolioView:
        """Insert symbol into the owner's set, creating the portfolio on first use."""
        symbol = normalize_symbol(symbol)
        portfolio_id = self._ensure_portfolio(owner_email)
        try:
            with get_session(self._engine) as session:
                exists = session.exec(
                    select(PortfolioStock.id).where(
                        PortfolioStock.portfolio_id == portfolio_id,
                        PortfolioStock.symbol == symbol,
                    )
                ).first()
                if exists is None:
                    session.add(PortfolioStock(portfolio_id=portfolio_id, symbol=symbol))
        except IntegrityError:
            logger.debug("Symbol %s already in portfolio %s", symbol, portfolio_id)
        return self.get(owner_email)

    def remove_symbol(self, owner_email: str, symbol: str) -> PortfolioView:
        """Remove symbol from the owner's set. Absent symbol or portfolio is a no-op."""
        symbol = normalize_symbol(symbol)
        with get_session(self._engine) as session:
            portfolio = self._find_portfolio(session, owner_email)
            if portfolio is not None:
                held = session.exec(
                    select(PortfolioStock).where(
                        PortfolioStock.portfolio_id == portfolio.id,
                        PortfolioStock.symbol == symbol,
                    )
                ).all()
                for stock in held:
                    session.delete(stock)
        return self.get(owner_email)

    @staticmethod
    def _find_portfolio(session: Session, owner_email: str) -> Portfolio | None:
        return session.exec(
            select(Portfolio).where(Portfolio.owner_email == normalize_email(owner_email))
        ).first()

    def _ensure_portfolio(self, owner_email: str) -> int:
        with get_session(self._engine) as session:
            portfolio = self._find_portfolio(session, owner_email)
            if portfolio is not None:
                return portfolio.id
        try:
            with get_session(self._engine) as session:
                portfolio = Portfolio(owner_email=normalize_email(owner_email))
                session.add(portfolio)
                session.flush()
                return portfolio.id
        except IntegrityError:
            # Created by a concurrent request between our read and insert.
            with get_session(self._engine) as session:
                return self._find_portfolio(session, owner_email).id
