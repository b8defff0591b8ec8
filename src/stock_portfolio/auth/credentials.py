"""Credential verification and account registration."""
import logging

from stock_portfolio.auth.passwords import PasswordHasher
from stock_portfolio.db import Role, User
from stock_portfolio.db.stores import UserStore
from stock_portfolio.errors import (INVALID_CREDENTIALS, AuthenticationFailure,
                                    ConflictError, ValidationError)
from stock_portfolio.schemas import IdentityClaims, UserOut

logger = logging.getLogger(__name__)


def identity_for(user: User) -> IdentityClaims:
    """Token claims for a stored user."""
    return IdentityClaims(subject_id=str(user.id), email=user.email, role=user.role)


def user_out(user: User) -> UserOut:
    return UserOut(id=str(user.id), name=user.name, email=user.email, role=user.role)


def _required(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class CredentialVerifier:
    """Checks email/password pairs and registers new accounts.

    Unknown email and wrong password fail with the same AuthenticationFailure
    and the same amount of hashing work.
    """

    def __init__(self, users: UserStore, hasher: PasswordHasher) -> None:
        self._users = users
        self._hasher = hasher

    def authenticate(self, email: str | None, password: str | None) -> User:
        email = _required(email)
        if email is None or not password:
            raise ValidationError("Email and password are required")
        user = self._users.get_by_email(email)
        if user is None:
            self._hasher.burn(password)
            raise AuthenticationFailure(INVALID_CREDENTIALS)
        if not self._hasher.verify(password, user.hashed_password):
            raise AuthenticationFailure(INVALID_CREDENTIALS)
        return user

    def register(
        self,
        name: str | None,
        email: str | None,
        password: str | None,
        role: str | None,
    ) -> User:
        """Create an account. Raises ValidationError or ConflictError."""
        name = _required(name)
        email = _required(email)
        role_value = _required(role)
        if not (name and email and password and role_value):
            raise ValidationError("All fields are required")
        try:
            account_role = Role(role_value.lower())
        except ValueError as exc:
            allowed = ", ".join(r.value for r in Role)
            raise ValidationError(f"Role must be one of: {allowed}") from exc
        if self._users.get_by_email(email) is not None:
            logger.info("Signup rejected for existing email")
            raise ConflictError("User already exists")
        hashed = self._hasher.hash(password)
        return self._users.create(name, email, hashed, account_role)
