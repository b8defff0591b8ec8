"""One-way adaptive password hashing (bcrypt, per-record salt)."""
import bcrypt

from stock_portfolio.errors import ValidationError

# bcrypt only looks at the first 72 bytes; longer inputs are rejected up front.
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Hash and verify passwords. Never logs or stores plaintext."""

    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds
        # Compared against when the account does not exist, so unknown emails
        # cost the same as wrong passwords.
        self._dummy_hash = self.hash("dummy-password-for-timing")

    def hash(self, password: str) -> str:
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self._rounds)).decode("ascii")

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("ascii"))
        except ValueError:
            # Over-long input or a corrupt stored hash.
            return False

    def burn(self, password: str) -> None:
        """Spend one verification on the dummy hash; the result is irrelevant."""
        self.verify(password, self._dummy_hash)
