from typing import Optional, Sequence

from passlib.context import CryptContext

from user_accounts.core import config
from user_accounts.domain.interfaces import IPasswordEncoder


class PasswordEncoder(IPasswordEncoder):
    """One-way password hashing backed by a passlib CryptContext.

    The first configured scheme hashes new passwords; the remaining schemes
    are accepted by ``matches`` and marked deprecated.
    """

    def __init__(self, schemes: Optional[Sequence[str]] = None) -> None:
        self.schemes = list(schemes or config.get_password_schemes())
        self.context = CryptContext(schemes=self.schemes, deprecated="auto")

    def encode(self, raw_password: str) -> str:
        """Hash a password.

        Args:
            raw_password: Plain text password to hash

        Returns:
            Hashed password string

        Raises:
            ValueError: If the password is missing
        """
        if raw_password is None:
            raise ValueError("Password is required")
        return self.context.hash(raw_password)

    def matches(self, raw_password: str, encoded_password: str) -> bool:
        """Verify a password against its hash.

        Args:
            raw_password: Plain text password to verify
            encoded_password: Hashed password to verify against

        Returns:
            True if password matches, False otherwise
        """
        if not raw_password or not encoded_password:
            return False
        return self.context.verify(raw_password, encoded_password)


_default_encoder: Optional[PasswordEncoder] = None


def get_password_encoder() -> PasswordEncoder:
    """Return a process-wide encoder built from the current configuration."""
    global _default_encoder
    if _default_encoder is None:
        _default_encoder = PasswordEncoder()
    return _default_encoder
