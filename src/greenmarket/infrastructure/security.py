"""bcrypt implementation of the PasswordHasher port."""

from __future__ import annotations

import bcrypt

from greenmarket.application.interfaces import PasswordHasher
from greenmarket.domain.exceptions import ValidationError

# bcrypt only looks at the first 72 bytes of a password.
_MAX_PASSWORD_BYTES = 72


class BcryptPasswordHasher(PasswordHasher):

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        encoded = password.encode("utf-8")
        if len(encoded) > _MAX_PASSWORD_BYTES:
            raise ValidationError(
                f"Password cannot be longer than {_MAX_PASSWORD_BYTES} bytes"
            )
        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self._rounds)).decode("ascii")

    def verify(self, password: str, hashed: str) -> bool:
        encoded = password.encode("utf-8")
        if len(encoded) > _MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, hashed.encode("ascii"))
        except ValueError:
            # Stored value is not a bcrypt hash.
            return False
