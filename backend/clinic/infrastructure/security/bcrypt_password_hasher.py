"""bcrypt implementation of the PasswordHasher port."""

import bcrypt

from clinic.application.interfaces import PasswordHasher


class BcryptPasswordHasher(PasswordHasher):
    """Salted bcrypt hashes with a configurable cost factor."""

    def __init__(self, rounds: int = 10):
        self._rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            # Not a bcrypt hash
            return False
