"""Abstract password hashing interface (port)."""

from abc import ABC, abstractmethod


class PasswordHasher(ABC):
    """Port for one-way password hashing."""

    @abstractmethod
    def hash(self, password: str) -> str:
        """Return a salted hash of ``password``."""
        ...

    @abstractmethod
    def verify(self, password: str, hashed: str) -> bool:
        """Check ``password`` against a hash produced by ``hash``."""
        ...
