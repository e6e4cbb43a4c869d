"""Ports the application layer needs from infrastructure."""

from __future__ import annotations

from abc import ABC, abstractmethod


class PasswordHasher(ABC):

    @abstractmethod
    def hash(self, password: str) -> str:
        """Return a salted hash of ``password``."""

    @abstractmethod
    def verify(self, password: str, hashed: str) -> bool:
        """True if ``password`` matches ``hashed``."""
