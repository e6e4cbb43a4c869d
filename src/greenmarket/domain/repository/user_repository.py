"""Abstract repository for the User aggregate (the user directory)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from greenmarket.domain.model.user import User


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: str) -> User | None:
        """Return a user by ID, or None if not found."""

    @abstractmethod
    def get_by_email(self, email: str) -> User | None:
        """Return a user by email (case-insensitive), or None."""

    @abstractmethod
    def exists_by_email(self, email: str) -> bool:
        """True if the email is already registered."""

    @abstractmethod
    def add(self, user: User) -> None:
        """Persist a new user."""

    @abstractmethod
    def save(self, user: User) -> None:
        """Persist an updated user."""
