"""Role-checked lookups against the user directory."""

from __future__ import annotations

from greenmarket.domain.exceptions import ActorError
from greenmarket.domain.model.user import User, UserRole
from greenmarket.domain.repository.user_repository import UserRepository


class ActorDirectory:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def require_consumer(self, consumer_id: str) -> User:
        return self._require(consumer_id, UserRole.CONSUMER)

    def require_producer(self, producer_id: str) -> User:
        return self._require(producer_id, UserRole.PRODUCER)

    def _require(self, user_id: str, role: UserRole) -> User:
        user = self._user_repo.get_by_id(user_id) if user_id else None
        if user is None or user.role != role:
            label = role.value
            raise ActorError(
                f"Invalid {label}Id. {label} not found or is not a {label.lower()}."
            )
        return user
