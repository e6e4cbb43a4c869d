"""Application services: Get / Update Producer Profile."""

from __future__ import annotations

import structlog

from greenmarket.application.actors import ActorDirectory
from greenmarket.application.dto import ProducerProfileDTO
from greenmarket.application.interfaces import PasswordHasher
from greenmarket.domain.model.value_objects import PasswordHash
from greenmarket.domain.repository.user_repository import UserRepository

logger = structlog.get_logger(__name__)


class GetProducerProfileHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._actors = ActorDirectory(user_repo)

    def handle(self, producer_id: str) -> ProducerProfileDTO:
        producer = self._actors.require_producer(producer_id)
        return ProducerProfileDTO(
            id=producer.id,
            full_name=producer.full_name,
            email=producer.email.value,
            description=producer.description,
            profile_image_url=producer.profile_image_url,
        )


class UpdateProducerProfileHandler:

    def __init__(self, user_repo: UserRepository, hasher: PasswordHasher) -> None:
        self._user_repo = user_repo
        self._actors = ActorDirectory(user_repo)
        self._hasher = hasher

    def handle(
        self,
        producer_id: str,
        full_name: str,
        description: str | None = None,
        profile_image_url: str | None = None,
        new_password: str | None = None,
    ) -> None:
        """Update profile fields; a non-empty ``new_password`` also rotates the hash."""
        producer = self._actors.require_producer(producer_id)
        producer.update_profile(full_name, description, profile_image_url)

        if new_password:
            producer.change_password(PasswordHash(self._hasher.hash(new_password)))

        self._user_repo.save(producer)
        logger.info(
            "producer_profile_updated",
            producer_id=producer_id,
            password_changed=bool(new_password),
        )
