"""User aggregate: an entry in the user directory.

The ordering core only reads ``role`` and existence. Profile fields are
managed by the producer-profile use cases.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum

from greenmarket.domain.exceptions import ValidationError
from greenmarket.domain.model.value_objects import Email, PasswordHash


class UserRole(Enum):
    CONSUMER = "Consumer"
    PRODUCER = "Producer"

    @staticmethod
    def parse(raw: str) -> UserRole:
        """Case-insensitive lookup by name or value."""
        wanted = (raw or "").strip().lower()
        for role in UserRole:
            if wanted in (role.name.lower(), role.value.lower()):
                return role
        raise ValidationError(f"Role '{raw}' is not valid")


@dataclass(eq=False)
class User:
    id: str
    full_name: str
    email: Email
    password_hash: PasswordHash
    role: UserRole
    description: str | None = None
    profile_image_url: str | None = None

    @staticmethod
    def register(
        full_name: str,
        email: Email,
        password_hash: PasswordHash,
        role: UserRole,
    ) -> User:
        if not full_name or not full_name.strip():
            raise ValidationError("Full name cannot be empty")
        return User(
            id=str(uuid.uuid4()),
            full_name=full_name.strip(),
            email=email,
            password_hash=password_hash,
            role=role,
        )

    @property
    def is_producer(self) -> bool:
        return self.role == UserRole.PRODUCER

    @property
    def is_consumer(self) -> bool:
        return self.role == UserRole.CONSUMER

    def update_profile(
        self,
        full_name: str,
        description: str | None,
        profile_image_url: str | None,
    ) -> None:
        if not full_name or not full_name.strip():
            raise ValidationError("Full name cannot be empty")
        self.full_name = full_name.strip()
        self.description = description
        self.profile_image_url = profile_image_url

    def change_email(self, new_email: Email) -> None:
        self.email = new_email

    def change_password(self, new_hash: PasswordHash) -> None:
        self.password_hash = new_hash

    def __eq__(self, other: object) -> bool:
        return isinstance(other, User) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)
