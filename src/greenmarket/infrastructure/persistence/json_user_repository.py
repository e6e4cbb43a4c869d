"""JSON-file-backed implementation of UserRepository."""

from __future__ import annotations

from pathlib import Path

from greenmarket.domain.exceptions import DuplicateEmailError
from greenmarket.domain.model.user import User, UserRole
from greenmarket.domain.model.value_objects import Email, PasswordHash
from greenmarket.domain.repository.user_repository import UserRepository
from greenmarket.infrastructure.persistence.json_store import JsonFile


class JsonUserRepository(UserRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- UserRepository interface ---------------------------------------------

    def get_by_id(self, user_id: str) -> User | None:
        for raw in self._file.load():
            if raw["id"] == user_id:
                return self._to_domain(raw)
        return None

    def get_by_email(self, email: str) -> User | None:
        wanted = email.strip().lower()
        for raw in self._file.load():
            if raw["email"] == wanted:
                return self._to_domain(raw)
        return None

    def exists_by_email(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    def add(self, user: User) -> None:
        with self._file.lock:
            if self.exists_by_email(user.email.value):
                raise DuplicateEmailError(f"Email '{user.email}' is already registered")
            self._file.upsert(self._to_raw(user))

    def save(self, user: User) -> None:
        self._file.upsert(self._to_raw(user))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(user: User) -> dict:
        return {
            "id": user.id,
            "full_name": user.full_name,
            "email": user.email.value,
            "password_hash": user.password_hash.value,
            "role": user.role.value,
            "description": user.description,
            "profile_image_url": user.profile_image_url,
        }

    @staticmethod
    def _to_domain(raw: dict) -> User:
        return User(
            id=raw["id"],
            full_name=raw["full_name"],
            email=Email(raw["email"]),
            password_hash=PasswordHash(raw["password_hash"]),
            role=UserRole(raw["role"]),
            description=raw.get("description"),
            profile_image_url=raw.get("profile_image_url"),
        )
