"""Application service: Register User use case."""

from __future__ import annotations

import structlog

from greenmarket.application.interfaces import PasswordHasher
from greenmarket.domain.exceptions import DuplicateEmailError, ValidationError
from greenmarket.domain.model.user import User, UserRole
from greenmarket.domain.model.value_objects import Email, PasswordHash
from greenmarket.domain.repository.user_repository import UserRepository

logger = structlog.get_logger(__name__)


class RegisterUserHandler:

    def __init__(self, user_repo: UserRepository, hasher: PasswordHasher) -> None:
        self._user_repo = user_repo
        self._hasher = hasher

    def handle(self, full_name: str, email: str, password: str, role: str) -> str:
        """Register a consumer or producer and return the new user ID."""
        user_email = Email(email)
        if self._user_repo.exists_by_email(user_email.value):
            raise DuplicateEmailError(f"Email '{user_email}' is already registered")

        if not password:
            raise ValidationError("Password cannot be empty")
        user_role = UserRole.parse(role)

        user = User.register(
            full_name=full_name,
            email=user_email,
            password_hash=PasswordHash(self._hasher.hash(password)),
            role=user_role,
        )
        self._user_repo.add(user)

        logger.info("user_registered", user_id=user.id, role=user_role.value)
        return user.id
