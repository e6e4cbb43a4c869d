"""Application service: Authenticate User use case.

Verifies credentials only.  Token issuance belongs to the upstream
auth gateway.
"""

from __future__ import annotations

import structlog

from greenmarket.application.dto import AuthenticatedUserDTO
from greenmarket.application.interfaces import PasswordHasher
from greenmarket.domain.exceptions import AuthenticationError
from greenmarket.domain.repository.user_repository import UserRepository

logger = structlog.get_logger(__name__)


class AuthenticateUserHandler:

    def __init__(self, user_repo: UserRepository, hasher: PasswordHasher) -> None:
        self._user_repo = user_repo
        self._hasher = hasher

    def handle(self, email: str, password: str) -> AuthenticatedUserDTO:
        user = self._user_repo.get_by_email(email or "")
        if user is None or not self._hasher.verify(password or "", user.password_hash.value):
            logger.info("login_rejected")
            raise AuthenticationError("Invalid email or password")

        return AuthenticatedUserDTO(
            user_id=user.id,
            full_name=user.full_name,
            role=user.role.value,
        )
