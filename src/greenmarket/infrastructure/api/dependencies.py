"""Request-scoped dependencies: the container and the caller's identity.

The upstream auth gateway verifies the token and forwards the caller as
``X-User-Id`` / ``X-User-Role``.  These headers are trusted as-is.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from fastapi import Depends, Header, HTTPException, Request, status

from greenmarket.domain.exceptions import ValidationError
from greenmarket.domain.model.user import UserRole
from greenmarket.infrastructure.bootstrap import Container


@dataclass(frozen=True)
class Caller:
    user_id: str
    role: UserRole


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_caller(
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
) -> Caller:
    if not x_user_id or not x_user_role:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing caller identity",
        )
    try:
        role = UserRole.parse(x_user_role)
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Unknown caller role '{x_user_role}'",
        )
    return Caller(user_id=x_user_id, role=role)


def require_role(role: UserRole) -> Callable[..., Caller]:
    """Dependency factory: the caller must hold ``role``."""

    def dependency(caller: Caller = Depends(get_caller)) -> Caller:
        if caller.role != role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"This action requires the {role.value} role",
            )
        return caller

    return dependency


require_producer = require_role(UserRole.PRODUCER)
require_consumer = require_role(UserRole.CONSUMER)
