# app/core/security.py
"""Bearer token handling.

Tokens are HS256 JWTs carrying:
    {"sub": "<actor name>", "role": "dc", "exp": 1234567890, "type": "access"}

Every protected request passes its own token; nothing about the caller is
kept between requests.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import get_settings
from app.core.exceptions import ForbiddenError, UnauthorizedError
from app.core.logging_config import get_logger

log = get_logger("security")

bearer_scheme = HTTPBearer(scheme_name="Bearer", auto_error=False)


class Role(str, Enum):
    CLERK = "clerk"
    DC = "dc"
    SUPER_USER = "super_user"
    SUPER_ADMIN = "super_admin"
    ROOT = "root"


# Roles allowed to use the unguarded update and delete operations
ADMIN_ROLES = (Role.SUPER_ADMIN, Role.ROOT)


@dataclass(frozen=True)
class Principal:
    name: str
    role: Role


def create_access_token(subject: str, role: Role | str, expires_minutes: int | None = None) -> str:
    settings = get_settings()
    minutes = expires_minutes if expires_minutes is not None else settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES
    payload: dict[str, Any] = {
        "sub": subject,
        "role": Role(role).value,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=minutes),
        "type": "access",
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    settings = get_settings()
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])


def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Principal:
    if credentials is None:
        raise UnauthorizedError()
    try:
        payload = decode_token(credentials.credentials)
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired") from None
    except jwt.InvalidTokenError as e:
        log.warning("Rejected bearer token: %s", e)
        raise UnauthorizedError("Invalid token") from e

    if payload.get("type") != "access" or not payload.get("sub"):
        raise UnauthorizedError("Invalid token")
    try:
        role = Role(payload.get("role"))
    except ValueError:
        raise UnauthorizedError("Invalid token role") from None
    return Principal(name=payload["sub"], role=role)


def require_roles(*roles: Role) -> Callable[..., Principal]:
    """Dependency factory: the caller must hold one of ``roles``."""

    def _check(principal: Principal = Depends(get_current_principal)) -> Principal:
        if principal.role not in roles:
            raise ForbiddenError()
        return principal

    return _check


__all__ = [
    "ADMIN_ROLES",
    "Principal",
    "Role",
    "create_access_token",
    "decode_token",
    "get_current_principal",
    "require_roles",
]
