"""
Authentication use cases: admin login and the startup seeding of the
default admin account.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from castle_api.core.config import Settings, get_settings
from castle_api.core.errors import ServiceError
from castle_api.core.logger import get_logger
from castle_api.core.security import hash_password, verify_password
from castle_api.repositories.sql_repository import SQLRepository

logger = get_logger(__name__)


class AuthError(ServiceError):
    """Base class for authentication-related exceptions."""


class UserNotFoundError(AuthError):
    code = "not_found"

    def __init__(self, message: str = "Usuario no encontrado"):
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    code = "invalid_credentials"

    def __init__(self, message: str = "Contraseña incorrecta"):
        super().__init__(message)


@dataclass
class AuthService:
    """Checks credentials against the ``usuarios`` table."""

    settings: Optional[Settings] = None
    repository: SQLRepository = field(default_factory=SQLRepository)

    def __post_init__(self):
        if self.settings is None:
            self.settings = get_settings()

    def login(self, username: str, password: str) -> str:
        """Return the authenticated username or raise an AuthError.

        No session or token is issued; the caller only learns whether the
        pair is valid.
        """
        user = self.repository.get_user(username or "")
        if not user:
            logger.info("AUTH_UNKNOWN_USER", extra={"input_user": (username or "")[:50]})
            raise UserNotFoundError()
        if not verify_password(password or "", user.password):
            logger.info("AUTH_UNAUTHORIZED", extra={"input_user": user.username})
            raise InvalidCredentialsError()
        logger.info("LOGIN_SUCCESS", extra={"input_user": user.username})
        return user.username

    def seed_admin(self) -> bool:
        """Create the default admin when missing. Returns True when a row was inserted.

        Never raises: a failure is logged and startup goes on. Two processes
        booting at once can both see the account missing; only the unique
        index on ``username`` keeps the second insert out.
        """
        username = self.settings.admin_username
        try:
            if self.repository.get_user(username):
                return False
            self.repository.create_user(username, hash_password(self.settings.admin_password))
        except Exception as exc:
            logger.error("ADMIN_SEED_FAILED", extra={"username": username, "error": str(exc)})
            return False
        logger.info("ADMIN_SEEDED", extra={"username": username})
        return True
