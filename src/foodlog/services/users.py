"""User registration, login and profile management."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from foodlog.domain.models import UserRecord
from foodlog.errors import AuthError, ConflictError, NotFoundError, ValidationError
from foodlog.services.auth import PasswordHasher, TokenService
from foodlog.services.calories import optional_non_negative

PROFILE_FIELDS = ("name", "min_kcal", "max_kcal")

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with this exact email, if present."""

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user for an id, if present."""

    def create_user(
        self,
        name: str,
        email: str,
        password_hash: str,
        min_kcal: float | None,
        max_kcal: float | None,
    ) -> UserRecord:
        """Create and return a new user record.

        Raises ConflictError when the email is already taken.
        """

    def update_user(self, user_id: UUID, changes: dict[str, object]) -> UserRecord | None:
        """Apply changes and return the updated user, or None if missing."""


@dataclass
class UserService:
    """Application service for accounts and profiles."""

    repository: UserRepository
    hasher: PasswordHasher
    tokens: TokenService

    def register(
        self,
        name: str | None,
        email: str | None,
        password: str | None,
        min_kcal: object = None,
        max_kcal: object = None,
    ) -> tuple[UserRecord, str]:
        """Create an account and return it with a fresh token."""
        name = (name or "").strip()
        email = (email or "").strip()
        if not name or not email or not password:
            raise ValidationError("Missing fields")
        targets = _validate_targets(min_kcal, max_kcal)
        if self.repository.get_by_email(email) is not None:
            raise ConflictError("Email already registered")

        password_hash = self.hasher.hash(password)
        user = self.repository.create_user(
            name=name,
            email=email,
            password_hash=password_hash,
            min_kcal=targets[0],
            max_kcal=targets[1],
        )
        _logger.info("Registered user %s", user.id)
        return user, self.tokens.issue(user.id)

    def authenticate(
        self, email: str | None, password: str | None
    ) -> tuple[UserRecord, str]:
        """Check credentials and return the user with a fresh token."""
        email = (email or "").strip()
        if not email or not password:
            raise ValidationError("Missing fields")
        user = self.repository.get_by_email(email)
        if user is None:
            self.hasher.burn(password)
            _logger.info("Login failed")
            raise AuthError("Invalid credentials")
        if not self.hasher.verify(password, user.password_hash):
            _logger.info("Login failed for user %s", user.id)
            raise AuthError("Invalid credentials")
        return user, self.tokens.issue(user.id)

    def get_profile(self, user_id: UUID) -> UserRecord:
        user = self.repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, user_id: UUID, fields: dict[str, object]) -> UserRecord:
        """Apply a partial update; ``None`` clears a calorie target."""
        changes = {key: fields[key] for key in PROFILE_FIELDS if key in fields}
        if not changes:
            raise ValidationError("No fields to update")
        if "name" in changes:
            name = str(changes["name"] or "").strip()
            if not name:
                raise ValidationError("Name cannot be empty")
            changes["name"] = name

        current = self.get_profile(user_id)
        min_kcal, max_kcal = _validate_targets(
            changes.get("min_kcal", current.min_kcal),
            changes.get("max_kcal", current.max_kcal),
        )
        if "min_kcal" in changes:
            changes["min_kcal"] = min_kcal
        if "max_kcal" in changes:
            changes["max_kcal"] = max_kcal

        updated = self.repository.update_user(user_id, changes)
        if updated is None:
            raise NotFoundError("User not found")
        return updated


def _validate_targets(
    min_kcal: object, max_kcal: object
) -> tuple[float | None, float | None]:
    low = optional_non_negative(min_kcal, "min_kcal")
    high = optional_non_negative(max_kcal, "max_kcal")
    if low is not None and high is not None and low > high:
        raise ValidationError("min_kcal must not exceed max_kcal")
    return low, high
