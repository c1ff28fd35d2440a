"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from foodlog.domain.models import UserRecord
from foodlog.errors import ConflictError, InternalError
from foodlog.services.users import UserRepository

_UNIQUE_VIOLATION = "23505"
_COLUMNS = "id, name, email, password_hash, min_kcal, max_kcal, created_at"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with this exact email, if present."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user for an id, if present."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def create_user(
        self,
        name: str,
        email: str,
        password_hash: str,
        min_kcal: float | None,
        max_kcal: float | None,
    ) -> UserRecord:
        """Create a new user row and return it."""
        try:
            response = (
                self.client.table("users")
                .insert(
                    {
                        "name": name,
                        "email": email,
                        "password_hash": password_hash,
                        "min_kcal": min_kcal,
                        "max_kcal": max_kcal,
                    }
                )
                .execute()
            )
        except APIError as exc:
            if exc.code == _UNIQUE_VIOLATION:
                raise ConflictError("Email already registered") from exc
            raise
        if not response.data:
            raise InternalError("Failed to create user")
        return _parse_user(response.data[0])

    def update_user(self, user_id: UUID, changes: dict[str, object]) -> UserRecord | None:
        """Update profile columns and return the stored row."""
        response = (
            self.client.table("users")
            .update(changes)
            .eq("id", str(user_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])


def _parse_user(row: dict[str, object]) -> UserRecord:
    created_raw = row.get("created_at")
    return UserRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name") or ""),
        email=str(row["email"]),
        password_hash=str(row.get("password_hash") or ""),
        min_kcal=_optional_float(row.get("min_kcal")),
        max_kcal=_optional_float(row.get("max_kcal")),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
