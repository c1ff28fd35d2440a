"""Domain models for users."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    name: str
    email: str
    password_hash: str
    min_kcal: float | None
    max_kcal: float | None
    created_at: datetime | None = None

    def profile(self) -> dict[str, object]:
        """Return the public profile without credentials."""
        return {
            "id": str(self.id),
            "name": self.name,
            "email": self.email,
            "min_kcal": self.min_kcal,
            "max_kcal": self.max_kcal,
        }
