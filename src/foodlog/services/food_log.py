"""Daily food log service."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from foodlog.domain.food_log import FoodEntry
from foodlog.errors import ValidationError
from foodlog.services.calories import (
    optional_non_negative,
    portion_kcal,
    require_positive,
)


class FoodLogRepository(Protocol):
    """Persistence interface for food entries.

    Every method is scoped to the owning user.
    """

    def list_entries(self, user_id: UUID, day: date) -> list[FoodEntry]:
        """Return the user's entries for a day, newest first."""

    def create_entry(
        self, user_id: UUID, day: date, name: str, values: dict[str, float | None]
    ) -> FoodEntry:
        """Insert an entry with grams, kcal_100g and optional macros."""

    def update_entry(
        self, entry_id: UUID, user_id: UUID, grams: float, kcal_100g: float
    ) -> int:
        """Update grams and rate of an owned entry; return rows changed."""

    def delete_entry(self, entry_id: UUID, user_id: UUID) -> int:
        """Delete an owned entry; return rows removed."""


@dataclass
class FoodLogService:
    """Adds, edits and lists the foods a user ate per day."""

    repository: FoodLogRepository

    def list_for_day(self, user_id: UUID, day: date) -> list[FoodEntry]:
        return self.repository.list_entries(user_id, day)

    def add(  # noqa: PLR0913
        self,
        user_id: UUID,
        day: date | None,
        name: str | None,
        grams: object,
        kcal_100g: object,
        protein_100g: object = None,
        carbs_100g: object = None,
        fat_100g: object = None,
    ) -> FoodEntry:
        """Log a food; kcal is derived from grams and the per-100g rate."""
        name = (name or "").strip()
        if day is None or not name:
            raise ValidationError("Missing fields")
        grams_value = require_positive(grams)
        rate = require_positive(kcal_100g)
        portion_kcal(grams_value, rate)
        values = {
            "grams": grams_value,
            "kcal_100g": rate,
            "protein_100g": optional_non_negative(protein_100g, "protein_100g"),
            "carbs_100g": optional_non_negative(carbs_100g, "carbs_100g"),
            "fat_100g": optional_non_negative(fat_100g, "fat_100g"),
        }
        return self.repository.create_entry(user_id, day, name, values)

    def update(
        self, entry_id: UUID, user_id: UUID, grams: object, kcal_100g: object
    ) -> tuple[int, float]:
        """Change an entry's grams and rate; return (rows updated, new kcal)."""
        grams_value = require_positive(grams)
        rate = require_positive(kcal_100g)
        kcal = portion_kcal(grams_value, rate)
        updated = self.repository.update_entry(entry_id, user_id, grams_value, rate)
        return updated, round(kcal, 2)

    def delete(self, entry_id: UUID, user_id: UUID) -> int:
        return self.repository.delete_entry(entry_id, user_id)

    def get_total(self, user_id: UUID, day: date) -> float:
        """Return the day's kcal sum rounded to 1 decimal."""
        return total_kcal(self.repository.list_entries(user_id, day))


def total_kcal(entries: list[FoodEntry]) -> float:
    return round(sum(entry.kcal for entry in entries), 1)
