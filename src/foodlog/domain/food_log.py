"""Domain models for the daily food log."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class FoodEntry:
    """A food eaten by a user on a given day.

    The per-100g rate is stored; ``kcal`` is derived from it and ``grams``.
    """

    id: UUID
    user_id: UUID
    day: date
    name: str
    grams: float
    kcal_100g: float
    protein_100g: float | None = None
    carbs_100g: float | None = None
    fat_100g: float | None = None
    created_at: datetime | None = None

    @property
    def kcal(self) -> float:
        return (self.kcal_100g / 100.0) * self.grams


@dataclass(frozen=True)
class DayNote:
    """Free-text note for a user's day."""

    user_id: UUID
    day: date
    note: str
    updated_at: datetime | None = None


@dataclass(frozen=True)
class DayMacros:
    """Macronutrient grams summed over a day."""

    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class DayView:
    """Entries, totals and target status for one day."""

    day: date
    items: list[FoodEntry]
    total_kcal: float
    min_kcal: float | None
    max_kcal: float | None
    status: str | None
    macros: DayMacros
    note: str | None = None
