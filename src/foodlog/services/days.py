"""Day view aggregation over entries, targets and notes."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from foodlog.domain.food_log import DayMacros, DayView, FoodEntry
from foodlog.errors import NotFoundError
from foodlog.services.food_log import FoodLogService, total_kcal
from foodlog.services.notes import NoteService
from foodlog.services.users import UserService

BELOW = "below"
WITHIN = "within"
ABOVE = "above"


@dataclass
class DayService:
    """Read-only composition of the food log, profile and notes."""

    food_log_service: FoodLogService
    user_service: UserService
    note_service: NoteService

    def get_day(self, user_id: UUID, day: date) -> DayView:
        """Return entries, totals and target status for a day."""
        items = self.food_log_service.list_for_day(user_id, day)
        # Total comes from the same rows as the listing.
        total = total_kcal(items)
        min_kcal, max_kcal = self._targets(user_id)
        note = self.note_service.get_note(user_id, day)
        return DayView(
            day=day,
            items=items,
            total_kcal=total,
            min_kcal=min_kcal,
            max_kcal=max_kcal,
            status=classify_status(total, min_kcal, max_kcal),
            macros=sum_macros(items),
            note=note.note if note else None,
        )

    def _targets(self, user_id: UUID) -> tuple[float | None, float | None]:
        # A token can outlive its user row; such a day has no targets.
        try:
            user = self.user_service.get_profile(user_id)
        except NotFoundError:
            return None, None
        return user.min_kcal, user.max_kcal


def classify_status(
    total: float, min_kcal: float | None, max_kcal: float | None
) -> str | None:
    """Compare a day's total to the user's targets."""
    if min_kcal is not None and total < min_kcal:
        return BELOW
    if max_kcal is not None and total > max_kcal:
        return ABOVE
    if min_kcal is not None or max_kcal is not None:
        return WITHIN
    return None


def sum_macros(items: list[FoodEntry]) -> DayMacros:
    """Sum macro grams over entries that carry per-100g values."""
    protein = carbs = fat = 0.0
    for item in items:
        factor = item.grams / 100.0
        protein += (item.protein_100g or 0.0) * factor
        carbs += (item.carbs_100g or 0.0) * factor
        fat += (item.fat_100g or 0.0) * factor
    return DayMacros(
        protein_g=round(protein, 1), carbs_g=round(carbs, 1), fat_g=round(fat, 1)
    )
