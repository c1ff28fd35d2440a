"""Supabase repository for food entries."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from foodlog.domain.food_log import FoodEntry
from foodlog.errors import InternalError
from foodlog.services.food_log import FoodLogRepository

_COLUMNS = (
    "id, user_id, date, name, grams, kcal_100g, protein_100g, carbs_100g, "
    "fat_100g, created_at"
)


@dataclass
class SupabaseFoodLogRepository(FoodLogRepository):
    """Supabase implementation for the food log."""

    client: Client

    def list_entries(self, user_id: UUID, day: date) -> list[FoodEntry]:
        """Return the user's entries for a day, newest first."""
        response = (
            self.client.table("food_entries")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def create_entry(
        self, user_id: UUID, day: date, name: str, values: dict[str, float | None]
    ) -> FoodEntry:
        """Insert an entry row and return it."""
        response = (
            self.client.table("food_entries")
            .insert(
                {
                    "user_id": str(user_id),
                    "date": day.isoformat(),
                    "name": name,
                    "grams": values["grams"],
                    "kcal_100g": values["kcal_100g"],
                    "protein_100g": values.get("protein_100g"),
                    "carbs_100g": values.get("carbs_100g"),
                    "fat_100g": values.get("fat_100g"),
                }
            )
            .execute()
        )
        if not response.data:
            raise InternalError("Failed to create food entry")
        return _parse_entry(response.data[0])

    def update_entry(
        self, entry_id: UUID, user_id: UUID, grams: float, kcal_100g: float
    ) -> int:
        """Update grams and rate where both id and owner match."""
        response = (
            self.client.table("food_entries")
            .update({"grams": grams, "kcal_100g": kcal_100g})
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return len(response.data or [])

    def delete_entry(self, entry_id: UUID, user_id: UUID) -> int:
        """Delete the row where both id and owner match."""
        response = (
            self.client.table("food_entries")
            .delete()
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return len(response.data or [])


def _parse_entry(row: dict[str, object]) -> FoodEntry:
    created_raw = row.get("created_at")
    return FoodEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        day=date.fromisoformat(str(row["date"])),
        name=str(row.get("name", "")),
        grams=float(row.get("grams", 0.0)),
        kcal_100g=float(row.get("kcal_100g", 0.0)),
        protein_100g=_optional_float(row.get("protein_100g")),
        carbs_100g=_optional_float(row.get("carbs_100g")),
        fat_100g=_optional_float(row.get("fat_100g")),
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
