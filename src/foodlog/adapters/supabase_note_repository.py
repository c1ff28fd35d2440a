"""Supabase repository for day notes."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from foodlog.domain.food_log import DayNote
from foodlog.services.notes import NoteRepository


@dataclass
class SupabaseNoteRepository(NoteRepository):
    """Supabase implementation for day notes, one row per (user, date)."""

    client: Client

    def get_note(self, user_id: UUID, day: date) -> DayNote | None:
        """Return the stored note for the day."""
        response = (
            self.client.table("day_notes")
            .select("user_id, date, note, updated_at")
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_note(response.data[0])

    def upsert_note(self, user_id: UUID, day: date, note: str) -> DayNote:
        """Insert or overwrite the note for the day."""
        updated_at = datetime.now(tz=UTC)
        response = (
            self.client.table("day_notes")
            .upsert(
                {
                    "user_id": str(user_id),
                    "date": day.isoformat(),
                    "note": note,
                    "updated_at": updated_at.isoformat(),
                },
                on_conflict="user_id,date",
            )
            .execute()
        )
        if response.data:
            return _parse_note(response.data[0])
        return DayNote(user_id=user_id, day=day, note=note, updated_at=updated_at)

    def delete_note(self, user_id: UUID, day: date) -> None:
        """Delete the note for the day."""
        self.client.table("day_notes").delete().eq("user_id", str(user_id)).eq(
            "date", day.isoformat()
        ).execute()


def _parse_note(row: dict[str, object]) -> DayNote:
    updated_raw = row.get("updated_at")
    return DayNote(
        user_id=UUID(str(row["user_id"])),
        day=date.fromisoformat(str(row["date"])),
        note=str(row.get("note") or ""),
        updated_at=(
            datetime.fromisoformat(updated_raw)
            if isinstance(updated_raw, str) and updated_raw
            else None
        ),
    )
