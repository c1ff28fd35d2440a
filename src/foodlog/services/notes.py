"""Per-day notes service."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from foodlog.domain.food_log import DayNote


class NoteRepository(Protocol):
    """Persistence interface for day notes."""

    def get_note(self, user_id: UUID, day: date) -> DayNote | None:
        """Return the note for a user's day, if present."""

    def upsert_note(self, user_id: UUID, day: date, note: str) -> DayNote:
        """Create or overwrite the note for a user's day."""

    def delete_note(self, user_id: UUID, day: date) -> None:
        """Remove the note for a user's day, if any."""


@dataclass
class NoteService:
    """Service for day notes. A blank note is the same as no note."""

    repository: NoteRepository

    def get_note(self, user_id: UUID, day: date) -> DayNote | None:
        return self.repository.get_note(user_id, day)

    def save_note(self, user_id: UUID, day: date, text: str | None) -> DayNote | None:
        """Store the note, or delete it when the text is blank."""
        cleaned = (text or "").strip()
        if not cleaned:
            self.repository.delete_note(user_id, day)
            return None
        return self.repository.upsert_note(user_id, day, cleaned)

    def delete_note(self, user_id: UUID, day: date) -> None:
        self.repository.delete_note(user_id, day)
