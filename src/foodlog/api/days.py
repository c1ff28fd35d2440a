"""Food log, day view and note endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from foodlog.api.dependencies import current_user_id, get_container, parse_day
from foodlog.api.schemas import AddFoodRequest, NoteRequest, UpdateFoodRequest
from foodlog.domain.food_log import DayView, FoodEntry

router = APIRouter(tags=["day"])


@router.get("/day")
def get_day(
    request: Request, date: str | None = None, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return the day's entries, total and target status."""
    day = parse_day(date)
    view = get_container(request).day_service.get_day(user_id, day)
    return _day_payload(view)


@router.post("/day", status_code=status.HTTP_201_CREATED)
def add_food(
    payload: AddFoodRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Log a food for a day."""
    day = parse_day(payload.date) if payload.date else None
    entry = get_container(request).food_log_service.add(
        user_id,
        day,
        payload.name,
        payload.grams,
        payload.kcal_100g,
        protein_100g=payload.protein_100g,
        carbs_100g=payload.carbs_100g,
        fat_100g=payload.fat_100g,
    )
    return {"id": str(entry.id), "kcal": round(entry.kcal, 2)}


@router.put("/day/{entry_id}")
def update_food(
    entry_id: UUID,
    payload: UpdateFoodRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Change grams and rate of an entry the caller owns."""
    updated, kcal = get_container(request).food_log_service.update(
        entry_id, user_id, payload.grams, payload.kcal_100g
    )
    return {"ok": True, "updated": updated, "kcal": kcal}


@router.delete("/day/{entry_id}")
def delete_food(
    entry_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Delete an entry the caller owns."""
    deleted = get_container(request).food_log_service.delete(entry_id, user_id)
    return {"ok": True, "deleted": deleted}


@router.get("/notes")
def get_note(
    request: Request, date: str | None = None, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    day = parse_day(date)
    note = get_container(request).note_service.get_note(user_id, day)
    return {"date": day.isoformat(), "note": note.note if note else None}


@router.post("/notes")
def save_note(
    payload: NoteRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Save the day's note; a blank note removes it."""
    day = parse_day(payload.date)
    note = get_container(request).note_service.save_note(user_id, day, payload.note)
    return {"date": day.isoformat(), "note": note.note if note else None}


@router.delete("/notes")
def delete_note(
    request: Request, date: str | None = None, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    day = parse_day(date)
    get_container(request).note_service.delete_note(user_id, day)
    return {"ok": True}


def _entry_payload(entry: FoodEntry) -> dict[str, object]:
    return {
        "id": str(entry.id),
        "name": entry.name,
        "grams": entry.grams,
        "kcal": round(entry.kcal, 2),
        "kcal_100g": entry.kcal_100g,
        "protein_100g": entry.protein_100g,
        "carbs_100g": entry.carbs_100g,
        "fat_100g": entry.fat_100g,
        "created_at": entry.created_at.isoformat() if entry.created_at else None,
    }


def _day_payload(view: DayView) -> dict[str, object]:
    return {
        "date": view.day.isoformat(),
        "items": [_entry_payload(entry) for entry in view.items],
        "total_kcal": view.total_kcal,
        "user_targets": {"min_kcal": view.min_kcal, "max_kcal": view.max_kcal},
        "status": view.status,
        "macros": {
            "protein_g": view.macros.protein_g,
            "carbs_g": view.macros.carbs_g,
            "fat_g": view.macros.fat_g,
        },
        "note": view.note,
    }
