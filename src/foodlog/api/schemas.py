"""Request payload models.

Fields are optional at this layer so that missing values reach the services,
which report them as ``Missing fields``.
"""

from pydantic import BaseModel, StrictFloat, StrictInt

# Numbers or numeric strings; booleans are rejected rather than read as 1 or 0.
Numeric = StrictFloat | StrictInt | str | None


class RegisterRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    min_kcal: float | None = None
    max_kcal: float | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class ProfileUpdateRequest(BaseModel):
    """Partial profile update; only fields present in the body are applied."""

    name: str | None = None
    min_kcal: float | None = None
    max_kcal: float | None = None

    def supplied(self) -> dict[str, object]:
        return {key: getattr(self, key) for key in self.model_fields_set}


class AddFoodRequest(BaseModel):
    date: str | None = None
    name: str | None = None
    grams: Numeric = None
    kcal_100g: Numeric = None
    protein_100g: Numeric = None
    carbs_100g: Numeric = None
    fat_100g: Numeric = None


class UpdateFoodRequest(BaseModel):
    grams: Numeric = None
    kcal_100g: Numeric = None


class NoteRequest(BaseModel):
    date: str | None = None
    note: str | None = None
