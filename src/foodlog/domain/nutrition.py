"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FoodSearchItem:
    """A food from the upstream database with values per 100 g."""

    name: str
    kcal_100g: float
    protein_100g: float | None = None
    carbs_100g: float | None = None
    fat_100g: float | None = None


@dataclass(frozen=True)
class FoodSearchResult:
    """Normalized search response."""

    query: str
    items: list[FoodSearchItem]

    @property
    def count(self) -> int:
        return len(self.items)
