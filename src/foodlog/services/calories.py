"""Calorie arithmetic and numeric input checks."""

import math

from foodlog.errors import ValidationError


def to_number(value: object) -> float | None:
    """Coerce ints, floats and numeric strings to float; otherwise None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def require_positive(value: object, message: str = "Missing fields") -> float:
    """Return value as a positive float or raise ValidationError."""
    number = to_number(value)
    if number is None or number <= 0:
        raise ValidationError(message)
    return number


def optional_non_negative(value: object, field: str) -> float | None:
    """Return None for a missing value, otherwise a non-negative float."""
    if value is None:
        return None
    number = to_number(value)
    if number is None or number < 0:
        raise ValidationError(f"Invalid {field}")
    return number


def portion_kcal(grams: float, kcal_100g: float) -> float:
    """Return kcal for a portion; raise ValidationError if it overflows."""
    kcal = (kcal_100g / 100.0) * grams
    if not math.isfinite(kcal):
        raise ValidationError("Missing fields")
    return kcal


def compute_kcal(grams: object, kcal_100g: object) -> float:
    """Return kcal for a portion, rounded to 2 decimals."""
    return round(portion_kcal(require_positive(grams), require_positive(kcal_100g)), 2)
