"""Food search service proxying USDA FDC."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

from foodlog.adapters.fdc_client import GENERIC_DATA_TYPES, FdcClient
from foodlog.domain.nutrition import FoodSearchItem, FoodSearchResult
from foodlog.errors import ConfigError, UpstreamError, ValidationError
from foodlog.services.cache import Cache

# Energy (kcal), then the Atwater energy values Foundation foods report.
_ENERGY_IDS = (1008, 2047, 2048)
_MACRO_IDS = {
    "protein": 1003,
    "fat": 1004,
    "carbs": 1005,
}
MAX_LIMIT = 50

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


@dataclass
class NutritionService:
    """Food search with normalization, dedup and caching."""

    fdc_client: FdcClient | None
    cache: Cache
    search_ttl_seconds: int = 300
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(
        self, query: str, limit: int = 20, only_generic: bool = True
    ) -> FoodSearchResult:
        """Search foods, returning unique names with kcal per 100 g."""
        cleaned = (query or "").strip()
        if not cleaned:
            raise ValidationError("Missing query")
        if self.fdc_client is None:
            raise ConfigError("Food search is not configured")
        limit = max(1, min(int(limit), MAX_LIMIT))

        cache_key = f"fdc:search:{cleaned.lower()}:{limit}:{int(only_generic)}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, FoodSearchResult):
            _logger.debug("Food search cache hit: %s", cache_key)
            return FoodSearchResult(query=cleaned, items=cached.items)

        client = self.fdc_client
        data_types = GENERIC_DATA_TYPES if only_generic else None
        try:
            payload = await self._call_with_retry(
                # Over-fetch since duplicates and foods without energy are dropped.
                lambda: client.search_foods(
                    cleaned, page_size=limit * 2, data_types=data_types
                ),
                action="search",
            )
        except ValueError as exc:
            raise UpstreamError("Food search returned invalid JSON") from exc
        if not isinstance(payload, dict):
            raise UpstreamError("Food search returned an unexpected payload")
        foods = payload.get("foods") or []
        if not isinstance(foods, list):
            raise UpstreamError("Food search returned an unexpected payload")
        result = FoodSearchResult(query=cleaned, items=normalize_foods(foods, limit))
        self.cache.set(cache_key, result, ttl_seconds=self.search_ttl_seconds)
        _logger.info("Food search: query=%s results=%s", cleaned, result.count)
        return result

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call the upstream with a short retry on server and transport errors."""
        attempt = 0
        while True:
            try:
                return await func()
            except (httpx.HTTPStatusError, httpx.TransportError) as exc:
                attempt += 1
                status_code = _status_code_from_exception(exc)
                _logger.warning(
                    "Food %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    status_code or "n/a",
                    exc,
                )
                retryable = status_code is None or status_code >= 500
                if not retryable or attempt > self.retry_attempts:
                    raise _upstream_error(exc, status_code) from exc
                await asyncio.sleep(self.retry_delay_seconds)


def normalize_foods(foods: list[dict[str, object]], limit: int) -> list[FoodSearchItem]:
    """Turn raw FDC foods into unique items with values per 100 g."""
    seen: set[str] = set()
    items: list[FoodSearchItem] = []
    for food in foods:
        if not isinstance(food, dict):
            continue
        name = str(food.get("description") or "").strip()
        key = name.lower()
        if not name or key in seen:
            continue
        nutrients = _nutrient_values(food.get("foodNutrients") or [])
        kcal = next((nutrients[i] for i in _ENERGY_IDS if i in nutrients), None)
        if kcal is None:
            continue
        seen.add(key)
        items.append(
            FoodSearchItem(
                name=name,
                kcal_100g=round(kcal, 1),
                protein_100g=_rounded(nutrients.get(_MACRO_IDS["protein"])),
                carbs_100g=_rounded(nutrients.get(_MACRO_IDS["carbs"])),
                fat_100g=_rounded(nutrients.get(_MACRO_IDS["fat"])),
            )
        )
        if len(items) >= limit:
            break
    return items


def _nutrient_values(food_nutrients: list[dict[str, object]]) -> dict[int, float]:
    """Map FDC nutrient ids to amounts, skipping energy reported in kJ."""
    values: dict[int, float] = {}
    for nutrient in food_nutrients:
        nutrient_info = nutrient.get("nutrient") or {}
        nutrient_id = nutrient.get("nutrientId") or nutrient_info.get("id")
        amount = nutrient.get("value", nutrient.get("amount"))
        if not isinstance(nutrient_id, int) or not isinstance(amount, int | float):
            continue
        unit = str(nutrient.get("unitName") or nutrient_info.get("unitName") or "")
        if nutrient_id in _ENERGY_IDS and unit and unit.upper() != "KCAL":
            continue
        values.setdefault(nutrient_id, float(amount))
    return values


def _rounded(value: float | None) -> float | None:
    return round(value, 1) if value is not None else None


def _status_code_from_exception(exc: Exception) -> int | None:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return status_code
    return None


def _upstream_error(exc: Exception, status_code: int | None) -> UpstreamError:
    if status_code is None:
        return UpstreamError(f"Food search failed: {exc}")
    response = getattr(exc, "response", None)
    detail = (response.text if response is not None else "")[:200]
    return UpstreamError(
        f"Food search failed with status {status_code}: {detail}".rstrip(": "),
        upstream_status=status_code,
    )
