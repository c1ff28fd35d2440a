"""Tests for the food search service."""

import asyncio
from dataclasses import dataclass, field

import httpx
import pytest

from foodlog.adapters.fdc_client import GENERIC_DATA_TYPES, FdcClient, HttpxFdcClient
from foodlog.errors import ConfigError, UpstreamError, ValidationError
from foodlog.services.cache import InMemoryCache
from foodlog.services.nutrition import NutritionService, normalize_foods
from tests.conftest import FakeFdcClient, fdc_food


@dataclass
class FailingFdcClient(FdcClient):
    status_code: int = 503
    calls: int = 0
    errors: list[str] = field(default_factory=list)

    async def search_foods(
        self,
        query: str,
        page_size: int = 20,
        data_types: tuple[str, ...] | None = None,
    ) -> dict[str, object]:
        self.calls += 1
        request = httpx.Request("POST", "https://api.test/foods/search")
        response = httpx.Response(
            self.status_code, request=request, text="upstream unavailable"
        )
        response.raise_for_status()
        return {}


def _service(client: FdcClient | None) -> NutritionService:
    return NutritionService(client, InMemoryCache(), retry_delay_seconds=0)


def test_search_dedups_case_insensitively_and_rounds() -> None:
    result = asyncio.run(_service(FakeFdcClient()).search("apple"))

    assert result.query == "apple"
    assert result.count == 2
    assert [item.name for item in result.items] == ["Apple", "Apple juice"]
    assert result.items[0].kcal_100g == 52
    assert result.items[0].carbs_100g == 13.8
    assert result.items[1].kcal_100g == 46.0
    assert result.items[1].protein_100g is None


def test_search_uses_cache() -> None:
    client = FakeFdcClient()
    service = _service(client)

    asyncio.run(service.search("Apple", limit=5))
    cached = asyncio.run(service.search("  apple ", limit=5))

    assert cached.count == 2
    assert len(client.calls) == 1


def test_cache_key_includes_limit_and_generic_flag() -> None:
    client = FakeFdcClient()
    service = _service(client)

    asyncio.run(service.search("apple", limit=5))
    asyncio.run(service.search("apple", limit=6))
    asyncio.run(service.search("apple", limit=5, only_generic=False))

    assert len(client.calls) == 3


def test_only_generic_restricts_data_types() -> None:
    client = FakeFdcClient()
    service = _service(client)

    asyncio.run(service.search("apple"))
    asyncio.run(service.search("pear", only_generic=False))

    assert client.calls[0]["data_types"] == GENERIC_DATA_TYPES
    assert client.calls[1]["data_types"] is None


def test_limit_caps_results() -> None:
    client = FakeFdcClient(
        search_payload={"foods": [fdc_food(f"Food {i}", 100 + i) for i in range(10)]}
    )

    result = asyncio.run(_service(client).search("food", limit=3))

    assert result.count == 3
    assert [item.name for item in result.items] == ["Food 0", "Food 1", "Food 2"]


def test_blank_query_is_rejected() -> None:
    with pytest.raises(ValidationError):
        asyncio.run(_service(FakeFdcClient()).search("   "))


def test_missing_credentials_raise_config_error() -> None:
    with pytest.raises(ConfigError):
        asyncio.run(_service(None).search("apple"))


def test_server_error_is_retried_then_raised_as_upstream_error() -> None:
    client = FailingFdcClient(status_code=503)

    with pytest.raises(UpstreamError) as excinfo:
        asyncio.run(_service(client).search("apple"))

    assert client.calls == 2
    assert excinfo.value.upstream_status == 503
    assert "503" in excinfo.value.message


def test_client_error_is_not_retried() -> None:
    client = FailingFdcClient(status_code=403)

    with pytest.raises(UpstreamError) as excinfo:
        asyncio.run(_service(client).search("apple"))

    assert client.calls == 1
    assert excinfo.value.upstream_status == 403


def test_normalize_foods_energy_fallback_and_skips() -> None:
    foods = [
        {
            "description": "Kale, raw",
            "foodNutrients": [
                {"nutrientId": 1062, "unitName": "kJ", "value": 180},
                {"nutrientId": 2047, "unitName": "KCAL", "value": 43.04},
            ],
        },
        fdc_food("Water", None),
        {"description": "", "foodNutrients": []},
        {
            "description": "Oats",
            "foodNutrients": [{"nutrient": {"id": 1008}, "amount": 389}],
        },
    ]

    items = normalize_foods(foods, limit=10)

    assert [(item.name, item.kcal_100g) for item in items] == [
        ("Kale, raw", 43.0),
        ("Oats", 389.0),
    ]


def test_cache_hit_echoes_current_query() -> None:
    client = FakeFdcClient()
    service = _service(client)

    asyncio.run(service.search("Apple"))
    cached = asyncio.run(service.search("apple"))

    assert cached.query == "apple"
    assert len(client.calls) == 1


@pytest.mark.parametrize("payload", [[{"description": "Apple"}], {"foods": "none"}])
def test_unexpected_payload_is_upstream_error(payload: object) -> None:
    client = FakeFdcClient(search_payload=payload)  # type: ignore[arg-type]

    with pytest.raises(UpstreamError, match="unexpected payload"):
        asyncio.run(_service(client).search("apple"))


def test_non_json_response_is_upstream_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    client = HttpxFdcClient(
        api_key="key",
        base_url="https://api.test",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    with pytest.raises(UpstreamError, match="invalid JSON"):
        asyncio.run(_service(client).search("apple"))
