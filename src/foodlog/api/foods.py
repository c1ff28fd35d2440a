"""Food search endpoint."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request

from foodlog.api.dependencies import current_user_id, get_container

router = APIRouter(tags=["foods"])


@router.get("/foods/search")
async def search_foods(
    request: Request,
    query: str = "",
    limit: int = 20,
    only_generic: bool = Query(default=True, alias="onlyGeneric"),
    _user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Search the upstream nutrition database."""
    result = await get_container(request).nutrition_service.search(
        query, limit=limit, only_generic=only_generic
    )
    return {
        "query": result.query,
        "count": result.count,
        "items": [
            {
                "name": item.name,
                "kcal_100g": item.kcal_100g,
                "protein_100g": item.protein_100g,
                "carbs_100g": item.carbs_100g,
                "fat_100g": item.fat_100g,
            }
            for item in result.items
        ],
    }
