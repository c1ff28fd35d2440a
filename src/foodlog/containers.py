"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from foodlog.adapters.fdc_client import HttpxFdcClient
from foodlog.adapters.supabase_food_log_repository import SupabaseFoodLogRepository
from foodlog.adapters.supabase_note_repository import SupabaseNoteRepository
from foodlog.adapters.supabase_user_repository import SupabaseUserRepository
from foodlog.config import Settings
from foodlog.services.auth import PasswordHasher, TokenService
from foodlog.services.cache import InMemoryCache
from foodlog.services.days import DayService
from foodlog.services.food_log import FoodLogService
from foodlog.services.notes import NoteService
from foodlog.services.nutrition import NutritionService
from foodlog.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    token_service: TokenService
    user_service: UserService
    food_log_service: FoodLogService
    note_service: NoteService
    day_service: DayService
    nutrition_service: NutritionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    token_service = TokenService(
        secret=resolved_settings.jwt_secret,
        ttl_days=resolved_settings.token_ttl_days,
    )
    user_service = UserService(
        repository=SupabaseUserRepository(supabase_client),
        hasher=PasswordHasher(rounds=resolved_settings.bcrypt_rounds),
        tokens=token_service,
    )
    food_log_service = FoodLogService(SupabaseFoodLogRepository(supabase_client))
    note_service = NoteService(SupabaseNoteRepository(supabase_client))
    day_service = DayService(
        food_log_service=food_log_service,
        user_service=user_service,
        note_service=note_service,
    )
    fdc_client = (
        HttpxFdcClient.create(
            api_key=resolved_settings.fdc_api_key,
            base_url=resolved_settings.fdc_base_url,
            timeout_seconds=resolved_settings.fdc_timeout_seconds,
        )
        if resolved_settings.fdc_api_key
        else None
    )
    nutrition_service = NutritionService(
        fdc_client=fdc_client,
        cache=InMemoryCache(max_entries=resolved_settings.food_search_cache_size),
        search_ttl_seconds=resolved_settings.food_search_ttl_seconds,
    )

    async def close_resources() -> None:
        if fdc_client is not None:
            await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        token_service=token_service,
        user_service=user_service,
        food_log_service=food_log_service,
        note_service=note_service,
        day_service=day_service,
        nutrition_service=nutrition_service,
        close_resources=close_resources,
    )
