"""Registration, login and profile endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from foodlog.api.dependencies import current_user_id, get_container
from foodlog.api.schemas import LoginRequest, ProfileUpdateRequest, RegisterRequest

router = APIRouter(tags=["auth"])


@router.post("/auth/register", status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, request: Request) -> dict[str, object]:
    """Create an account and return the profile with a token."""
    container = get_container(request)
    user, token = container.user_service.register(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        min_kcal=payload.min_kcal,
        max_kcal=payload.max_kcal,
    )
    return {**user.profile(), "token": token}


@router.post("/auth/login")
def login(payload: LoginRequest, request: Request) -> dict[str, object]:
    """Exchange credentials for a token."""
    container = get_container(request)
    user, token = container.user_service.authenticate(payload.email, payload.password)
    return {**user.profile(), "token": token}


@router.get("/me")
def get_me(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return the caller's profile."""
    return get_container(request).user_service.get_profile(user_id).profile()


@router.put("/me")
def update_me(
    payload: ProfileUpdateRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Update name and calorie targets; ``null`` clears a target."""
    container = get_container(request)
    return container.user_service.update_profile(user_id, payload.supplied()).profile()
