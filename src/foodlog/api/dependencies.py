"""Shared FastAPI dependencies."""

from datetime import date, datetime
from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import Header, Request

from foodlog.errors import ValidationError
from foodlog.services.auth import parse_bearer

if TYPE_CHECKING:
    from foodlog.containers import AppContainer


def get_container(request: Request) -> "AppContainer":
    return request.app.state.container


async def current_user_id(
    request: Request, authorization: str | None = Header(default=None)
) -> UUID:
    """Resolve the caller from the bearer token; no database lookup."""
    token = parse_bearer(authorization)
    return get_container(request).token_service.verify(token)


def parse_day(raw: str | None) -> date:
    """Parse a YYYY-MM-DD calendar date."""
    if not raw or not raw.strip():
        raise ValidationError("Missing date")
    try:
        return datetime.strptime(raw.strip(), "%Y-%m-%d").date()
    except ValueError as exc:
        raise ValidationError("Invalid date, expected YYYY-MM-DD") from exc
