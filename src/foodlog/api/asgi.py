"""ASGI entrypoint for the FoodLog API."""

from foodlog.api.app import create_app
from foodlog.containers import build_container

app = create_app(build_container())
