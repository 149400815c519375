"""ASGI entrypoint for the Smart Cart Buddy API."""

from smart_cart_buddy.api.app import create_app
from smart_cart_buddy.containers import build_container

app = create_app(build_container())
