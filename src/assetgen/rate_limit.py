"""Fixed-window request limiting for the generate endpoint.

Every client, identified by its remote address, gets a counter that starts
with its first request in a window and resets once the window has elapsed.
The counters live in the in-memory storage of the `limits` package.
"""

from flask import Flask
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from assetgen.config import Settings

RATE_LIMITED_MESSAGE = "Too many requests, please try again later."


def rate_limit_value(settings: Settings) -> str:
    # Settings only accept whole-second windows.
    window_seconds = settings.rate_limit_window_ms // 1000
    return f"{settings.rate_limit_max_requests} per {window_seconds} second"


def create_limiter(app: Flask) -> Limiter:
    return Limiter(
        get_remote_address,
        app=app,
        storage_uri="memory://",
        strategy="fixed-window",
        headers_enabled=True,
    )
