"""HTTP API for festival_finder: FastAPI application and httpx client."""

from festival_finder.api.app import create_app
from festival_finder.api.client import ApiClient

__all__ = ["ApiClient", "create_app"]
