"""Shared utilities for festival_finder."""

from festival_finder.util.images import public_image_url
from festival_finder.util.logging import setup_logging

__all__ = ["public_image_url", "setup_logging"]
