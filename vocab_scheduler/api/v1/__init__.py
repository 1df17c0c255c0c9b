"""Version 1 API."""

from vocab_scheduler.api.v1.api import api_router

__all__ = ["api_router"]
