"""API endpoints package."""

from thesis_registry.api.router import API_PREFIX, create_api_router

__all__ = ["API_PREFIX", "create_api_router"]
