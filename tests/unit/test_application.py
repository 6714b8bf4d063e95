"""Tests for application factory."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import status

from thesis_registry.application import create_app


def _route_paths(app) -> list[str]:
    # OpenAPI paths follow route registration order and also cover routers
    # that newer FastAPI versions mount as nested route objects
    return list(app.openapi()["paths"])


class TestApplication:
    """Tests for create_app()."""

    def test_create_app_includes_routes(self):
        """Test: resource and health routes are mounted under /api."""
        app = create_app()
        routes = _route_paths(app)
        assert "/api/health" in routes
        assert "/api/health/db" in routes
        assert "/api/universities" in routes
        assert "/api/institutes/university/{university_id}" in routes
        assert "/api/theses/search" in routes
        assert "/api/dashboard/stats" in routes

    def test_search_route_is_matched_before_thesis_id(self):
        app = create_app()
        routes = _route_paths(app)
        assert routes.index("/api/theses/search") < routes.index(
            "/api/theses/{thesis_id}"
        )

    @pytest.mark.asyncio
    async def test_cors_preflight_allows_configured_origin(self, api_client, settings):
        """Test: preflight requests from a configured origin are allowed."""
        origin = settings.CORS_ORIGINS[0]

        response = await api_client.options(
            "/api/universities",
            headers={
                "Origin": origin,
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.headers["access-control-allow-origin"] == origin

    @pytest.mark.asyncio
    async def test_lifespan_initializes_and_closes_database(self):
        """Test: startup runs init_db and shutdown runs close_db."""
        with (
            patch(
                "thesis_registry.application.init_db", new_callable=AsyncMock
            ) as mock_init,
            patch(
                "thesis_registry.application.close_db", new_callable=AsyncMock
            ) as mock_close,
        ):
            app = create_app()
            async with app.router.lifespan_context(app):
                mock_init.assert_awaited_once()
                mock_close.assert_not_awaited()

        mock_close.assert_awaited_once()
