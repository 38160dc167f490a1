"""Tests for main FastAPI application."""

import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient
from contextlib import asynccontextmanager

from marketplace.main import create_app, lifespan
from marketplace.middleware.request_logging import RequestLoggingMiddleware


def make_pool(conn):
    """Build a pool mock whose acquire() yields conn."""
    pool = AsyncMock()

    @asynccontextmanager
    async def mock_acquire():
        yield conn

    pool.acquire = mock_acquire
    return pool


class TestMainApp:
    """Test main FastAPI application."""

    @pytest.fixture
    def mock_db_manager(self):
        """Mock database manager."""
        with patch("marketplace.main.db_manager") as mock:
            mock.initialize = AsyncMock()
            mock.close = AsyncMock()
            yield mock

    @pytest.fixture
    def mock_get_db_pool(self):
        """Mock get_db_pool function."""
        with patch("marketplace.main.get_db_pool") as mock:
            mock_conn = AsyncMock()
            mock_conn.fetchval = AsyncMock(return_value=5)
            mock.return_value = make_pool(mock_conn)
            yield mock

    @pytest.fixture
    def app(self, mock_db_manager, mock_get_db_pool):
        return create_app()

    @pytest.fixture
    def client(self, app):
        return TestClient(app)

    def test_create_app(self, app):
        assert app.title == "Marketplace API"
        assert app.version == "1.0.0"
        assert app.docs_url == "/docs"
        assert app.openapi_url == "/openapi.json"

    def test_root_endpoint(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json() == {
            "service": "Marketplace API",
            "version": "1.0.0",
            "docs": "/docs",
            "health": "/health"
        }

    def test_liveness_check(self, client):
        response = client.get("/live")

        assert response.status_code == 200
        assert response.json()["status"] == "alive"

    def test_health_check_success(self, client):
        """Test health check endpoint when database is healthy."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"

    def test_ready_check_success(self, client):
        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json()["database_connections"] == 5

    def test_health_check_database_failure(self, client, mock_get_db_pool):
        """Test health check when database fails."""
        mock_get_db_pool.side_effect = Exception("connection refused")

        response = client.get("/health")

        assert response.status_code == 503
        assert response.headers["content-type"] == "application/problem+json"
        data = response.json()
        assert data["title"] == "Service Unavailable"
        assert data["detail"] == "Database connection failed"
        assert data["database_error"] == "connection refused"

    def test_ready_check_database_failure(self, client, mock_get_db_pool):
        mock_get_db_pool.side_effect = Exception("connection refused")

        response = client.get("/ready")

        assert response.status_code == 503
        assert response.json()["detail"] == "Service not ready"

    def test_routers_mounted_under_v1(self, app):
        paths = {route.path for route in app.routes}

        assert "/v1/products" in paths
        assert "/v1/users" in paths
        assert "/v1/users/{user_id}/followers" in paths
        assert "/v1/admin/products" in paths

    def test_openapi_docs_available(self, client):
        response = client.get("/openapi.json")

        assert response.status_code == 200
        assert response.json()["info"]["title"] == "Marketplace API"

    def test_request_logging_middleware_registered(self, app):
        middleware_classes = [middleware.cls for middleware in app.user_middleware]

        assert RequestLoggingMiddleware in middleware_classes

    def test_exception_handlers_registered(self, app):
        assert len(app.exception_handlers) > 0


class TestLifespan:
    """Test application lifespan events."""

    @pytest.mark.asyncio
    @patch("marketplace.main.db_manager")
    @patch("marketplace.main.get_db_pool")
    async def test_lifespan_startup_success(self, mock_get_db_pool, mock_db_manager):
        """Test successful startup and shutdown."""
        mock_db_manager.initialize = AsyncMock()
        mock_db_manager.close = AsyncMock()
        mock_get_db_pool.return_value = make_pool(AsyncMock())
        app = create_app()

        async with lifespan(app):
            mock_db_manager.initialize.assert_called_once()
            mock_get_db_pool.assert_called_once()

        mock_db_manager.close.assert_called_once()

    @pytest.mark.asyncio
    @patch("marketplace.main.db_manager")
    async def test_lifespan_startup_failure(self, mock_db_manager):
        mock_db_manager.initialize = AsyncMock(side_effect=Exception("DB init failed"))
        app = create_app()

        with pytest.raises(Exception, match="DB init failed"):
            async with lifespan(app):
                pass

    @pytest.mark.asyncio
    @patch("marketplace.main.db_manager")
    @patch("marketplace.main.get_db_pool")
    async def test_lifespan_shutdown_error(self, mock_get_db_pool, mock_db_manager):
        """Test that shutdown errors are logged, not raised."""
        mock_db_manager.initialize = AsyncMock()
        mock_db_manager.close = AsyncMock(side_effect=Exception("Shutdown error"))
        mock_get_db_pool.return_value = make_pool(AsyncMock())
        app = create_app()

        async with lifespan(app):
            pass

        mock_db_manager.close.assert_called_once()
