"""
應用程式層級測試

測試健康檢查、儀表盤示範資料與應用程式生命週期
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import Settings
from app.main import create_app
from app.services.server_store import ServerStore
from app.utils.exceptions import DatabaseError


class TestHealthEndpoints:
    """測試健康檢查端點"""

    async def test_root(self, client):
        """測試根路由"""
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "running"

    async def test_ping(self, client):
        """測試 API ping"""
        response = await client.get("/api/ping")

        assert response.json() == {"message": "pong"}

    async def test_health_healthy(self, client):
        """測試資料庫正常"""
        data = (await client.get("/health")).json()

        assert data["status"] == "healthy"
        assert data["database"] == "healthy"
        assert data["environment"] == "testing"

    async def test_health_degraded(self, client, store):
        """測試資料庫異常時回報 degraded 而不是失敗"""
        with patch.object(store, "ping", new=AsyncMock(side_effect=DatabaseError("ping failed: gone", operation="ping"))):
            response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "degraded"
        assert data["database"] == "unhealthy: ping failed: gone"


class TestDashboardAPI:
    """測試儀表盤示範資料端點"""

    async def test_dashboard_stats(self, client):
        """測試儀表盤統計"""
        body = (await client.get("/api/dashboard/stats")).json()

        assert body["code"] == 0
        assert body["data"]["server_total"] == 12

    async def test_alerts(self, client):
        """測試告警列表"""
        body = (await client.get("/api/monitor/alerts")).json()

        assert body["code"] == 0
        assert len(body["data"]) == 3
        assert {alert["level"] for alert in body["data"]} == {"critical", "warning", "info"}


class TestLifespan:
    """測試應用程式生命週期"""

    async def test_startup_creates_store_and_schema(self, tmp_path):
        """測試啟動時建立資料表並注入 ServerStore"""
        config = Settings(DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'opsadmin.db'}", LOG_LEVEL="WARNING")
        app = create_app(config)

        async with app.router.lifespan_context(app):
            store = app.state.server_store
            assert isinstance(store, ServerStore)

            async with store.engine.connect() as conn:
                tables = await conn.run_sync(lambda c: inspect(c).get_table_names())
            assert "servers" in tables

            server = await store.create({"name": "web-01", "ip": "10.0.0.1"})
            assert server.id == 1

    async def test_startup_fails_when_database_unreachable(self, tmp_path):
        """測試資料庫無法連線時中止啟動"""
        missing_dir = tmp_path / "missing" / "nested"
        config = Settings(DATABASE_URL=f"sqlite+aiosqlite:///{missing_dir / 'opsadmin.db'}", LOG_LEVEL="WARNING")
        app = create_app(config)

        with pytest.raises(SQLAlchemyError):
            async with app.router.lifespan_context(app):
                pass

    async def test_startup_without_auto_sync_leaves_schema_alone(self, tmp_path):
        """測試關閉自動同步時只檢查連線，不建立資料表"""
        config = Settings(
            DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'opsadmin.db'}",
            DATABASE_AUTO_SYNC=False,
            LOG_LEVEL="WARNING",
        )
        app = create_app(config)

        with patch("app.main.init_db", new=AsyncMock()) as mock_init_db:
            async with app.router.lifespan_context(app):
                store = app.state.server_store
                async with store.engine.connect() as conn:
                    tables = await conn.run_sync(lambda c: inspect(c).get_table_names())

        mock_init_db.assert_not_called()
        assert "servers" not in tables

    async def test_startup_without_auto_sync_fails_when_database_unreachable(self, tmp_path):
        """測試關閉自動同步時資料庫無法連線仍中止啟動"""
        missing_dir = tmp_path / "missing" / "nested"
        config = Settings(
            DATABASE_URL=f"sqlite+aiosqlite:///{missing_dir / 'opsadmin.db'}",
            DATABASE_AUTO_SYNC=False,
            LOG_LEVEL="WARNING",
        )
        app = create_app(config)

        with pytest.raises(SQLAlchemyError):
            async with app.router.lifespan_context(app):
                pass
