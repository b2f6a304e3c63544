"""
OpsAdmin 測試基礎配置

提供 SQLite in-memory 異步資料庫、ServerStore 與 httpx 測試客戶端等通用 fixture
所有測試使用隔離的 SQLite 資料庫，不依賴外部 MySQL
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.core.deps import get_server_store
from app.db.base import init_db
from app.main import create_app
from app.services.server_store import ServerStore

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def test_settings():
    """測試用設定"""
    return Settings(DATABASE_URL=TEST_DATABASE_URL, ENVIRONMENT="testing", LOG_LEVEL="WARNING")


@pytest_asyncio.fixture
async def engine():
    """每個測試獨立的 in-memory 資料庫引擎"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def store(engine):
    """伺服器資料存取服務"""
    return ServerStore(engine)


@pytest.fixture
def test_app(store, test_settings):
    """注入測試資料存取服務的應用程式"""
    application = create_app(test_settings)
    application.dependency_overrides[get_server_store] = lambda: store
    return application


@pytest_asyncio.fixture
async def client(test_app):
    """httpx 異步測試客戶端"""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def sample_server(store):
    """預先建立的測試伺服器"""
    return await store.create({"name": "web-01", "ip": "10.0.0.1", "cpu": 50, "memory": 40, "remark": "前端"})
