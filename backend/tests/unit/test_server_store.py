"""
ServerStore 單元測試

直接測試資料存取層在 SQLite 上的行為
"""

from unittest.mock import Mock

import pytest
from sqlalchemy.exc import OperationalError

from app.utils.exceptions import DatabaseError


class TestServerStoreCRUD:
    """測試基本增刪查改"""

    async def test_create_assigns_id_and_timestamps(self, store):
        """測試新增時由資料庫指派 id 與時間戳記"""
        server = await store.create({"name": "web-01", "ip": "10.0.0.1"})

        assert server.id is not None
        assert server.port == 22
        assert server.status == "running"
        assert server.cpu == 0
        assert server.memory == 0
        assert server.created_at is not None
        assert server.updated_at is not None

    async def test_get_missing_returns_none(self, store):
        """測試查詢不存在的 id"""
        assert await store.get(42) is None

    async def test_list_all_orders_by_id_desc(self, store):
        """測試列表依 id 由大到小排序"""
        ids = [(await store.create({"name": f"s{i}", "ip": f"10.0.0.{i}"})).id for i in range(3)]

        servers = await store.list_all()

        assert [server.id for server in servers] == sorted(ids, reverse=True)

    async def test_update_nonzero_applies_values(self, store, sample_server):
        """測試部分更新只修改指定欄位"""
        affected = await store.update_nonzero(sample_server.id, {"status": "stopped"})

        server = await store.get(sample_server.id)
        assert affected == 1
        assert server.status == "stopped"
        assert server.cpu == 50
        assert server.name == "web-01"

    async def test_update_nonzero_empty_values_touches_updated_at(self, store, sample_server):
        """測試沒有欄位時仍刷新 updated_at"""
        affected = await store.update_nonzero(sample_server.id, {})

        server = await store.get(sample_server.id)
        assert affected == 1
        assert server.updated_at >= sample_server.updated_at

    async def test_update_nonzero_missing_row(self, store):
        """測試更新不存在的資料列"""
        assert await store.update_nonzero(42, {"name": "x"}) == 0

    async def test_delete_returns_rowcount(self, store, sample_server):
        """測試刪除回傳受影響的資料列數"""
        assert await store.delete(sample_server.id) == 1
        assert await store.delete(sample_server.id) == 0

    async def test_delete_many_counts_existing_rows(self, store):
        """測試批次刪除只計算存在的資料列"""
        first = await store.create({"name": "a", "ip": "10.0.0.1"})
        second = await store.create({"name": "b", "ip": "10.0.0.2"})

        deleted = await store.delete_many([first.id, second.id, 999])

        assert deleted == 2
        assert await store.list_all() == []

    async def test_ping(self, store):
        """測試資料庫連線檢查"""
        await store.ping()


class TestServerStoreErrors:
    """測試資料庫錯誤轉換"""

    @pytest.mark.parametrize("operation, call", [
        ("query", lambda s: s.list_all()),
        ("query", lambda s: s.get(1)),
        ("create", lambda s: s.create({"name": "a", "ip": "10.0.0.1"})),
        ("update", lambda s: s.update_nonzero(1, {"name": "a"})),
        ("delete", lambda s: s.delete(1)),
        ("delete", lambda s: s.delete_many([1, 2])),
    ])
    async def test_sqlalchemy_errors_become_database_error(self, store, operation, call):
        """測試 SQLAlchemy 錯誤轉換為 DatabaseError 並帶有操作名稱"""
        store.session_factory = Mock(side_effect=OperationalError("SQL", {}, Exception("boom")))

        with pytest.raises(DatabaseError) as exc_info:
            await call(store)

        assert exc_info.value.operation == operation
        assert exc_info.value.message.startswith(f"{operation} failed:")
        assert "boom" in exc_info.value.message
