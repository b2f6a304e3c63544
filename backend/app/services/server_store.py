"""
OpsAdmin 伺服器資料存取服務

封裝 servers 資料表的所有資料庫操作
每個方法使用獨立的會話，方法之間不共享交易
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import delete, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker
from sqlalchemy.sql import func

from app.db.base import create_session_factory
from app.models.server import Server
from app.utils.exceptions import DatabaseError

# 設定日誌
logger = logging.getLogger(__name__)


class ServerStore:
    """伺服器資料存取物件"""

    def __init__(self, engine: AsyncEngine, session_factory: Optional[async_sessionmaker] = None):
        self.engine = engine
        self.session_factory = session_factory or create_session_factory(engine)

    def _failed(self, operation: str, exc: SQLAlchemyError) -> DatabaseError:
        logger.error(f"資料庫操作失敗 ({operation}): {exc}")
        return DatabaseError(f"{operation} failed: {exc}", operation=operation)

    async def list_all(self) -> List[Server]:
        """取得所有伺服器，依 id 由新到舊排序"""
        try:
            async with self.session_factory() as session:
                result = await session.execute(select(Server).order_by(Server.id.desc()))
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._failed("query", e) from e

    async def get(self, server_id: int) -> Optional[Server]:
        """依 id 取得伺服器，不存在時回傳 None"""
        try:
            async with self.session_factory() as session:
                return await session.get(Server, server_id)
        except SQLAlchemyError as e:
            raise self._failed("query", e) from e

    async def create(self, values: Dict[str, Any]) -> Server:
        """新增伺服器，回傳含資料庫指派 id 與時間戳記的完整資料"""
        server = Server(**values)
        try:
            async with self.session_factory() as session:
                session.add(server)
                await session.commit()
                await session.refresh(server)
        except SQLAlchemyError as e:
            raise self._failed("create", e) from e

        logger.info(f"已建立伺服器: {server!r}")
        return server

    async def update_nonzero(self, server_id: int, values: Dict[str, Any]) -> int:
        """
        套用部分更新

        values 只應包含非零值欄位，updated_at 一律刷新
        回傳受影響的資料列數
        """
        stmt = (
            update(Server)
            .where(Server.id == server_id)
            .values(**values, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                affected = result.rowcount
                await session.commit()
        except SQLAlchemyError as e:
            raise self._failed("update", e) from e

        logger.info(f"已更新伺服器 {server_id}: {sorted(values)}")
        return affected

    async def delete(self, server_id: int) -> int:
        """刪除單一伺服器，回傳受影響的資料列數"""
        stmt = delete(Server).where(Server.id == server_id).execution_options(synchronize_session=False)
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                affected = result.rowcount
                await session.commit()
        except SQLAlchemyError as e:
            raise self._failed("delete", e) from e
        return affected

    async def delete_many(self, server_ids: Iterable[int]) -> int:
        """以單一語句批次刪除伺服器，回傳實際刪除的數量"""
        ids = list(server_ids)
        stmt = delete(Server).where(Server.id.in_(ids)).execution_options(synchronize_session=False)
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                affected = result.rowcount
                await session.commit()
        except SQLAlchemyError as e:
            raise self._failed("delete", e) from e

        logger.info(f"批次刪除伺服器: 要求 {len(ids)} 筆，實際刪除 {affected} 筆")
        return affected

    async def ping(self) -> None:
        """檢查資料庫連線"""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise self._failed("ping", e) from e
