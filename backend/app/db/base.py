"""
OpsAdmin 資料庫基礎設定

提供 SQLAlchemy 2.0 異步基礎類別、引擎建立和資料表結構同步
引擎由應用程式生命週期建立並注入，不使用模組層級的全域連線
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import MetaData, column as column_clause, inspect, table as table_clause, update
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.core.config import Settings

logger = logging.getLogger(__name__)

# 設定元數據命名約定
metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s"
    }
)

# 建立基礎模型類別
Base = declarative_base(metadata=metadata)


def create_engine_from_settings(config: Settings) -> AsyncEngine:
    """
    依設定建立異步 SQLAlchemy 引擎

    MySQL 使用連接池並設定 utf8mb4，其他方言（如測試用 SQLite）使用預設設定
    """
    options: Dict[str, Any] = {
        "echo": config.DATABASE_ECHO,
        "pool_pre_ping": True,
    }
    if config.DATABASE_URL.startswith("mysql"):
        options.update(
            pool_size=config.DB_POOL_SIZE,          # 連接池大小
            max_overflow=config.DB_MAX_OVERFLOW,    # 最大溢出連接數
            pool_recycle=config.DB_POOL_RECYCLE,    # 連接回收時間（秒）
            connect_args={"charset": "utf8mb4"},
        )
    return create_async_engine(config.DATABASE_URL, **options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """建立異步會話工廠"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def _add_missing_columns(connection: Connection) -> List[str]:
    """
    補齊既有資料表缺少的欄位

    只新增欄位，不刪除也不修改既有欄位的型別
    新增的欄位一律允許 NULL
    模型要求 NOT NULL 且有 Python 端預設值的欄位（如建立時間），會回填既有資料列
    回傳新增的欄位名稱（table.column）
    """
    inspector = inspect(connection)
    existing_tables = set(inspector.get_table_names())
    preparer = connection.dialect.identifier_preparer
    added = []

    for table in Base.metadata.sorted_tables:
        if table.name not in existing_tables:
            continue
        existing_columns = {col["name"] for col in inspector.get_columns(table.name)}
        for column in table.columns:
            if column.name in existing_columns:
                continue
            ddl = (
                f"ALTER TABLE {preparer.quote(table.name)} "
                f"ADD COLUMN {preparer.quote(column.name)} "
                f"{column.type.compile(dialect=connection.dialect)}"
            )
            default = column.server_default
            if default is not None and isinstance(getattr(default, "arg", None), str):
                value = default.arg
                ddl += f" DEFAULT {value}" if value.lstrip("-").isdigit() else f" DEFAULT '{value}'"
            connection.exec_driver_sql(ddl)
            _backfill_column(connection, table, column)
            added.append(f"{table.name}.{column.name}")

    return added


def _backfill_column(connection: Connection, table, column) -> None:
    """
    以欄位預設值填入既有資料列的 NULL

    使用輕量的 table/column 建構，避免觸發其他欄位的 onupdate
    """
    default = column.default
    if column.nullable or default is None or column.server_default is not None:
        return
    if not (default.is_scalar or default.is_clause_element):
        return
    target = column_clause(column.name)
    connection.execute(
        update(table_clause(table.name, target))
        .where(target.is_(None))
        .values({column.name: default.arg})
    )


def sync_schema(connection: Connection) -> List[str]:
    """建立缺少的資料表並補齊缺少的欄位"""
    Base.metadata.create_all(connection)
    return _add_missing_columns(connection)


async def init_db(engine: AsyncEngine) -> None:
    """初始化資料庫，建立所有表格並同步欄位"""
    # 匯入所有模型以確保表格被註冊到 metadata
    from app.models import server  # noqa: F401

    async with engine.begin() as conn:
        added = await conn.run_sync(sync_schema)

    if added:
        logger.info(f"已新增資料表欄位: {', '.join(added)}")


async def check_db(engine: AsyncEngine) -> None:
    """確認資料庫可連線，不修改資料表結構"""
    async with engine.connect() as conn:
        await conn.exec_driver_sql("SELECT 1")


async def close_db(engine: Optional[AsyncEngine]) -> None:
    """關閉資料庫連接"""
    if engine is not None:
        await engine.dispose()
