"""
OpsAdmin 資料庫遷移環境

正式環境的資料表結構以 alembic 版本為準，啟動時的自動同步應以
DATABASE_AUTO_SYNC=false 關閉
已由自動同步建立的資料庫，先執行 `alembic stamp head` 再納入遷移管理
"""

import asyncio
from logging.config import fileConfig

from alembic import context

from app.core.config import settings
from app.db.base import Base, create_engine_from_settings
from app.models import server  # noqa: F401 註冊模型到 metadata

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """離線模式，只輸出 SQL 不連接資料庫"""
    context.configure(
        url=settings.DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection) -> None:
    """在同步連線上執行遷移（供 run_sync 呼叫）"""
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=True,
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """使用與應用程式相同的引擎設定執行遷移"""
    engine = create_engine_from_settings(settings)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(do_run_migrations)
    finally:
        await engine.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
