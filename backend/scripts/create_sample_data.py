#!/usr/bin/env python3
"""
創建 OpsAdmin 示例數據腳本

寫入幾筆示例伺服器用於前端開發和演示
"""

import asyncio

from app.core.config import settings
from app.db.base import close_db, create_engine_from_settings, init_db
from app.services.server_store import ServerStore

SAMPLE_SERVERS = [
    {"name": "web-01", "ip": "192.168.1.10", "status": "running", "cpu": 35, "memory": 62, "remark": "Nginx 前端"},
    {"name": "web-02", "ip": "192.168.1.11", "status": "running", "cpu": 28, "memory": 55, "remark": "Nginx 前端"},
    {"name": "db-01", "ip": "192.168.1.20", "port": 2222, "status": "running", "cpu": 71, "memory": 83, "remark": "MySQL 主庫"},
    {"name": "cache-01", "ip": "192.168.1.40", "status": "stopped", "remark": "Redis 快取"},
    {"name": "backup-01", "ip": "192.168.1.50", "status": "error", "cpu": 3, "memory": 12},
]


async def main() -> None:
    """創建示例伺服器"""
    engine = create_engine_from_settings(settings)
    try:
        await init_db(engine)
        store = ServerStore(engine)
        for values in SAMPLE_SERVERS:
            server = await store.create(values)
            print(f"✅ 已建立 {server}")
    finally:
        await close_db(engine)


if __name__ == "__main__":
    asyncio.run(main())
