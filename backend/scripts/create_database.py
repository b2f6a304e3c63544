#!/usr/bin/env python3
"""
創建 OpsAdmin MySQL 資料庫腳本

在應用程式第一次啟動或運行 Alembic 遷移之前，需要先創建資料庫
"""

import sys

import pymysql
from sqlalchemy.engine import make_url

from app.core.config import settings


def create_database() -> bool:
    """創建 OpsAdmin 資料庫"""
    try:
        # 解析資料庫連接資訊
        url = make_url(settings.DATABASE_URL)
        db_name = url.database

        print(f"連接到 MySQL 伺服器: {url.username}@{url.host}:{url.port or 3306}")

        # 連接到 MySQL（不指定資料庫）
        connection = pymysql.connect(
            host=url.host,
            port=url.port or 3306,
            user=url.username,
            password=url.password or "",
            charset='utf8mb4'
        )

        try:
            with connection.cursor() as cursor:
                cursor.execute(f"CREATE DATABASE IF NOT EXISTS `{db_name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")
                print(f"✅ 資料庫 '{db_name}' 創建成功")

            connection.commit()

        finally:
            connection.close()

        return True

    except pymysql.MySQLError as e:
        print(f"❌ 創建資料庫失敗: {e}")
        return False


if __name__ == "__main__":
    success = create_database()
    sys.exit(0 if success else 1)
