"""
OpsAdmin 資料庫模型

匯入所有資料庫模型以確保它們被 SQLAlchemy 正確識別
"""

from app.models.server import Server

__all__ = [
    "Server",
]
