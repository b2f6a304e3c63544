"""
OpsAdmin 伺服器模型

定義伺服器清單的資料庫模型
"""

from sqlalchemy import Column, Integer, String, DateTime, Index
from sqlalchemy.sql import func

from app.db.base import Base


class Server(Base):
    """
    伺服器清單表

    單一平面資料表，沒有外鍵與關聯
    id 與時間戳記由資料庫指派
    """
    __tablename__ = "servers"

    # 主鍵
    id = Column(Integer, primary_key=True, autoincrement=True, comment="伺服器唯一識別碼")

    # 基本資訊
    name = Column(String(100), nullable=False, comment="伺服器名稱")
    ip = Column(String(50), nullable=False, comment="IP位址")
    port = Column(Integer, default=22, server_default="22", comment="SSH連接埠")

    # 狀態（running / stopped / error，不強制限制）
    status = Column(String(20), default="running", server_default="running", comment="狀態")

    # 資源使用率（百分比）
    cpu = Column(Integer, default=0, server_default="0", comment="CPU使用率")
    memory = Column(Integer, default=0, server_default="0", comment="記憶體使用率")

    remark = Column(String(500), nullable=True, comment="備註")

    # 時間戳記
    created_at = Column(DateTime, default=func.now(), nullable=False, comment="建立時間")
    updated_at = Column(
        DateTime,
        default=func.now(),
        onupdate=func.now(),
        nullable=False,
        comment="更新時間"
    )

    __table_args__ = (
        Index('idx_servers_status', 'status'),
        {'comment': '伺服器清單表'}
    )

    def __repr__(self) -> str:
        return f"<Server(id={self.id}, name='{self.name}', ip='{self.ip}', status='{self.status}')>"

    def __str__(self) -> str:
        return f"{self.name} ({self.ip})"
