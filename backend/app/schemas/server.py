"""
OpsAdmin 伺服器相關 Pydantic Schema

定義伺服器管理的 API 請求和回應資料結構
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict, StrictInt


class ServerCreate(BaseModel):
    """
    建立伺服器請求資料結構

    id 與時間戳記由資料庫指派，請求中若帶入會被忽略
    """
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., max_length=100, description="伺服器名稱")
    ip: str = Field(..., max_length=50, description="IP位址")
    port: Optional[StrictInt] = Field(22, description="SSH連接埠")
    status: Optional[str] = Field("running", max_length=20, description="狀態")
    cpu: Optional[StrictInt] = Field(0, description="CPU使用率")
    memory: Optional[StrictInt] = Field(0, description="記憶體使用率")
    remark: Optional[str] = Field(None, max_length=500, description="備註")

    def to_values(self) -> Dict[str, Any]:
        """
        轉換為寫入資料庫的欄位

        null 欄位不寫入，交由資料表預設值處理
        port 與 status 傳入零值時同樣改用預設值
        """
        values = self.model_dump(exclude_none=True)
        for field in ("port", "status"):
            if not values.get(field):
                values.pop(field, None)
        return values


class ServerUpdate(BaseModel):
    """更新伺服器請求資料結構（部分更新）"""
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(None, max_length=100, description="伺服器名稱")
    ip: Optional[str] = Field(None, max_length=50, description="IP位址")
    port: Optional[StrictInt] = Field(None, description="SSH連接埠")
    status: Optional[str] = Field(None, max_length=20, description="狀態")
    cpu: Optional[StrictInt] = Field(None, description="CPU使用率")
    memory: Optional[StrictInt] = Field(None, description="記憶體使用率")
    remark: Optional[str] = Field(None, max_length=500, description="備註")

    def nonzero_values(self) -> Dict[str, Any]:
        """
        取得要套用的欄位

        未提供、null、空字串或 0 都視為「未提供」，不會覆寫既有值
        """
        return {
            field: value
            for field, value in self.model_dump().items()
            if value is not None and value != "" and value != 0
        }


class ServerResponse(BaseModel):
    """伺服器回應資料結構"""
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="伺服器唯一識別碼")
    name: str = Field(..., description="伺服器名稱")
    ip: str = Field(..., description="IP位址")
    port: int = Field(..., description="SSH連接埠")
    status: str = Field(..., description="狀態")
    cpu: int = Field(..., description="CPU使用率")
    memory: int = Field(..., description="記憶體使用率")
    remark: Optional[str] = Field(None, description="備註")
    created_at: datetime = Field(..., description="建立時間")
    updated_at: datetime = Field(..., description="更新時間")


class BatchDeleteRequest(BaseModel):
    """批次刪除請求資料結構"""
    ids: Optional[List[StrictInt]] = Field(None, description="要刪除的伺服器 ID 列表")


class BatchDeleteResult(BaseModel):
    """批次刪除結果"""
    deleted: int = Field(..., description="實際刪除的數量")
