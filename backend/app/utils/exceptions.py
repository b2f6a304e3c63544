"""
OpsAdmin 自訂異常類別

定義應用程式中使用的各種異常類型
所有異常都會被轉換成統一回應格式 {code, msg, data}
"""

from typing import Optional, Dict, Any


class OpsAdminException(Exception):
    """OpsAdmin 基礎異常類別"""

    code: int = 1

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(OpsAdminException):
    """請求資料驗證錯誤（JSON 解析失敗或欄位不合法）"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"invalid parameters: {message}", details)


class NotFoundError(OpsAdminException):
    """資源不存在"""

    def __init__(self, resource: str = "server", resource_id: Optional[Any] = None):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} not found", {"id": resource_id} if resource_id is not None else None)


class DatabaseError(OpsAdminException):
    """資料庫相關錯誤"""

    def __init__(self, message: str, operation: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.operation = operation
        super().__init__(message, details)
