"""
OpsAdmin 統一回應格式

所有 API 回應都包裝成 {code, msg, data}
code 為 0 表示成功，非 0 表示失敗，HTTP 狀態碼一律為 200
"""

from typing import Any, Generic, Optional, TypeVar
from pydantic import BaseModel, Field

DataT = TypeVar("DataT")

SUCCESS_CODE = 0
FAILURE_CODE = 1


class ApiResponse(BaseModel, Generic[DataT]):
    """統一回應結構"""
    code: int = Field(SUCCESS_CODE, description="業務狀態碼，0 表示成功")
    msg: str = Field("success", description="提示訊息")
    data: Optional[DataT] = Field(None, description="回應資料")


def success(data: Any = None, msg: str = "success") -> ApiResponse:
    """建立成功回應"""
    return ApiResponse(code=SUCCESS_CODE, msg=msg, data=data)


def failure(msg: str, code: int = FAILURE_CODE) -> ApiResponse:
    """建立失敗回應"""
    return ApiResponse(code=code, msg=msg, data=None)
