"""
OpsAdmin 依賴注入系統

提供 FastAPI 依賴注入函數，包括資料存取服務與請求本文解析
"""

import logging
from typing import Type, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError as PydanticValidationError

from app.services.server_store import ServerStore
from app.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


# 資料存取依賴
def get_server_store(request: Request) -> ServerStore:
    """
    取得伺服器資料存取服務

    實例在應用程式啟動時建立並掛在 app.state 上
    """
    return request.app.state.server_store


def format_validation_errors(exc: PydanticValidationError) -> str:
    """將 Pydantic 驗證錯誤整理成單行訊息"""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "body"
        messages.append(f"{location}: {error['msg']}")
    return "; ".join(messages)


async def parse_json_body(request: Request, schema: Type[SchemaT]) -> SchemaT:
    """
    解析並驗證 JSON 請求本文

    JSON 格式錯誤或欄位驗證失敗時拋出 ValidationError
    """
    try:
        payload = await request.json()
    except ValueError as e:
        logger.warning(f"請求本文 JSON 解析失敗: {e}")
        raise ValidationError(str(e)) from e

    try:
        return schema.model_validate(payload)
    except PydanticValidationError as e:
        message = format_validation_errors(e)
        logger.warning(f"請求本文驗證失敗: {message}")
        raise ValidationError(message) from e
