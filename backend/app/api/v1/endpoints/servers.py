"""
OpsAdmin 伺服器管理 API 端點

提供伺服器的查詢、新增、更新、刪除與批次刪除
所有回應包裝成 {code, msg, data}，失敗時 code 為 1
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Request

from app.core.deps import get_server_store, parse_json_body
from app.schemas.response import ApiResponse, failure, success
from app.schemas.server import (
    BatchDeleteRequest,
    BatchDeleteResult,
    ServerCreate,
    ServerResponse,
    ServerUpdate,
)
from app.services.server_store import ServerStore
from app.utils.exceptions import NotFoundError

# 設定日誌
logger = logging.getLogger(__name__)

router = APIRouter()


# ==================== 伺服器 CRUD 操作 ====================

@router.get("", response_model=ApiResponse[List[ServerResponse]])
async def list_servers(store: ServerStore = Depends(get_server_store)):
    """
    取得伺服器列表

    依 id 由新到舊排序，不分頁
    """
    servers = await store.list_all()
    return success([ServerResponse.model_validate(server) for server in servers])


@router.post("/batch-delete", response_model=ApiResponse[BatchDeleteResult])
async def batch_delete_servers(request: Request, store: ServerStore = Depends(get_server_store)):
    """
    批次刪除伺服器

    請求本文: {"ids": [1, 2, 3]}
    回傳實際刪除的數量，不存在的 id 不計入
    """
    payload = await parse_json_body(request, BatchDeleteRequest)

    if not payload.ids:
        return failure("please select servers to delete")

    deleted = await store.delete_many(payload.ids)
    return success(BatchDeleteResult(deleted=deleted), msg="deleted")


@router.get("/{server_id}", response_model=ApiResponse[ServerResponse])
async def get_server(
    server_id: int = Path(..., description="伺服器 ID"),
    store: ServerStore = Depends(get_server_store),
):
    """取得特定伺服器詳細資訊"""
    server = await store.get(server_id)
    if server is None:
        raise NotFoundError("server", server_id)
    return success(ServerResponse.model_validate(server))


@router.post("", response_model=ApiResponse[ServerResponse])
async def create_server(request: Request, store: ServerStore = Depends(get_server_store)):
    """
    建立新伺服器

    id、created_at、updated_at 由資料庫指派
    未提供的欄位套用預設值（port 22、status running、cpu/memory 0）
    """
    payload = await parse_json_body(request, ServerCreate)
    server = await store.create(payload.to_values())
    return success(ServerResponse.model_validate(server), msg="created")


@router.put("/{server_id}", response_model=ApiResponse[ServerResponse])
async def update_server(
    request: Request,
    server_id: int = Path(..., description="伺服器 ID"),
    store: ServerStore = Depends(get_server_store),
):
    """
    更新伺服器設定

    只套用非零值欄位：空字串或 0 視為未提供，不會清空既有值
    先確認伺服器存在才解析請求本文
    """
    if await store.get(server_id) is None:
        raise NotFoundError("server", server_id)

    payload = await parse_json_body(request, ServerUpdate)
    await store.update_nonzero(server_id, payload.nonzero_values())

    # 檢查與更新之間若被其他請求刪除，這裡會回報不存在
    server = await store.get(server_id)
    if server is None:
        raise NotFoundError("server", server_id)
    return success(ServerResponse.model_validate(server), msg="updated")


@router.delete("/{server_id}", response_model=ApiResponse)
async def delete_server(
    server_id: int = Path(..., description="伺服器 ID"),
    store: ServerStore = Depends(get_server_store),
):
    """刪除伺服器"""
    if await store.delete(server_id) == 0:
        raise NotFoundError("server", server_id)

    logger.info(f"已刪除伺服器 {server_id}")
    return success(msg="deleted")
