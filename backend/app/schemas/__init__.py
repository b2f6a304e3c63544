"""
OpsAdmin Pydantic Schemas

匯出所有 API 請求與回應 Schema
"""

from app.schemas.server import (
    ServerCreate,
    ServerUpdate,
    ServerResponse,
    BatchDeleteRequest,
    BatchDeleteResult,
)

from app.schemas.response import (
    ApiResponse,
    success,
    failure,
)

__all__ = [
    # Server schemas
    "ServerCreate",
    "ServerUpdate",
    "ServerResponse",
    "BatchDeleteRequest",
    "BatchDeleteResult",

    # Envelope
    "ApiResponse",
    "success",
    "failure",
]
