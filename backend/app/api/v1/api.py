"""
API 路由匯總

統一管理所有 API 路由，由 main.py 以 /api 前綴掛載
"""

from fastapi import APIRouter

from app.api.v1.endpoints import dashboard, servers

api_router = APIRouter()

# 包含伺服器管理路由
api_router.include_router(servers.router, prefix="/servers", tags=["伺服器管理"])

# 包含儀表盤示範資料路由
api_router.include_router(dashboard.router, tags=["儀表盤"])


@api_router.get("/ping")
async def ping():
    """API 健康檢查"""
    return {"message": "pong"}
