"""
OpsAdmin 儀表盤 API 端點

前端儀表盤使用的固定示範資料，不查詢資料庫
"""

from typing import Any, Dict, List

from fastapi import APIRouter

from app.schemas.response import ApiResponse, success

router = APIRouter()

DASHBOARD_STATS: Dict[str, Any] = {
    "server_total": 12,
    "server_running": 10,
    "server_stopped": 1,
    "server_error": 1,
    "alert_total": 3,
    "avg_cpu": 37,
    "avg_memory": 58,
}

ALERTS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "level": "critical",
        "server": "db-01",
        "message": "CPU usage above 90%",
        "time": "2024-01-15 10:30:00",
    },
    {
        "id": 2,
        "level": "warning",
        "server": "web-02",
        "message": "Memory usage above 80%",
        "time": "2024-01-15 10:12:00",
    },
    {
        "id": 3,
        "level": "info",
        "server": "cache-01",
        "message": "Service restarted",
        "time": "2024-01-15 09:45:00",
    },
]


@router.get("/dashboard/stats", response_model=ApiResponse[Dict[str, Any]])
async def get_dashboard_stats():
    """取得儀表盤統計數據"""
    return success(DASHBOARD_STATS)


@router.get("/monitor/alerts", response_model=ApiResponse[List[Dict[str, Any]]])
async def get_alerts():
    """取得告警列表"""
    return success(ALERTS)
