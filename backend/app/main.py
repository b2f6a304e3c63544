"""
OpsAdmin FastAPI 主應用程式

運維管理系統的後端 API 服務
提供伺服器清單的增刪查改，所有回應統一為 {code, msg, data}
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1.api import api_router
from app.core.config import Settings, get_cors_origins, settings
from app.core.deps import format_validation_errors, get_server_store
from app.core.logging import setup_logging
from app.db.base import check_db, close_db, create_engine_from_settings, init_db
from app.schemas.response import failure
from app.services.server_store import ServerStore
from app.utils.exceptions import DatabaseError, OpsAdminException

logger = logging.getLogger(__name__)


def build_lifespan(config: Settings):
    """建立應用程式生命週期管理函數"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        應用程式生命週期管理

        資料庫連線或資料表同步失敗會中止啟動，不重試
        DATABASE_AUTO_SYNC 關閉時只檢查連線，資料表結構交由 alembic 管理
        """
        logger.info(f"{config.PROJECT_NAME} 後端服務啟動中...")

        engine = create_engine_from_settings(config)
        try:
            if config.DATABASE_AUTO_SYNC:
                await init_db(engine)
            else:
                await check_db(engine)
        except Exception as e:
            logger.critical(f"資料庫初始化失敗，服務無法啟動: {e}")
            await close_db(engine)
            raise
        logger.info("資料庫連接初始化完成")

        app.state.server_store = ServerStore(engine)

        yield

        logger.info(f"{config.PROJECT_NAME} 後端服務關閉中...")
        await close_db(engine)
        logger.info("資料庫連接已關閉")

    return lifespan


def register_exception_handlers(app: FastAPI) -> None:
    """註冊全域異常處理器，業務錯誤一律回傳 HTTP 200"""

    @app.exception_handler(OpsAdminException)
    async def opsadmin_exception_handler(request: Request, exc: OpsAdminException):
        """業務異常處理器"""
        return JSONResponse(
            status_code=200,
            content=jsonable_encoder(failure(exc.message, code=exc.code))
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """路徑參數等請求驗證錯誤處理器"""
        message = format_validation_errors(exc)
        logger.warning(f"請求參數驗證失敗 {request.method} {request.url.path}: {message}")
        return JSONResponse(
            status_code=200,
            content=jsonable_encoder(failure(f"invalid parameters: {message}"))
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """全域異常處理器"""
        logger.exception(f"未處理的異常 {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content=jsonable_encoder(failure("internal server error"))
        )


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """建立 FastAPI 應用程式實例"""
    config = config or settings
    setup_logging(config)

    app = FastAPI(
        title=config.PROJECT_NAME,
        description=config.DESCRIPTION,
        version=config.VERSION,
        lifespan=build_lifespan(config),
    )

    # 設定 CORS 中間件，只允許設定的前端來源
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(config),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "Content-Type", "Authorization"],
        max_age=config.CORS_MAX_AGE,
    )

    register_exception_handlers(app)

    # 包含 API 路由
    app.include_router(api_router, prefix=config.API_PREFIX)

    @app.get("/")
    async def root():
        """根路由"""
        return {
            "message": f"{config.PROJECT_NAME} API Service",
            "version": config.VERSION,
            "status": "running"
        }

    @app.get("/health")
    async def health_check(store: ServerStore = Depends(get_server_store)):
        """健康檢查端點"""
        db_status = "healthy"
        try:
            await store.ping()
        except DatabaseError as e:
            db_status = f"unhealthy: {e.message}"

        return {
            "status": "healthy" if db_status == "healthy" else "degraded",
            "service": "opsadmin-backend",
            "version": config.VERSION,
            "environment": config.ENVIRONMENT,
            "database": db_status
        }

    return app


# 建立 FastAPI 應用程式實例
app = create_app()


def run() -> None:
    """以 uvicorn 啟動服務"""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development"
    )


if __name__ == "__main__":
    run()
