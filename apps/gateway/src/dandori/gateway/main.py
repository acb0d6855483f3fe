"""FastAPI 应用主文件

app 创建 + lifespan 管理：DB 初始化/关闭 + 仪表盘重算器 + 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from dandori.core.catalog import get_catalog
from dandori.core.clock import system_clock
from dandori.core.config import get_db_path
from dandori.core.errors import (
    DandoriError,
    InvalidStatusTransitionError,
    PermissionDeniedError,
    ProjectNotFoundError,
    RegenerationNotConfirmedError,
    TaskNotFoundError,
)
from dandori.core.store import create_store_group
from fastapi import FastAPI, Request
from starlette.responses import JSONResponse

from .middleware.logging_config import setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TraceMiddleware
from .routes import dashboard, employees, health, projects, tasks
from .services.dashboard_hub import DashboardHub

log = structlog.get_logger()

# 领域异常 -> HTTP 状态码，未列出的按 500 处理
_ERROR_STATUS: dict[type[DandoriError], int] = {
    ProjectNotFoundError: 404,
    TaskNotFoundError: 404,
    PermissionDeniedError: 403,
    RegenerationNotConfirmedError: 409,
    InvalidStatusTransitionError: 409,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时初始化 DB 与重算器，关闭时清理"""
    store_group = await create_store_group(get_db_path())
    app.state.store_group = store_group
    app.state.clock = system_clock
    app.state.catalog = get_catalog()
    app.state.dashboard_hub = DashboardHub(store_group, system_clock)
    log.info("gateway_started", task_templates=len(app.state.catalog))

    yield

    await app.state.dashboard_hub.close()
    await store_group.conn.close()


async def dandori_error_handler(request: Request, exc: DandoriError) -> JSONResponse:
    """领域异常统一转换为 {"error": {"code", "message"}}"""
    status_code = next(
        (code for cls, code in _ERROR_STATUS.items() if isinstance(exc, cls)),
        500,
    )
    if status_code >= 500:
        log.error("request_failed", code=exc.code, error=exc.message)
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": exc.code, "message": exc.message}},
    )


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="Dandori Gateway",
        version="0.1.0",
        description="Dandori 案件任务进度 API",
        lifespan=lifespan,
    )

    # 注册中间件（顺序：先 Trace 后 Logging）
    app.add_middleware(TraceMiddleware)
    app.add_middleware(LoggingMiddleware)

    # 初始化日志
    setup_logging()

    app.add_exception_handler(DandoriError, dandori_error_handler)

    # 注册路由
    app.include_router(projects.router, tags=["projects"])
    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(employees.router, tags=["employees"])
    app.include_router(dashboard.router, tags=["dashboard"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
