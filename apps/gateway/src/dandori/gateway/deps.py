"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store、时钟与当前员工

实例通过 app.state 管理，在 lifespan 中初始化/清理。
"""

from collections.abc import Sequence

from dandori.core.clock import Clock
from dandori.core.models import Employee, TaskTemplate
from dandori.core.store import StoreGroup
from fastapi import Depends, Header, Request

from .services.dashboard_hub import DashboardHub


def get_store_group(request: Request) -> StoreGroup:
    """从 app.state 获取 StoreGroup 实例"""
    return request.app.state.store_group


def get_dashboard_hub(request: Request) -> DashboardHub:
    """从 app.state 获取 DashboardHub 实例"""
    return request.app.state.dashboard_hub


def get_clock(request: Request) -> Clock:
    """从 app.state 获取时钟"""
    return request.app.state.clock


def get_catalog(request: Request) -> Sequence[TaskTemplate]:
    """从 app.state 获取生效的任务模板目录"""
    return request.app.state.catalog


async def get_current_employee(
    x_employee_id: str | None = Header(default=None),
    store_group: StoreGroup = Depends(get_store_group),
) -> Employee | None:
    """按 X-Employee-Id 请求头解析调用者，缺失或未知时为 None（无编辑权限）"""
    if not x_employee_id:
        return None
    return await store_group.employee_store.get_employee(x_employee_id)
