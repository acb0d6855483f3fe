"""任务状态路由

PATCH /api/tasks/{task_id}/status: 变更任务状态
- 200: 变更成功
- 403: 无所属案件的编辑权限
- 404: 任务不存在
- 409: 非法流转
"""

from dandori.core.clock import Clock
from dandori.core.models import Employee, TaskStatus
from dandori.core.store import StoreGroup
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..deps import get_clock, get_current_employee, get_dashboard_hub, get_store_group
from ..services.dashboard_hub import DashboardHub
from ..services.presenters import task_view
from ..services.task_service import TaskService

router = APIRouter()


class StatusUpdateRequest(BaseModel):
    """状态变更请求"""

    status: TaskStatus


@router.patch("/api/tasks/{task_id}/status")
async def update_task_status(
    task_id: str,
    body: StatusUpdateRequest,
    employee: Employee | None = Depends(get_current_employee),
    store_group: StoreGroup = Depends(get_store_group),
    clock: Clock = Depends(get_clock),
    hub: DashboardHub = Depends(get_dashboard_hub),
):
    """变更任务状态，成功后触发所属案件的看板重算"""
    service = TaskService(store_group, clock)
    task = await service.update_status(task_id, body.status, employee)
    hub.invalidate(task.project_id)
    return task_view(task, clock())
