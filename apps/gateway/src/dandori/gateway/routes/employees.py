"""员工任务路由

GET /api/employees/{employee_id}/tasks: 员工的逾期 / 今日到期 / 本周到期任务
"""

from dandori.core.clock import Clock
from dandori.core.store import StoreGroup
from fastapi import APIRouter, Depends

from ..deps import get_clock, get_store_group
from ..services.presenters import task_view
from ..services.task_service import TaskService

router = APIRouter()


@router.get("/api/employees/{employee_id}/tasks")
async def get_employee_tasks(
    employee_id: str,
    store_group: StoreGroup = Depends(get_store_group),
    clock: Clock = Depends(get_clock),
):
    """员工任务视图，未知员工得到空列表"""
    groups = await TaskService(store_group, clock).tasks_for_employee(employee_id)
    now = clock()
    return {
        "employee_id": employee_id,
        **{name: [task_view(t, now) for t in tasks] for name, tasks in groups.items()},
    }
