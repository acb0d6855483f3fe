"""看板路由

GET /api/dashboard/departments: 视图范围内全部案件的部门汇总 + KPI
GET /api/dashboard/delays: 按员工统计的延迟情况
GET /api/dashboard/fiscal-years: 年度选择器
"""

from dandori.core.clock import Clock
from dandori.core.fiscal import available_fiscal_years, current_fiscal_year, fiscal_year
from dandori.core.models import Employee
from dandori.core.rollup import rollup
from dandori.core.scope import ViewContext, default_mode_for
from dandori.core.status import delay_stats_by_employee, summarize
from dandori.core.store import StoreGroup
from fastapi import APIRouter, Depends, Query

from ..deps import get_clock, get_current_employee, get_store_group
from ..services.project_service import ProjectService

router = APIRouter()


@router.get("/api/dashboard/departments")
async def department_dashboard(
    fiscal_year_param: int | None = Query(default=None, alias="fiscal_year"),
    mode: str | None = Query(default=None, description="personal/branch/company"),
    employee: Employee | None = Depends(get_current_employee),
    store_group: StoreGroup = Depends(get_store_group),
    clock: Clock = Depends(get_clock),
):
    """跨案件部门汇总：与案件详情使用同一汇总算法，只是任务集合不同"""
    now = clock()
    window = fiscal_year(fiscal_year_param) if fiscal_year_param else current_fiscal_year(now)
    context = ViewContext(
        employee=employee,
        mode=mode or default_mode_for(employee),
        fiscal_year=window,
    )
    projects = await ProjectService(store_group, clock).list_in_scope(context)
    tasks = await store_group.task_store.list_tasks_for_projects(
        p.project_id for p in projects
    )

    return {
        "fiscal_year": window.model_dump(mode="json"),
        "mode": context.mode,
        "project_count": len(projects),
        "departments": [d.model_dump(mode="json") for d in rollup(tasks, now)],
        "summary": summarize(tasks, now).model_dump(mode="json"),
    }


@router.get("/api/dashboard/delays")
async def delay_dashboard(
    store_group: StoreGroup = Depends(get_store_group),
    clock: Clock = Depends(get_clock),
):
    """按员工统计延迟，逾期多的在前"""
    employees = await store_group.employee_store.list_employees()
    tasks = await store_group.task_store.list_all_tasks()
    stats = delay_stats_by_employee(employees, tasks, clock())
    return {"employees": [s.model_dump(mode="json") for s in stats]}


@router.get("/api/dashboard/fiscal-years")
async def fiscal_years(clock: Clock = Depends(get_clock)):
    """可选年度（新的在前）"""
    now = clock()
    current = current_fiscal_year(now)
    return {
        "current": current.year,
        "fiscal_years": [fy.model_dump(mode="json") for fy in available_fiscal_years(now)],
    }
