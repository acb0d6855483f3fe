"""案件路由

GET  /api/projects: 调用者视图范围内的案件（按年度与视图模式过滤）
POST /api/projects: 创建案件并展开任务（201）
GET  /api/projects/{project_id}: 案件详情（任务、部门汇总、KPI、编辑权限）
POST /api/projects/{project_id}/tasks/regenerate: 重新生成任务
     - 403: 无编辑权限
     - 404: 案件不存在
     - 409: 未确认
"""

from collections.abc import Sequence
from datetime import date

from dandori.core.clock import Clock
from dandori.core.fiscal import current_fiscal_year, fiscal_year
from dandori.core.models import Employee, ProjectStatus, TaskTemplate
from dandori.core.permissions import can_edit
from dandori.core.regeneration import regenerate_project_tasks
from dandori.core.rollup import rollup, rollup_by_project
from dandori.core.scope import ViewContext, default_mode_for
from dandori.core.status import summarize
from dandori.core.store import StoreGroup
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from ..deps import (
    get_catalog,
    get_clock,
    get_current_employee,
    get_dashboard_hub,
    get_store_group,
)
from ..services.dashboard_hub import DashboardHub
from ..services.presenters import project_view, task_view
from ..services.project_service import ProjectService

router = APIRouter()


class ProjectCreateRequest(BaseModel):
    """创建案件请求"""

    customer_name: str = Field(min_length=1)
    contract_date: date
    status: ProjectStatus = ProjectStatus.POST_CONTRACT
    branch_id: str | None = None
    assigned_sales: str | None = None
    assigned_design: str | None = None
    assigned_construction: str | None = None


class RegenerateRequest(BaseModel):
    """任务再生成请求"""

    confirm: bool = Field(default=False, description="确认替换案件的全部任务")
    preserve_progress: bool = Field(default=True, description="按模板继承旧任务的进度")


@router.get("/api/projects")
async def list_projects(
    fiscal_year_param: int | None = Query(default=None, alias="fiscal_year"),
    mode: str | None = Query(default=None, description="personal/branch/company"),
    employee: Employee | None = Depends(get_current_employee),
    store_group: StoreGroup = Depends(get_store_group),
    clock: Clock = Depends(get_clock),
):
    """查询视图范围内的案件，附带每个案件的部门汇总"""
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
    departments = rollup_by_project(tasks, now)

    return {
        "fiscal_year": window.model_dump(mode="json"),
        "mode": context.mode,
        "projects": [
            {
                **project_view(p, employee is not None and can_edit(employee, p)),
                "departments": [
                    d.model_dump(mode="json")
                    for d in departments.get(p.project_id) or rollup([], now)
                ],
            }
            for p in projects
        ],
    }


@router.post("/api/projects", status_code=201)
async def create_project(
    body: ProjectCreateRequest,
    employee: Employee | None = Depends(get_current_employee),
    store_group: StoreGroup = Depends(get_store_group),
    clock: Clock = Depends(get_clock),
    catalog: Sequence[TaskTemplate] = Depends(get_catalog),
    hub: DashboardHub = Depends(get_dashboard_hub),
):
    """创建案件，任务清单在同一事务内展开"""
    service = ProjectService(store_group, clock, catalog)
    project, tasks = await service.create_project(
        body.customer_name,
        body.contract_date,
        status=body.status,
        branch_id=body.branch_id,
        sales_id=body.assigned_sales,
        design_id=body.assigned_design,
        construction_id=body.assigned_construction,
        actor_id=employee.employee_id if employee else None,
    )
    hub.invalidate(project.project_id)

    now = clock()
    return {
        "project": project_view(project, employee is not None and can_edit(employee, project)),
        "tasks": [task_view(t, now) for t in tasks],
    }


@router.get("/api/projects/{project_id}")
async def get_project_detail(
    project_id: str,
    employee: Employee | None = Depends(get_current_employee),
    store_group: StoreGroup = Depends(get_store_group),
    clock: Clock = Depends(get_clock),
):
    """案件详情"""
    project = await ProjectService(store_group, clock).get_project(project_id)
    tasks = await store_group.task_store.list_tasks(project_id)
    now = clock()

    return {
        "project": project_view(project, employee is not None and can_edit(employee, project)),
        "tasks": [task_view(t, now) for t in tasks],
        "departments": [d.model_dump(mode="json") for d in rollup(tasks, now)],
        "summary": summarize(tasks, now).model_dump(mode="json"),
    }


@router.post("/api/projects/{project_id}/tasks/regenerate")
async def regenerate_tasks(
    project_id: str,
    body: RegenerateRequest,
    employee: Employee | None = Depends(get_current_employee),
    store_group: StoreGroup = Depends(get_store_group),
    clock: Clock = Depends(get_clock),
    catalog: Sequence[TaskTemplate] = Depends(get_catalog),
    hub: DashboardHub = Depends(get_dashboard_hub),
):
    """按当前契约日与负责人重新生成任务"""
    service = ProjectService(store_group, clock, catalog)
    project = await service.get_project(project_id)
    service.ensure_editable(employee, project)

    result = await regenerate_project_tasks(
        store_group,
        project_id,
        actor_id=employee.employee_id if employee else None,
        confirmed=body.confirm,
        now=clock(),
        catalog=catalog,
        preserve_progress=body.preserve_progress,
    )
    hub.invalidate(project_id)

    return {
        "project_id": result.project_id,
        "deleted_count": result.deleted_count,
        "created_count": result.created_count,
        "preserved_progress": result.preserved_progress,
    }
