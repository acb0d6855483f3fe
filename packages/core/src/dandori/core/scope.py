"""看板范围 -- 显式传入的视图上下文

视图模式与年度作为参数传入，不依赖全局状态。
"""

from collections.abc import Iterable

from pydantic import BaseModel, Field

from .fiscal import in_fiscal_year
from .models.dashboard import FiscalYear
from .models.employee import Employee
from .models.enums import Role, ViewMode
from .models.project import Project
from .permissions import is_assigned_to_project

# 默认以全社视图打开看板的角色
_COMPANY_VIEW_ROLES = {Role.PRESIDENT, Role.EXECUTIVE, Role.DEPARTMENT_HEAD}


class ViewContext(BaseModel):
    """视图上下文"""

    employee: Employee | None = Field(default=None, description="当前员工，None 表示匿名")
    mode: str = Field(default=ViewMode.PERSONAL, description="personal/branch/company")
    fiscal_year: FiscalYear | None = Field(default=None, description="年度窗口，None 表示不限")


def default_mode_for(employee: Employee | None) -> ViewMode:
    """管理层默认全社视图，其余默认个人视图"""
    if employee is not None and employee.role in _COMPANY_VIEW_ROLES:
        return ViewMode.COMPANY
    return ViewMode.PERSONAL


def _in_mode(context: ViewContext, project: Project) -> bool:
    if context.mode == ViewMode.COMPANY:
        return True
    employee = context.employee
    if employee is None:
        return False
    if context.mode == ViewMode.PERSONAL:
        return is_assigned_to_project(employee, project)
    if context.mode == ViewMode.BRANCH:
        return employee.branch_id is not None and project.branch_id == employee.branch_id
    return False


def projects_in_scope(context: ViewContext, projects: Iterable[Project]) -> list[Project]:
    """按年度（契约日）与视图模式过滤案件；未知模式得到空结果"""
    scoped = []
    for project in projects:
        if context.fiscal_year is not None and not in_fiscal_year(
            project.contract_date, context.fiscal_year.year
        ):
            continue
        if _in_mode(context, project):
            scoped.append(project)
    return scoped
