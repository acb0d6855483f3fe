"""权限判定 -- 无状态的查看/编辑判定

- department_head / leader: 案件任一主负责人与自己同部门分组即可编辑
- member: 仅自己是主负责人的案件可编辑
- 其他角色、未知角色或未知职种: 拒绝
查看权限对所有人开放。
"""

from collections.abc import Iterable

from .models.employee import Employee
from .models.enums import Role
from .models.organization import department_group_of
from .models.project import Project
from .models.task import Task


def _shares_department_group(employee: Employee, project: Project) -> bool:
    own_group = department_group_of(employee.department)
    if own_group is None:
        return False
    for assignee in (project.sales, project.design, project.construction):
        if assignee is not None and department_group_of(assignee.position) == own_group:
            return True
    return False


def is_assigned_to_project(employee: Employee, project: Project) -> bool:
    """员工是否为案件的主负责人之一"""
    return employee.employee_id in project.lead_ids()


def can_edit(employee: Employee, project: Project) -> bool:
    """案件编辑权限"""
    if employee.role in (Role.DEPARTMENT_HEAD, Role.LEADER):
        return _shares_department_group(employee, project)
    if employee.role == Role.MEMBER:
        return is_assigned_to_project(employee, project)
    return False


def can_view(employee: Employee, project: Project) -> bool:
    """案件查看权限：全员可看"""
    return True


def can_edit_task(employee: Employee, task: Task, project: Project) -> bool:
    """任务编辑权限与所属案件一致"""
    return task.project_id == project.project_id and can_edit(employee, project)


def can_view_task(employee: Employee, task: Task, project: Project) -> bool:
    """任务查看权限与所属案件一致"""
    return can_view(employee, project)


def can_manage_employees(employee: Employee) -> bool:
    """员工主数据管理：仅部门长"""
    return employee.role == Role.DEPARTMENT_HEAD


def can_manage_task_masters(employee: Employee) -> bool:
    """任务模板管理：仅部门长"""
    return employee.role == Role.DEPARTMENT_HEAD


def my_projects(employee: Employee, projects: Iterable[Project]) -> list[Project]:
    """自己担任主负责人的案件"""
    return [p for p in projects if is_assigned_to_project(employee, p)]


def editable_projects(employee: Employee, projects: Iterable[Project]) -> list[Project]:
    """可编辑的案件"""
    return [p for p in projects if can_edit(employee, p)]


def viewable_projects(employee: Employee, projects: Iterable[Project]) -> list[Project]:
    """可查看的案件（全部）"""
    return list(projects)
