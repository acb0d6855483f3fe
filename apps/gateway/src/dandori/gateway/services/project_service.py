"""ProjectService -- 案件创建、范围查询与权限校验

案件创建时按契约日展开任务清单，案件、任务与审计记录在同一事务内写入。
"""

from collections.abc import Sequence
from datetime import date

import aiosqlite
import structlog
from dandori.core.clock import Clock
from dandori.core.errors import PermissionDeniedError, PersistenceError, ProjectNotFoundError
from dandori.core.materializer import build_tasks, materialize
from dandori.core.models import (
    AuditAction,
    AuditEntry,
    Employee,
    LeadAssignee,
    Project,
    ProjectStatus,
    Task,
    TaskTemplate,
)
from dandori.core.permissions import can_edit
from dandori.core.scope import ViewContext, projects_in_scope
from dandori.core.store import StoreGroup, create_project_with_tasks
from ulid import ULID

log = structlog.get_logger()


class ProjectService:
    """案件业务服务"""

    def __init__(
        self,
        store_group: StoreGroup,
        clock: Clock,
        catalog: Sequence[TaskTemplate] | None = None,
    ) -> None:
        self._stores = store_group
        self._clock = clock
        self._catalog = catalog

    async def _lead(self, employee_id: str | None) -> LeadAssignee | None:
        """负责人 + 其职种；员工主数据中查不到时职种为空"""
        if not employee_id:
            return None
        employee = await self._stores.employee_store.get_employee(employee_id)
        return LeadAssignee(
            employee_id=employee_id,
            position=employee.department if employee else None,
        )

    async def create_project(
        self,
        customer_name: str,
        contract_date: date,
        *,
        status: ProjectStatus = ProjectStatus.POST_CONTRACT,
        branch_id: str | None = None,
        sales_id: str | None = None,
        design_id: str | None = None,
        construction_id: str | None = None,
        actor_id: str | None = None,
    ) -> tuple[Project, list[Task]]:
        """创建案件并展开初始任务

        Raises:
            PersistenceError: 写入失败，案件与任务均未落库
        """
        now = self._clock()
        project = Project(
            project_id=str(ULID()),
            customer_name=customer_name,
            contract_date=contract_date,
            status=status,
            branch_id=branch_id,
            sales=await self._lead(sales_id),
            design=await self._lead(design_id),
            construction=await self._lead(construction_id),
            created_at=now,
            updated_at=now,
        )
        drafts = materialize(contract_date, project.department_assignees(), self._catalog)
        tasks = build_tasks(project.project_id, drafts, now)

        audit = AuditEntry(
            audit_id=str(ULID()),
            ts=now,
            actor_id=actor_id,
            action=AuditAction.CREATE,
            table_name="projects",
            record_id=project.project_id,
            changes={
                "contract_date": contract_date.isoformat(),
                "task_count": len(tasks),
            },
        )

        try:
            await create_project_with_tasks(
                self._stores.conn,
                self._stores.project_store,
                self._stores.task_store,
                self._stores.audit_store,
                project,
                tasks,
                audit,
                write_lock=self._stores.write_lock,
            )
        except aiosqlite.Error as exc:
            raise PersistenceError("create_project", exc) from exc

        log.info(
            "project_created",
            project_id=project.project_id,
            contract_date=contract_date.isoformat(),
            task_count=len(tasks),
        )
        return project, tasks

    async def get_project(self, project_id: str) -> Project:
        """查询案件，不存在时抛出 ProjectNotFoundError"""
        project = await self._stores.project_store.get_project(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    async def list_in_scope(self, context: ViewContext) -> list[Project]:
        """按视图上下文过滤案件"""
        fiscal_year = context.fiscal_year
        if fiscal_year is not None:
            projects = await self._stores.project_store.list_projects(
                fiscal_year.start_date, fiscal_year.end_date
            )
        else:
            projects = await self._stores.project_store.list_projects()
        return projects_in_scope(context, projects)

    @staticmethod
    def ensure_editable(employee: Employee | None, project: Project) -> None:
        """无编辑权限时抛出 PermissionDeniedError"""
        if employee is None or not can_edit(employee, project):
            raise PermissionDeniedError(
                employee.employee_id if employee else None,
                project.project_id,
            )
