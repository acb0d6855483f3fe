"""Store 接口定义 -- 领域逻辑只依赖这些协议，不依赖具体数据库"""

from collections.abc import Iterable
from datetime import date
from typing import Protocol

from ..models.employee import Employee
from ..models.project import Project
from ..models.records import AuditEntry, Notification
from ..models.task import Task


class ProjectStore(Protocol):
    """案件存储"""

    async def create_project(self, project: Project) -> None: ...

    async def get_project(self, project_id: str) -> Project | None: ...

    async def list_projects(
        self,
        contract_from: date | None = None,
        contract_to: date | None = None,
    ) -> list[Project]: ...


class TaskStore(Protocol):
    """任务存储"""

    async def insert_tasks(self, tasks: Iterable[Task]) -> None: ...

    async def get_task(self, task_id: str) -> Task | None: ...

    async def list_tasks(self, project_id: str) -> list[Task]: ...

    async def list_tasks_for_projects(self, project_ids: Iterable[str]) -> list[Task]: ...

    async def list_all_tasks(self) -> list[Task]: ...

    async def list_tasks_for_assignee(self, employee_id: str) -> list[Task]: ...

    async def delete_tasks(self, project_id: str) -> int: ...

    async def update_task(self, task: Task) -> None: ...


class EmployeeStore(Protocol):
    """员工存储（只读主数据）"""

    async def get_employee(self, employee_id: str) -> Employee | None: ...

    async def list_employees(self) -> list[Employee]: ...


class AuditStore(Protocol):
    """审计日志存储"""

    async def append(self, entry: AuditEntry) -> None: ...

    async def list_for_record(self, table_name: str, record_id: str) -> list[AuditEntry]: ...


class NotificationStore(Protocol):
    """通知存储"""

    async def add_if_absent(self, notification: Notification) -> bool: ...

    async def list_for_user(self, user_id: str) -> list[Notification]: ...
