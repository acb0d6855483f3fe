"""TaskService -- 任务状态变更与员工任务视图"""

import aiosqlite
import structlog
from dandori.core.clock import Clock
from dandori.core.errors import (
    PermissionDeniedError,
    PersistenceError,
    ProjectNotFoundError,
    TaskNotFoundError,
)
from dandori.core.models import AuditAction, AuditEntry, Employee, Task, TaskStatus
from dandori.core.permissions import can_edit_task
from dandori.core.status import delayed_tasks_for, due_this_week_for, due_today_for
from dandori.core.store import StoreGroup, update_task_with_audit
from dandori.core.transitions import apply_status_change
from ulid import ULID

log = structlog.get_logger()


class TaskService:
    """任务业务服务"""

    def __init__(self, store_group: StoreGroup, clock: Clock) -> None:
        self._stores = store_group
        self._clock = clock

    async def update_status(
        self,
        task_id: str,
        new_status: TaskStatus,
        employee: Employee | None,
    ) -> Task:
        """变更任务状态并写入审计

        Raises:
            TaskNotFoundError: 任务不存在
            PermissionDeniedError: 调用者无所属案件的编辑权限
            InvalidStatusTransitionError: 非法流转
            PersistenceError: 写入失败
        """
        # 读取任务到提交之间持有写锁，避免与再生成交错
        async with self._stores.write_lock:
            task = await self._stores.task_store.get_task(task_id)
            if task is None:
                raise TaskNotFoundError(task_id)
            project = await self._stores.project_store.get_project(task.project_id)
            if project is None:
                raise ProjectNotFoundError(task.project_id)
            if employee is None or not can_edit_task(employee, task, project):
                raise PermissionDeniedError(
                    employee.employee_id if employee else None,
                    project.project_id,
                )

            now = self._clock()
            updated = apply_status_change(task, new_status, now)
            audit = AuditEntry(
                audit_id=str(ULID()),
                ts=now,
                actor_id=employee.employee_id,
                action=AuditAction.UPDATE,
                table_name="tasks",
                record_id=task_id,
                changes={"status": {"from": task.status.value, "to": updated.status.value}},
            )
            try:
                await update_task_with_audit(
                    self._stores.conn,
                    self._stores.task_store,
                    self._stores.audit_store,
                    updated,
                    audit,
                )
            except aiosqlite.Error as exc:
                raise PersistenceError("update_task_status", exc) from exc

        log.info(
            "task_status_changed",
            task_id=task_id,
            project_id=task.project_id,
            from_status=task.status.value,
            to_status=updated.status.value,
        )
        return updated

    async def tasks_for_employee(self, employee_id: str) -> dict[str, list[Task]]:
        """员工的逾期 / 今日到期 / 本周到期任务"""
        tasks = await self._stores.task_store.list_tasks_for_assignee(employee_id)
        now = self._clock()
        return {
            "delayed": delayed_tasks_for(employee_id, tasks, now),
            "due_today": due_today_for(employee_id, tasks, now),
            "due_this_week": due_this_week_for(employee_id, tasks, now),
        }
