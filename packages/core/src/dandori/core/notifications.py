"""延迟通知 -- 每日检查逾期任务并通知负责人

每个逾期、未完成且已分配的任务生成一条 delay 通知，
幂等键 delay:<task_id>:<日期> 保证同一天重复运行不会重复通知。
"""

from collections.abc import Iterable, Mapping
from datetime import datetime

import aiosqlite
import structlog
from pydantic import BaseModel, Field
from ulid import ULID

from .errors import PersistenceError
from .models.project import Project
from .models.records import Notification
from .models.task import Task
from .status import is_overdue, overdue_days
from .store import StoreGroup

log = structlog.get_logger()


def delay_idempotency_key(task_id: str, now: datetime) -> str:
    """同一任务同一天只通知一次"""
    return f"delay:{task_id}:{now.date().isoformat()}"


def build_delay_notifications(
    tasks: Iterable[Task],
    projects: Mapping[str, Project],
    now: datetime,
) -> list[Notification]:
    """为逾期任务生成通知

    Args:
        tasks: 候选任务
        projects: project_id -> Project，用于在消息中显示顾客名
        now: 当前时间
    """
    notifications = []
    for task in tasks:
        if task.assigned_to is None or not is_overdue(task, now):
            continue
        project = projects.get(task.project_id)
        customer = project.customer_name if project and project.customer_name else "Unknown customer"
        days = overdue_days(task, now)
        notifications.append(
            Notification(
                notification_id=str(ULID()),
                user_id=task.assigned_to,
                title=f"Task delayed: {task.title}",
                message=(
                    f"{customer}: this task is {days} day(s) overdue. "
                    "Please follow up as soon as possible."
                ),
                type="delay",
                related_project_id=task.project_id,
                related_task_id=task.task_id,
                created_at=now,
                idempotency_key=delay_idempotency_key(task.task_id, now),
            )
        )
    return notifications


class DailyCheckResult(BaseModel):
    """每日检查结果"""

    checked_tasks: int
    overdue_tasks: int
    created: int = Field(description="新写入的通知数（当天已通知的不计）")


async def run_daily_check(stores: StoreGroup, now: datetime) -> DailyCheckResult:
    """检查全部任务并为逾期任务写入通知，同一天重复运行不会产生新通知

    Raises:
        PersistenceError: 写入失败，本次检查的通知全部回滚
    """
    tasks = await stores.task_store.list_all_tasks()
    projects = {p.project_id: p for p in await stores.project_store.list_projects()}
    notifications = build_delay_notifications(tasks, projects, now)

    created = 0
    async with stores.write_lock:
        try:
            for notification in notifications:
                if await stores.notification_store.add_if_absent(notification):
                    created += 1
            await stores.conn.commit()
        except aiosqlite.Error as exc:
            await stores.conn.rollback()
            raise PersistenceError("run_daily_check", exc) from exc

    log.info(
        "daily_check_completed",
        checked_tasks=len(tasks),
        overdue_tasks=len(notifications),
        created=created,
    )
    return DailyCheckResult(
        checked_tasks=len(tasks),
        overdue_tasks=len(notifications),
        created=created,
    )
