"""任务状态判定 -- 逾期、今日到期、本周到期与逾期天数

所有视图共用的唯一判定实现，纯函数，仅依赖传入的 now。
逾期从不落库，始终由 due_date、status 与 now 推导。
"""

from collections.abc import Iterable
from datetime import datetime, time, timedelta

from .config import DUE_SOON_WINDOW_DAYS
from .models.dashboard import EmployeeDelayStats, TaskSummary
from .models.employee import Employee
from .models.enums import DONE_STATES, StatusBucket, TaskStatus
from .models.task import Task, TaskDraft


def is_overdue(task: TaskDraft, now: datetime) -> bool:
    """期限早于今天且未完成即为逾期；无期限的任务不会逾期"""
    if task.status in DONE_STATES or task.due_date is None:
        return False
    return task.due_date < now.date()


def is_due_today(task: TaskDraft, now: datetime) -> bool:
    """期限是今天"""
    return task.due_date is not None and task.due_date == now.date()


def is_due_this_week(task: TaskDraft, now: datetime) -> bool:
    """期限在 (now, now + 7 天) 之间，已逾期的任务不计入"""
    if task.due_date is None:
        return False
    due = datetime.combine(task.due_date, time.min, tzinfo=now.tzinfo)
    return now < due < now + timedelta(days=DUE_SOON_WINDOW_DAYS)


def overdue_days(task: TaskDraft, now: datetime) -> int:
    """逾期天数，未逾期为 0"""
    if not is_overdue(task, now):
        return 0
    return (now.date() - task.due_date).days


def classify(task: TaskDraft, now: datetime) -> StatusBucket:
    """看板分类

    completed/not_applicable 优先于逾期；
    逾期优先于 requested/not_started，与存储的状态无关；
    人工标记的 delayed 归入 overdue。
    """
    if task.status in DONE_STATES:
        return StatusBucket.COMPLETED
    if is_overdue(task, now) or task.status == TaskStatus.DELAYED:
        return StatusBucket.OVERDUE
    if task.status == TaskStatus.REQUESTED:
        return StatusBucket.IN_PROGRESS
    return StatusBucket.NOT_STARTED


def summarize(tasks: Iterable[TaskDraft], now: datetime) -> TaskSummary:
    """KPI 卡片计数"""
    summary = TaskSummary()
    for task in tasks:
        summary.total += 1
        if task.status in DONE_STATES:
            summary.completed += 1
            continue
        if is_overdue(task, now):
            summary.overdue += 1
        if is_due_today(task, now):
            summary.due_today += 1
        if is_due_this_week(task, now):
            summary.due_this_week += 1
    if summary.total:
        summary.progress_rate = round(summary.completed / summary.total * 100, 1)
    return summary


def _is_open(task: TaskDraft) -> bool:
    return task.status not in DONE_STATES


def delayed_tasks_for(employee_id: str, tasks: Iterable[Task], now: datetime) -> list[Task]:
    """员工负责的逾期任务"""
    return [t for t in tasks if t.assigned_to == employee_id and is_overdue(t, now)]


def due_today_for(employee_id: str, tasks: Iterable[Task], now: datetime) -> list[Task]:
    """员工负责的今日到期未完成任务"""
    return [
        t
        for t in tasks
        if t.assigned_to == employee_id and _is_open(t) and is_due_today(t, now)
    ]


def due_this_week_for(employee_id: str, tasks: Iterable[Task], now: datetime) -> list[Task]:
    """员工负责的本周到期未完成任务"""
    return [
        t
        for t in tasks
        if t.assigned_to == employee_id and _is_open(t) and is_due_this_week(t, now)
    ]


def delay_stats_by_employee(
    employees: Iterable[Employee],
    tasks: Iterable[Task],
    now: datetime,
) -> list[EmployeeDelayStats]:
    """按员工统计延迟：只保留有任务的员工，逾期多的在前"""
    task_list = list(tasks)
    stats = []
    for employee in employees:
        own = [t for t in task_list if t.assigned_to == employee.employee_id]
        if not own:
            continue
        delayed = [t for t in own if is_overdue(t, now)]
        stats.append(
            EmployeeDelayStats(
                employee=employee,
                total_tasks=len(own),
                delayed_tasks=len(delayed),
                delayed_task_list=delayed,
            )
        )
    stats.sort(key=lambda s: s.delayed_tasks, reverse=True)
    return stats
