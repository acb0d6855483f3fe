"""延迟通知单元测试

测试内容：
1. 只为逾期、未完成、已分配的任务生成通知
2. 消息包含顾客名与逾期天数
3. 同一天重复运行不产生新通知
"""

from datetime import date, datetime, timedelta

from dandori.core.materializer import build_tasks
from dandori.core.models import AuditAction, AuditEntry, TaskDraft, TaskStatus
from dandori.core.notifications import (
    build_delay_notifications,
    delay_idempotency_key,
    run_daily_check,
)
from dandori.core.store import create_project_with_tasks


def _drafts() -> list[TaskDraft]:
    return [
        TaskDraft(template_id=1, title="Late", due_date=date(2025, 2, 10), assigned_to="emp-sales"),
        TaskDraft(template_id=2, title="Unassigned", due_date=date(2025, 2, 10)),
        TaskDraft(
            template_id=3,
            title="Done",
            due_date=date(2025, 2, 10),
            assigned_to="emp-sales",
            status=TaskStatus.COMPLETED,
        ),
        TaskDraft(template_id=4, title="Future", due_date=date(2025, 3, 1), assigned_to="emp-sales"),
    ]


class TestBuildDelayNotifications:
    """通知生成"""

    def test_only_overdue_assigned_open_tasks(self, project, now):
        """每个逾期已分配任务一条通知"""
        tasks = build_tasks(project.project_id, _drafts(), now)
        notifications = build_delay_notifications(tasks, {project.project_id: project}, now)

        assert len(notifications) == 1
        notification = notifications[0]
        assert notification.user_id == "emp-sales"
        assert notification.title == "Task delayed: Late"
        assert "Yamada" in notification.message
        assert "5 day(s) overdue" in notification.message
        assert notification.related_task_id == tasks[0].task_id
        assert notification.idempotency_key == f"delay:{tasks[0].task_id}:2025-02-15"

    def test_unknown_project_falls_back(self, now):
        """找不到案件时使用占位顾客名"""
        tasks = build_tasks("missing", _drafts()[:1], now)
        [notification] = build_delay_notifications(tasks, {}, now)
        assert notification.message.startswith("Unknown customer:")

    def test_idempotency_key_changes_daily(self, now):
        """幂等键按日期区分"""
        assert delay_idempotency_key("t1", now) != delay_idempotency_key(
            "t1", now + timedelta(days=1)
        )


class TestRunDailyCheck:
    """每日检查落库"""

    async def _seed(self, stores, project, now: datetime):
        tasks = build_tasks(project.project_id, _drafts(), now)
        audit = AuditEntry(
            audit_id="01JAUDIT00000000000000000A",
            ts=now,
            action=AuditAction.CREATE,
            table_name="projects",
            record_id=project.project_id,
        )
        await create_project_with_tasks(
            stores.conn,
            stores.project_store,
            stores.task_store,
            stores.audit_store,
            project,
            tasks,
            audit,
        )

    async def test_daily_check_is_idempotent(self, core_stores, project, now):
        """同一天运行两次只写入一次"""
        await self._seed(core_stores, project, now)

        first = await run_daily_check(core_stores, now)
        assert first.checked_tasks == 4
        assert first.overdue_tasks == 1
        assert first.created == 1

        second = await run_daily_check(core_stores, now + timedelta(hours=3))
        assert second.overdue_tasks == 1
        assert second.created == 0

        saved = await core_stores.notification_store.list_for_user("emp-sales")
        assert len(saved) == 1
        assert saved[0].related_project_id == project.project_id

    async def test_next_day_notifies_again(self, core_stores, project, now):
        """第二天仍逾期时再次通知"""
        await self._seed(core_stores, project, now)
        await run_daily_check(core_stores, now)
        result = await run_daily_check(core_stores, now + timedelta(days=1))
        assert result.created == 1
        assert len(await core_stores.notification_store.list_for_user("emp-sales")) == 2
