"""TaskStore SQLite 实现

此处仅提供数据库操作，不提交事务；事务由 transaction 模块统一管理。
"""

from collections.abc import Iterable
from datetime import date, datetime

import aiosqlite

from ..models.task import Task

_TASK_COLUMNS = (
    "task_id, project_id, template_id, title, description, responsible_position, "
    "due_date, assigned_to, status, priority, actual_completion_date, dos, donts, "
    "manual_url, created_at, updated_at"
)

# 有期限的在前，按期限、模板顺序排列
_TASK_ORDER = "ORDER BY due_date IS NULL, due_date, template_id"


def _iso(value: date | None) -> str | None:
    return value.isoformat() if value is not None else None


class SqliteTaskStore:
    """TaskStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def insert_tasks(self, tasks: Iterable[Task]) -> None:
        """批量插入任务（不自动提交，需由调用方保证整批原子性）"""
        await self._conn.executemany(
            f"INSERT INTO tasks ({_TASK_COLUMNS}) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            [
                (
                    task.task_id,
                    task.project_id,
                    task.template_id,
                    task.title,
                    task.description,
                    task.responsible_position,
                    _iso(task.due_date),
                    task.assigned_to,
                    task.status.value,
                    task.priority.value,
                    _iso(task.actual_completion_date),
                    task.dos,
                    task.donts,
                    task.manual_url,
                    task.created_at.isoformat(),
                    task.updated_at.isoformat(),
                )
                for task in tasks
            ],
        )

    async def get_task(self, task_id: str) -> Task | None:
        """根据 task_id 查询任务"""
        cursor = await self._conn.execute(
            f"SELECT {_TASK_COLUMNS} FROM tasks WHERE task_id = ?",
            (task_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_task(row)

    async def list_tasks(self, project_id: str) -> list[Task]:
        """查询单个案件的全部任务"""
        cursor = await self._conn.execute(
            f"SELECT {_TASK_COLUMNS} FROM tasks WHERE project_id = ? {_TASK_ORDER}",
            (project_id,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_task(row) for row in rows]

    async def list_tasks_for_projects(self, project_ids: Iterable[str]) -> list[Task]:
        """查询多个案件的全部任务"""
        ids = list(project_ids)
        if not ids:
            return []
        placeholders = ", ".join("?" for _ in ids)
        cursor = await self._conn.execute(
            f"SELECT {_TASK_COLUMNS} FROM tasks WHERE project_id IN ({placeholders}) "
            f"{_TASK_ORDER}",
            ids,
        )
        rows = await cursor.fetchall()
        return [self._row_to_task(row) for row in rows]

    async def list_all_tasks(self) -> list[Task]:
        """查询全部任务"""
        cursor = await self._conn.execute(f"SELECT {_TASK_COLUMNS} FROM tasks {_TASK_ORDER}")
        rows = await cursor.fetchall()
        return [self._row_to_task(row) for row in rows]

    async def list_tasks_for_assignee(self, employee_id: str) -> list[Task]:
        """查询分配给指定员工的任务"""
        cursor = await self._conn.execute(
            f"SELECT {_TASK_COLUMNS} FROM tasks WHERE assigned_to = ? {_TASK_ORDER}",
            (employee_id,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_task(row) for row in rows]

    async def delete_tasks(self, project_id: str) -> int:
        """删除案件的全部任务，返回删除条数（不自动提交）"""
        cursor = await self._conn.execute(
            "DELETE FROM tasks WHERE project_id = ?",
            (project_id,),
        )
        return cursor.rowcount

    async def update_task(self, task: Task) -> None:
        """更新任务的可变字段（不自动提交）"""
        await self._conn.execute(
            """
            UPDATE tasks
            SET status = ?, actual_completion_date = ?, due_date = ?,
                assigned_to = ?, updated_at = ?
            WHERE task_id = ?
            """,
            (
                task.status.value,
                _iso(task.actual_completion_date),
                _iso(task.due_date),
                task.assigned_to,
                task.updated_at.isoformat(),
                task.task_id,
            ),
        )

    @staticmethod
    def _row_to_task(row: aiosqlite.Row) -> Task:
        """将数据库行转换为 Task 模型"""
        return Task(
            task_id=row[0],
            project_id=row[1],
            template_id=row[2],
            title=row[3],
            description=row[4],
            responsible_position=row[5],
            due_date=date.fromisoformat(row[6]) if row[6] else None,
            assigned_to=row[7],
            status=row[8],
            priority=row[9],
            actual_completion_date=date.fromisoformat(row[10]) if row[10] else None,
            dos=row[11],
            donts=row[12],
            manual_url=row[13],
            created_at=datetime.fromisoformat(row[14]),
            updated_at=datetime.fromisoformat(row[15]),
        )
