"""多表原子事务封装

案件与任务、任务与审计日志在同一 SQLite 事务内提交，
失败时整体回滚，调用方看到的永远是完整的旧状态或完整的新状态。

所有 Store 共享一个连接，commit 会提交连接上的全部未提交写入，
因此事务之间必须用 StoreGroup.write_lock 串行化：
- 传入 write_lock 时，helper 在锁内完成写入与提交
- 需要"先读后写"的调用方（再生成、状态变更）自行持有锁，此时不传 write_lock
"""

import asyncio
from collections.abc import Sequence
from contextlib import nullcontext

import aiosqlite

from ..models.project import Project
from ..models.records import AuditEntry
from ..models.task import Task
from .audit_store import SqliteAuditStore
from .project_store import SqliteProjectStore
from .task_store import SqliteTaskStore


def _guard(write_lock: asyncio.Lock | None):
    return write_lock if write_lock is not None else nullcontext()


async def create_project_with_tasks(
    conn: aiosqlite.Connection,
    project_store: SqliteProjectStore,
    task_store: SqliteTaskStore,
    audit_store: SqliteAuditStore,
    project: Project,
    tasks: Sequence[Task],
    audit: AuditEntry,
    *,
    write_lock: asyncio.Lock | None = None,
) -> None:
    """在同一事务内写入案件、初始任务清单与审计记录

    Raises:
        Exception: 任一写入失败时回滚并原样抛出
    """
    async with _guard(write_lock):
        try:
            await project_store.create_project(project)
            await task_store.insert_tasks(tasks)
            await audit_store.append(audit)
            await conn.commit()
        except Exception:
            await conn.rollback()
            raise


async def replace_project_tasks(
    conn: aiosqlite.Connection,
    task_store: SqliteTaskStore,
    audit_store: SqliteAuditStore,
    project_id: str,
    tasks: Sequence[Task],
    audit: AuditEntry,
    *,
    write_lock: asyncio.Lock | None = None,
) -> int:
    """删除案件现有任务并插入新任务，整体原子

    Returns:
        被删除的旧任务条数

    Raises:
        Exception: 任一步骤失败时回滚，旧任务保持不变
    """
    async with _guard(write_lock):
        try:
            deleted = await task_store.delete_tasks(project_id)
            await task_store.insert_tasks(tasks)
            await audit_store.append(audit)
            await conn.commit()
        except Exception:
            await conn.rollback()
            raise
    return deleted


async def update_task_with_audit(
    conn: aiosqlite.Connection,
    task_store: SqliteTaskStore,
    audit_store: SqliteAuditStore,
    task: Task,
    audit: AuditEntry,
    *,
    write_lock: asyncio.Lock | None = None,
) -> None:
    """在同一事务内更新任务并追加审计记录"""
    async with _guard(write_lock):
        try:
            await task_store.update_task(task)
            await audit_store.append(audit)
            await conn.commit()
        except Exception:
            await conn.rollback()
            raise
