"""Dandori Core Store -- SQLite 持久化实现

提供工厂函数创建共享数据库连接的 Store 实例组。
"""

import asyncio
from pathlib import Path

import aiosqlite

from .audit_store import SqliteAuditStore
from .employee_store import SqliteEmployeeStore
from .notification_store import SqliteNotificationStore
from .project_store import SqliteProjectStore
from .protocols import AuditStore, EmployeeStore, NotificationStore, ProjectStore, TaskStore
from .sqlite_init import init_db
from .task_store import SqliteTaskStore
from .transaction import (
    create_project_with_tasks,
    replace_project_tasks,
    update_task_with_audit,
)


class StoreGroup:
    """Store 实例组 -- 共享同一个数据库连接

    write_lock 串行化连接上的写事务：一个事务的 commit 不能提交另一个事务的半成品。
    """

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self.conn = conn
        self.write_lock = asyncio.Lock()
        self.project_store = SqliteProjectStore(conn)
        self.task_store = SqliteTaskStore(conn)
        self.employee_store = SqliteEmployeeStore(conn)
        self.audit_store = SqliteAuditStore(conn)
        self.notification_store = SqliteNotificationStore(conn)


async def create_store_group(db_path: str | Path) -> StoreGroup:
    """创建 Store 实例组

    Args:
        db_path: SQLite 数据库文件路径

    Returns:
        StoreGroup 实例
    """
    # 确保数据库目录存在
    db_dir = Path(db_path).parent
    db_dir.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(str(db_path))
    conn.row_factory = aiosqlite.Row
    await init_db(conn)

    return StoreGroup(conn=conn)


__all__ = [
    "StoreGroup",
    "create_store_group",
    "init_db",
    "ProjectStore",
    "TaskStore",
    "EmployeeStore",
    "AuditStore",
    "NotificationStore",
    "SqliteProjectStore",
    "SqliteTaskStore",
    "SqliteEmployeeStore",
    "SqliteAuditStore",
    "SqliteNotificationStore",
    "create_project_with_tasks",
    "replace_project_tasks",
    "update_task_with_audit",
]
