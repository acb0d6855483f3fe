"""NotificationStore SQLite 实现

通过 idempotency_key 唯一索引去重，重复写入静默跳过。
"""

from datetime import datetime

import aiosqlite

from ..models.records import Notification

_NOTIFICATION_COLUMNS = (
    "notification_id, user_id, title, message, type, related_project_id, "
    "related_task_id, read, created_at, idempotency_key"
)


class SqliteNotificationStore:
    """NotificationStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def add_if_absent(self, notification: Notification) -> bool:
        """写入通知；幂等键已存在时跳过并返回 False（不自动提交）"""
        cursor = await self._conn.execute(
            f"INSERT OR IGNORE INTO notifications ({_NOTIFICATION_COLUMNS}) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                notification.notification_id,
                notification.user_id,
                notification.title,
                notification.message,
                notification.type,
                notification.related_project_id,
                notification.related_task_id,
                int(notification.read),
                notification.created_at.isoformat(),
                notification.idempotency_key,
            ),
        )
        return cursor.rowcount > 0

    async def list_for_user(self, user_id: str) -> list[Notification]:
        """查询员工的通知，新的在前"""
        cursor = await self._conn.execute(
            f"SELECT {_NOTIFICATION_COLUMNS} FROM notifications "
            "WHERE user_id = ? ORDER BY created_at DESC, notification_id DESC",
            (user_id,),
        )
        rows = await cursor.fetchall()
        return [
            Notification(
                notification_id=row[0],
                user_id=row[1],
                title=row[2],
                message=row[3],
                type=row[4],
                related_project_id=row[5],
                related_task_id=row[6],
                read=bool(row[7]),
                created_at=datetime.fromisoformat(row[8]),
                idempotency_key=row[9],
            )
            for row in rows
        ]
