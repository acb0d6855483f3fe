"""AuditStore SQLite 实现 -- append-only 审计日志"""

import json
from datetime import datetime

import aiosqlite

from ..models.records import AuditEntry


class SqliteAuditStore:
    """AuditStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def append(self, entry: AuditEntry) -> None:
        """追加审计记录（不自动提交）"""
        await self._conn.execute(
            """
            INSERT INTO audit_logs (audit_id, ts, actor_id, action, table_name,
                                    record_id, changes)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                entry.audit_id,
                entry.ts.isoformat(),
                entry.actor_id,
                entry.action.value,
                entry.table_name,
                entry.record_id,
                json.dumps(entry.changes, ensure_ascii=False, default=str),
            ),
        )

    async def list_for_record(self, table_name: str, record_id: str) -> list[AuditEntry]:
        """查询某条记录的审计历史，按写入顺序"""
        cursor = await self._conn.execute(
            """
            SELECT audit_id, ts, actor_id, action, table_name, record_id, changes
            FROM audit_logs
            WHERE table_name = ? AND record_id = ?
            ORDER BY rowid ASC
            """,
            (table_name, record_id),
        )
        rows = await cursor.fetchall()
        return [
            AuditEntry(
                audit_id=row[0],
                ts=datetime.fromisoformat(row[1]),
                actor_id=row[2],
                action=row[3],
                table_name=row[4],
                record_id=row[5],
                changes=json.loads(row[6]),
            )
            for row in rows
        ]
