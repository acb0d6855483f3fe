"""审计日志与通知记录"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from .enums import AuditAction


class AuditEntry(BaseModel):
    """审计日志"""

    audit_id: str = Field(description="唯一标识，ULID 格式")
    ts: datetime = Field(description="记录时间")
    actor_id: str | None = Field(default=None, description="操作者员工 ID")
    action: AuditAction = Field(description="动作")
    table_name: str = Field(description="对象表")
    record_id: str = Field(description="对象记录 ID")
    changes: dict[str, Any] = Field(default_factory=dict, description="变更内容")


class Notification(BaseModel):
    """站内通知"""

    notification_id: str = Field(description="唯一标识，ULID 格式")
    user_id: str = Field(description="接收者员工 ID")
    title: str
    message: str
    type: str = Field(default="delay", description="通知类型")
    related_project_id: str | None = None
    related_task_id: str | None = None
    read: bool = False
    created_at: datetime
    idempotency_key: str | None = Field(default=None, description="幂等键，防止同日重复通知")
