"""Task Domain Model -- 任务实例

任务的逾期状态从不落库，始终由 due_date、status 与当前时间推导。
responsible_position 在生成时由模板写入，是一等字段而非描述前缀。
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from .enums import TaskPriority, TaskStatus


class TaskDraft(BaseModel):
    """由模板展开、尚未落库的任务草稿"""

    template_id: int | None = Field(default=None, description="来源模板序号")
    title: str = Field(description="任务标题")
    description: str | None = Field(default=None, description="拼接后的说明文本")
    responsible_position: str | None = Field(default=None, description="负责职种")
    due_date: date | None = Field(default=None, description="期限，None 表示未排期")
    assigned_to: str | None = Field(default=None, description="负责人员工 ID")
    status: TaskStatus = Field(default=TaskStatus.NOT_STARTED, description="初始状态")
    priority: TaskPriority = Field(default=TaskPriority.LOW, description="优先级")
    actual_completion_date: date | None = Field(default=None, description="实际完成日")
    dos: str | None = Field(default=None)
    donts: str | None = Field(default=None)
    manual_url: str | None = Field(default=None)


class Task(TaskDraft):
    """任务实例 -- 由所属案件独占，案件删除时级联删除"""

    task_id: str = Field(description="唯一标识，ULID 格式")
    project_id: str = Field(description="所属案件 ID")
    created_at: datetime = Field(description="创建时间")
    updated_at: datetime = Field(description="更新时间")
