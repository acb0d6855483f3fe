"""TaskTemplate Domain Model -- 任务模板（部署时定义，之后只读）"""

from pydantic import BaseModel, Field


class TaskTemplate(BaseModel):
    """任务模板

    days_from_anchor 为 None 表示该任务需要人工排期。
    """

    model_config = {"frozen": True}

    template_id: int = Field(description="稳定序号")
    title: str = Field(description="任务标题")
    phase: str = Field(default="", description="所属阶段")
    responsible_position: str | None = Field(default=None, description="负责职种")
    importance: str | None = Field(default=None, description="重要度等级 S/A/B")
    days_from_anchor: int | None = Field(
        default=None,
        description="距契约日的天数（可为负），None 表示人工排期",
    )
    purpose: str = Field(default="", description="目的")
    detail: str = Field(default="", description="说明")
    dos: str = Field(default="", description="应做事项")
    donts: str = Field(default="", description="禁止事项")
    tools: str = Field(default="", description="使用工具")
    required_materials: str = Field(default="", description="必要资料")
    notes: str = Field(default="", description="备注")
    manual_url: str | None = Field(default=None, description="操作手册链接")
