"""看板聚合模型 -- 请求级临时聚合，不落库"""

from datetime import date

from pydantic import BaseModel, Field

from .employee import Employee
from .enums import TrafficLight
from .task import Task


class FiscalYear(BaseModel):
    """会计年度窗口：year 年 8 月 1 日至次年 7 月 31 日"""

    model_config = {"frozen": True}

    year: int = Field(description="年度")
    start_date: date = Field(description="起始日（含）")
    end_date: date = Field(description="结束日（含）")
    label: str = Field(description="显示名")


class DepartmentStatus(BaseModel):
    """部门汇总"""

    department: str = Field(description="部门名")
    status: TrafficLight = Field(description="红绿灯")
    delayed_count: int = Field(default=0, description="逾期任务数")
    total_count: int = Field(default=0, description="任务总数")


class TaskSummary(BaseModel):
    """KPI 卡片计数"""

    total: int = 0
    completed: int = 0
    overdue: int = 0
    due_today: int = 0
    due_this_week: int = 0
    progress_rate: float = Field(default=0.0, description="完成率（%）")


class EmployeeDelayStats(BaseModel):
    """按员工统计的延迟情况"""

    employee: Employee
    total_tasks: int
    delayed_tasks: int
    delayed_task_list: list[Task] = Field(default_factory=list)
