"""Dandori Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .dashboard import DepartmentStatus, EmployeeDelayStats, FiscalYear, TaskSummary
from .employee import Employee
from .enums import (
    DONE_STATES,
    VALID_TRANSITIONS,
    AuditAction,
    ProjectStatus,
    Role,
    StatusBucket,
    TaskPriority,
    TaskStatus,
    TrafficLight,
    ViewMode,
    priority_for_tier,
    validate_transition,
)
from .organization import (
    DEPARTMENT_DEFINITIONS,
    LEAD_ROLE_POSITIONS,
    DepartmentDefinition,
    DepartmentGroup,
    LeadRole,
    Position,
    department_group_of,
)
from .project import LeadAssignee, Project
from .records import AuditEntry, Notification
from .task import Task, TaskDraft
from .template import TaskTemplate

__all__ = [
    # 枚举
    "TaskStatus",
    "TaskPriority",
    "ProjectStatus",
    "Role",
    "TrafficLight",
    "StatusBucket",
    "ViewMode",
    "AuditAction",
    # 状态机
    "VALID_TRANSITIONS",
    "DONE_STATES",
    "validate_transition",
    "priority_for_tier",
    # 组织
    "Position",
    "DepartmentGroup",
    "LeadRole",
    "DepartmentDefinition",
    "DEPARTMENT_DEFINITIONS",
    "LEAD_ROLE_POSITIONS",
    "department_group_of",
    # 实体
    "TaskTemplate",
    "TaskDraft",
    "Task",
    "Project",
    "LeadAssignee",
    "Employee",
    # 聚合
    "FiscalYear",
    "DepartmentStatus",
    "TaskSummary",
    "EmployeeDelayStats",
    # 记录
    "AuditEntry",
    "Notification",
]
