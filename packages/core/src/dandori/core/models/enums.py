"""枚举定义 -- 任务状态机、优先级、案件状态、角色与看板分类

包含 TaskStatus 状态机、TaskPriority、ProjectStatus、Role、TrafficLight、
StatusBucket、ViewMode、AuditAction 枚举，以及 VALID_TRANSITIONS 合法流转映射
和 DONE_STATES 完成态集合。
"""

from enum import StrEnum


class TaskStatus(StrEnum):
    """任务状态机

    not_started -> requested -> completed 为主流程；
    delayed 可由人工在任意未完成状态设置；
    not_applicable 为终态，汇总时与 completed 等同处理。
    """

    NOT_STARTED = "not_started"
    REQUESTED = "requested"
    DELAYED = "delayed"
    COMPLETED = "completed"
    NOT_APPLICABLE = "not_applicable"


VALID_TRANSITIONS: dict[TaskStatus, set[TaskStatus]] = {
    TaskStatus.NOT_STARTED: {
        TaskStatus.REQUESTED,
        TaskStatus.DELAYED,
        TaskStatus.COMPLETED,
        TaskStatus.NOT_APPLICABLE,
    },
    TaskStatus.REQUESTED: {
        TaskStatus.NOT_STARTED,
        TaskStatus.DELAYED,
        TaskStatus.COMPLETED,
        TaskStatus.NOT_APPLICABLE,
    },
    TaskStatus.DELAYED: {
        TaskStatus.NOT_STARTED,
        TaskStatus.REQUESTED,
        TaskStatus.COMPLETED,
        TaskStatus.NOT_APPLICABLE,
    },
    # 已完成任务可以重新打开
    TaskStatus.COMPLETED: {TaskStatus.NOT_STARTED, TaskStatus.REQUESTED},
    TaskStatus.NOT_APPLICABLE: set(),
}

# 汇总与逾期判定中视为"已完成"的状态
DONE_STATES: set[TaskStatus] = {
    TaskStatus.COMPLETED,
    TaskStatus.NOT_APPLICABLE,
}


class TaskPriority(StrEnum):
    """任务优先级"""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ProjectStatus(StrEnum):
    """案件状态"""

    PRE_CONTRACT = "pre_contract"
    POST_CONTRACT = "post_contract"
    CONSTRUCTION = "construction"
    COMPLETED = "completed"


class Role(StrEnum):
    """员工角色层级"""

    PRESIDENT = "president"
    EXECUTIVE = "executive"
    DEPARTMENT_HEAD = "department_head"
    LEADER = "leader"
    MEMBER = "member"


class TrafficLight(StrEnum):
    """部门红绿灯"""

    NORMAL = "normal"
    WARNING = "warning"
    DELAYED = "delayed"


class StatusBucket(StrEnum):
    """任务看板分类，所有视图共享同一判定"""

    COMPLETED = "completed"
    OVERDUE = "overdue"
    IN_PROGRESS = "in_progress"
    NOT_STARTED = "not_started"


class ViewMode(StrEnum):
    """看板视图范围"""

    PERSONAL = "personal"
    BRANCH = "branch"
    COMPANY = "company"


class AuditAction(StrEnum):
    """审计动作"""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    REGENERATE = "regenerate"


def validate_transition(from_status: TaskStatus, to_status: TaskStatus) -> bool:
    """验证任务状态流转是否合法

    Args:
        from_status: 当前状态
        to_status: 目标状态

    Returns:
        True 如果流转合法，否则 False
    """
    allowed = VALID_TRANSITIONS.get(from_status, set())
    return to_status in allowed


def priority_for_tier(tier: str | None) -> TaskPriority:
    """重要度等级映射到优先级：S -> high，A -> medium，其他 -> low"""
    if tier == "S":
        return TaskPriority.HIGH
    if tier == "A":
        return TaskPriority.MEDIUM
    return TaskPriority.LOW
