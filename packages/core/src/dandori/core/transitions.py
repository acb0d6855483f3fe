"""任务状态变更 -- 校验流转并维护实际完成日"""

from datetime import datetime

from .errors import InvalidStatusTransitionError
from .models.enums import TaskStatus, validate_transition
from .models.task import Task


def apply_status_change(task: Task, new_status: TaskStatus, now: datetime) -> Task:
    """返回变更后的任务副本

    - 进入 completed 时，若尚无实际完成日则记为今天
    - completed 被重新打开时清除实际完成日

    Raises:
        InvalidStatusTransitionError: 流转不合法（包括保持原状态）
    """
    if not validate_transition(task.status, new_status):
        raise InvalidStatusTransitionError(task.status, new_status)

    update: dict = {"status": new_status, "updated_at": now}
    if new_status == TaskStatus.COMPLETED and task.actual_completion_date is None:
        update["actual_completion_date"] = now.date()
    elif task.status == TaskStatus.COMPLETED:
        update["actual_completion_date"] = None
    return task.model_copy(update=update)
