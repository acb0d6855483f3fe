"""响应序列化 -- 任务附带看板分类与逾期天数，避免前端重复判定"""

from datetime import datetime
from typing import Any

from dandori.core.models import Project, Task
from dandori.core.status import classify, overdue_days


def task_view(task: Task, now: datetime) -> dict[str, Any]:
    """任务 + 派生的 bucket / overdue_days"""
    data = task.model_dump(mode="json")
    data["bucket"] = classify(task, now).value
    data["overdue_days"] = overdue_days(task, now)
    return data


def project_view(project: Project, can_edit: bool) -> dict[str, Any]:
    """案件 + 调用者的编辑权限"""
    data = project.model_dump(mode="json")
    data["can_edit"] = can_edit
    return data
