"""部门汇总 -- 按部门统计逾期任务并给出红绿灯

同一算法用于单个案件（案件详情）和多个案件（看板 KPI），只是输入的任务集合不同。
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import datetime

from .config import ROLLUP_WARNING_MAX_DELAYED
from .models.dashboard import DepartmentStatus
from .models.enums import TrafficLight
from .models.organization import DEPARTMENT_DEFINITIONS, DepartmentDefinition
from .models.task import Task, TaskDraft
from .status import is_overdue


def traffic_light(delayed_count: int) -> TrafficLight:
    """0 -> normal，1..2 -> warning，>= 3 -> delayed"""
    if delayed_count <= 0:
        return TrafficLight.NORMAL
    if delayed_count <= ROLLUP_WARNING_MAX_DELAYED:
        return TrafficLight.WARNING
    return TrafficLight.DELAYED


def rollup(
    tasks: Iterable[TaskDraft],
    now: datetime,
    definitions: Sequence[DepartmentDefinition] = DEPARTMENT_DEFINITIONS,
) -> list[DepartmentStatus]:
    """按部门定义顺序输出每个部门的汇总

    没有负责职种或职种不属于任何部门的任务不参与汇总。
    """
    task_list = list(tasks)
    result = []
    for definition in definitions:
        members = [t for t in task_list if t.responsible_position in definition.positions]
        delayed = sum(1 for t in members if is_overdue(t, now))
        result.append(
            DepartmentStatus(
                department=definition.name,
                status=traffic_light(delayed),
                delayed_count=delayed,
                total_count=len(members),
            )
        )
    return result


def rollup_by_project(
    tasks: Iterable[Task],
    now: datetime,
    definitions: Sequence[DepartmentDefinition] = DEPARTMENT_DEFINITIONS,
) -> dict[str, list[DepartmentStatus]]:
    """按案件分组后逐个汇总"""
    grouped: dict[str, list[Task]] = defaultdict(list)
    for task in tasks:
        grouped[task.project_id].append(task)
    return {
        project_id: rollup(project_tasks, now, definitions)
        for project_id, project_tasks in grouped.items()
    }
