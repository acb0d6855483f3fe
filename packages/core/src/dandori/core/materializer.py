"""任务展开 -- 将模板目录按契约日展开为案件的任务清单

期限 = 契约日 + days_from_anchor（自然日，不跳过休息日）；
days_from_anchor 未设置的模板生成未排期任务。
负责人按模板职种从案件负责人映射中查找，查不到则不分配。
"""

from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime, timedelta

import structlog
from ulid import ULID

from .catalog import get_catalog
from .models.enums import TaskStatus, priority_for_tier
from .models.task import Task, TaskDraft
from .models.template import TaskTemplate

log = structlog.get_logger()

# 说明文本的段落顺序（空段落省略）
_DESCRIPTION_SECTIONS: tuple[tuple[str, str | None], ...] = (
    ("purpose", "[Purpose]"),
    ("detail", None),
    ("dos", "[Dos]"),
    ("donts", "[Don'ts]"),
    ("tools", "[Tools]"),
    ("required_materials", "[Required materials]"),
    ("notes", "[Notes]"),
)


def calculate_due_date(anchor: date, days_from_anchor: int | None) -> date | None:
    """契约日 + 偏移天数；偏移未设置时返回 None（人工排期）"""
    if days_from_anchor is None:
        return None
    return anchor + timedelta(days=days_from_anchor)


def compose_description(template: TaskTemplate) -> str | None:
    """按固定顺序拼接模板中非空的说明段落"""
    blocks = []
    for field_name, heading in _DESCRIPTION_SECTIONS:
        text = (getattr(template, field_name) or "").strip()
        if not text:
            continue
        blocks.append(f"{heading}\n{text}" if heading else text)
    return "\n\n".join(blocks) or None


def resolve_assignee(
    position: str | None,
    department_assignees: Mapping[str, str],
) -> str | None:
    """按职种查找负责人，查不到返回 None（未分配）"""
    if not position:
        return None
    return department_assignees.get(position)


def materialize(
    anchor: date,
    department_assignees: Mapping[str, str],
    catalog: Sequence[TaskTemplate] | None = None,
) -> list[TaskDraft]:
    """按模板目录顺序展开任务草稿

    相同输入总是得到相同的草稿序列。

    Args:
        anchor: 契约日
        department_assignees: 职种 -> 员工 ID
        catalog: 模板目录，默认使用当前生效的目录

    Returns:
        TaskDraft 列表，与模板目录一一对应
    """
    templates = get_catalog() if catalog is None else catalog
    return [
        TaskDraft(
            template_id=template.template_id,
            title=template.title,
            description=compose_description(template),
            responsible_position=template.responsible_position,
            due_date=calculate_due_date(anchor, template.days_from_anchor),
            assigned_to=resolve_assignee(template.responsible_position, department_assignees),
            status=TaskStatus.NOT_STARTED,
            priority=priority_for_tier(template.importance),
            dos=template.dos or None,
            donts=template.donts or None,
            manual_url=template.manual_url,
        )
        for template in templates
    ]


def carry_over_progress(
    previous: Iterable[Task],
    drafts: Sequence[TaskDraft],
) -> list[TaskDraft]:
    """再生成时按 template_id 继承进行中的任务状态

    继承 status 与 actual_completion_date；
    无固定偏移的模板额外继承人工设置的期限。
    没有 template_id 的旧任务无法匹配，不被继承。
    """
    by_template: dict[int, Task] = {
        task.template_id: task for task in previous if task.template_id is not None
    }
    merged: list[TaskDraft] = []
    for draft in drafts:
        old = by_template.get(draft.template_id) if draft.template_id is not None else None
        if old is None:
            merged.append(draft)
            continue
        update = {
            "status": old.status,
            "actual_completion_date": old.actual_completion_date,
        }
        if draft.due_date is None and old.due_date is not None:
            update["due_date"] = old.due_date
        merged.append(draft.model_copy(update=update))
    return merged


def build_tasks(project_id: str, drafts: Iterable[TaskDraft], now: datetime) -> list[Task]:
    """为草稿分配 ID 与时间戳，生成可落库的任务实例"""
    tasks = [
        Task(
            **draft.model_dump(),
            task_id=str(ULID()),
            project_id=project_id,
            created_at=now,
            updated_at=now,
        )
        for draft in drafts
    ]
    log.info("tasks_materialized", project_id=project_id, task_count=len(tasks))
    return tasks
