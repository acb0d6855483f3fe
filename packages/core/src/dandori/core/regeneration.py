"""任务再生成 -- 按案件当前的契约日与负责人重新展开任务清单

再生成会替换案件的全部任务，因此：
- 必须显式确认（confirmed=True），否则不做任何改动
- 删除与插入在同一事务内完成，失败时案件保留原有任务
- 默认按 template_id 继承进行中的状态，避免人工进度丢失
- 每次执行写入一条 regenerate 审计记录
"""

from collections.abc import Sequence
from datetime import datetime

import aiosqlite
import structlog
from pydantic import BaseModel, Field
from ulid import ULID

from .errors import PersistenceError, ProjectNotFoundError, RegenerationNotConfirmedError
from .materializer import build_tasks, carry_over_progress, materialize
from .models.enums import AuditAction
from .models.records import AuditEntry
from .models.task import Task
from .models.template import TaskTemplate
from .store import StoreGroup, replace_project_tasks

log = structlog.get_logger()


class RegenerationResult(BaseModel):
    """再生成结果"""

    project_id: str
    deleted_count: int = Field(description="被替换的旧任务数")
    created_count: int = Field(description="新生成的任务数")
    preserved_progress: bool = Field(description="是否继承了旧任务的进度")
    tasks: list[Task] = Field(default_factory=list)


async def regenerate_project_tasks(
    stores: StoreGroup,
    project_id: str,
    *,
    actor_id: str | None,
    confirmed: bool,
    now: datetime,
    catalog: Sequence[TaskTemplate] | None = None,
    preserve_progress: bool = True,
) -> RegenerationResult:
    """重新生成案件的任务清单

    Args:
        stores: Store 实例组
        project_id: 案件 ID
        actor_id: 操作者员工 ID（写入审计）
        confirmed: 调用方已确认替换全部任务
        now: 当前时间
        catalog: 模板目录，默认使用当前生效的目录
        preserve_progress: 按 template_id 继承旧任务的状态与完成日

    Raises:
        RegenerationNotConfirmedError: 未确认
        ProjectNotFoundError: 案件不存在
        PersistenceError: 写入失败，事务已回滚
    """
    if not confirmed:
        raise RegenerationNotConfirmedError(project_id)

    # 读取旧任务到提交之间持有写锁，其间提交的状态变更不会被覆盖
    async with stores.write_lock:
        project = await stores.project_store.get_project(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)

        drafts = materialize(project.contract_date, project.department_assignees(), catalog)
        if preserve_progress:
            previous = await stores.task_store.list_tasks(project_id)
            drafts = carry_over_progress(previous, drafts)
        tasks = build_tasks(project_id, drafts, now)

        audit = AuditEntry(
            audit_id=str(ULID()),
            ts=now,
            actor_id=actor_id,
            action=AuditAction.REGENERATE,
            table_name="tasks",
            record_id=project_id,
            changes={
                "anchor_date": project.contract_date.isoformat(),
                "new_task_count": len(tasks),
                "preserve_progress": preserve_progress,
            },
        )

        try:
            deleted = await replace_project_tasks(
                stores.conn,
                stores.task_store,
                stores.audit_store,
                project_id,
                tasks,
                audit,
            )
        except aiosqlite.Error as exc:
            log.error(
                "project_tasks_regeneration_failed",
                project_id=project_id,
                error=str(exc),
            )
            raise PersistenceError("regenerate_project_tasks", exc) from exc

    log.info(
        "project_tasks_regenerated",
        project_id=project_id,
        actor_id=actor_id,
        deleted_count=deleted,
        created_count=len(tasks),
        preserve_progress=preserve_progress,
    )
    return RegenerationResult(
        project_id=project_id,
        deleted_count=deleted,
        created_count=len(tasks),
        preserved_progress=preserve_progress,
        tasks=tasks,
    )
