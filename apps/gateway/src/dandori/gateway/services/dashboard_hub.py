"""DashboardHub -- 失效即重算的仪表盘快照广播器

任务或案件变更后调用 invalidate(project_id)：
防抖等待 -> 重新读取该案件的任务 -> 重新判定与汇总 -> 发布快照。
同一案件的新失效会取消尚未完成的旧重算。
订阅者持有 asyncio.Queue；可订阅单个案件，也可订阅全部案件（project_id=None）。
"""

import asyncio
from collections import defaultdict
from datetime import datetime

import aiosqlite
import structlog
from dandori.core.clock import Clock
from dandori.core.config import DASHBOARD_QUEUE_MAXSIZE, get_dashboard_debounce_seconds
from dandori.core.models import DepartmentStatus, TaskSummary
from dandori.core.rollup import rollup
from dandori.core.status import summarize
from dandori.core.store import StoreGroup
from pydantic import BaseModel, Field

log = structlog.get_logger()


class ProjectSnapshot(BaseModel):
    """单个案件的看板快照"""

    project_id: str
    computed_at: datetime
    departments: list[DepartmentStatus] = Field(default_factory=list)
    summary: TaskSummary = Field(default_factory=TaskSummary)


class DashboardHub:
    """仪表盘重算与广播"""

    def __init__(
        self,
        store_group: StoreGroup,
        clock: Clock,
        debounce_seconds: float | None = None,
        queue_maxsize: int = DASHBOARD_QUEUE_MAXSIZE,
    ) -> None:
        self._store_group = store_group
        self._clock = clock
        self._debounce = (
            get_dashboard_debounce_seconds() if debounce_seconds is None else debounce_seconds
        )
        self._queue_maxsize = queue_maxsize
        # project_id（None 表示全部案件）-> 订阅队列
        self._subscribers: dict[str | None, set[asyncio.Queue]] = defaultdict(set)
        # project_id -> 待执行的重算
        self._pending: dict[str, asyncio.Task] = {}

    async def subscribe(self, project_id: str | None = None) -> asyncio.Queue:
        """订阅案件快照，project_id 为 None 时订阅全部案件"""
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._queue_maxsize)
        self._subscribers[project_id].add(queue)
        return queue

    async def unsubscribe(self, project_id: str | None, queue: asyncio.Queue) -> None:
        """取消订阅"""
        self._subscribers[project_id].discard(queue)
        if not self._subscribers[project_id]:
            del self._subscribers[project_id]

    def invalidate(self, project_id: str) -> None:
        """标记案件失效，防抖后重算；取代该案件尚未完成的重算"""
        previous = self._pending.get(project_id)
        if previous is not None and not previous.done():
            previous.cancel()

        task = asyncio.create_task(self._debounced_recompute(project_id))
        self._pending[project_id] = task
        task.add_done_callback(lambda t: self._forget(project_id, t))

    def _forget(self, project_id: str, task: asyncio.Task) -> None:
        if self._pending.get(project_id) is task:
            del self._pending[project_id]

    async def _debounced_recompute(self, project_id: str) -> None:
        await asyncio.sleep(self._debounce)
        try:
            await self.recompute(project_id)
        except aiosqlite.Error as exc:
            log.error("dashboard_recompute_failed", project_id=project_id, error=str(exc))
        except Exception:
            # 后台任务无人取回结果，其余异常在此记录
            log.exception("dashboard_recompute_failed", project_id=project_id)

    async def recompute(self, project_id: str) -> ProjectSnapshot:
        """立即重算案件快照并发布"""
        tasks = await self._store_group.task_store.list_tasks(project_id)
        now = self._clock()
        snapshot = ProjectSnapshot(
            project_id=project_id,
            computed_at=now,
            departments=rollup(tasks, now),
            summary=summarize(tasks, now),
        )
        self._publish(project_id, snapshot)
        log.debug("dashboard_snapshot_published", project_id=project_id, task_count=len(tasks))
        return snapshot

    def _publish(self, project_id: str, snapshot: ProjectSnapshot) -> None:
        for key in (project_id, None):
            queues = self._subscribers.get(key)
            if not queues:
                continue
            dead_queues = []
            for queue in queues:
                try:
                    queue.put_nowait(snapshot)
                except asyncio.QueueFull:
                    dead_queues.append(queue)

            # 清理已满的队列
            for q in dead_queues:
                queues.discard(q)
            if not queues:
                del self._subscribers[key]

    async def wait_idle(self) -> None:
        """等待所有待执行的重算完成"""
        while self._pending:
            await asyncio.wait(list(self._pending.values()))

    async def close(self) -> None:
        """取消所有待执行的重算"""
        pending = list(self._pending.values())
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._pending.clear()
