"""TraceMiddleware -- 从路径中提取案件/任务 ID 绑定到日志上下文

/api/projects/{project_id}/... 绑定 project_id，
/api/tasks/{task_id}/... 绑定 task_id。
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

_PATH_KEYS = {"projects": "project_id", "tasks": "task_id"}


class TraceMiddleware(BaseHTTPMiddleware):
    """案件级追踪中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        parts = request.url.path.strip("/").split("/")
        bound: dict[str, str] = {}
        # 只看 /api/<collection>/<id> 形式
        if len(parts) >= 3 and parts[0] == "api" and parts[1] in _PATH_KEYS:
            bound[_PATH_KEYS[parts[1]]] = parts[2]

        if bound:
            structlog.contextvars.bind_contextvars(**bound)

        return await call_next(request)
