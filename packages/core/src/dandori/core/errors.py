"""Dandori 异常体系

纯计算部分对引用缺失一律降级为安全默认值，不抛异常；
此处的异常只用于持久化、再生成确认和状态流转等有副作用的操作。
"""


class DandoriError(Exception):
    """Dandori 基础异常"""

    code: str = "DANDORI_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ProjectNotFoundError(DandoriError):
    """案件不存在"""

    code = "PROJECT_NOT_FOUND"

    def __init__(self, project_id: str) -> None:
        super().__init__(f"Project with id {project_id} does not exist")
        self.project_id = project_id


class TaskNotFoundError(DandoriError):
    """任务不存在"""

    code = "TASK_NOT_FOUND"

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task with id {task_id} does not exist")
        self.task_id = task_id


class RegenerationNotConfirmedError(DandoriError):
    """任务再生成未经显式确认

    再生成会删除案件现有的全部任务，调用方必须传入 confirmed=True。
    """

    code = "REGENERATION_NOT_CONFIRMED"

    def __init__(self, project_id: str) -> None:
        super().__init__(
            f"Regenerating tasks of project {project_id} replaces all of its tasks "
            "and must be explicitly confirmed"
        )
        self.project_id = project_id


class InvalidStatusTransitionError(DandoriError):
    """非法的任务状态流转"""

    code = "INVALID_STATUS_TRANSITION"

    def __init__(self, from_status: str, to_status: str) -> None:
        super().__init__(f"Cannot transition task from {from_status} to {to_status}")
        self.from_status = from_status
        self.to_status = to_status


class PersistenceError(DandoriError):
    """持久化失败（事务已回滚，不存在部分写入）"""

    code = "PERSISTENCE_ERROR"

    def __init__(self, operation: str, cause: Exception) -> None:
        """
        Args:
            operation: 失败的操作名
            cause: 底层异常
        """
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause


class CatalogError(DandoriError):
    """任务模板目录无效"""

    code = "CATALOG_INVALID"


class PermissionDeniedError(DandoriError):
    """无编辑权限"""

    code = "PERMISSION_DENIED"

    def __init__(self, employee_id: str | None, project_id: str) -> None:
        who = employee_id or "anonymous caller"
        super().__init__(f"{who} is not allowed to edit project {project_id}")
        self.employee_id = employee_id
        self.project_id = project_id
