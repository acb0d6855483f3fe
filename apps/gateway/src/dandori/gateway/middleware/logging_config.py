"""structlog 配置模块

dev 模式：pretty print 可读输出
json 模式：结构化 JSON 输出
每条日志附带服务名与业务时区（期限判定都按该时区的"今天"进行）。
"""

import logging
import os

import structlog
from dandori.core.config import get_timezone

SERVICE_NAME = "dandori-gateway"


def add_service_context(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: structlog.types.EventDict,
) -> structlog.types.EventDict:
    """附加 service 与 business_tz 字段，已绑定的值优先"""
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("business_tz", get_timezone().key)
    return event_dict


def setup_logging() -> None:
    """初始化 structlog 配置

    根据 DANDORI_LOG_FORMAT 环境变量选择渲染模式：
    - "json": 结构化 JSON 输出（生产环境）
    - "dev" (默认): pretty print 可读输出
    """
    log_format = os.environ.get("DANDORI_LOG_FORMAT", "dev")
    log_level = os.environ.get("DANDORI_LOG_LEVEL", "INFO")

    # 基础处理器链
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        add_service_context,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # 配置标准库 logging
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # aiosqlite 在 DEBUG 级别逐条输出 SQL 调用
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
