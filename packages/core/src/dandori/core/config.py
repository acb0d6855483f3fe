"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、任务模板目录、时区、仪表盘重算防抖等可配置常量。
"""

import os
from pathlib import Path
from zoneinfo import ZoneInfo


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("DANDORI_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "DANDORI_DB_PATH",
        str(_get_base_dir() / "sqlite" / "dandori.db"),
    )


def get_catalog_path() -> Path | None:
    """获取外部任务模板 JSON 路径，未配置时使用内置模板"""
    value = os.environ.get("DANDORI_TASK_CATALOG_PATH")
    return Path(value) if value else None


def get_timezone() -> ZoneInfo:
    """获取业务时区（"今天"的判定基准）"""
    return ZoneInfo(os.environ.get("DANDORI_TIMEZONE", "Asia/Tokyo"))


def get_dashboard_debounce_seconds() -> float:
    """获取仪表盘重算防抖间隔（秒）"""
    return int(os.environ.get("DANDORI_DASHBOARD_DEBOUNCE_MS", "200")) / 1000


# 会计年度起始月（8 月 1 日开始）
FISCAL_YEAR_START_MONTH: int = 8

# 年度选择器：过去 3 年 + 当前 + 未来 2 年
AVAILABLE_FISCAL_YEARS_BEFORE: int = 3
AVAILABLE_FISCAL_YEARS_AFTER: int = 2

# "本周到期"窗口（天）
DUE_SOON_WINDOW_DAYS: int = 7

# 部门红绿灯阈值：延迟数 1..2 为 warning，>= 3 为 delayed
ROLLUP_WARNING_MAX_DELAYED: int = 2

# 仪表盘订阅队列容量
DASHBOARD_QUEUE_MAXSIZE: int = 100
