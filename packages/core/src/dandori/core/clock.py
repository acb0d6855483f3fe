"""时钟 -- 为状态判定提供可注入的"当前时间"

所有状态判定函数都显式接收 now，此处只提供生产环境与测试用的时钟。
"""

from collections.abc import Callable
from datetime import datetime

from .config import get_timezone

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    """业务时区下的当前时间"""
    return datetime.now(get_timezone())


def fixed_clock(at: datetime) -> Clock:
    """返回恒定时间的时钟（测试用）"""
    return lambda: at
