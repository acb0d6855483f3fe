"""会计年度 -- 8 月 1 日开始的年度窗口

纯函数，对任意合法日期都有定义，不抛异常。
"""

from datetime import date, datetime, time

from .config import (
    AVAILABLE_FISCAL_YEARS_AFTER,
    AVAILABLE_FISCAL_YEARS_BEFORE,
    FISCAL_YEAR_START_MONTH,
)
from .models.dashboard import FiscalYear


def fiscal_year_of(value: date) -> int:
    """日期所属年度：8 月及以后为当年，7 月及以前为上一年"""
    if value.month >= FISCAL_YEAR_START_MONTH:
        return value.year
    return value.year - 1


def fiscal_year_range(year: int) -> tuple[datetime, datetime]:
    """年度的 [start, end] 区间，两端均包含

    start 为 year 年 8 月 1 日 00:00:00，end 为次年 7 月 31 日 23:59:59。
    """
    start = datetime(year, FISCAL_YEAR_START_MONTH, 1)
    end = datetime.combine(date(year + 1, FISCAL_YEAR_START_MONTH - 1, 31), time(23, 59, 59))
    return start, end


def fiscal_year(year: int) -> FiscalYear:
    """构造年度窗口"""
    start, end = fiscal_year_range(year)
    return FiscalYear(
        year=year,
        start_date=start.date(),
        end_date=end.date(),
        label=f"FY{year}",
    )


def in_fiscal_year(value: date, year: int) -> bool:
    """日期是否落在指定年度内"""
    window = fiscal_year(year)
    return window.start_date <= value <= window.end_date


def current_fiscal_year(now: datetime) -> FiscalYear:
    """当前年度"""
    return fiscal_year(fiscal_year_of(now.date()))


def available_fiscal_years(now: datetime) -> list[FiscalYear]:
    """年度选择器候选：过去 3 年 + 当前 + 未来 2 年，新年度在前"""
    current = fiscal_year_of(now.date())
    return [
        fiscal_year(current + offset)
        for offset in range(AVAILABLE_FISCAL_YEARS_AFTER, -AVAILABLE_FISCAL_YEARS_BEFORE - 1, -1)
    ]
