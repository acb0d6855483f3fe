"""CLI 入口模块 -- python -m dandori.core <command>

支持的命令：
  daily-check                                   检查逾期任务并写入延迟通知
  regenerate-tasks <project_id> --confirm       按当前契约日重新生成案件任务
                   [--reset-progress]           不继承旧任务的进度
"""

import asyncio
import sys

from .config import get_db_path

_USAGE = """用法: python -m dandori.core <command>
命令:
  daily-check                              检查逾期任务并写入延迟通知
  regenerate-tasks <project_id> --confirm  重新生成案件任务（--reset-progress 不继承进度）"""


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print(_USAGE)
        sys.exit(1)

    command = sys.argv[1]

    if command == "daily-check":
        asyncio.run(daily_check())
    elif command == "regenerate-tasks":
        args = sys.argv[2:]
        positional = [a for a in args if not a.startswith("--")]
        if len(positional) != 1:
            print(_USAGE)
            sys.exit(1)
        if "--confirm" not in args:
            print("再生成会替换案件的全部任务，请加 --confirm 确认")
            sys.exit(1)
        asyncio.run(
            regenerate_tasks(
                positional[0],
                preserve_progress="--reset-progress" not in args,
            )
        )
    else:
        print(f"未知命令: {command}")
        print("可用命令: daily-check, regenerate-tasks")
        sys.exit(1)


async def daily_check() -> None:
    """执行每日延迟检查"""
    from .clock import system_clock
    from .notifications import run_daily_check
    from .store import create_store_group

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")

    store_group = await create_store_group(db_path)
    try:
        result = await run_daily_check(store_group, system_clock())
        print(
            f"检查完成：{result.checked_tasks} 个任务，"
            f"{result.overdue_tasks} 个逾期，新增 {result.created} 条通知"
        )
    finally:
        await store_group.conn.close()


async def regenerate_tasks(project_id: str, preserve_progress: bool) -> None:
    """执行任务再生成"""
    from .clock import system_clock
    from .errors import DandoriError
    from .regeneration import regenerate_project_tasks
    from .store import create_store_group

    store_group = await create_store_group(get_db_path())
    try:
        result = await regenerate_project_tasks(
            store_group,
            project_id,
            actor_id=None,
            confirmed=True,
            now=system_clock(),
            preserve_progress=preserve_progress,
        )
        print(f"再生成完成：删除 {result.deleted_count} 个，生成 {result.created_count} 个任务")
    except DandoriError as exc:
        print(f"再生成失败: {exc.message}")
        sys.exit(1)
    finally:
        await store_group.conn.close()


if __name__ == "__main__":
    main()
