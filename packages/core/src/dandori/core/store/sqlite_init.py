"""SQLite 数据库初始化

PRAGMA 配置 + 表 DDL + 索引创建。
使用 aiosqlite 异步操作。
"""

import aiosqlite

# employees 表 DDL
_EMPLOYEES_DDL = """
CREATE TABLE IF NOT EXISTS employees (
    employee_id  TEXT PRIMARY KEY,
    name         TEXT NOT NULL DEFAULT '',
    email        TEXT NOT NULL DEFAULT '',
    role         TEXT NOT NULL,
    department   TEXT NOT NULL DEFAULT '',
    branch_id    TEXT
);
"""

# projects 表 DDL
_PROJECTS_DDL = """
CREATE TABLE IF NOT EXISTS projects (
    project_id             TEXT PRIMARY KEY,
    customer_name          TEXT NOT NULL DEFAULT '',
    contract_date          TEXT NOT NULL,
    status                 TEXT NOT NULL DEFAULT 'post_contract',
    branch_id              TEXT,
    assigned_sales         TEXT,
    assigned_design        TEXT,
    assigned_construction  TEXT,
    created_at             TEXT NOT NULL,
    updated_at             TEXT NOT NULL
);
"""

_PROJECTS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_projects_contract_date ON projects(contract_date DESC);",
]

# tasks 表 DDL（随案件级联删除）
_TASKS_DDL = """
CREATE TABLE IF NOT EXISTS tasks (
    task_id                 TEXT PRIMARY KEY,
    project_id              TEXT NOT NULL,
    template_id             INTEGER,
    title                   TEXT NOT NULL,
    description             TEXT,
    responsible_position    TEXT,
    due_date                TEXT,
    assigned_to             TEXT,
    status                  TEXT NOT NULL DEFAULT 'not_started',
    priority                TEXT NOT NULL DEFAULT 'low',
    actual_completion_date  TEXT,
    dos                     TEXT,
    donts                   TEXT,
    manual_url              TEXT,
    created_at              TEXT NOT NULL,
    updated_at              TEXT NOT NULL,

    FOREIGN KEY (project_id) REFERENCES projects(project_id) ON DELETE CASCADE
);
"""

_TASKS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_project_id ON tasks(project_id);",
    "CREATE INDEX IF NOT EXISTS idx_tasks_assigned_to ON tasks(assigned_to);",
    "CREATE INDEX IF NOT EXISTS idx_tasks_due_date ON tasks(due_date);",
]

# audit_logs 表 DDL（append-only）
_AUDIT_LOGS_DDL = """
CREATE TABLE IF NOT EXISTS audit_logs (
    audit_id    TEXT PRIMARY KEY,
    ts          TEXT NOT NULL,
    actor_id    TEXT,
    action      TEXT NOT NULL,
    table_name  TEXT NOT NULL,
    record_id   TEXT NOT NULL,
    changes     TEXT NOT NULL DEFAULT '{}'
);
"""

_AUDIT_LOGS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_audit_logs_record ON audit_logs(table_name, record_id);",
]

# notifications 表 DDL
_NOTIFICATIONS_DDL = """
CREATE TABLE IF NOT EXISTS notifications (
    notification_id     TEXT PRIMARY KEY,
    user_id             TEXT NOT NULL,
    title               TEXT NOT NULL,
    message             TEXT NOT NULL,
    type                TEXT NOT NULL DEFAULT 'delay',
    related_project_id  TEXT,
    related_task_id     TEXT,
    read                INTEGER NOT NULL DEFAULT 0,
    created_at          TEXT NOT NULL,
    idempotency_key     TEXT
);
"""

_NOTIFICATIONS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_notifications_user ON notifications(user_id, created_at DESC);",
    # 幂等键唯一约束（仅对非 NULL 值生效）
    (
        "CREATE UNIQUE INDEX IF NOT EXISTS idx_notifications_idempotency_key "
        "ON notifications(idempotency_key) WHERE idempotency_key IS NOT NULL;"
    ),
]


async def init_db(conn: aiosqlite.Connection) -> None:
    """初始化数据库：设置 PRAGMA + 创建表 + 创建索引

    Args:
        conn: aiosqlite 数据库连接
    """
    # 设置 PRAGMA
    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute("PRAGMA foreign_keys = ON;")
    await conn.execute("PRAGMA busy_timeout = 5000;")

    # 创建表
    for ddl in (_EMPLOYEES_DDL, _PROJECTS_DDL, _TASKS_DDL, _AUDIT_LOGS_DDL, _NOTIFICATIONS_DDL):
        await conn.execute(ddl)

    # 创建索引
    for idx_sql in (
        _PROJECTS_INDEXES + _TASKS_INDEXES + _AUDIT_LOGS_INDEXES + _NOTIFICATIONS_INDEXES
    ):
        await conn.execute(idx_sql)

    await conn.commit()
