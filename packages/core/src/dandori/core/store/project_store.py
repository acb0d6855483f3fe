"""ProjectStore SQLite 实现

读取时关联 employees 表，为三个主负责人补全职种（权限判定需要）。
"""

from datetime import date, datetime

import aiosqlite

from ..models.project import LeadAssignee, Project

_SELECT_PROJECT = """
SELECT p.project_id, p.customer_name, p.contract_date, p.status, p.branch_id,
       p.assigned_sales, s.department,
       p.assigned_design, d.department,
       p.assigned_construction, c.department,
       p.created_at, p.updated_at
FROM projects p
LEFT JOIN employees s ON s.employee_id = p.assigned_sales
LEFT JOIN employees d ON d.employee_id = p.assigned_design
LEFT JOIN employees c ON c.employee_id = p.assigned_construction
"""


def _lead(employee_id: str | None, position: str | None) -> LeadAssignee | None:
    if employee_id is None:
        return None
    return LeadAssignee(employee_id=employee_id, position=position)


class SqliteProjectStore:
    """ProjectStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_project(self, project: Project) -> None:
        """创建案件记录（不自动提交）"""
        await self._conn.execute(
            """
            INSERT INTO projects (project_id, customer_name, contract_date, status,
                                  branch_id, assigned_sales, assigned_design,
                                  assigned_construction, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                project.project_id,
                project.customer_name,
                project.contract_date.isoformat(),
                project.status.value,
                project.branch_id,
                project.sales.employee_id if project.sales else None,
                project.design.employee_id if project.design else None,
                project.construction.employee_id if project.construction else None,
                project.created_at.isoformat(),
                project.updated_at.isoformat(),
            ),
        )

    async def get_project(self, project_id: str) -> Project | None:
        """根据 project_id 查询案件"""
        cursor = await self._conn.execute(
            f"{_SELECT_PROJECT} WHERE p.project_id = ?",
            (project_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_project(row)

    async def list_projects(
        self,
        contract_from: date | None = None,
        contract_to: date | None = None,
    ) -> list[Project]:
        """查询案件列表，可按契约日区间（两端包含）筛选，按契约日倒序"""
        clauses = []
        params: list[str] = []
        if contract_from is not None:
            clauses.append("p.contract_date >= ?")
            params.append(contract_from.isoformat())
        if contract_to is not None:
            clauses.append("p.contract_date <= ?")
            params.append(contract_to.isoformat())
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        cursor = await self._conn.execute(
            f"{_SELECT_PROJECT} {where} ORDER BY p.contract_date DESC",
            params,
        )
        rows = await cursor.fetchall()
        return [self._row_to_project(row) for row in rows]

    @staticmethod
    def _row_to_project(row: aiosqlite.Row) -> Project:
        """将数据库行转换为 Project 模型"""
        return Project(
            project_id=row[0],
            customer_name=row[1],
            contract_date=date.fromisoformat(row[2]),
            status=row[3],
            branch_id=row[4],
            sales=_lead(row[5], row[6]),
            design=_lead(row[7], row[8]),
            construction=_lead(row[9], row[10]),
            created_at=datetime.fromisoformat(row[11]),
            updated_at=datetime.fromisoformat(row[12]),
        )
