"""EmployeeStore SQLite 实现 -- 员工主数据由外部维护，核心只读"""

import aiosqlite

from ..models.employee import Employee

_EMPLOYEE_COLUMNS = "employee_id, name, email, role, department, branch_id"


class SqliteEmployeeStore:
    """EmployeeStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def upsert_employee(self, employee: Employee) -> None:
        """写入或覆盖员工记录（不自动提交）"""
        await self._conn.execute(
            f"""
            INSERT INTO employees ({_EMPLOYEE_COLUMNS})
            VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT(employee_id) DO UPDATE SET
                name = excluded.name,
                email = excluded.email,
                role = excluded.role,
                department = excluded.department,
                branch_id = excluded.branch_id
            """,
            (
                employee.employee_id,
                employee.name,
                employee.email,
                employee.role,
                employee.department,
                employee.branch_id,
            ),
        )

    async def get_employee(self, employee_id: str) -> Employee | None:
        """根据 employee_id 查询员工"""
        cursor = await self._conn.execute(
            f"SELECT {_EMPLOYEE_COLUMNS} FROM employees WHERE employee_id = ?",
            (employee_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_employee(row)

    async def list_employees(self) -> list[Employee]:
        """查询全部员工"""
        cursor = await self._conn.execute(
            f"SELECT {_EMPLOYEE_COLUMNS} FROM employees ORDER BY employee_id"
        )
        rows = await cursor.fetchall()
        return [self._row_to_employee(row) for row in rows]

    @staticmethod
    def _row_to_employee(row: aiosqlite.Row) -> Employee:
        return Employee(
            employee_id=row[0],
            name=row[1],
            email=row[2],
            role=row[3],
            department=row[4],
            branch_id=row[5],
        )
