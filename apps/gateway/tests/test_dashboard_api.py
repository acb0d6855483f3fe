"""看板 API 测试"""

from httpx import AsyncClient


class TestDepartmentDashboard:
    """跨案件部门汇总"""

    async def test_company_view(self, client: AsyncClient, created_project):
        """社长默认全社视图"""
        resp = await client.get(
            "/api/dashboard/departments", headers={"X-Employee-Id": "emp-president"}
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["mode"] == "company"
        assert data["project_count"] == 1
        departments = {d["department"]: d for d in data["departments"]}
        assert departments["Sales Dept."]["status"] == "warning"
        assert departments["Design Dept."]["delayed_count"] == 1
        assert data["summary"]["total"] == 3
        assert data["summary"]["overdue"] == 2

    async def test_matches_project_detail(self, client: AsyncClient, created_project):
        """单案件时与案件详情的汇总一致"""
        project_id = created_project["project"]["project_id"]
        detail = (await client.get(f"/api/projects/{project_id}")).json()
        dashboard = (
            await client.get(
                "/api/dashboard/departments",
                params={"mode": "company"},
            )
        ).json()
        assert dashboard["departments"] == detail["departments"]
        assert dashboard["summary"] == detail["summary"]

    async def test_empty_scope(self, client: AsyncClient, created_project):
        """匿名个人视图：没有案件，全部 normal"""
        data = (await client.get("/api/dashboard/departments")).json()
        assert data["project_count"] == 0
        assert {d["status"] for d in data["departments"]} == {"normal"}

    async def test_other_fiscal_year(self, client: AsyncClient, created_project):
        """其他年度没有案件"""
        data = (
            await client.get(
                "/api/dashboard/departments",
                params={"fiscal_year": 2025, "mode": "company"},
            )
        ).json()
        assert data["fiscal_year"]["label"] == "FY2025"
        assert data["project_count"] == 0


class TestDelayDashboard:
    """员工延迟统计"""

    async def test_delay_stats(self, client: AsyncClient, created_project):
        """只列出有任务的员工，逾期多的在前"""
        data = (await client.get("/api/dashboard/delays")).json()
        stats = {s["employee"]["employee_id"]: s for s in data["employees"]}
        assert set(stats) == {"emp-sales", "emp-design"}
        assert stats["emp-sales"]["total_tasks"] == 2
        assert stats["emp-sales"]["delayed_tasks"] == 1
        assert stats["emp-design"]["delayed_task_list"][0]["title"] == "Plan review"

    async def test_completed_tasks_drop_out(self, client: AsyncClient, created_project):
        """完成后不再计入延迟"""
        task_id = created_project["tasks"][1]["task_id"]
        await client.patch(
            f"/api/tasks/{task_id}/status",
            json={"status": "completed"},
            headers={"X-Employee-Id": "emp-design"},
        )
        data = (await client.get("/api/dashboard/delays")).json()
        stats = [s["employee"]["employee_id"] for s in data["employees"]]
        assert stats == ["emp-sales", "emp-design"]
        assert data["employees"][1]["delayed_tasks"] == 0


class TestFiscalYears:
    """年度选择器"""

    async def test_fiscal_years(self, client: AsyncClient):
        """当前 2024 年度，新年度在前"""
        data = (await client.get("/api/dashboard/fiscal-years")).json()
        assert data["current"] == 2024
        assert [fy["year"] for fy in data["fiscal_years"]] == [2026, 2025, 2024, 2023, 2022, 2021]
        assert data["fiscal_years"][2]["start_date"] == "2024-08-01"
