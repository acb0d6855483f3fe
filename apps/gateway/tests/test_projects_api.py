"""案件 API 测试

测试内容：
1. 创建案件时展开任务（201）
2. 案件详情：任务分类、部门汇总、KPI、编辑权限
3. 按视图模式与年度查询案件
4. 任务再生成的 403 / 404 / 409 / 200
"""

from httpx import AsyncClient

SALES = {"X-Employee-Id": "emp-sales"}


def _departments(payload: dict) -> dict[str, dict]:
    return {d["department"]: d for d in payload["departments"]}


class TestCreateProject:
    """创建案件"""

    async def test_create_materializes_tasks(self, created_project: dict):
        """任务按模板展开，期限与负责人已解析"""
        project = created_project["project"]
        tasks = created_project["tasks"]

        assert project["customer_name"] == "Yamada"
        assert project["sales"] == {"employee_id": "emp-sales", "position": "Sales"}
        assert project["can_edit"] is True

        assert [t["title"] for t in tasks] == [
            "Contract signing",
            "Plan review",
            "Ground-breaking ceremony",
        ]
        assert [t["due_date"] for t in tasks] == ["2025-01-01", "2025-01-31", None]
        assert [t["assigned_to"] for t in tasks] == ["emp-sales", "emp-design", "emp-sales"]
        assert [t["priority"] for t in tasks] == ["high", "medium", "low"]
        assert [t["bucket"] for t in tasks] == ["overdue", "overdue", "not_started"]
        assert [t["overdue_days"] for t in tasks] == [45, 15, 0]

    async def test_create_validates_body(self, client: AsyncClient):
        """缺少契约日 -> 422"""
        resp = await client.post("/api/projects", json={"customer_name": "X"}, headers=SALES)
        assert resp.status_code == 422

    async def test_create_is_audited(self, app, created_project: dict):
        """创建写入审计记录"""
        store_group = app.state.store_group
        history = await store_group.audit_store.list_for_record(
            "projects", created_project["project"]["project_id"]
        )
        assert len(history) == 1
        assert history[0].actor_id == "emp-sales"
        assert history[0].changes["task_count"] == 3


class TestProjectDetail:
    """案件详情"""

    async def test_detail(self, client: AsyncClient, created_project: dict):
        """任务、部门红绿灯与 KPI"""
        project_id = created_project["project"]["project_id"]
        resp = await client.get(f"/api/projects/{project_id}", headers=SALES)
        assert resp.status_code == 200
        data = resp.json()

        assert len(data["tasks"]) == 3
        departments = _departments(data)
        assert departments["Sales Dept."] == {
            "department": "Sales Dept.",
            "status": "warning",
            "delayed_count": 1,
            "total_count": 2,
        }
        assert departments["Design Dept."]["status"] == "warning"
        assert departments["Construction Dept."]["status"] == "normal"
        assert data["summary"]["overdue"] == 2
        assert data["summary"]["progress_rate"] == 0.0
        assert data["project"]["can_edit"] is True

    async def test_edit_flag_per_caller(self, client: AsyncClient, created_project: dict):
        """部门长可编辑，其他部门 leader 与匿名不可编辑"""
        project_id = created_project["project"]["project_id"]
        expectations = {
            "emp-sales-head": True,
            "emp-exterior": False,
            "emp-president": False,
        }
        for employee_id, expected in expectations.items():
            resp = await client.get(
                f"/api/projects/{project_id}", headers={"X-Employee-Id": employee_id}
            )
            assert resp.json()["project"]["can_edit"] is expected

        anonymous = await client.get(f"/api/projects/{project_id}")
        assert anonymous.json()["project"]["can_edit"] is False

    async def test_not_found(self, client: AsyncClient):
        """不存在的案件 -> 404 + 错误信封"""
        resp = await client.get("/api/projects/missing")
        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "PROJECT_NOT_FOUND"


class TestListProjects:
    """视图范围"""

    async def _ids(self, client: AsyncClient, employee_id: str | None, **params) -> list[str]:
        headers = {"X-Employee-Id": employee_id} if employee_id else {}
        resp = await client.get("/api/projects", params=params, headers=headers)
        assert resp.status_code == 200
        return [p["project_id"] for p in resp.json()["projects"]]

    async def test_default_modes(self, client: AsyncClient, created_project: dict):
        """担当者默认个人视图，社长默认全社视图"""
        project_id = created_project["project"]["project_id"]
        assert await self._ids(client, "emp-construction") == [project_id]
        assert await self._ids(client, "emp-president") == [project_id]
        assert await self._ids(client, "emp-exterior") == []
        assert await self._ids(client, None) == []

    async def test_explicit_modes(self, client: AsyncClient, created_project: dict):
        """据点 / 全社 / 未知模式"""
        project_id = created_project["project"]["project_id"]
        assert await self._ids(client, "emp-exterior", mode="branch") == []
        assert await self._ids(client, "emp-design", mode="branch") == [project_id]
        assert await self._ids(client, "emp-exterior", mode="company") == [project_id]
        assert await self._ids(client, "emp-president", mode="everything") == []

    async def test_fiscal_year_filter(self, client: AsyncClient, created_project: dict):
        """契约日 2025-01-01 属于 2024 年度"""
        project_id = created_project["project"]["project_id"]
        assert await self._ids(client, "emp-president", fiscal_year=2024) == [project_id]
        assert await self._ids(client, "emp-president", fiscal_year=2025) == []

    async def test_list_includes_rollup(self, client: AsyncClient, created_project: dict):
        """列表中的每个案件附带部门汇总"""
        resp = await client.get("/api/projects", headers={"X-Employee-Id": "emp-president"})
        data = resp.json()
        assert data["mode"] == "company"
        assert data["fiscal_year"]["label"] == "FY2024"
        [project] = data["projects"]
        assert _departments(project)["Sales Dept."]["delayed_count"] == 1
        assert project["can_edit"] is False


class TestRegenerate:
    """任务再生成"""

    async def test_requires_edit_permission(self, client: AsyncClient, created_project: dict):
        """无编辑权限 -> 403"""
        project_id = created_project["project"]["project_id"]
        resp = await client.post(
            f"/api/projects/{project_id}/tasks/regenerate",
            json={"confirm": True},
            headers={"X-Employee-Id": "emp-exterior"},
        )
        assert resp.status_code == 403
        assert resp.json()["error"]["code"] == "PERMISSION_DENIED"

    async def test_requires_confirmation(self, client: AsyncClient, created_project: dict):
        """未确认 -> 409，任务不变"""
        project_id = created_project["project"]["project_id"]
        resp = await client.post(
            f"/api/projects/{project_id}/tasks/regenerate", json={}, headers=SALES
        )
        assert resp.status_code == 409
        assert resp.json()["error"]["code"] == "REGENERATION_NOT_CONFIRMED"

        detail = await client.get(f"/api/projects/{project_id}")
        before = {t["task_id"] for t in created_project["tasks"]}
        assert {t["task_id"] for t in detail.json()["tasks"]} == before

    async def test_unknown_project(self, client: AsyncClient):
        """不存在的案件 -> 404"""
        resp = await client.post(
            "/api/projects/missing/tasks/regenerate", json={"confirm": True}, headers=SALES
        )
        assert resp.status_code == 404

    async def test_regenerate_preserves_progress(
        self, client: AsyncClient, created_project: dict
    ):
        """确认后重新生成，已完成的任务保持完成"""
        project_id = created_project["project"]["project_id"]
        contract_task = created_project["tasks"][0]["task_id"]
        patch = await client.patch(
            f"/api/tasks/{contract_task}/status", json={"status": "completed"}, headers=SALES
        )
        assert patch.status_code == 200

        resp = await client.post(
            f"/api/projects/{project_id}/tasks/regenerate",
            json={"confirm": True},
            headers=SALES,
        )
        assert resp.status_code == 200
        assert resp.json() == {
            "project_id": project_id,
            "deleted_count": 3,
            "created_count": 3,
            "preserved_progress": True,
        }

        detail = (await client.get(f"/api/projects/{project_id}")).json()
        by_title = {t["title"]: t for t in detail["tasks"]}
        assert by_title["Contract signing"]["status"] == "completed"
        assert by_title["Contract signing"]["task_id"] != contract_task
        assert detail["summary"]["completed"] == 1

    async def test_regenerate_reset_progress(self, client: AsyncClient, created_project: dict):
        """preserve_progress=false 时全部回到 not_started"""
        project_id = created_project["project"]["project_id"]
        contract_task = created_project["tasks"][0]["task_id"]
        await client.patch(
            f"/api/tasks/{contract_task}/status", json={"status": "completed"}, headers=SALES
        )

        resp = await client.post(
            f"/api/projects/{project_id}/tasks/regenerate",
            json={"confirm": True, "preserve_progress": False},
            headers=SALES,
        )
        assert resp.json()["preserved_progress"] is False

        detail = (await client.get(f"/api/projects/{project_id}")).json()
        assert {t["status"] for t in detail["tasks"]} == {"not_started"}
