"""apps/gateway 测试配置 -- httpx AsyncClient + 临时数据库 + 固定时钟"""

from collections.abc import AsyncGenerator
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest
import pytest_asyncio
from dandori.core.clock import fixed_clock
from dandori.core.models import Employee, TaskTemplate
from dandori.core.store import create_store_group
from httpx import ASGITransport, AsyncClient

NOW = datetime(2025, 2, 15, 9, 0, tzinfo=ZoneInfo("Asia/Tokyo"))

CATALOG = (
    TaskTemplate(
        template_id=1,
        title="Contract signing",
        responsible_position="Sales",
        importance="S",
        days_from_anchor=0,
    ),
    TaskTemplate(
        template_id=2,
        title="Plan review",
        responsible_position="Design",
        importance="A",
        days_from_anchor=30,
    ),
    TaskTemplate(template_id=3, title="Ground-breaking ceremony", responsible_position="Sales"),
)

EMPLOYEES = (
    Employee(employee_id="emp-sales", name="Sato", role="member", department="Sales",
             branch_id="tokyo"),
    Employee(employee_id="emp-design", name="Suzuki", role="member", department="Design",
             branch_id="tokyo"),
    Employee(employee_id="emp-construction", name="Takahashi", role="member",
             department="Construction", branch_id="osaka"),
    Employee(employee_id="emp-sales-head", name="Tanaka", role="department_head",
             department="Sales Admin", branch_id="tokyo"),
    Employee(employee_id="emp-president", name="Ito", role="president", department="Other"),
    Employee(employee_id="emp-exterior", name="Watanabe", role="leader",
             department="Exterior Design", branch_id="osaka"),
)


@pytest_asyncio.fixture
async def app(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """创建测试用 FastAPI app（绕过 lifespan 手动初始化）"""
    monkeypatch.setenv("DANDORI_DB_PATH", str(tmp_path / "sqlite" / "test.db"))

    from dandori.gateway.main import create_app
    from dandori.gateway.services.dashboard_hub import DashboardHub

    application = create_app()

    store_group = await create_store_group(tmp_path / "sqlite" / "test.db")
    for employee in EMPLOYEES:
        await store_group.employee_store.upsert_employee(employee)
    await store_group.conn.commit()

    clock = fixed_clock(NOW)
    application.state.store_group = store_group
    application.state.clock = clock
    application.state.catalog = CATALOG
    application.state.dashboard_hub = DashboardHub(store_group, clock, debounce_seconds=0.01)

    yield application

    await application.state.dashboard_hub.close()
    await store_group.conn.close()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def project_payload() -> dict:
    """契约日 2025-01-01、营业/设计/工事负责人齐全的案件"""
    return {
        "customer_name": "Yamada",
        "contract_date": "2025-01-01",
        "branch_id": "tokyo",
        "assigned_sales": "emp-sales",
        "assigned_design": "emp-design",
        "assigned_construction": "emp-construction",
    }


@pytest_asyncio.fixture
async def created_project(client: AsyncClient, project_payload: dict) -> dict:
    """通过 API 创建的案件"""
    resp = await client.post(
        "/api/projects", json=project_payload, headers={"X-Employee-Id": "emp-sales"}
    )
    assert resp.status_code == 201
    return resp.json()
