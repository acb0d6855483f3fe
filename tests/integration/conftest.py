"""集成测试共享 fixture"""

from collections.abc import AsyncGenerator
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest
import pytest_asyncio
from dandori.core.clock import fixed_clock
from dandori.core.models import Employee, TaskTemplate
from dandori.core.store import StoreGroup, create_store_group
from httpx import ASGITransport, AsyncClient

# 三个模板：偏移 0 / 30 / 未设置
PIPELINE_CATALOG = (
    TaskTemplate(template_id=1, title="Contract", responsible_position="Sales",
                 importance="S", days_from_anchor=0),
    TaskTemplate(template_id=2, title="Plan review", responsible_position="Design",
                 importance="A", days_from_anchor=30),
    TaskTemplate(template_id=3, title="Ceremony", responsible_position="Sales"),
)


@pytest.fixture
def pipeline_catalog() -> tuple[TaskTemplate, ...]:
    """偏移 0 / 30 / 未设置 的三模板目录"""
    return PIPELINE_CATALOG


@pytest.fixture
def pipeline_now() -> datetime:
    """评估时间 2025-02-15"""
    return datetime(2025, 2, 15, 9, 0, tzinfo=ZoneInfo("Asia/Tokyo"))


@pytest_asyncio.fixture
async def integration_stores(tmp_path: Path) -> AsyncGenerator[StoreGroup, None]:
    """集成测试用 Store 实例组，预置员工"""
    store_group = await create_store_group(tmp_path / "integration.db")
    for employee in (
        Employee(employee_id="E", role="member", department="Design"),
        Employee(employee_id="E2", role="member", department="Sales"),
        Employee(employee_id="H", role="department_head", department="Sales"),
        Employee(employee_id="S", role="member", department="Sales"),
    ):
        await store_group.employee_store.upsert_employee(employee)
    await store_group.conn.commit()
    yield store_group
    await store_group.conn.close()


@pytest_asyncio.fixture
async def integration_app(integration_stores: StoreGroup, pipeline_now: datetime):
    """集成测试用 FastAPI app"""
    from dandori.gateway.main import create_app
    from dandori.gateway.services.dashboard_hub import DashboardHub

    app = create_app()
    clock = fixed_clock(pipeline_now)
    app.state.store_group = integration_stores
    app.state.clock = clock
    app.state.catalog = PIPELINE_CATALOG
    app.state.dashboard_hub = DashboardHub(integration_stores, clock, debounce_seconds=0)

    yield app

    await app.state.dashboard_hub.close()


@pytest_asyncio.fixture
async def client(integration_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=integration_app),
        base_url="http://test",
    ) as ac:
        yield ac
