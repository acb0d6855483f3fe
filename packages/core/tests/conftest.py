"""packages/core 测试配置 -- 核心层 fixture"""

from collections.abc import AsyncGenerator
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest
import pytest_asyncio
from dandori.core.models import Employee, LeadAssignee, Project
from dandori.core.store import StoreGroup, create_store_group

TZ = ZoneInfo("Asia/Tokyo")


@pytest.fixture
def now() -> datetime:
    """测试基准时间：2025-02-15 09:00（东京）"""
    return datetime(2025, 2, 15, 9, 0, tzinfo=TZ)


@pytest_asyncio.fixture
async def core_stores(tmp_path: Path) -> AsyncGenerator[StoreGroup, None]:
    """核心层 Store 实例组"""
    store_group = await create_store_group(tmp_path / "core_test.db")
    yield store_group
    await store_group.conn.close()


@pytest.fixture
def employees() -> dict[str, Employee]:
    """各部门的员工"""
    return {
        "sales": Employee(employee_id="emp-sales", name="Sato", role="member", department="Sales"),
        "design": Employee(
            employee_id="emp-design", name="Suzuki", role="member", department="Design"
        ),
        "construction": Employee(
            employee_id="emp-construction",
            name="Takahashi",
            role="member",
            department="Construction",
        ),
        "sales_head": Employee(
            employee_id="emp-sales-head",
            name="Tanaka",
            role="department_head",
            department="Sales Admin",
        ),
    }


@pytest.fixture
def project(now: datetime) -> Project:
    """契约日 2025-01-01、三个主负责人齐全的案件"""
    return Project(
        project_id="01JPROJECT0000000000000001",
        customer_name="Yamada",
        contract_date=datetime(2025, 1, 1).date(),
        branch_id="tokyo",
        sales=LeadAssignee(employee_id="emp-sales", position="Sales"),
        design=LeadAssignee(employee_id="emp-design", position="Design"),
        construction=LeadAssignee(employee_id="emp-construction", position="Construction"),
        created_at=now,
        updated_at=now,
    )
