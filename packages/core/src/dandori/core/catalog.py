"""任务模板目录 -- 按顺序定义的标准业务流程

内置默认目录覆盖从契约到交房的标准流程；
也可通过 DANDORI_TASK_CATALOG_PATH 指定 JSON 文件替换。
"""

from pathlib import Path

import structlog
from pydantic import TypeAdapter, ValidationError

from .config import get_catalog_path
from .errors import CatalogError
from .models.organization import Position
from .models.template import TaskTemplate

log = structlog.get_logger()

_CATALOG_ADAPTER = TypeAdapter(list[TaskTemplate])

DEFAULT_CATALOG: tuple[TaskTemplate, ...] = (
    TaskTemplate(
        template_id=1,
        title="Pre-contract loan consultation",
        phase="contract",
        responsible_position=Position.LOAN_ADMIN,
        importance="A",
        days_from_anchor=-14,
        purpose="Confirm the customer's borrowing capacity before the contract is signed.",
        tools="Loan simulation sheet",
    ),
    TaskTemplate(
        template_id=2,
        title="Contract signing and deposit receipt",
        phase="contract",
        responsible_position=Position.SALES,
        importance="S",
        days_from_anchor=0,
        purpose="Conclude the construction contract and receive the contract payment.",
        dos="Walk the customer through every clause of the contract.",
        donts="Do not promise a handover date before the construction schedule is fixed.",
        required_materials="Contract, important-matters explanation, receipt",
    ),
    TaskTemplate(
        template_id=3,
        title="Loan formal application",
        phase="contract",
        responsible_position=Position.LOAN_ADMIN,
        importance="S",
        days_from_anchor=7,
        required_materials="Income certificate, contract copy",
    ),
    TaskTemplate(
        template_id=4,
        title="Site survey",
        phase="design",
        responsible_position=Position.DESIGN,
        importance="A",
        days_from_anchor=10,
        purpose="Measure the lot and check road access, utilities and neighbouring buildings.",
        tools="Laser level, survey app",
    ),
    TaskTemplate(
        template_id=5,
        title="Floor plan finalization",
        phase="design",
        responsible_position=Position.DESIGN,
        importance="S",
        days_from_anchor=30,
        dos="Get the customer's signature on the final plan.",
    ),
    TaskTemplate(
        template_id=6,
        title="Interior coordination meeting",
        phase="design",
        responsible_position=Position.INTERIOR_COORDINATOR,
        importance="A",
        days_from_anchor=45,
        purpose="Decide finishes, fixtures and colour schemes.",
        tools="Sample book",
    ),
    TaskTemplate(
        template_id=7,
        title="Structural calculation",
        phase="design",
        responsible_position=Position.STRUCTURAL_DESIGN,
        importance="A",
        days_from_anchor=50,
    ),
    TaskTemplate(
        template_id=8,
        title="Building permit application",
        phase="design",
        responsible_position=Position.PERMIT_DESIGN,
        importance="S",
        days_from_anchor=60,
        donts="Do not apply before the floor plan is signed off.",
    ),
    TaskTemplate(
        template_id=9,
        title="Detailed drawings",
        phase="design",
        responsible_position=Position.DETAILED_DESIGN,
        importance="A",
        days_from_anchor=70,
    ),
    TaskTemplate(
        template_id=10,
        title="Estimating and material ordering",
        phase="construction",
        responsible_position=Position.PROCUREMENT,
        importance="A",
        days_from_anchor=80,
        notes="Order long lead-time items first.",
    ),
    TaskTemplate(
        template_id=11,
        title="Ground-breaking ceremony",
        phase="construction",
        responsible_position=Position.SALES,
        importance="B",
        days_from_anchor=None,
        purpose="Schedule with the customer; the date depends on their calendar.",
    ),
    TaskTemplate(
        template_id=12,
        title="Construction start",
        phase="construction",
        responsible_position=Position.CONSTRUCTION,
        importance="S",
        days_from_anchor=90,
        required_materials="Construction schedule, neighbour notice",
    ),
    TaskTemplate(
        template_id=13,
        title="Foundation inspection",
        phase="construction",
        responsible_position=Position.SITE_SUPERVISOR,
        importance="S",
        days_from_anchor=105,
    ),
    TaskTemplate(
        template_id=14,
        title="Framing and roof raising",
        phase="construction",
        responsible_position=Position.CONSTRUCTION,
        importance="A",
        days_from_anchor=120,
    ),
    TaskTemplate(
        template_id=15,
        title="Mid-construction inspection",
        phase="construction",
        responsible_position=Position.SITE_SUPERVISOR,
        importance="S",
        days_from_anchor=140,
    ),
    TaskTemplate(
        template_id=16,
        title="Exterior plan proposal",
        phase="exterior",
        responsible_position=Position.EXTERIOR_PLANNER,
        importance="B",
        days_from_anchor=150,
    ),
    TaskTemplate(
        template_id=17,
        title="Exterior construction",
        phase="exterior",
        responsible_position=Position.EXTERIOR_CONSTRUCTION,
        importance="B",
        days_from_anchor=175,
    ),
    TaskTemplate(
        template_id=18,
        title="Completion inspection",
        phase="handover",
        responsible_position=Position.SITE_SUPERVISOR,
        importance="S",
        days_from_anchor=190,
    ),
    TaskTemplate(
        template_id=19,
        title="Final payment confirmation",
        phase="handover",
        responsible_position=Position.SALES_ADMIN,
        importance="S",
        days_from_anchor=200,
    ),
    TaskTemplate(
        template_id=20,
        title="Handover",
        phase="handover",
        responsible_position=Position.SALES,
        importance="S",
        days_from_anchor=None,
    ),
    TaskTemplate(
        template_id=21,
        title="One-month after-service visit",
        phase="after_service",
        responsible_position=Position.CONSTRUCTION_ADMIN,
        importance="B",
        days_from_anchor=None,
    ),
)


def _check_unique_ids(templates: list[TaskTemplate]) -> None:
    seen: set[int] = set()
    for template in templates:
        if template.template_id in seen:
            raise CatalogError(f"Duplicate template_id {template.template_id} in catalog")
        seen.add(template.template_id)


def load_catalog(path: Path) -> tuple[TaskTemplate, ...]:
    """从 JSON 文件加载模板目录（数组，保持文件中的顺序）

    Raises:
        CatalogError: 文件无法读取、格式不合法或 template_id 重复
    """
    try:
        templates = _CATALOG_ADAPTER.validate_json(path.read_bytes())
    except (OSError, ValidationError) as e:
        raise CatalogError(f"Cannot load task catalog from {path}: {e}") from e

    _check_unique_ids(templates)
    log.info("task_catalog_loaded", path=str(path), template_count=len(templates))
    return tuple(templates)


def get_catalog() -> tuple[TaskTemplate, ...]:
    """当前生效的模板目录"""
    path = get_catalog_path()
    if path is None:
        return DEFAULT_CATALOG
    return load_catalog(path)
