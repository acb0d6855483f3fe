"""组织结构 -- 职种、部门分组与案件负责人

DEPARTMENT_DEFINITIONS 是职种到部门分组的唯一映射表，
部门汇总与编辑权限判定共用此表。
"""

from enum import StrEnum

from pydantic import BaseModel, Field


class Position(StrEnum):
    """职种（细粒度岗位标签）"""

    SALES = "Sales"
    SALES_ADMIN = "Sales Admin"
    LOAN_ADMIN = "Loan Admin"
    DESIGN = "Design"
    ARCHITECTURAL_DESIGN = "Architectural Design"
    INTERIOR_COORDINATOR = "IC"
    DETAILED_DESIGN = "Detailed Design"
    STRUCTURAL_DESIGN = "Structural Design"
    PERMIT_DESIGN = "Permit Design"
    CONSTRUCTION = "Construction"
    SITE_SUPERVISOR = "Site Supervisor"
    CONSTRUCTION_ADMIN = "Construction Admin"
    PROCUREMENT = "Procurement & Estimating"
    EXTERIOR_PLANNER = "Exterior Planner"
    EXTERIOR_DESIGN = "Exterior Design"
    EXTERIOR_CONSTRUCTION = "Exterior Construction"
    OTHER = "Other"


class DepartmentGroup(StrEnum):
    """部门分组"""

    SALES = "Sales Dept."
    DESIGN = "Design Dept."
    CONSTRUCTION = "Construction Dept."
    EXTERIOR = "Exterior Dept."


class LeadRole(StrEnum):
    """案件的三个主负责人角色"""

    SALES = "sales"
    DESIGN = "design"
    CONSTRUCTION = "construction"


class DepartmentDefinition(BaseModel):
    """部门定义：部门名 + 所属职种集合"""

    model_config = {"frozen": True}

    name: DepartmentGroup = Field(description="部门分组")
    positions: frozenset[str] = Field(description="所属职种标签")


DEPARTMENT_DEFINITIONS: tuple[DepartmentDefinition, ...] = (
    DepartmentDefinition(
        name=DepartmentGroup.SALES,
        positions=frozenset({Position.SALES, Position.SALES_ADMIN, Position.LOAN_ADMIN}),
    ),
    DepartmentDefinition(
        name=DepartmentGroup.DESIGN,
        positions=frozenset(
            {
                Position.DESIGN,
                Position.ARCHITECTURAL_DESIGN,
                Position.INTERIOR_COORDINATOR,
                Position.DETAILED_DESIGN,
                Position.STRUCTURAL_DESIGN,
                Position.PERMIT_DESIGN,
            }
        ),
    ),
    DepartmentDefinition(
        name=DepartmentGroup.CONSTRUCTION,
        positions=frozenset(
            {
                Position.CONSTRUCTION,
                Position.SITE_SUPERVISOR,
                Position.CONSTRUCTION_ADMIN,
                Position.PROCUREMENT,
            }
        ),
    ),
    DepartmentDefinition(
        name=DepartmentGroup.EXTERIOR,
        positions=frozenset(
            {
                Position.EXTERIOR_PLANNER,
                Position.EXTERIOR_DESIGN,
                Position.EXTERIOR_CONSTRUCTION,
            }
        ),
    ),
)

# 模板负责职种 -> 案件负责人角色（用于任务自动分配）
LEAD_ROLE_POSITIONS: dict[LeadRole, frozenset[str]] = {
    LeadRole.SALES: frozenset({Position.SALES}),
    LeadRole.DESIGN: frozenset({Position.DESIGN, Position.INTERIOR_COORDINATOR}),
    LeadRole.CONSTRUCTION: frozenset({Position.CONSTRUCTION, Position.SITE_SUPERVISOR}),
}


def department_group_of(position: str | None) -> DepartmentGroup | None:
    """职种 -> 部门分组，未知职种返回 None"""
    if not position:
        return None
    for definition in DEPARTMENT_DEFINITIONS:
        if position in definition.positions:
            return definition.name
    return None
