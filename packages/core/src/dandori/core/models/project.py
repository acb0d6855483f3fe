"""Project Domain Model -- 案件

contract_date 是所有任务期限的锚点日。
修改锚点日或负责人不会自动重算已生成的任务，需显式再生成。
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from .enums import ProjectStatus
from .organization import LEAD_ROLE_POSITIONS, LeadRole


class LeadAssignee(BaseModel):
    """案件主负责人（员工 ID + 其职种）"""

    employee_id: str = Field(description="员工 ID")
    position: str | None = Field(default=None, description="该员工的职种")


class Project(BaseModel):
    """案件数据模型"""

    project_id: str = Field(description="唯一标识，ULID 格式")
    customer_name: str = Field(default="", description="顾客名")
    contract_date: date = Field(description="契约日（锚点日）")
    status: ProjectStatus = Field(default=ProjectStatus.POST_CONTRACT, description="案件状态")
    branch_id: str | None = Field(default=None, description="所属据点")
    sales: LeadAssignee | None = Field(default=None, description="营业负责人")
    design: LeadAssignee | None = Field(default=None, description="设计负责人")
    construction: LeadAssignee | None = Field(default=None, description="工事负责人")
    created_at: datetime = Field(description="创建时间")
    updated_at: datetime = Field(description="更新时间")

    def lead(self, role: LeadRole) -> LeadAssignee | None:
        """按角色取主负责人"""
        return getattr(self, role.value)

    def lead_ids(self) -> set[str]:
        """三个主负责人的员工 ID 集合"""
        return {
            assignee.employee_id
            for assignee in (self.sales, self.design, self.construction)
            if assignee is not None
        }

    def department_assignees(self) -> dict[str, str]:
        """模板负责职种 -> 员工 ID，供任务自动分配使用"""
        mapping: dict[str, str] = {}
        for role, positions in LEAD_ROLE_POSITIONS.items():
            assignee = self.lead(role)
            if assignee is None:
                continue
            for position in positions:
                mapping[position] = assignee.employee_id
        return mapping
