"""Employee Domain Model -- 员工主数据（核心只读）

role 与 department 保持为字符串，未知取值可被表示并在权限判定中拒绝。
"""

from pydantic import BaseModel, Field


class Employee(BaseModel):
    """员工数据模型"""

    employee_id: str = Field(description="员工 ID")
    name: str = Field(default="", description="姓名")
    email: str = Field(default="", description="邮箱")
    role: str = Field(description="角色：president/executive/department_head/leader/member")
    department: str = Field(default="", description="职种标签")
    branch_id: str | None = Field(default=None, description="所属据点")
