"""权限判定单元测试

测试内容：
1. member 仅可编辑自己担任主负责人的案件
2. department_head / leader 按部门分组判定
3. 未知角色 / 未知职种一律拒绝
4. 查看权限对所有人开放
"""

import pytest
from dandori.core.models import Employee, LeadAssignee, Task
from dandori.core.permissions import (
    can_edit,
    can_edit_task,
    can_manage_employees,
    can_manage_task_masters,
    can_view,
    can_view_task,
    editable_projects,
    my_projects,
    viewable_projects,
)


class TestCanEdit:
    """案件编辑权限"""

    def test_member_assigned_design_can_edit(self, project):
        """设计担当 member 可编辑自己负责的案件"""
        employee = Employee(employee_id="emp-design", role="member", department="Design")
        assert can_edit(employee, project)

    def test_member_not_assigned_cannot_edit(self, project):
        """未担当的 member 不可编辑"""
        employee = Employee(employee_id="emp-other", role="member", department="Sales")
        assert not can_edit(employee, project)

    def test_department_head_same_group_can_edit(self, project):
        """营业部长：案件营业担当属于营业部门 -> 可编辑"""
        head = Employee(employee_id="emp-head", role="department_head", department="Sales")
        assert can_edit(head, project)

    def test_leader_matches_any_lead_group(self, project):
        """leader 与任一主负责人同部门即可"""
        leader = Employee(
            employee_id="emp-leader", role="leader", department="Site Supervisor"
        )
        assert can_edit(leader, project)

    def test_leader_other_group_cannot_edit(self, project):
        """外构部门的 leader 不能编辑没有外构负责人的案件"""
        leader = Employee(employee_id="emp-leader", role="leader", department="Exterior Design")
        assert not can_edit(leader, project)

    def test_lead_without_position_does_not_grant_group_access(self, project):
        """主负责人的职种未知时不计入部门分组"""
        unknown = project.model_copy(
            update={
                "sales": LeadAssignee(employee_id="emp-x", position=None),
                "design": None,
                "construction": None,
            }
        )
        head = Employee(employee_id="emp-head", role="department_head", department="Sales")
        assert not can_edit(head, unknown)

    @pytest.mark.parametrize("role", ["president", "executive", "guest", "", "MEMBER"])
    def test_other_roles_denied(self, project, role):
        """其他角色与未知角色一律拒绝"""
        employee = Employee(employee_id="emp-sales", role=role, department="Sales")
        assert not can_edit(employee, project)

    def test_unknown_department_denied(self, project):
        """未知职种的部门长拒绝"""
        head = Employee(employee_id="emp-head", role="department_head", department="Accounting")
        assert not can_edit(head, project)


class TestOtherPermissions:
    """查看、任务与主数据管理权限"""

    def test_view_is_global(self, project):
        """任何人（包括未知角色）都可查看"""
        stranger = Employee(employee_id="x", role="guest", department="")
        assert can_view(stranger, project)

    def test_task_permissions_follow_project(self, project, now):
        """任务权限与所属案件一致"""
        employee = Employee(employee_id="emp-design", role="member", department="Design")
        task = Task(
            task_id="t1",
            project_id=project.project_id,
            title="Plan",
            created_at=now,
            updated_at=now,
        )
        foreign = task.model_copy(update={"project_id": "another"})
        assert can_edit_task(employee, task, project)
        assert not can_edit_task(employee, foreign, project)
        assert can_view_task(employee, task, project)

    @pytest.mark.parametrize(
        "role,expected",
        [("department_head", True), ("leader", False), ("president", False), ("member", False)],
    )
    def test_master_management(self, role, expected):
        """仅部门长可管理员工与任务模板"""
        employee = Employee(employee_id="e", role=role, department="Sales")
        assert can_manage_employees(employee) is expected
        assert can_manage_task_masters(employee) is expected

    def test_bulk_filters(self, project):
        """my / editable / viewable 只是简单过滤"""
        other = project.model_copy(
            update={"project_id": "p2", "sales": None, "design": None, "construction": None}
        )
        member = Employee(employee_id="emp-sales", role="member", department="Sales")
        assert my_projects(member, [project, other]) == [project]
        assert editable_projects(member, [project, other]) == [project]
        assert viewable_projects(member, [project, other]) == [project, other]
