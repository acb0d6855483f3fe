"""看板范围单元测试"""

from datetime import date

from dandori.core.fiscal import fiscal_year
from dandori.core.models import Employee, ViewMode
from dandori.core.scope import ViewContext, default_mode_for, projects_in_scope


class TestProjectsInScope:
    """视图模式与年度过滤"""

    def _projects(self, project):
        other_branch = project.model_copy(
            update={"project_id": "p2", "branch_id": "osaka", "sales": None, "design": None,
                    "construction": None}
        )
        last_year = project.model_copy(
            update={"project_id": "p3", "contract_date": date(2023, 9, 1)}
        )
        return [project, other_branch, last_year]

    def test_personal_mode(self, project, employees):
        """个人视图：自己担任主负责人的案件"""
        context = ViewContext(employee=employees["design"], mode=ViewMode.PERSONAL)
        scoped = projects_in_scope(context, self._projects(project))
        assert [p.project_id for p in scoped] == [project.project_id, "p3"]

    def test_branch_mode(self, project):
        """据点视图：同一据点的案件"""
        employee = Employee(employee_id="e", role="leader", department="Sales", branch_id="osaka")
        context = ViewContext(employee=employee, mode=ViewMode.BRANCH)
        assert [p.project_id for p in projects_in_scope(context, self._projects(project))] == [
            "p2"
        ]

    def test_company_mode_with_fiscal_year(self, project):
        """全社视图 + 年度：只按契约日所属年度过滤"""
        context = ViewContext(mode=ViewMode.COMPANY, fiscal_year=fiscal_year(2024))
        scoped = projects_in_scope(context, self._projects(project))
        assert [p.project_id for p in scoped] == [project.project_id, "p2"]

    def test_unknown_mode_is_empty(self, project, employees):
        """未知模式得到空结果"""
        context = ViewContext(employee=employees["design"], mode="everything")
        assert projects_in_scope(context, self._projects(project)) == []

    def test_anonymous_personal_is_empty(self, project):
        """匿名调用者的个人视图为空"""
        assert projects_in_scope(ViewContext(), self._projects(project)) == []


class TestDefaultMode:
    """默认视图模式"""

    def test_management_defaults_to_company(self):
        """社长 / 役员 / 部门长默认全社视图"""
        for role in ("president", "executive", "department_head"):
            assert default_mode_for(Employee(employee_id="e", role=role)) == ViewMode.COMPANY

    def test_others_default_to_personal(self):
        """其余角色与匿名默认个人视图"""
        assert default_mode_for(Employee(employee_id="e", role="member")) == ViewMode.PERSONAL
        assert default_mode_for(None) == ViewMode.PERSONAL
