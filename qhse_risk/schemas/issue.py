"""
Issue schema.

Issues are derived, ephemeral records: recomputed on every evaluation and
never persisted. They feed the "Critical Issues" list and summary cards.
"""

from pydantic import BaseModel, Field

from .enums import IssueCategory, Severity


class Issue(BaseModel):
    """
    A single threshold breach for one project in one category.

    ``sort_value`` grows with the size of the breach regardless of the
    category's polarity (for KPI it is ``100 - kpi``), so issues of the
    same severity can be ordered worst-first with one key.
    """

    model_config = {'populate_by_name': True, 'frozen': True}

    type: IssueCategory = Field(description="Issue category")
    severity: Severity = Field(description="Critical, High or Medium")
    title: str = Field(description="Headline, e.g. '6 Open CARs'")
    project: str = Field(description="Project title")
    project_no: str = Field(alias='projectNo', description="Project number")
    details: str = Field(description="Explanation of the breach")
    count: float = Field(description="Raw metric value shown next to the issue")
    sort_value: float = Field(alias='sortValue', description="Magnitude key, higher is worse")
