"""
QHSE project record schema.

Describes the row shape produced by the QHSE project register backend
(a spreadsheet-like REST source). Every value arrives raw: a number, a
numeric string, a percent string such as '83%', an empty string or the
sentinel 'N/A'. The model keeps values untouched; numeric interpretation
belongs to the metric normalizer.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field


class ProjectRecord(BaseModel):
    """
    One project row from the QHSE project register.

    Field names are snake_case; the backend's camelCase keys are accepted
    as aliases and emitted by ``model_dump(by_alias=True)``. Unknown
    columns are preserved.
    """

    model_config = {'populate_by_name': True, 'extra': 'allow'}

    # Identity
    sr_no: Optional[Any] = Field(default=None, alias='srNo', description="Register serial number")
    project_no: Optional[Any] = Field(default=None, alias='projectNo', description="Project number")
    project_title: Optional[Any] = Field(default=None, alias='projectTitle', description="Project title")
    client: Optional[Any] = Field(default=None, description="Client name")
    project_manager: Optional[Any] = Field(default=None, alias='projectManager', description="Project manager")
    project_quality_eng: Optional[Any] = Field(default=None, alias='projectQualityEng', description="Quality engineer")

    # Completion / progress
    project_completion_percent: Optional[Any] = Field(
        default=None, alias='projectCompletionPercent', description="Completion, e.g. '83%'"
    )
    project_kpis_achieved_percent: Optional[Any] = Field(
        default=None, alias='projectKPIsAchievedPercent', description="KPIs achieved, e.g. '90%'"
    )

    # Billability
    quality_billability_percent: Optional[Any] = Field(
        default=None, alias='qualityBillabilityPercent', description="Billed vs planned quality hours"
    )

    # Corrective actions
    cars_open: Optional[Any] = Field(default=None, alias='carsOpen', description="Open CARs")
    cars_closed: Optional[Any] = Field(default=None, alias='carsClosed', description="Closed CARs")
    cars_delayed_closing_no_days: Optional[Any] = Field(
        default=None, alias='carsDelayedClosingNoDays', description="Days CAR closure is overdue"
    )

    # Observations
    obs_open: Optional[Any] = Field(default=None, alias='obsOpen', description="Open observations")
    obs_closed: Optional[Any] = Field(default=None, alias='obsClosed', description="Closed observations")
    obs_delayed_closing_no_days: Optional[Any] = Field(
        default=None, alias='obsDelayedClosingNoDays', description="Days observation closure is overdue"
    )

    # Audits (dates: presence matters, not value)
    delay_in_audits_no_days: Optional[Any] = Field(
        default=None, alias='delayInAuditsNoDays', description="Audit schedule delay in days"
    )
    project_audit_1: Optional[Any] = Field(default=None, alias='projectAudit1')
    project_audit_2: Optional[Any] = Field(default=None, alias='projectAudit2')
    project_audit_3: Optional[Any] = Field(default=None, alias='projectAudit3')
    project_audit_4: Optional[Any] = Field(default=None, alias='projectAudit4')
    client_audit_1: Optional[Any] = Field(default=None, alias='clientAudit1')
    client_audit_2: Optional[Any] = Field(default=None, alias='clientAudit2')

    # Quality plan
    project_quality_plan_status_rev: Optional[Any] = Field(
        default=None, alias='projectQualityPlanStatusRev', description="Quality plan revision"
    )
    project_quality_plan_status_issue_date: Optional[Any] = Field(
        default=None, alias='projectQualityPlanStatusIssueDate', description="Quality plan issue date"
    )


# Backend keys of the project audit date columns counted by quality metrics.
# Client audit columns (clientAudit1-2) are not counted.
AUDIT_DATE_FIELDS = (
    'projectAudit1',
    'projectAudit2',
    'projectAudit3',
    'projectAudit4',
)
