"""
Data schemas for the QHSE risk engine.

Usage:
    from qhse_risk.schemas import ProjectRecord, Issue, RiskTier

    record = ProjectRecord(projectNo='P-101', carsOpen='3')
    record.model_dump(by_alias=True)['carsOpen']  # '3'
"""

from .enums import (
    RiskTier,
    Severity,
    SEVERITY_ORDER,
    IssueCategory,
    KPIStatus,
    RiskFilter,
)
from .project import ProjectRecord, AUDIT_DATE_FIELDS
from .issue import Issue
from .summary import DashboardSummary, SummaryCards, QualityMetrics

__all__ = [
    'RiskTier',
    'Severity',
    'SEVERITY_ORDER',
    'IssueCategory',
    'KPIStatus',
    'RiskFilter',
    'ProjectRecord',
    'AUDIT_DATE_FIELDS',
    'Issue',
    'DashboardSummary',
    'SummaryCards',
    'QualityMetrics',
]
