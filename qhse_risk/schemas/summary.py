"""
Dashboard summary schemas.

Plain numeric counters consumed directly by the summary-card components.
"""

from typing import Dict
from pydantic import BaseModel, Field


class SummaryCards(BaseModel):
    """Counts shown on the "Critical Issues Overview" cards."""

    critical_cars: int = Field(default=0, description="Projects with a Critical CARs issue")
    audit_delays: int = Field(default=0, description="Projects with a Critical audit delay")
    poor_kpi: int = Field(default=0, description="Projects with a KPI issue (High or above)")
    billability_issues: int = Field(default=0, description="Projects over-billing (High or above)")


class DashboardSummary(BaseModel):
    """
    Read-only fold over classified projects and detected issues.

    Dict counters always carry every key of their enum, zero-filled, so
    consumers can index without guarding.
    """

    total_projects: int = Field(description="Valid projects considered")
    risk_counts: Dict[str, int] = Field(description="Projects per RiskTier value")
    high_risk_count: int = Field(description="Projects classified HIGH or CRITICAL")
    severity_floor: str = Field(description="Minimum severity counted in issue_counts")
    issue_counts: Dict[str, int] = Field(description="Issues per IssueCategory at/above the floor")
    severity_counts: Dict[str, int] = Field(description="Issues per Severity value")
    total_issues: int = Field(description="All detected issues")
    total_open_cars: float = Field(description="Sum of open CARs across valid projects")
    total_closed_cars: float = Field(description="Sum of closed CARs across valid projects")
    total_open_observations: float = Field(description="Sum of open observations")
    total_closed_observations: float = Field(description="Sum of closed observations")
    cards: SummaryCards = Field(default_factory=SummaryCards)


class QualityMetrics(BaseModel):
    """Portfolio-level quality management metrics."""

    total_audits: int = 0
    completed_audits: int = 0
    delayed_audits: int = 0
    total_cars: float = 0
    open_cars: float = 0
    closed_cars: float = 0
    total_obs: float = 0
    open_obs: float = 0
    closed_obs: float = 0
    avg_kpi: float = 0
    avg_completion: float = 0
    compliance_rate: float = 0
    quality_score: float = 0
