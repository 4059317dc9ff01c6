"""
Issue detection thresholds.

Defaults are the values used by the QHSE "Critical Issues" view. Any of
them can be overridden through Settings (QHSE_THRESHOLD_<NAME>).
"""

from pydantic import BaseModel, Field


class IssueThresholds(BaseModel):
    """Per-category band limits for issue detection."""

    model_config = {'frozen': True}

    # CARs: higher open count is worse
    cars_critical: float = Field(default=5, description="Critical when carsOpen > value")
    cars_high: float = Field(default=3, description="High when carsOpen >= value")

    # Audits: higher delay is worse
    audit_critical: float = Field(default=10, description="Critical when auditDelay > value")
    audit_high: float = Field(default=5, description="High when auditDelay >= value")

    # KPI: lower achievement is worse
    kpi_critical: float = Field(default=60, description="Critical when 0 < kpi < value")
    kpi_high: float = Field(default=70, description="High when 0 < kpi < value")

    # Billability: over-billing (scope creep) is the problem
    billability_critical: float = Field(default=120, description="Critical when billability > value")
    billability_high: float = Field(default=100, description="High when billability > value")

    # Observations: delay bands take precedence over raw count
    obs_critical_delay: float = Field(default=14, description="Critical when obsDelayed > value")
    obs_high_delay: float = Field(default=7, description="Medium when obsDelayed >= value")
    obs_high_count: float = Field(default=10, description="High when obsOpen > value")


DEFAULT_THRESHOLDS = IssueThresholds()
