"""
Closed vocabularies shared by the classifier, detector and aggregator.

Values match the strings the dashboard renders, so an enum member can be
passed straight to a badge or filter without translation.
"""

from enum import Enum


class RiskTier(str, Enum):
    """Single-valued triage classification assigned to every project."""
    CRITICAL = "CRITICAL"  # Immediate management attention
    HIGH = "HIGH"          # Management review
    MEDIUM = "MEDIUM"      # Monitor closely
    LOW = "LOW"            # On track


class Severity(str, Enum):
    """Issue severity, ordered Critical > High > Medium."""
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"

    @property
    def ordinal(self) -> int:
        return SEVERITY_ORDER[self]


SEVERITY_ORDER = {
    Severity.CRITICAL: 3,
    Severity.HIGH: 2,
    Severity.MEDIUM: 1,
}


class IssueCategory(str, Enum):
    """Category an issue is raised under."""
    CARS = "CARs"
    AUDIT = "Audit"
    KPI = "KPI"
    BILLABILITY = "Billability"
    OBSERVATIONS = "Observations"


class KPIStatus(str, Enum):
    """Traffic-light status for a KPI achievement percentage."""
    GREEN = "Green"
    YELLOW = "Yellow"
    RED = "Red"


class RiskFilter(str, Enum):
    """Project table filters offered by the status dashboard."""
    ALL = "ALL"
    CRITICAL = "CRITICAL"
    HIGH_RISK = "HIGH_RISK"      # HIGH or CRITICAL
    MEDIUM_RISK = "MEDIUM_RISK"
    ON_TRACK = "ON_TRACK"        # LOW
