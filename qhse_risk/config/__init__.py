"""Configuration: environment settings, thresholds and rule tables."""

from .settings import settings, Settings, ConfigurationError
from .thresholds import IssueThresholds, DEFAULT_THRESHOLDS
from .rules import (
    Condition,
    RiskRule,
    IssueBand,
    CategoryRule,
    RISK_RULES,
    DEFAULT_TIER,
    ISSUE_RULES,
    build_issue_rules,
)

__all__ = [
    'settings',
    'Settings',
    'ConfigurationError',
    'IssueThresholds',
    'DEFAULT_THRESHOLDS',
    'Condition',
    'RiskRule',
    'IssueBand',
    'CategoryRule',
    'RISK_RULES',
    'DEFAULT_TIER',
    'ISSUE_RULES',
    'build_issue_rules',
]
