"""
QHSE project risk classification and critical-issue detection.

Turns heterogeneous QHSE project register rows into a risk tier per
project, a ranked list of issues, and dashboard summary counters.

Usage:
    from qhse_risk import classify, detect_issues, rank, summarize

    tier = classify({'projectNo': 'P-7', 'carsOpen': '3'})
    issues = rank(detect_issues(projects))
    summary = summarize(projects, issues)
"""

from .transformers.metric_normalizer import parse_number, parse_percentage
from .schemas import (
    RiskTier,
    Severity,
    IssueCategory,
    KPIStatus,
    RiskFilter,
    ProjectRecord,
    Issue,
    DashboardSummary,
    QualityMetrics,
)
from .classifiers.risk_classifier import RiskClassifier, classify, filter_by_risk, kpi_status
from .detectors.issue_detector import IssueDetector, detect_issues, filter_issues
from .detectors.severity_ranker import rank
from .aggregators.dashboard_summary import summarize
from .aggregators.quality_metrics import calculate_quality_metrics
from .engine import QHSERiskEngine, EngineResult

__all__ = [
    'parse_number',
    'parse_percentage',
    'RiskTier',
    'Severity',
    'IssueCategory',
    'KPIStatus',
    'RiskFilter',
    'ProjectRecord',
    'Issue',
    'DashboardSummary',
    'QualityMetrics',
    'RiskClassifier',
    'classify',
    'filter_by_risk',
    'kpi_status',
    'IssueDetector',
    'detect_issues',
    'filter_issues',
    'rank',
    'summarize',
    'calculate_quality_metrics',
    'QHSERiskEngine',
    'EngineResult',
]
