"""
Dashboard summary aggregation.

Folds classified projects and detected issues into the plain counters the
summary cards display. Nothing is mutated; every call recomputes from its
inputs.
"""

from dataclasses import asdict
from typing import Any, Iterable, List, Optional, Union

import pandas as pd

from qhse_risk.classifiers.risk_classifier import ClassifiedProject, RiskClassifier
from qhse_risk.schemas.enums import IssueCategory, RiskTier, Severity, SEVERITY_ORDER
from qhse_risk.schemas.issue import Issue
from qhse_risk.schemas.summary import DashboardSummary, SummaryCards
from qhse_risk.transformers.project_transformer import METRIC_FIELDS

# Card -> (category, minimum severity)
CARD_DEFINITIONS = {
    'critical_cars': (IssueCategory.CARS, Severity.CRITICAL),
    'audit_delays': (IssueCategory.AUDIT, Severity.CRITICAL),
    'poor_kpi': (IssueCategory.KPI, Severity.HIGH),
    'billability_issues': (IssueCategory.BILLABILITY, Severity.HIGH),
}

_TIERS = [tier.value for tier in RiskTier]
_CATEGORIES = [category.value for category in IssueCategory]
_SEVERITIES = [severity.value for severity in Severity]


def ensure_classified(
    projects: Iterable[Any],
    classifier: Optional[RiskClassifier] = None,
) -> List[ClassifiedProject]:
    """
    Accept raw records or already-classified projects.

    Raw records are filtered for identity and classified; a list of
    ClassifiedProject is passed through.

    Raises:
        TypeError: If classified and raw projects are mixed
    """
    projects = list(projects or [])
    n_classified = sum(isinstance(p, ClassifiedProject) for p in projects)
    if n_classified and n_classified < len(projects):
        raise TypeError(
            f'Expected raw records or ClassifiedProject items, got a mix '
            f'({n_classified} classified of {len(projects)})'
        )
    if n_classified:
        return projects
    classifier = classifier or RiskClassifier()
    return classifier.classify_projects(projects)


def projects_frame(classified: List[ClassifiedProject]) -> pd.DataFrame:
    """One row per classified project: risk_level plus normalized metrics."""
    rows = [
        {'risk_level': project.risk_level.value, **asdict(project.metrics)}
        for project in classified
    ]
    return pd.DataFrame(rows, columns=['risk_level', *METRIC_FIELDS])


def issues_frame(issues: Iterable[Issue]) -> pd.DataFrame:
    """One row per issue: category, severity and severity ordinal."""
    rows = [
        {
            'type': issue.type.value,
            'severity': issue.severity.value,
            'ordinal': SEVERITY_ORDER[issue.severity],
        }
        for issue in issues
    ]
    return pd.DataFrame(rows, columns=['type', 'severity', 'ordinal'])


def _counts(series: pd.Series, keys: List[str]) -> dict:
    counts = series.value_counts().reindex(keys, fill_value=0)
    return {key: int(counts[key]) for key in keys}


def count_issues_at_or_above(
    df: pd.DataFrame,
    floor: Severity,
    category: Optional[IssueCategory] = None,
) -> int:
    """Count issues of a category (or all) whose severity is at least floor."""
    mask = df['ordinal'] >= floor.ordinal
    if category is not None:
        mask &= df['type'] == category.value
    return int(mask.sum())


def summarize(
    projects: Iterable[Any],
    issues: Iterable[Issue],
    severity_floor: Union[Severity, str] = Severity.CRITICAL,
    classifier: Optional[RiskClassifier] = None,
) -> DashboardSummary:
    """
    Build dashboard counters.

    Args:
        projects: Raw project records or ClassifiedProject list
        issues: Issues detected for the same projects (ranked or not)
        severity_floor: Minimum severity counted in issue_counts
        classifier: Classifier for raw records (default rule table if omitted)

    Returns:
        DashboardSummary with zero-filled per-tier, per-category and
        per-severity counters

    Raises:
        ValueError: If severity_floor names no severity
        TypeError: If projects mixes raw records and ClassifiedProject items
    """
    floor = Severity(severity_floor)
    classified = ensure_classified(projects, classifier)

    df = projects_frame(classified)
    idf = issues_frame(issues)

    risk_counts = _counts(df['risk_level'], _TIERS)
    at_floor = idf[idf['ordinal'] >= floor.ordinal]

    cards = SummaryCards(**{
        name: count_issues_at_or_above(idf, card_floor, category)
        for name, (category, card_floor) in CARD_DEFINITIONS.items()
    })

    return DashboardSummary(
        total_projects=len(df),
        risk_counts=risk_counts,
        high_risk_count=risk_counts[RiskTier.HIGH.value] + risk_counts[RiskTier.CRITICAL.value],
        severity_floor=floor.value,
        issue_counts=_counts(at_floor['type'], _CATEGORIES),
        severity_counts=_counts(idf['severity'], _SEVERITIES),
        total_issues=len(idf),
        total_open_cars=float(df['cars_open'].sum()),
        total_closed_cars=float(df['cars_closed'].sum()),
        total_open_observations=float(df['obs_open'].sum()),
        total_closed_observations=float(df['obs_closed'].sum()),
        cards=cards,
    )
