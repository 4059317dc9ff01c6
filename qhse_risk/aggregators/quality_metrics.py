"""
Portfolio quality management metrics.

Soft-coded performance and compliance bands so thresholds can be tuned
without touching the calculation.
"""

from typing import Any, Dict, Iterable, Optional

from qhse_risk.aggregators.dashboard_summary import ensure_classified, projects_frame
from qhse_risk.classifiers.risk_classifier import RiskClassifier
from qhse_risk.schemas.summary import QualityMetrics

# Quality performance ranges, best first (lower bound inclusive)
QUALITY_PERFORMANCE: Dict[str, Dict[str, Any]] = {
    'EXCELLENT': {'min': 95, 'label': 'Excellent'},
    'GOOD': {'min': 85, 'label': 'Good'},
    'FAIR': {'min': 70, 'label': 'Fair'},
    'POOR': {'min': 50, 'label': 'Poor'},
    'CRITICAL': {'min': 0, 'label': 'Critical'},
}

# Compliance status by resolved-issue rate, best first
COMPLIANCE_STATUS: Dict[str, Dict[str, Any]] = {
    'COMPLIANT': {'threshold': 95, 'label': 'Compliant'},
    'MOSTLY_COMPLIANT': {'threshold': 85, 'label': 'Mostly Compliant'},
    'PARTIALLY_COMPLIANT': {'threshold': 70, 'label': 'Partially Compliant'},
    'NON_COMPLIANT': {'threshold': 0, 'label': 'Non-Compliant'},
}

# Quality score weights
SCORE_WEIGHTS = {
    'kpi': 0.4,
    'compliance': 0.3,
    'completion': 0.2,
    'audits_on_time': 0.1,
}


def calculate_quality_metrics(
    projects: Iterable[Any],
    classifier: Optional[RiskClassifier] = None,
) -> QualityMetrics:
    """
    Calculate quality metrics across valid projects.

    - Audits: recorded audit dates; a project with auditDelay > 0 counts
      as one delayed audit
    - avg_kpi: mean over projects reporting a KPI (0% means no data)
    - compliance_rate: closed CARs + observations over all raised,
      100 when none were raised
    - quality_score: weighted blend of KPI, compliance, completion and
      on-time audit rate

    Args:
        projects: Raw project records or ClassifiedProject list
        classifier: Classifier for raw records

    Returns:
        QualityMetrics rounded to one decimal; all zero for no projects
    """
    df = projects_frame(ensure_classified(projects, classifier))
    if df.empty:
        return QualityMetrics()

    total_audits = int(df['audits_recorded'].sum())
    delayed_audits = int((df['audit_delay'] > 0).sum())
    completed_audits = max(total_audits - delayed_audits, 0)

    open_cars = float(df['cars_open'].sum())
    closed_cars = float(df['cars_closed'].sum())
    open_obs = float(df['obs_open'].sum())
    closed_obs = float(df['obs_closed'].sum())

    reported_kpi = df.loc[df['kpi_achieved'] > 0, 'kpi_achieved']
    avg_kpi = float(reported_kpi.mean()) if len(reported_kpi) else 0.0
    avg_completion = float(df['completion'].mean())

    total_issues = open_cars + closed_cars + open_obs + closed_obs
    resolved = closed_cars + closed_obs
    compliance_rate = resolved / total_issues * 100 if total_issues > 0 else 100.0

    audits_on_time = completed_audits / total_audits * 100 if total_audits > 0 else 100.0

    quality_score = (
        avg_kpi * SCORE_WEIGHTS['kpi']
        + compliance_rate * SCORE_WEIGHTS['compliance']
        + avg_completion * SCORE_WEIGHTS['completion']
        + audits_on_time * SCORE_WEIGHTS['audits_on_time']
    )

    return QualityMetrics(
        total_audits=total_audits,
        completed_audits=completed_audits,
        delayed_audits=delayed_audits,
        total_cars=open_cars + closed_cars,
        open_cars=open_cars,
        closed_cars=closed_cars,
        total_obs=open_obs + closed_obs,
        open_obs=open_obs,
        closed_obs=closed_obs,
        avg_kpi=round(avg_kpi, 1),
        avg_completion=round(avg_completion, 1),
        compliance_rate=round(compliance_rate, 1),
        quality_score=round(quality_score, 1),
    )


def quality_performance(score: float) -> str:
    """Performance band key for a quality score (EXCELLENT ... CRITICAL)."""
    for key, band in QUALITY_PERFORMANCE.items():
        if score >= band['min']:
            return key
    return 'CRITICAL'


def compliance_status(rate: float) -> str:
    """Compliance status key for a resolved-issue rate."""
    for key, status in COMPLIANCE_STATUS.items():
        if rate >= status['threshold']:
            return key
    return 'NON_COMPLIANT'
