"""Normalization of raw QHSE register rows into project metrics."""
from dataclasses import dataclass, fields
from typing import Any

from qhse_risk.schemas.project import AUDIT_DATE_FIELDS
from qhse_risk.transformers.metric_normalizer import (
    is_missing,
    parse_number,
    parse_percentage,
)
from qhse_risk.utils.validators import as_record


@dataclass(frozen=True)
class ProjectMetrics:
    """
    Normalized metrics of one project.

    Every value is a finite, non-negative float; 0 stands for "no data".

    Attributes:
        completion: Project completion percent
        billability: Quality billability percent
        kpi_achieved: KPIs achieved percent ('%' stripped), read by issue
            detection and quality metrics
        kpi_number: KPIs achieved read as a plain number, read by the risk
            cascade; '95%' is not a number and gives 0
        cars_open / cars_closed: Corrective action request counts
        cars_delayed: Days CAR closure is overdue
        obs_open / obs_closed: Observation counts
        obs_delayed: Days observation closure is overdue
        audit_delay: Audit schedule delay in days
        audits_recorded: Project audit date columns holding a value
    """
    completion: float = 0.0
    billability: float = 0.0
    kpi_achieved: float = 0.0
    kpi_number: float = 0.0
    cars_open: float = 0.0
    cars_closed: float = 0.0
    cars_delayed: float = 0.0
    obs_open: float = 0.0
    obs_closed: float = 0.0
    obs_delayed: float = 0.0
    audit_delay: float = 0.0
    audits_recorded: int = 0


METRIC_FIELDS = tuple(f.name for f in fields(ProjectMetrics))


def to_metrics(project: Any) -> ProjectMetrics:
    """
    Normalize the metric columns of one project.

    Args:
        project: Raw project mapping or ProjectRecord

    Returns:
        ProjectMetrics; never raises
    """
    record = as_record(project)
    kpi = record.get('projectKPIsAchievedPercent')
    return ProjectMetrics(
        completion=parse_percentage(record.get('projectCompletionPercent')),
        billability=parse_percentage(record.get('qualityBillabilityPercent')),
        kpi_achieved=parse_percentage(kpi),
        kpi_number=parse_number(kpi),
        cars_open=parse_number(record.get('carsOpen')),
        cars_closed=parse_number(record.get('carsClosed')),
        cars_delayed=parse_number(record.get('carsDelayedClosingNoDays')),
        obs_open=parse_number(record.get('obsOpen')),
        obs_closed=parse_number(record.get('obsClosed')),
        obs_delayed=parse_number(record.get('obsDelayedClosingNoDays')),
        audit_delay=parse_number(record.get('delayInAuditsNoDays')),
        audits_recorded=sum(
            1 for field in AUDIT_DATE_FIELDS if not is_missing(record.get(field))
        ),
    )
