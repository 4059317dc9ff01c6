"""
Rule tables for risk classification and issue detection.

Both cascades are ordered data rather than nested conditionals:

- RISK_RULES: one RiskRule per tier, evaluated top to bottom. A rule
  matches when any of its clauses matches; a clause matches when all of
  its conditions hold.
- build_issue_rules(): one CategoryRule per issue category, each with
  ordered severity bands and an explicit polarity.

Metric names refer to attributes of ProjectMetrics.
"""

import operator
from dataclasses import dataclass
from typing import Callable, Dict, Literal, Optional, Tuple

from qhse_risk.config.thresholds import IssueThresholds, DEFAULT_THRESHOLDS
from qhse_risk.schemas.enums import IssueCategory, RiskTier, Severity

OPERATORS: Dict[str, Callable[[float, float], bool]] = {
    '>': operator.gt,
    '>=': operator.ge,
    '<': operator.lt,
    '<=': operator.le,
    '==': operator.eq,
}

Polarity = Literal['max', 'min']


@dataclass(frozen=True)
class Condition:
    """Comparison of one normalized metric against a threshold."""
    metric: str
    op: str
    threshold: float

    def __post_init__(self):
        if self.op not in OPERATORS:
            raise ValueError(
                f"Unknown operator '{self.op}'. Valid operators: {', '.join(OPERATORS)}"
            )

    def holds(self, metrics) -> bool:
        return OPERATORS[self.op](getattr(metrics, self.metric), self.threshold)


@dataclass(frozen=True)
class RiskRule:
    """Tier assigned when any clause (an all-of tuple of conditions) holds."""
    tier: RiskTier
    clauses: Tuple[Tuple[Condition, ...], ...]

    def matches(self, metrics) -> bool:
        return any(
            all(condition.holds(metrics) for condition in clause)
            for clause in self.clauses
        )


def _c(metric: str, op: str, threshold: float) -> Condition:
    return Condition(metric, op, threshold)


# Management-attention triage: open non-conformances and audit breaches
# dominate billability, which dominates soft KPI performance.
RISK_RULES: Tuple[RiskRule, ...] = (
    RiskRule(RiskTier.CRITICAL, (
        (_c('cars_open', '>=', 3),),
        (_c('obs_open', '>=', 5),),
        (_c('audit_delay', '>=', 30),),                          # over a month late
        (_c('completion', '>=', 80), _c('cars_open', '>', 0)),   # near completion with CARs
        (_c('billability', '<', 30), _c('completion', '>', 50)), # poor billability mid-project
        (_c('cars_delayed', '>=', 45),),
        (_c('obs_delayed', '>=', 60),),
    )),
    RiskRule(RiskTier.HIGH, (
        (_c('cars_open', '>=', 1),),
        (_c('obs_open', '>=', 2),),
        (_c('audit_delay', '>', 0),),
        (_c('billability', '<', 50),),
        (_c('kpi_number', '<', 70),),
        (_c('completion', '>=', 90), _c('cars_open', '>', 0)),
        (_c('completion', '>=', 90), _c('obs_open', '>', 0)),
        (_c('cars_delayed', '>', 0),),
        (_c('obs_delayed', '>', 0),),
    )),
    RiskRule(RiskTier.MEDIUM, (
        (_c('billability', '<', 70),),
        (_c('kpi_number', '<', 85),),
        (_c('completion', '<', 30), _c('billability', '<', 60)),
    )),
)

DEFAULT_TIER = RiskTier.LOW


@dataclass(frozen=True)
class IssueBand:
    """
    One severity band within a category.

    Attributes:
        severity: Severity emitted when the band matches
        condition: Test applied to the project's metrics
        details: Explanation template, formatted with display values
        sort_metric: Metric used for sort_value (defaults to the category metric)
        details_when_delayed: Alternative template used when the category's
            delay_metric is positive
    """
    severity: Severity
    condition: Condition
    details: str
    sort_metric: Optional[str] = None
    details_when_delayed: Optional[str] = None


@dataclass(frozen=True)
class CategoryRule:
    """
    Issue detection rule for one category.

    Attributes:
        category: Issue category
        metric: Primary metric of the category
        polarity: 'max' when a higher value is worse, 'min' when lower is worse
        title: Title template, formatted with display values
        bands: Severity bands, first match wins
        count_metric: Metric reported as Issue.count (defaults to metric)
        requires_data: Skip the category when the metric is 0 ("no data")
        delay_metric: Metric selecting details_when_delayed
        ceiling: Reference value for 'min' polarity (sort_value = ceiling - value)
    """
    category: IssueCategory
    metric: str
    polarity: Polarity
    title: str
    bands: Tuple[IssueBand, ...]
    count_metric: Optional[str] = None
    requires_data: bool = False
    delay_metric: Optional[str] = None
    ceiling: float = 100.0

    def sort_value(self, value: float) -> float:
        if self.polarity == 'min':
            return self.ceiling - value
        return value


def build_issue_rules(thresholds: IssueThresholds = DEFAULT_THRESHOLDS) -> Tuple[CategoryRule, ...]:
    """
    Build the ordered category rules for the given thresholds.

    Args:
        thresholds: Band limits

    Returns:
        Category rules in detection order: CARs, Audit, KPI, Billability,
        Observations
    """
    t = thresholds
    return (
        CategoryRule(
            category=IssueCategory.CARS,
            metric='cars_open',
            polarity='max',
            title='{cars_open} Open CARs',
            delay_metric='cars_delayed',
            bands=(
                IssueBand(
                    Severity.CRITICAL, _c('cars_open', '>', t.cars_critical),
                    details='Multiple open CARs requiring attention',
                    details_when_delayed='{cars_delayed} days delayed closing',
                ),
                IssueBand(
                    Severity.HIGH, _c('cars_open', '>=', t.cars_high),
                    details='Several open CARs need attention',
                    details_when_delayed='{cars_delayed} days delayed closing',
                ),
            ),
        ),
        CategoryRule(
            category=IssueCategory.AUDIT,
            metric='audit_delay',
            polarity='max',
            title='Audit Delayed {audit_delay} Days',
            bands=(
                IssueBand(
                    Severity.CRITICAL, _c('audit_delay', '>', t.audit_critical),
                    details='Critical audit timeline breach requiring immediate action',
                ),
                IssueBand(
                    Severity.HIGH, _c('audit_delay', '>=', t.audit_high),
                    details='Audit schedule needs attention',
                ),
            ),
        ),
        CategoryRule(
            category=IssueCategory.KPI,
            metric='kpi_achieved',
            polarity='min',
            title='KPI Achievement: {kpi_achieved}%',
            requires_data=True,
            bands=(
                IssueBand(
                    Severity.CRITICAL, _c('kpi_achieved', '<', t.kpi_critical),
                    details='Significantly below acceptable performance threshold',
                ),
                IssueBand(
                    Severity.HIGH, _c('kpi_achieved', '<', t.kpi_high),
                    details='Below target performance threshold',
                ),
            ),
        ),
        CategoryRule(
            category=IssueCategory.BILLABILITY,
            metric='billability',
            polarity='max',
            title='Quality Billability: {billability}%',
            requires_data=True,
            bands=(
                IssueBand(
                    Severity.CRITICAL, _c('billability', '>', t.billability_critical),
                    details='Critical over-billability - potential scope creep and budget impact',
                ),
                IssueBand(
                    Severity.HIGH, _c('billability', '>', t.billability_high),
                    details='Over-billability detected - monitor for scope creep',
                ),
            ),
        ),
        CategoryRule(
            category=IssueCategory.OBSERVATIONS,
            metric='obs_delayed',
            polarity='max',
            title='{obs_open} Open Observations',
            count_metric='obs_open',
            bands=(
                IssueBand(
                    Severity.CRITICAL, _c('obs_delayed', '>', t.obs_critical_delay),
                    details='{obs_delayed} days delayed - critical overdue',
                ),
                IssueBand(
                    Severity.MEDIUM, _c('obs_delayed', '>=', t.obs_high_delay),
                    details='{obs_delayed} days delayed closing',
                ),
                IssueBand(
                    Severity.HIGH, _c('obs_open', '>', t.obs_high_count),
                    details='High volume of open observations requiring attention',
                    sort_metric='obs_open',
                ),
            ),
        ),
    )


ISSUE_RULES: Tuple[CategoryRule, ...] = build_issue_rules()
