"""
Risk Classifier for QHSE projects

Assigns exactly one risk tier (CRITICAL, HIGH, MEDIUM, LOW) to a project
from its normalized quality metrics. Tiers are evaluated top to bottom and
the first matching tier wins; LOW is the default.

Usage:
    from qhse_risk.classifiers import RiskClassifier

    classifier = RiskClassifier()
    classifier.classify({'projectNo': 'P-1', 'carsOpen': 3})
    # Returns: RiskTier.CRITICAL
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Sequence, Union

from qhse_risk.config.rules import DEFAULT_TIER, RISK_RULES, RiskRule
from qhse_risk.schemas.enums import KPIStatus, RiskFilter, RiskTier
from qhse_risk.transformers.metric_normalizer import parse_percentage
from qhse_risk.transformers.project_transformer import ProjectMetrics, to_metrics
from qhse_risk.utils.validators import filter_valid_projects

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassifiedProject:
    """A valid project with its display serial number and risk tier."""
    display_sr_no: int
    record: Mapping[str, Any]
    metrics: ProjectMetrics
    risk_level: RiskTier

    @property
    def project_no(self) -> Any:
        return self.record.get('projectNo')

    @property
    def project_title(self) -> Any:
        return self.record.get('projectTitle')


class RiskClassifier:
    """Ordered rule cascade over normalized project metrics."""

    # Tiers matched by each dashboard filter
    FILTER_TIERS = {
        RiskFilter.ALL: frozenset(RiskTier),
        RiskFilter.CRITICAL: frozenset({RiskTier.CRITICAL}),
        RiskFilter.HIGH_RISK: frozenset({RiskTier.HIGH, RiskTier.CRITICAL}),
        RiskFilter.MEDIUM_RISK: frozenset({RiskTier.MEDIUM}),
        RiskFilter.ON_TRACK: frozenset({RiskTier.LOW}),
    }

    # KPI traffic light lower bounds
    KPI_GREEN_MIN = 90
    KPI_YELLOW_MIN = 70

    def __init__(self, rules: Sequence[RiskRule] = RISK_RULES, default_tier: RiskTier = DEFAULT_TIER):
        """
        Initialize the classifier.

        Args:
            rules: Ordered tier rules, highest tier first
            default_tier: Tier assigned when no rule matches
        """
        self.rules = tuple(rules)
        self.default_tier = default_tier

    def classify_metrics(self, metrics: ProjectMetrics) -> RiskTier:
        """Return the first tier whose rule matches; short-circuits."""
        for rule in self.rules:
            if rule.matches(metrics):
                return rule.tier
        return self.default_tier

    def classify(self, project: Any) -> RiskTier:
        """
        Classify a single project.

        Total over all inputs: missing or malformed values normalize to 0,
        and records without identity are still classified.

        Args:
            project: Raw project mapping or ProjectRecord

        Returns:
            RiskTier
        """
        return self.classify_metrics(to_metrics(project))

    def classify_projects(self, projects: Iterable[Any]) -> List[ClassifiedProject]:
        """
        Classify every valid project of a batch.

        Records without projectNo/projectTitle are excluded. Valid records
        are numbered from 1 in input order.

        Args:
            projects: Raw project mappings or ProjectRecord models

        Returns:
            ClassifiedProject list in input order
        """
        classified = []
        for idx, record in enumerate(filter_valid_projects(projects), start=1):
            metrics = to_metrics(record)
            classified.append(ClassifiedProject(
                display_sr_no=idx,
                record=record,
                metrics=metrics,
                risk_level=self.classify_metrics(metrics),
            ))

        logger.debug(f'Classified {len(classified)} projects')
        return classified


def filter_by_risk(
    classified: Iterable[ClassifiedProject],
    risk_filter: Union[RiskFilter, str] = RiskFilter.ALL,
) -> List[ClassifiedProject]:
    """
    Apply a dashboard risk filter.

    Args:
        classified: Output of RiskClassifier.classify_projects()
        risk_filter: ALL, CRITICAL, HIGH_RISK, MEDIUM_RISK or ON_TRACK

    Returns:
        Matching projects in input order

    Raises:
        ValueError: If risk_filter is not a known filter
    """
    try:
        key = RiskFilter(risk_filter)
    except ValueError:
        valid = ', '.join(f.value for f in RiskFilter)
        raise ValueError(f"Unknown risk filter '{risk_filter}'. Valid filters: {valid}") from None

    tiers = RiskClassifier.FILTER_TIERS[key]
    return [project for project in classified if project.risk_level in tiers]


def kpi_status(value: Any) -> KPIStatus:
    """
    Traffic-light status of a KPI achievement value.

    Args:
        value: Raw KPI percentage ('92%', 75, 'N/A', ...)

    Returns:
        GREEN at 90 and above, YELLOW at 70 and above, RED otherwise
    """
    percent = parse_percentage(value)
    if percent >= RiskClassifier.KPI_GREEN_MIN:
        return KPIStatus.GREEN
    if percent >= RiskClassifier.KPI_YELLOW_MIN:
        return KPIStatus.YELLOW
    return KPIStatus.RED


_default_classifier = RiskClassifier()


def classify(project: Any) -> RiskTier:
    """Classify one project with the default rule table."""
    return _default_classifier.classify(project)
