"""
QHSE project risk engine.

Runs the full pipeline over a batch of project records:

    records -> normalize -> classify -> detect issues -> rank -> summarize

Each evaluate() call recomputes everything from its input. The engine
keeps configuration only, so overlapping calls are safe; discarding stale
results is up to the caller.

Usage:
    from qhse_risk import QHSERiskEngine

    engine = QHSERiskEngine()
    result = engine.evaluate(projects)
    result.summary.risk_counts['CRITICAL']
    result.issues[0].title
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

from qhse_risk.aggregators.dashboard_summary import summarize
from qhse_risk.aggregators.quality_metrics import calculate_quality_metrics
from qhse_risk.classifiers.risk_classifier import ClassifiedProject, RiskClassifier
from qhse_risk.config.settings import Settings, settings as default_settings
from qhse_risk.detectors.issue_detector import IssueDetector
from qhse_risk.detectors.severity_ranker import rank
from qhse_risk.schemas.enums import RiskTier, Severity
from qhse_risk.schemas.issue import Issue
from qhse_risk.schemas.summary import DashboardSummary, QualityMetrics
from qhse_risk.transformers.metric_normalizer import is_missing

logger = logging.getLogger(__name__)


@dataclass
class EngineResult:
    """Everything the dashboard needs from one evaluation."""
    classified: List[ClassifiedProject]
    issues: List[Issue]
    summary: DashboardSummary
    quality: QualityMetrics = field(default_factory=QualityMetrics)

    def risk_levels(self) -> dict:
        """Map projectNo (or title) to its risk tier."""
        return {
            str(p.project_title if is_missing(p.project_no) else p.project_no): p.risk_level
            for p in self.classified
        }


class QHSERiskEngine:
    """Main engine for QHSE risk classification and issue detection."""

    def __init__(self, settings: Optional[Settings] = None,
                 severity_floor: Optional[Severity] = None):
        """
        Initialize the engine.

        Args:
            settings: Settings providing thresholds and the severity floor
            severity_floor: Overrides the configured severity floor

        Raises:
            ConfigurationError: If configured thresholds or floor are invalid
        """
        self.settings = settings or default_settings
        self.classifier = RiskClassifier()
        self.detector = IssueDetector(thresholds=self.settings.load_issue_thresholds())
        self.severity_floor = severity_floor or self.settings.severity_floor()

    def classify(self, project: Any) -> RiskTier:
        return self.classifier.classify(project)

    def detect_issues(self, projects: Iterable[Any]) -> List[Issue]:
        return self.detector.detect_issues(projects)

    def evaluate(self, projects: Iterable[Any]) -> EngineResult:
        """
        Evaluate a batch of projects.

        Args:
            projects: Raw project records or ProjectRecord models

        Returns:
            EngineResult with classified projects, ranked issues, summary
            counters and quality metrics
        """
        projects = list(projects or [])
        classified = self.classifier.classify_projects(projects)
        records = [p.record for p in classified]
        issues = rank(self.detector.detect_issues(records))

        summary = summarize(classified, issues, severity_floor=self.severity_floor)
        quality = calculate_quality_metrics(classified)

        logger.info(
            f'Evaluated {summary.total_projects} of {len(projects)} records: '
            f'{summary.risk_counts[RiskTier.CRITICAL.value]} critical, '
            f'{summary.total_issues} issues'
        )
        return EngineResult(
            classified=classified,
            issues=issues,
            summary=summary,
            quality=quality,
        )
