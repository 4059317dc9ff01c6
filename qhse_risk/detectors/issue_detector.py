"""
Critical issue detection for QHSE projects.

Scans each valid project against the category rules (CARs, Audit, KPI,
Billability, Observations). Within a category the severity bands are
tested in order and the first match wins, so a project raises at most one
issue per category but may raise issues in several categories.
"""

import logging
from dataclasses import asdict
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from qhse_risk.config.rules import ISSUE_RULES, CategoryRule, IssueBand, build_issue_rules
from qhse_risk.config.thresholds import IssueThresholds
from qhse_risk.schemas.enums import IssueCategory
from qhse_risk.schemas.issue import Issue
from qhse_risk.transformers.metric_normalizer import format_metric, is_missing
from qhse_risk.transformers.project_transformer import ProjectMetrics, to_metrics
from qhse_risk.utils.validators import as_record, filter_valid_projects

logger = logging.getLogger(__name__)

UNNAMED_PROJECT = 'Unnamed Project'
NO_PROJECT_NUMBER = 'No Project Number'


def _identity(record) -> Dict[str, str]:
    title = record.get('projectTitle')
    project_no = record.get('projectNo')
    if is_missing(project_no):
        project_no = record.get('srNo')
    return {
        'project': UNNAMED_PROJECT if is_missing(title) else str(title),
        'project_no': NO_PROJECT_NUMBER if is_missing(project_no) else str(project_no),
    }


class IssueDetector:
    """Emit typed issues from per-category threshold bands."""

    def __init__(self, rules: Optional[Sequence[CategoryRule]] = None,
                 thresholds: Optional[IssueThresholds] = None):
        """
        Initialize the detector.

        Args:
            rules: Category rules in detection order; built from thresholds
                when omitted
            thresholds: Band limits used when rules are omitted
        """
        if rules is None:
            rules = build_issue_rules(thresholds) if thresholds is not None else ISSUE_RULES
        self.rules = tuple(rules)

    def _match_band(self, rule: CategoryRule, metrics: ProjectMetrics) -> Optional[IssueBand]:
        if rule.requires_data and getattr(metrics, rule.metric) <= 0:
            return None
        for band in rule.bands:
            if band.condition.holds(metrics):
                return band
        return None

    def _build_issue(self, rule: CategoryRule, band: IssueBand,
                     metrics: ProjectMetrics, identity: Dict[str, str]) -> Issue:
        display = {name: format_metric(value) for name, value in asdict(metrics).items()}

        details = band.details
        if band.details_when_delayed and rule.delay_metric and getattr(metrics, rule.delay_metric) > 0:
            details = band.details_when_delayed

        sort_metric = band.sort_metric or band.condition.metric
        return Issue(
            type=rule.category,
            severity=band.severity,
            title=rule.title.format(**display),
            project=identity['project'],
            project_no=identity['project_no'],
            details=details.format(**display),
            count=getattr(metrics, rule.count_metric or rule.metric),
            sort_value=rule.sort_value(getattr(metrics, sort_metric)),
        )

    def detect_project(self, project: Any) -> List[Issue]:
        """
        Detect issues for one project, without the identity filter.

        Args:
            project: Raw project mapping or ProjectRecord

        Returns:
            Issues in category order
        """
        record = as_record(project)
        metrics = to_metrics(record)
        identity = _identity(record)

        issues = []
        for rule in self.rules:
            band = self._match_band(rule, metrics)
            if band is not None:
                issues.append(self._build_issue(rule, band, metrics, identity))
        return issues

    def detect_issues(self, projects: Iterable[Any]) -> List[Issue]:
        """
        Detect issues across a batch of projects.

        Records without projectNo/projectTitle are skipped. Output is not
        ranked; pass it to rank() for most-urgent-first order.

        Args:
            projects: Raw project mappings or ProjectRecord models

        Returns:
            Issues in project order, then category order
        """
        issues = []
        for record in filter_valid_projects(projects):
            issues.extend(self.detect_project(record))

        logger.debug(f'Detected {len(issues)} issues')
        return issues


def filter_issues(
    issues: Iterable[Issue],
    category: Optional[Union[IssueCategory, str]] = None,
) -> List[Issue]:
    """
    Select the issues of one category.

    Args:
        issues: Detected or ranked issues
        category: Category to keep; None keeps everything

    Returns:
        Matching issues in input order
    """
    if category is None:
        return list(issues)
    category = IssueCategory(category)
    return [issue for issue in issues if issue.type == category]


_default_detector = IssueDetector()


def detect_issues(projects: Iterable[Any]) -> List[Issue]:
    """Detect issues with the default thresholds."""
    return _default_detector.detect_issues(projects)
