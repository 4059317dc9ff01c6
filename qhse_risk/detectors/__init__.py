from .issue_detector import IssueDetector, detect_issues, filter_issues
from .severity_ranker import rank, severity_key

__all__ = [
    'IssueDetector',
    'detect_issues',
    'filter_issues',
    'rank',
    'severity_key',
]
