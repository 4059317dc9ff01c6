"""Most-urgent-first ordering of detected issues."""
from typing import Iterable, List, Tuple

from qhse_risk.schemas.enums import SEVERITY_ORDER
from qhse_risk.schemas.issue import Issue


def severity_key(issue: Issue) -> Tuple[int, float]:
    """Sort key: severity ordinal descending, then sort_value descending."""
    return (-SEVERITY_ORDER[issue.severity], -issue.sort_value)


def rank(issues: Iterable[Issue]) -> List[Issue]:
    """
    Order issues most urgent first.

    Severity (Critical > High > Medium) decides first, sort_value breaks
    ties. The sort is stable: issues with equal keys keep their input
    order. The input is not modified.

    Args:
        issues: Issues to rank

    Returns:
        New ranked list
    """
    return sorted(issues, key=severity_key)
