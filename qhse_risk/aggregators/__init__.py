from .dashboard_summary import summarize, CARD_DEFINITIONS
from .quality_metrics import (
    calculate_quality_metrics,
    quality_performance,
    compliance_status,
)

__all__ = [
    'summarize',
    'CARD_DEFINITIONS',
    'calculate_quality_metrics',
    'quality_performance',
    'compliance_status',
]
