from .risk_classifier import (
    RiskClassifier,
    ClassifiedProject,
    classify,
    filter_by_risk,
    kpi_status,
)

__all__ = [
    'RiskClassifier',
    'ClassifiedProject',
    'classify',
    'filter_by_risk',
    'kpi_status',
]
