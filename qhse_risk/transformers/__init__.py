"""Record normalization: metric parsing and project metric transformation."""

from .metric_normalizer import (
    is_missing,
    parse_number,
    parse_percentage,
    format_metric,
)

__all__ = [
    'is_missing',
    'parse_number',
    'parse_percentage',
    'format_metric',
]
