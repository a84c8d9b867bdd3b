"""Growth measurements and WHO percentile reference data."""

from .errors import GrowthEntryNotFoundError, GrowthError
from .service import (
    BAND_ABOVE_P97,
    BAND_BELOW_P3,
    BAND_NORMAL,
    GrowthTracker,
    ReferenceComparison,
    age_in_months,
    compare_to_reference,
    format_length,
    format_weight,
)
from .standards import METRICS, WHO_STANDARDS, ReferenceRow, reference_series

__all__ = [
    "BAND_ABOVE_P97",
    "BAND_BELOW_P3",
    "BAND_NORMAL",
    "GrowthEntryNotFoundError",
    "GrowthError",
    "GrowthTracker",
    "METRICS",
    "ReferenceComparison",
    "ReferenceRow",
    "WHO_STANDARDS",
    "age_in_months",
    "compare_to_reference",
    "format_length",
    "format_weight",
    "reference_series",
]
