"""Vaccine schedule and developmental milestone checklists."""

from .errors import HealthError, HealthItemNotFoundError, HealthValidationError
from .service import (
    CHECKLIST_MILESTONES,
    CHECKLIST_VACCINES,
    CHECKLISTS,
    AgeGroup,
    ChecklistProgress,
    HealthTracker,
)

__all__ = [
    "CHECKLISTS",
    "CHECKLIST_MILESTONES",
    "CHECKLIST_VACCINES",
    "AgeGroup",
    "ChecklistProgress",
    "HealthError",
    "HealthItemNotFoundError",
    "HealthTracker",
    "HealthValidationError",
]
