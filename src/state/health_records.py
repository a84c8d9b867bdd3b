"""Vaccine and milestone checklists, seeded with a default schedule."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

MILESTONE_MOTOR = "motor"
MILESTONE_LANGUAGE = "language"
MILESTONE_COGNITIVE = "cognitive"
MILESTONE_SOCIAL = "social"

MILESTONE_CATEGORIES: tuple[str, ...] = (
    MILESTONE_MOTOR,
    MILESTONE_LANGUAGE,
    MILESTONE_COGNITIVE,
    MILESTONE_SOCIAL,
)


@dataclass(frozen=True)
class Vaccine:
    """A scheduled vaccination; `date_ms` is set while it is marked completed."""
    id: str
    name: str
    age_months: int
    completed: bool = False
    date_ms: Optional[int] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class Milestone:
    id: str
    category: str
    description: str
    age_months: int
    completed: bool = False
    date_ms: Optional[int] = None

    def __post_init__(self) -> None:
        if self.category not in MILESTONE_CATEGORIES:
            raise ValueError(f"Invalid milestone category: {self.category!r}")


DEFAULT_VACCINES: tuple[Vaccine, ...] = (
    Vaccine(id="v1", name="Hepatitis B (dose 1)", age_months=0),
    Vaccine(id="v2", name="BCG", age_months=0),
    Vaccine(id="v3", name="Hepatitis B (dose 2)", age_months=1),
    Vaccine(id="v4", name="5-in-1 DTaP-IPV-Hib (dose 1)", age_months=2),
    Vaccine(id="v5", name="Pneumococcal conjugate (dose 1)", age_months=2),
    Vaccine(id="v6", name="5-in-1 DTaP-IPV-Hib (dose 2)", age_months=4),
    Vaccine(id="v7", name="Pneumococcal conjugate (dose 2)", age_months=4),
    Vaccine(id="v8", name="Hepatitis B (dose 3)", age_months=6),
    Vaccine(id="v9", name="5-in-1 DTaP-IPV-Hib (dose 3)", age_months=6),
    Vaccine(id="v10", name="MMRV (dose 1)", age_months=12),
    Vaccine(id="v11", name="Pneumococcal conjugate (booster)", age_months=12),
    Vaccine(id="v12", name="5-in-1 DTaP-IPV-Hib (booster)", age_months=18),
    Vaccine(id="v13", name="MMRV (dose 2)", age_months=18),
)

DEFAULT_MILESTONES: tuple[Milestone, ...] = (
    Milestone(id="m1", category=MILESTONE_MOTOR, description="Lifts head briefly when lying on tummy", age_months=1),
    Milestone(id="m2", category=MILESTONE_SOCIAL, description="Looks at faces", age_months=1),
    Milestone(id="m3", category=MILESTONE_MOTOR, description="Lifts head 45 degrees on tummy", age_months=2),
    Milestone(id="m4", category=MILESTONE_SOCIAL, description='Coos "ah" and "oh" sounds', age_months=2),
    Milestone(id="m5", category=MILESTONE_SOCIAL, description="Smiles when engaged", age_months=2),
    Milestone(id="m6", category=MILESTONE_MOTOR, description="Lifts head 90 degrees on tummy", age_months=4),
    Milestone(id="m7", category=MILESTONE_MOTOR, description="Rolls from front to back", age_months=4),
    Milestone(id="m8", category=MILESTONE_COGNITIVE, description="Reaches for and grasps objects", age_months=4),
    Milestone(id="m9", category=MILESTONE_MOTOR, description="Sits steadily with support", age_months=6),
    Milestone(id="m10", category=MILESTONE_COGNITIVE, description="Passes objects between hands", age_months=6),
    Milestone(id="m11", category=MILESTONE_LANGUAGE, description='Babbles single syllables ("ma", "da")', age_months=6),
    Milestone(id="m12", category=MILESTONE_MOTOR, description="Stands while holding on", age_months=9),
    Milestone(id="m13", category=MILESTONE_MOTOR, description="Crawls", age_months=9),
    Milestone(id="m14", category=MILESTONE_COGNITIVE, description="Picks up small objects with thumb and finger", age_months=9),
    Milestone(id="m15", category=MILESTONE_MOTOR, description="Stands alone briefly", age_months=12),
    Milestone(id="m16", category=MILESTONE_MOTOR, description="Cruises along furniture", age_months=12),
    Milestone(id="m17", category=MILESTONE_LANGUAGE, description='Says "mama" or "dada" meaningfully', age_months=12),
)


@dataclass(frozen=True)
class HealthRecords:
    vaccines: tuple[Vaccine, ...] = DEFAULT_VACCINES
    milestones: tuple[Milestone, ...] = DEFAULT_MILESTONES
