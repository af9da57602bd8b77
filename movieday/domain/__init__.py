"""Domain models for listings and schedules."""

from .models import (
    FAMILY_RATINGS,
    RATINGS,
    CandidateInterval,
    Film,
    Rejection,
    ScheduledEvent,
    ScheduleResult,
    Screening,
    normalize_rating,
)

__all__ = [
    "FAMILY_RATINGS",
    "RATINGS",
    "CandidateInterval",
    "Film",
    "Rejection",
    "ScheduledEvent",
    "ScheduleResult",
    "Screening",
    "normalize_rating",
]
