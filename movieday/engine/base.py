"""Base scheduler interface shared by the packing strategies."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import List

from movieday.config import PlannerConfig
from movieday.domain.models import Film, ScheduleResult
from movieday.visibility import VisibilityPredicate


class BaseScheduler(ABC):
    """
    Abstract base class for all packing strategies.

    A scheduler turns one day's films into a ScheduleResult. Runs are pure:
    the only source of variation is the ``rng`` handed in by the caller.
    """

    def __init__(self, cfg: PlannerConfig | None = None):
        self.cfg = cfg or PlannerConfig()

    @abstractmethod
    def make_schedule(
        self,
        films: List[Film],
        selected_date: str,
        is_visible: VisibilityPredicate,
        rng: random.Random,
    ) -> ScheduleResult:
        """
        Pack the day's films into a non-overlapping schedule.

        Args:
            films: The day's listing
            selected_date: ISO date the showtimes belong to
            is_visible: Read-only predicate keyed by film title
            rng: Seeded random generator for tie-breaking

        Returns:
            ScheduleResult with film, meal and break events
        """
        pass


def make_rng(seed: int | None = None) -> random.Random:
    return random.Random(seed)
