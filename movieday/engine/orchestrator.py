"""Orchestrator - builds the paired family / all-audiences schedules for a day."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List, Optional

from movieday.config import PlannerConfig
from movieday.domain.models import Film, ScheduleResult
from movieday.visibility import VisibilityPredicate, show_all

from .base import make_rng
from .comfortable import ComfortableScheduler


@dataclass
class PairedSchedule:
    """The two calendars shown side by side for one day."""

    family: ScheduleResult
    all_audiences: ScheduleResult
    variation: int = 0


def build_paired_schedule(
    films: List[Film],
    selected_date: str,
    is_visible: VisibilityPredicate,
    cfg: PlannerConfig,
    rng: random.Random,
) -> PairedSchedule:
    """
    Two-phase pack: all-audiences first, then family against it.

    Args:
        films: The day's listing, in the order the packer should see it
        selected_date: ISO date
        is_visible: Visibility predicate keyed by title
        cfg: PlannerConfig (preferences included)
        rng: Seeded generator shared by both phases

    Returns:
        PairedSchedule with both results
    """
    all_audiences = ComfortableScheduler(cfg, family_only=False).make_schedule(
        films, selected_date, is_visible, rng
    )
    rated_r_slots = all_audiences.rated_r_slots()
    family = ComfortableScheduler(
        cfg,
        family_only=True,
        companion=all_audiences,
        rated_r_slots=rated_r_slots,
    ).make_schedule(films, selected_date, is_visible, rng)
    return PairedSchedule(family=family, all_audiences=all_audiences)


def generate_variation(
    films: List[Film],
    selected_date: str,
    is_visible: VisibilityPredicate,
    cfg: PlannerConfig,
    rng: random.Random,
) -> PairedSchedule:
    """Reshuffle the whole film list, then run the paired pack on it."""
    shuffled = list(films)
    rng.shuffle(shuffled)
    return build_paired_schedule(shuffled, selected_date, is_visible, cfg, rng)


class Orchestrator:
    """
    Holds one theater's listings and produces schedules per day.

    The initial schedule for a day comes from ``plan``; every call to
    ``next_variation`` reshuffles and returns a fresh pair, drawing from the
    same seeded generator so a whole session can be replayed.
    """

    def __init__(
        self,
        listings: Dict[str, List[Film]],
        cfg: PlannerConfig | None = None,
        is_visible: VisibilityPredicate | None = None,
        seed: Optional[int] = None,
    ):
        self.listings = listings
        self.cfg = cfg or PlannerConfig()
        self.is_visible = is_visible or show_all
        self.rng = make_rng(seed)
        self.variation_index = 0

    def films_for(self, selected_date: str) -> List[Film]:
        if selected_date not in self.listings:
            print(f"[WARN] No listings for {selected_date}")
            return []
        return self.listings[selected_date]

    def plan(self, selected_date: str) -> PairedSchedule:
        print(f"[INFO] Orchestrator: Building schedules for {selected_date}")
        films = self.films_for(selected_date)
        paired = build_paired_schedule(films, selected_date, self.is_visible, self.cfg, self.rng)
        self._report(paired)
        return paired

    def next_variation(self, selected_date: str) -> PairedSchedule:
        self.variation_index += 1
        print(f"[INFO] Orchestrator: Variation #{self.variation_index + 1} for {selected_date}")
        films = self.films_for(selected_date)
        paired = generate_variation(films, selected_date, self.is_visible, self.cfg, self.rng)
        paired.variation = self.variation_index
        self._report(paired)
        return paired

    def _report(self, paired: PairedSchedule) -> None:
        for label, result in (("All movies", paired.all_audiences), ("Family", paired.family)):
            print(f"[OK] {label}: {len(result.film_events)} films scheduled")
            for s in result.skipped:
                print(f"[WARN] Skipped {s.title} at {s.showtime!r}: {s.reason}")
