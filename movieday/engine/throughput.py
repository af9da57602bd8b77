"""Throughput packing: as many films as fit, back to back."""

from __future__ import annotations

import random
from datetime import datetime
from typing import List, Optional, Set

from movieday.constraints import eligible_films
from movieday.domain.models import Film, Rejection, ScheduleResult
from movieday.intervals import build_candidates, film_event
from movieday.visibility import VisibilityPredicate

from .base import BaseScheduler


class ThroughputScheduler(BaseScheduler):
    """
    Earliest-start greedy pass with a turnover buffer on every film.

    No meals, no rest breaks and no opening-hour floor; the buffer added
    to each film's end is the only gap between consecutive films.
    """

    def __init__(self, cfg=None, family_only: bool = False):
        super().__init__(cfg)
        self.family_only = family_only

    def make_schedule(
        self,
        films: List[Film],
        selected_date: str,
        is_visible: VisibilityPredicate,
        rng: random.Random,
    ) -> ScheduleResult:
        cfg = self.cfg
        result = ScheduleResult(selected_date=str(selected_date), family_only=self.family_only)

        films_ok = eligible_films(films, is_visible, self.family_only, cfg.family_ratings)
        candidates, skipped = build_candidates(films_ok, selected_date, cfg.turnover_buffer_minutes)
        result.skipped.extend(skipped)
        candidates.sort(key=lambda c: c.start)

        seen: Set[str] = set()
        last_end: Optional[datetime] = None
        for cand in candidates:
            if cand.film.title in seen:
                result.rejections.append(Rejection(cand.film.title, cand.showtime, "already_scheduled"))
                continue
            if last_end is not None and cand.start < last_end:
                result.rejections.append(Rejection(cand.film.title, cand.showtime, "overlaps_previous"))
                continue
            result.events.append(film_event(cand, cfg))
            seen.add(cand.film.title)
            last_end = cand.end

        return result
