"""Comfortable packing: meal windows, rest breaks and paired family views."""

from __future__ import annotations

import random
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Set

from movieday.config import PlannerConfig
from movieday.constraints import conflicts_with_meals, eligible_films, meal_windows
from movieday.domain.models import (
    BREAK,
    DISPLAY_BACKGROUND,
    MEAL,
    CandidateInterval,
    Film,
    Rejection,
    ScheduledEvent,
    ScheduleResult,
    SlotKey,
)
from movieday.intervals import build_candidates, film_event
from movieday.timeplan import combine
from movieday.visibility import VisibilityPredicate

from .base import BaseScheduler


def order_candidates(
    candidates: Iterable[CandidateInterval],
    rng: random.Random,
    tie_window_minutes: int = 30,
) -> List[CandidateInterval]:
    """Ascending start; runs of close starts are shuffled with ``rng``.

    A run grows while each start is at most ``tie_window_minutes`` after the
    previous one. Candidates in different runs never change order.
    """
    window = timedelta(minutes=tie_window_minutes)
    ordered: List[CandidateInterval] = []
    run: List[CandidateInterval] = []
    for cand in sorted(candidates, key=lambda c: c.start):
        if run and cand.start - run[-1].start > window:
            rng.shuffle(run)
            ordered.extend(run)
            run = []
        run.append(cand)
    rng.shuffle(run)
    ordered.extend(run)
    return ordered


def order_aligned(
    candidates: Iterable[CandidateInterval],
    companion_starts: Set[datetime],
) -> List[CandidateInterval]:
    # starts shared with the companion first, then chronological
    return sorted(candidates, key=lambda c: (0 if c.start in companion_starts else 1, c.start))


class ComfortableScheduler(BaseScheduler):
    """
    Greedy packer that leaves room for meals and breaks between films.

    When ``companion`` is given the run is the dependent half of a paired
    schedule: candidates are ordered to line up with the companion's start
    times, and in family mode the companion's R-rated slots and its chosen
    times for shared titles are off limits.
    """

    def __init__(
        self,
        cfg: PlannerConfig | None = None,
        family_only: bool = False,
        companion: Optional[ScheduleResult] = None,
        rated_r_slots: Optional[Set[SlotKey]] = None,
    ):
        super().__init__(cfg)
        self.family_only = family_only
        self.companion = companion
        if rated_r_slots is None and companion is not None:
            rated_r_slots = companion.rated_r_slots()
        self.rated_r_slots: Set[SlotKey] = set(rated_r_slots or ())

    def make_schedule(
        self,
        films: List[Film],
        selected_date: str,
        is_visible: VisibilityPredicate,
        rng: random.Random,
    ) -> ScheduleResult:
        cfg = self.cfg
        prefs = cfg.preferences
        result = ScheduleResult(selected_date=str(selected_date), family_only=self.family_only)

        windows = meal_windows(selected_date, prefs, cfg)
        for title, (start, end) in windows:
            result.events.append(
                ScheduledEvent(
                    title=title,
                    label=title,
                    start=start,
                    end=end,
                    background_color=cfg.meal_color,
                    kind=MEAL,
                    display=DISPLAY_BACKGROUND,
                )
            )

        films_ok = eligible_films(films, is_visible, self.family_only, cfg.family_ratings)
        candidates, skipped = build_candidates(films_ok, selected_date)
        result.skipped.extend(skipped)

        if self.companion is not None:
            ordered = order_aligned(candidates, self.companion.film_starts())
        else:
            ordered = order_candidates(candidates, rng, cfg.tie_window_minutes)

        break_gap = timedelta(minutes=prefs.break_minutes)
        scheduled_titles: Set[str] = set()
        used_slots: Set[SlotKey] = set()
        last_end = combine(selected_date, cfg.opening_time)
        accepted_any = False

        for cand in ordered:
            reason = self._rejection_reason(cand, scheduled_titles, used_slots, last_end + break_gap, windows)
            if reason is not None:
                result.rejections.append(Rejection(cand.film.title, cand.showtime, reason))
                continue

            if accepted_any and prefs.break_minutes > 0:
                result.events.append(
                    ScheduledEvent(
                        title="Break",
                        label="Break",
                        start=last_end,
                        end=cand.start,
                        background_color=cfg.break_color,
                        kind=BREAK,
                        display=DISPLAY_BACKGROUND,
                    )
                )
            result.events.append(film_event(cand, cfg))
            scheduled_titles.add(cand.film.title)
            used_slots.add(cand.slot_key)
            last_end = cand.end
            accepted_any = True

        return result

    def _rejection_reason(
        self,
        cand: CandidateInterval,
        scheduled_titles: Set[str],
        used_slots: Set[SlotKey],
        earliest_start: datetime,
        windows,
    ) -> Optional[str]:
        title = cand.film.title
        if title in scheduled_titles:
            return "already_scheduled"
        if cand.start < earliest_start:
            return "break_not_satisfied"
        if cand.slot_key in used_slots:
            return "slot_used"
        if self.family_only and cand.slot_key in self.rated_r_slots:
            return "rated_r_slot"
        if self.family_only and self.companion is not None:
            other = self.companion.start_for_title(title)
            if other is not None and other != cand.start:
                return "companion_time_conflict"
        if conflicts_with_meals(cand.start, cand.end, windows):
            return "meal_conflict"
        return None
