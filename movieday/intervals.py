"""Expand a film listing into candidate viewing intervals."""

from __future__ import annotations

from datetime import timedelta
from typing import Iterable, List, Tuple

from .config import PlannerConfig
from .domain.models import (
    DISPLAY_NORMAL,
    FILM,
    CandidateInterval,
    Film,
    Rejection,
    ScheduledEvent,
)
from .timeplan import parse_duration, parse_time_of_day
from .visibility import VisibilityPredicate


def build_candidates(
    films: Iterable[Film],
    selected_date,
    buffer_minutes: int = 0,
) -> Tuple[List[CandidateInterval], List[Rejection]]:
    """
    One candidate per film x screening x showtime.

    Args:
        films: Films already passed through the eligibility filter
        selected_date: Day the showtimes belong to
        buffer_minutes: Turnover time added after each film

    Returns:
        (candidates, skipped) where skipped lists showtimes that could not
        be parsed; those never reach the packer.
    """
    candidates: List[CandidateInterval] = []
    skipped: List[Rejection] = []
    for film in films:
        length = timedelta(minutes=parse_duration(film.duration) + buffer_minutes)
        for screening in film.screenings:
            for showtime in screening.times:
                try:
                    start = parse_time_of_day(showtime, selected_date)
                except ValueError as e:
                    skipped.append(Rejection(film.title, showtime, f"unparseable_time: {e}"))
                    continue
                candidates.append(
                    CandidateInterval(
                        film=film,
                        screening=screening,
                        showtime=showtime,
                        start=start,
                        end=start + length,
                    )
                )
    return candidates, skipped


def film_event(candidate: CandidateInterval, cfg: PlannerConfig) -> ScheduledEvent:
    film = candidate.film
    return ScheduledEvent(
        title=film.title,
        label=f"{film.title} ({candidate.screening.screen})",
        start=candidate.start,
        end=candidate.end,
        background_color=cfg.color_for(film.normalized_rating),
        kind=FILM,
        display=DISPLAY_NORMAL,
        film=film,
    )


def build_showtime_events(
    films: Iterable[Film],
    selected_date,
    is_visible: VisibilityPredicate,
    cfg: PlannerConfig,
) -> Tuple[List[ScheduledEvent], List[Rejection]]:
    """Every visible showing on the day, unpacked; overlaps are expected."""
    visible = [f for f in films if is_visible(f.title)]
    candidates, skipped = build_candidates(visible, selected_date, cfg.turnover_buffer_minutes)
    events = [film_event(c, cfg) for c in candidates]
    events.sort(key=lambda e: (e.start, e.title))
    return events, skipped
