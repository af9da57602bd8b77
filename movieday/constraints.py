from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, List, Tuple

import pandas as pd

from .config import PlannerConfig, SchedulePreferences
from .domain.models import FAMILY_RATINGS, Film, normalize_rating
from .timeplan import combine
from .visibility import VisibilityPredicate


Window = Tuple[datetime, datetime]


def is_rating_allowed(rating: str, family_only: bool, family_ratings: Iterable[str] = FAMILY_RATINGS) -> bool:
    if not family_only:
        return True
    return normalize_rating(rating) in set(family_ratings)


def eligible_films(
    films: Iterable[Film],
    is_visible: VisibilityPredicate,
    family_only: bool,
    family_ratings: Iterable[str] = FAMILY_RATINGS,
) -> List[Film]:
    # visibility is asked once per film per pass
    allowed = set(family_ratings)
    return [
        f for f in films
        if is_visible(f.title) and is_rating_allowed(f.rating, family_only, allowed)
    ]


def meal_windows(selected_date, prefs: SchedulePreferences, cfg: PlannerConfig) -> List[Tuple[str, Window]]:
    windows: List[Tuple[str, Window]] = []
    for enabled, meal in ((prefs.include_lunch, cfg.lunch), (prefs.include_dinner, cfg.dinner)):
        if not enabled:
            continue
        start = combine(selected_date, meal.start)
        windows.append((meal.title, (start, start + timedelta(minutes=meal.duration_minutes))))
    return windows


def conflicts_with_meals(start: datetime, end: datetime, windows: Iterable[Tuple[str, Window]]) -> bool:
    # a film that ends or starts exactly on a meal boundary still counts as touching it
    for _, (meal_start, meal_end) in windows:
        if start <= meal_end and end >= meal_start:
            return True
    return False


def intervals_overlap(a: Window, b: Window) -> bool:
    return a[0] < b[1] and b[0] < a[1]


def has_overlap(events_df: pd.DataFrame) -> bool:
    # film rows only; background blocks may sit under films
    if events_df.empty:
        return False
    df = events_df[events_df["kind"] == "film"].copy()
    if df.empty:
        return False
    df["start"] = pd.to_datetime(df["start"])
    df["end"] = pd.to_datetime(df["end"])
    df.sort_values("start", inplace=True)
    prev_end = None
    for _, row in df.iterrows():
        if prev_end is not None and row["start"] < prev_end:
            return True
        prev_end = max(prev_end, row["end"]) if prev_end is not None else row["end"]
    return False


def within_opening_hours(events_df: pd.DataFrame, opening: datetime, closing: datetime) -> bool:
    if events_df.empty:
        return True
    df = events_df[events_df["kind"] == "film"]
    if df.empty:
        return True
    starts = pd.to_datetime(df["start"])
    return bool((starts >= pd.Timestamp(opening)).all() and (starts < pd.Timestamp(closing)).all())
