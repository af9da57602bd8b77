from __future__ import annotations

from datetime import timedelta

import pandas as pd

from .config import PlannerConfig
from .constraints import has_overlap, meal_windows, within_opening_hours
from .timeplan import combine


def validate_schedule(
    events_df: pd.DataFrame,
    selected_date: str,
    cfg: PlannerConfig,
    family_only: bool = False,
    check_breaks: bool = True,
) -> None:
    films = events_df[events_df["kind"] == "film"].sort_values("start")

    if has_overlap(events_df):
        raise ValueError("Overlapping film events detected")

    dupes = films["title"][films["title"].duplicated()]
    if not dupes.empty:
        raise ValueError(f"Films scheduled more than once: {sorted(set(dupes))}")

    if family_only and "rating" in films.columns:
        allowed = set(cfg.family_ratings)
        bad = films[~films["rating"].fillna("").isin(allowed)]
        if not bad.empty:
            raise ValueError(f"Family schedule includes non-family ratings: {list(bad['title'])}")

    opening = combine(selected_date, cfg.opening_time)
    closing = combine(selected_date, cfg.closing_time)
    if not within_opening_hours(events_df, opening, closing):
        raise ValueError(f"Film events outside opening hours ({cfg.opening_time}-{cfg.closing_time})")

    windows = meal_windows(selected_date, cfg.preferences, cfg)
    for title, (meal_start, meal_end) in windows:
        clash = films[(films["start"] < meal_end) & (films["end"] > meal_start)]
        if not clash.empty:
            raise ValueError(f"{title} overlaps films: {list(clash['title'])}")

    if not check_breaks:
        return
    gap_needed = timedelta(minutes=cfg.preferences.break_minutes)
    prev_end = None
    for _, row in films.iterrows():
        if prev_end is not None and row["start"] - prev_end < gap_needed:
            covered = any(prev_end >= s and row["start"] <= e for _, (s, e) in windows)
            if not covered:
                raise ValueError(
                    f"Break before {row['title']} is shorter than {cfg.preferences.break_minutes} minutes"
                )
        prev_end = row["end"]


def summarize_schedule(events_df: pd.DataFrame) -> str:
    if events_df.empty:
        return "No events."
    df = events_df.copy()
    films = df[df["kind"] == "film"].sort_values("start")
    if films.empty:
        lines = ["No films scheduled."]
    else:
        films = films.assign(
            minutes=(films["end"] - films["start"]).dt.total_seconds() / 60.0,
            start_hm=films["start"].dt.strftime("%H:%M"),
            end_hm=films["end"].dt.strftime("%H:%M"),
        )
        cols = ["start_hm", "end_hm", "label" if "label" in films.columns else "title", "rating"]
        lines = ["Films:"]
        lines.append(films[[c for c in cols if c in films.columns]].to_string(index=False))
        lines.append("")
        if "rating" in films.columns:
            lines.append("Films per rating:")
            lines.append(films.groupby(films["rating"].fillna("?")).size().to_string())
            lines.append("")
        lines.append(f"Total screen time: {films['minutes'].sum() / 60.0:.1f}h across {len(films)} films")

    background = df[df["kind"] != "film"]
    if not background.empty:
        counts = background.groupby("kind").size()
        lines.append("")
        lines.append("Breaks:")
        lines.append(counts.to_string())
    return "\n".join(lines)
