from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Iterable, List

import pandas as pd

from .domain.models import Film, ScheduledEvent
from .timeplan import parse_duration, parse_time_of_day


EVENT_COLUMNS = ["title", "label", "start", "end", "kind", "display", "rating", "background_color"]
RECORD_COLUMNS = ["title", "start", "end", "backgroundColor", "display", "kind", "film", "rating"]


def read_listings(path: str | Path) -> Dict[str, List[Film]]:
    """Load a listings file: ``{"YYYY-MM-DD": [film, ...], ...}``."""
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ValueError(f"Listings file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"Listings file {path} is not valid JSON: {e}") from e
    return parse_listings(raw)


def parse_listings(raw: Dict) -> Dict[str, List[Film]]:
    if not isinstance(raw, dict):
        raise ValueError("Listings must map ISO dates to lists of films")
    listings: Dict[str, List[Film]] = {}
    for date_str, films in raw.items():
        # normalizes the key and rejects non-dates
        try:
            key = pd.Timestamp(date_str).strftime("%Y-%m-%d")
        except ValueError as e:
            raise ValueError(f"Listings key is not a date: {date_str!r}") from e
        if not isinstance(films, list):
            raise ValueError(f"Listings for {date_str} must be a list")
        listings[key] = [Film.from_dict(f) for f in films]
    return listings


def available_dates(listings: Dict[str, List[Film]]) -> List[str]:
    return sorted(listings)


def showtimes_frame(films: Iterable[Film], selected_date: str) -> pd.DataFrame:
    """One row per showing; ``start`` is NaT where the time did not parse."""
    rows = []
    for film in films:
        minutes = parse_duration(film.duration)
        for screening in film.screenings:
            for showtime in screening.times:
                try:
                    start = parse_time_of_day(showtime, selected_date)
                except ValueError:
                    start = pd.NaT
                rows.append(
                    {
                        "title": film.title,
                        "rating": film.normalized_rating,
                        "duration_minutes": minutes,
                        "screen": screening.screen,
                        "showtime": showtime,
                        "start": start,
                    }
                )
    df = pd.DataFrame(rows, columns=["title", "rating", "duration_minutes", "screen", "showtime", "start"])
    df["start"] = pd.to_datetime(df["start"])
    return df.sort_values(["start", "title"], na_position="last").reset_index(drop=True)


def events_frame(events: Iterable[ScheduledEvent]) -> pd.DataFrame:
    rows = [
        {
            "title": e.title,
            "label": e.label,
            "start": e.start,
            "end": e.end,
            "kind": e.kind,
            "display": e.display,
            "rating": e.film.normalized_rating if e.film else None,
            "background_color": e.background_color,
        }
        for e in events
    ]
    df = pd.DataFrame(rows, columns=EVENT_COLUMNS)
    df["start"] = pd.to_datetime(df["start"])
    df["end"] = pd.to_datetime(df["end"])
    return df.sort_values(["start", "end"]).reset_index(drop=True)


def write_schedule(path: str | Path, events: Iterable[ScheduledEvent], tz: str | None = None) -> int:
    """Write events as CSV, or as calendar records when the path ends in .json."""
    path = Path(path)
    events = sorted(events, key=lambda e: (e.start, e.end))
    if path.suffix.lower() == ".json":
        records = [e.to_record(tz) for e in events]
        path.write_text(json.dumps(records, indent=2), encoding="utf-8")
    else:
        df = events_frame(events)
        if tz:
            df["start"] = df["start"].dt.tz_localize(tz)
            df["end"] = df["end"].dt.tz_localize(tz)
        df.to_csv(path, index=False)
    return len(events)


def read_schedule(path: str | Path) -> pd.DataFrame:
    path = Path(path)
    if not path.exists():
        raise ValueError(f"Schedule file not found: {path}")
    if path.suffix.lower() == ".json":
        records = json.loads(path.read_text(encoding="utf-8"))
        df = pd.DataFrame(records) if records else pd.DataFrame(columns=RECORD_COLUMNS)
        df = df.rename(columns={"title": "label", "film": "title", "backgroundColor": "background_color"})
        # meal and break records have no film; their label is the title
        if {"title", "label"} <= set(df.columns):
            df["title"] = df["title"].fillna(df["label"])
    else:
        df = pd.read_csv(path)
    missing = {"title", "start", "end", "kind"} - set(df.columns)
    if missing:
        raise ValueError(f"Schedule {path} is missing columns: {sorted(missing)}")
    df["start"] = _local_naive(df["start"])
    df["end"] = _local_naive(df["end"])
    return df


def _local_naive(series: pd.Series) -> pd.Series:
    # keep wall-clock time, drop any offset
    return pd.to_datetime(series.astype(str).str.slice(0, 19))
