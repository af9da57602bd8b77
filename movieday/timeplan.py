"""Time-of-day and duration parsing for theater listings."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta

import pandas as pd


DEFAULT_DURATION_MINUTES = 120

_MERIDIEM_RE = re.compile(r"\s*(?<![a-z])([ap])\.?\s*m\.?(?![a-z])\s*", re.IGNORECASE)
_DURATION_RE = re.compile(r"(\d+)\s*hours?,\s*(\d+)\s*minutes?", re.IGNORECASE)

# Any fixed day works; only the clock part of the result is used.
_REFERENCE_DAY = date(2024, 1, 1)


def _as_date(reference_date: date | datetime | str) -> date:
    if isinstance(reference_date, datetime):
        return reference_date.date()
    if isinstance(reference_date, date):
        return reference_date
    return pd.Timestamp(reference_date).date()


def parse_clock(text: str) -> time:
    """Parse a 12-hour clock string such as ``"2:05 PM"`` into a time.

    Raises:
        ValueError: if the string has no ``hour:minute`` pair.
    """
    if text is None:
        raise ValueError("Showtime is missing")
    raw = str(text)
    match = _MERIDIEM_RE.search(raw)
    meridiem = match.group(1).lower() if match else None
    stripped = _MERIDIEM_RE.sub("", raw).strip()

    if ":" not in stripped:
        raise ValueError(f"Invalid showtime: {text!r}")
    hours_part, minutes_part = stripped.split(":", 1)
    try:
        hour = int(hours_part.strip())
        minute = int(minutes_part.strip()[:2])
    except ValueError as e:
        raise ValueError(f"Invalid showtime: {text!r}") from e

    if meridiem == "p" and hour != 12:
        hour += 12
    if meridiem == "a" and hour == 12:
        hour = 0
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"Showtime out of range: {text!r}")
    return time(hour, minute)


def parse_time_of_day(text: str, reference_date: date | datetime | str) -> datetime:
    """Anchor a 12-hour showtime string on the given calendar day."""
    return datetime.combine(_as_date(reference_date), parse_clock(text))


def to_24_hour(text: str) -> str:
    return parse_clock(text).strftime("%H:%M:%S")


def parse_duration(text: str | None) -> int:
    """Total minutes from ``"<N> hours, <M> minutes"``.

    Anything that does not match falls back to two hours.
    """
    if not text:
        return DEFAULT_DURATION_MINUTES
    match = _DURATION_RE.search(str(text))
    if not match:
        return DEFAULT_DURATION_MINUTES
    hours, minutes = match.groups()
    return int(hours) * 60 + int(minutes)


def add_minutes(time_of_day: str, minutes: int) -> str:
    # wraps past midnight without rolling the date
    parts = [int(x) for x in time_of_day.split(":")]
    hour, minute = parts[0], parts[1]
    second = parts[2] if len(parts) > 2 else 0
    start = datetime.combine(_REFERENCE_DAY, time(hour % 24, minute, second))
    return (start + timedelta(minutes=minutes)).strftime("%H:%M:%S")


def combine(reference_date: date | datetime | str, hh_mm: str) -> datetime:
    """Anchor a 24-hour ``HH:MM`` string on a day; ``24:00`` means midnight after."""
    day = _as_date(reference_date)
    hour, minute = [int(x) for x in hh_mm.split(":")[:2]]
    if hour == 24:
        return datetime.combine(day, time(0, minute)) + timedelta(days=1)
    return datetime.combine(day, time(hour, minute))


def to_iso(dt: datetime, tz: str | None = None) -> str:
    # ISO8601, with offset when a timezone is configured
    ts = pd.Timestamp(dt)
    if tz:
        ts = ts.tz_localize(tz)
    return ts.isoformat()
