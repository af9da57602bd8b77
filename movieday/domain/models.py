"""Domain models for theater listings and planned schedules."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from movieday.timeplan import to_iso


RATINGS = {"G", "PG", "PG-13", "R"}
FAMILY_RATINGS = {"G", "PG", "PG-13"}

_RATING_ALIASES = {"PG13": "PG-13", "PG 13": "PG-13"}

FILM = "film"
MEAL = "meal"
BREAK = "break"

DISPLAY_NORMAL = "normal"
DISPLAY_BACKGROUND = "background"

SlotKey = Tuple[datetime, datetime]


def normalize_rating(rating: str | None) -> str:
    """Upper-case a rating and fold known spellings onto the canonical set."""
    if not rating:
        return ""
    value = " ".join(str(rating).split()).upper()
    return _RATING_ALIASES.get(value, value)


@dataclass(frozen=True)
class Screening:
    """One auditorium and its showtimes for the day."""

    screen: str
    times: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Film:
    """A film on the day's listing."""

    title: str
    rating: str = ""
    duration: str = ""
    screenings: Tuple[Screening, ...] = ()
    poster: str = ""
    genres: str = ""

    @property
    def normalized_rating(self) -> str:
        return normalize_rating(self.rating)

    @classmethod
    def from_dict(cls, raw: Dict) -> "Film":
        if "title" not in raw or not str(raw["title"]).strip():
            raise ValueError(f"Film record without a title: {raw!r}")
        screenings = []
        for s in raw.get("screenings") or []:
            times = s.get("times") or []
            if isinstance(times, str):
                times = [times]
            screenings.append(Screening(screen=str(s.get("screen", "")), times=tuple(str(t) for t in times)))
        return cls(
            title=str(raw["title"]).strip(),
            rating=str(raw.get("rating") or ""),
            duration=str(raw.get("duration") or ""),
            screenings=tuple(screenings),
            poster=str(raw.get("poster") or ""),
            genres=str(raw.get("genres") or ""),
        )

    def to_dict(self) -> Dict:
        return {
            "title": self.title,
            "poster": self.poster,
            "rating": self.rating,
            "duration": self.duration,
            "genres": self.genres,
            "screenings": [{"screen": s.screen, "times": list(s.times)} for s in self.screenings],
        }


@dataclass(frozen=True)
class CandidateInterval:
    film: Film
    screening: Screening
    showtime: str
    start: datetime
    end: datetime

    @property
    def slot_key(self) -> SlotKey:
        return (self.start, self.end)


@dataclass
class ScheduledEvent:
    title: str
    label: str
    start: datetime
    end: datetime
    background_color: str
    kind: str = FILM
    display: str = DISPLAY_NORMAL
    film: Optional[Film] = None

    @property
    def is_film(self) -> bool:
        return self.kind == FILM

    @property
    def slot_key(self) -> SlotKey:
        return (self.start, self.end)

    def to_record(self, tz: str | None = None) -> Dict:
        """Event record in the shape the calendar view consumes."""
        return {
            "title": self.label,
            "start": to_iso(self.start, tz),
            "end": to_iso(self.end, tz),
            "backgroundColor": self.background_color,
            "display": self.display,
            "kind": self.kind,
            "film": self.film.title if self.film else None,
            "rating": self.film.normalized_rating if self.film else None,
        }


@dataclass
class Rejection:
    """Why a candidate was not admitted; kept for --verbose reporting."""

    title: str
    showtime: str
    reason: str


@dataclass
class ScheduleResult:
    selected_date: str
    family_only: bool
    events: List[ScheduledEvent] = field(default_factory=list)
    skipped: List[Rejection] = field(default_factory=list)
    rejections: List[Rejection] = field(default_factory=list)

    @property
    def film_events(self) -> List[ScheduledEvent]:
        return [e for e in self.events if e.is_film]

    def film_starts(self) -> set:
        return {e.start for e in self.film_events}

    def start_for_title(self, title: str) -> Optional[datetime]:
        for e in self.film_events:
            if e.film is not None and e.film.title == title:
                return e.start
        return None

    def rated_r_slots(self) -> set:
        return {e.slot_key for e in self.film_events if e.film is not None and e.film.normalized_rating == "R"}
