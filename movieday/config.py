"""Configuration loading for the movie day planner (YAML or JSON)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Dict, List, Optional

import yaml


MIN_BREAK_MINUTES = 0
MAX_BREAK_MINUTES = 60


def clamp_break_minutes(value) -> int:
    try:
        minutes = int(value)
    except (TypeError, ValueError):
        minutes = 0
    return max(MIN_BREAK_MINUTES, min(MAX_BREAK_MINUTES, minutes))


@dataclass
class SchedulePreferences:
    include_lunch: bool = True
    include_dinner: bool = True
    break_minutes: int = 15

    def __post_init__(self) -> None:
        self.break_minutes = clamp_break_minutes(self.break_minutes)


@dataclass
class MealWindow:
    title: str
    start: str  # HH:MM
    duration_minutes: int = 60


@dataclass
class QuickPreset:
    label: str
    description: str
    preferences: SchedulePreferences


def _default_presets() -> List[QuickPreset]:
    return [
        QuickPreset(
            "Family Day",
            "Perfect for families with kids - includes lunch and early dinner",
            SchedulePreferences(include_lunch=True, include_dinner=True, break_minutes=20),
        ),
        QuickPreset(
            "Movie Marathon",
            "Maximum movies, no meal breaks",
            SchedulePreferences(include_lunch=False, include_dinner=False, break_minutes=20),
        ),
        QuickPreset(
            "Evening Focus",
            "Concentrates movies after 5 PM",
            SchedulePreferences(include_lunch=True, include_dinner=False, break_minutes=20),
        ),
        QuickPreset(
            "Dinner Plans",
            "Schedules around dinner time, perfect for dinner and a movie",
            SchedulePreferences(include_lunch=False, include_dinner=True, break_minutes=20),
        ),
    ]


def _default_colors() -> Dict[str, str]:
    return {
        "G": "#4ade80",
        "PG": "#60a5fa",
        "PG-13": "#f59e0b",
        "R": "#ef4444",
    }


@dataclass
class PlannerConfig:
    preferences: SchedulePreferences = field(default_factory=SchedulePreferences)
    opening_time: str = "09:00"
    closing_time: str = "24:00"
    lunch: MealWindow = field(default_factory=lambda: MealWindow("Lunch Break", "12:00"))
    dinner: MealWindow = field(default_factory=lambda: MealWindow("Dinner Break", "17:30"))
    tie_window_minutes: int = 30
    turnover_buffer_minutes: int = 30
    family_ratings: List[str] = field(default_factory=lambda: ["G", "PG", "PG-13"])
    rating_colors: Dict[str, str] = field(default_factory=_default_colors)
    default_color: str = "#6b7280"
    meal_color: str = "#94a3b8"
    break_color: str = "#374151"
    presets: List[QuickPreset] = field(default_factory=_default_presets)
    timezone: Optional[str] = None

    def color_for(self, rating: str) -> str:
        return self.rating_colors.get(rating, self.default_color)

    def preset(self, label: str) -> QuickPreset:
        wanted = label.strip().lower()
        for p in self.presets:
            if p.label.lower() == wanted:
                return p
        known = ", ".join(p.label for p in self.presets)
        raise ValueError(f"Unknown preset {label!r}; expected one of: {known}")

    def with_preferences(self, prefs: SchedulePreferences) -> "PlannerConfig":
        return replace(self, preferences=prefs)


def _preferences_from(raw: Dict, base: SchedulePreferences) -> SchedulePreferences:
    known = {f.name for f in fields(SchedulePreferences)}
    unknown = set(raw) - known
    if unknown:
        raise ValueError(f"Unknown preference keys: {sorted(unknown)}")
    merged = {f.name: getattr(base, f.name) for f in fields(SchedulePreferences)}
    merged.update(raw)
    for key in ("include_lunch", "include_dinner"):
        if not isinstance(merged[key], bool):
            raise ValueError(f"Preference {key} must be true or false, got {merged[key]!r}")
    return SchedulePreferences(
        include_lunch=merged["include_lunch"],
        include_dinner=merged["include_dinner"],
        break_minutes=merged["break_minutes"],
    )


def _meal_from(raw: Dict, base: MealWindow) -> MealWindow:
    return MealWindow(
        title=str(raw.get("title", base.title)),
        start=str(raw.get("start", base.start)),
        duration_minutes=int(raw.get("duration_minutes", base.duration_minutes)),
    )


def config_from_dict(data: Dict | None) -> PlannerConfig:
    cfg = PlannerConfig()
    if not data:
        return cfg
    if not isinstance(data, dict):
        raise ValueError("Configuration root must be a mapping")

    updates = {}
    if "preferences" in data:
        updates["preferences"] = _preferences_from(data["preferences"] or {}, cfg.preferences)
    for key in ("opening_time", "closing_time", "default_color", "meal_color", "break_color", "timezone"):
        if key in data:
            updates[key] = data[key]
    for key in ("tie_window_minutes", "turnover_buffer_minutes"):
        if key in data:
            updates[key] = int(data[key])
    if "lunch" in data:
        updates["lunch"] = _meal_from(data["lunch"] or {}, cfg.lunch)
    if "dinner" in data:
        updates["dinner"] = _meal_from(data["dinner"] or {}, cfg.dinner)
    if "family_ratings" in data:
        updates["family_ratings"] = [str(r).upper() for r in data["family_ratings"]]
    if "rating_colors" in data:
        colors = dict(cfg.rating_colors)
        colors.update({str(k).upper(): str(v) for k, v in data["rating_colors"].items()})
        updates["rating_colors"] = colors
    if "presets" in data:
        presets = []
        for p in data["presets"]:
            if "label" not in p:
                raise ValueError("Every preset needs a label")
            presets.append(
                QuickPreset(
                    label=str(p["label"]),
                    description=str(p.get("description", "")),
                    preferences=_preferences_from(p.get("preferences") or {}, SchedulePreferences()),
                )
            )
        updates["presets"] = presets
    return replace(cfg, **updates)


def load_config(path: str | Path | None = None) -> PlannerConfig:
    """Load planner configuration from a YAML or JSON file.

    Missing keys fall back to the built-in defaults; ``None`` returns the
    defaults unchanged.
    """
    if path is None:
        return PlannerConfig()
    path = Path(path)
    if not path.exists():
        raise ValueError(f"Config file not found: {path}")
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValueError(f"Could not parse config {path}: {e}") from e
    return config_from_dict(data)
