from datetime import datetime

import pandas as pd
import pytest

from movieday.config import PlannerConfig, SchedulePreferences
from movieday.validator import summarize_schedule, validate_schedule

DAY = "2025-03-01"


def _dt(h, m=0):
    return datetime(2025, 3, 1, h, m)


def _frame(rows):
    return pd.DataFrame(
        [
            {"title": t, "label": f"{t} (1)", "start": s, "end": e, "kind": k, "rating": r}
            for t, s, e, k, r in rows
        ]
    )


def _cfg(lunch=True, dinner=True, break_minutes=15):
    return PlannerConfig(preferences=SchedulePreferences(lunch, dinner, break_minutes))


def test_valid_schedule_passes():
    df = _frame(
        [
            ("Lunch Break", _dt(12), _dt(13), "meal", None),
            ("A", _dt(10), _dt(11, 30), "film", "G"),
            ("Break", _dt(11, 30), _dt(13, 30), "break", None),
            ("B", _dt(13, 30), _dt(15), "film", "PG"),
        ]
    )
    validate_schedule(df, DAY, _cfg(dinner=False), family_only=True)


def test_overlap_fails():
    df = _frame([("A", _dt(10), _dt(12), "film", "G"), ("B", _dt(11), _dt(12, 30), "film", "G")])
    with pytest.raises(ValueError, match="Overlapping"):
        validate_schedule(df, DAY, _cfg(False, False, 0))


def test_duplicate_title_fails():
    df = _frame([("A", _dt(10), _dt(11), "film", "G"), ("A", _dt(14), _dt(15), "film", "G")])
    with pytest.raises(ValueError, match="more than once"):
        validate_schedule(df, DAY, _cfg(False, False, 0))


def test_family_rating_gate():
    df = _frame([("Gore", _dt(10), _dt(11), "film", "R")])
    validate_schedule(df, DAY, _cfg(False, False, 0))
    with pytest.raises(ValueError, match="non-family"):
        validate_schedule(df, DAY, _cfg(False, False, 0), family_only=True)


def test_meal_overlap_fails():
    df = _frame([("A", _dt(11), _dt(12, 30), "film", "G")])
    with pytest.raises(ValueError, match="Lunch Break"):
        validate_schedule(df, DAY, _cfg())
    validate_schedule(df, DAY, _cfg(lunch=False))


def test_short_break_fails_unless_checks_disabled():
    df = _frame([("A", _dt(10), _dt(11), "film", "G"), ("B", _dt(11, 5), _dt(12), "film", "G")])
    with pytest.raises(ValueError, match="shorter than 15"):
        validate_schedule(df, DAY, _cfg(False, False, 15))
    validate_schedule(df, DAY, _cfg(False, False, 15), check_breaks=False)


def test_film_before_opening_fails():
    df = _frame([("A", _dt(8), _dt(9), "film", "G")])
    with pytest.raises(ValueError, match="opening hours"):
        validate_schedule(df, DAY, _cfg(False, False, 0))


def test_summarize():
    df = _frame(
        [
            ("A", _dt(10), _dt(11, 30), "film", "G"),
            ("Lunch Break", _dt(12), _dt(13), "meal", None),
            ("B", _dt(14), _dt(16), "film", "R"),
        ]
    )
    text = summarize_schedule(df)
    assert "A (1)" in text
    assert "Total screen time: 3.5h across 2 films" in text
    assert "meal" in text
    assert summarize_schedule(df.iloc[0:0]) == "No events."
