"""Tests for paired schedule generation and variations."""

import random
from datetime import datetime

import pytest

from movieday.config import PlannerConfig, SchedulePreferences
from movieday.data_io import events_frame, parse_listings
from movieday.domain.models import Film, Screening
from movieday.engine.base import make_rng
from movieday.engine.orchestrator import Orchestrator, build_paired_schedule, generate_variation
from movieday.validator import validate_schedule
from movieday.visibility import VisibilityFilter, show_all

DAY = "2025-03-01"


def _dt(h, m=0):
    return datetime(2025, 3, 1, h, m)


@pytest.fixture
def listings(listings_raw):
    return parse_listings(listings_raw)


def _cfg(lunch=True, dinner=True, break_minutes=15):
    return PlannerConfig(preferences=SchedulePreferences(lunch, dinner, break_minutes))


def _films(result):
    return sorted((e.title, e.start) for e in result.film_events)


@pytest.mark.parametrize("seed", range(10))
def test_two_film_day_with_default_preferences(morning_clash_films, seed):
    paired = build_paired_schedule(morning_clash_films, DAY, show_all, _cfg(), make_rng(seed))

    assert _films(paired.family) == [("A", _dt(10))]
    assert ("A", _dt(10)) in _films(paired.all_audiences)
    morning = [e for e in paired.all_audiences.film_events if e.start in (_dt(10), _dt(10, 15))]
    assert len(morning) == 1


@pytest.mark.parametrize("seed", range(20))
def test_two_film_day_without_lunch_keeps_one_morning_start(morning_clash_films, seed):
    paired = build_paired_schedule(morning_clash_films, DAY, show_all, _cfg(lunch=False), make_rng(seed))

    morning = [e for e in paired.all_audiences.film_events if e.start in (_dt(10), _dt(10, 15))]
    assert len(morning) == 1
    assert [t for t, _ in _films(paired.family)] == ["A"]
    # family keeps the same time for A as the all-movies view
    assert paired.family.start_for_title("A") == paired.all_audiences.start_for_title("A")


def test_family_avoids_r_slot_taken_in_all_audiences():
    films = [
        Film("Thriller", "R", "2 hours, 0 minutes", (Screening("1", ("2:00 PM",)),)),
        Film("Twin", "PG", "2 hours, 0 minutes", (Screening("2", ("2:00 PM",)),)),
    ]
    cfg = _cfg()
    # every seed: whichever of the two 2:00 PM films the all-audiences view takes
    for seed in range(10):
        paired = build_paired_schedule(films, DAY, show_all, cfg, make_rng(seed))
        taken = [e.title for e in paired.all_audiences.film_events]
        assert len(taken) == 1
        if taken == ["Thriller"]:
            assert paired.family.film_events == []
        else:
            assert _films(paired.family) == [("Twin", _dt(14))]


def test_paired_schedule_is_reproducible(listings):
    films = listings[DAY]
    first = build_paired_schedule(films, DAY, show_all, _cfg(), make_rng(7))
    second = build_paired_schedule(films, DAY, show_all, _cfg(), make_rng(7))
    assert _films(first.family) == _films(second.family)
    assert _films(first.all_audiences) == _films(second.all_audiences)


def test_variation_is_reproducible_and_valid(listings):
    films = listings[DAY]
    cfg = _cfg()
    a = generate_variation(films, DAY, show_all, cfg, make_rng(11))
    b = generate_variation(films, DAY, show_all, cfg, make_rng(11))
    assert _films(a.all_audiences) == _films(b.all_audiences)
    validate_schedule(events_frame(a.all_audiences.events), DAY, cfg)
    validate_schedule(events_frame(a.family.events), DAY, cfg, family_only=True)


def test_variations_produce_different_schedules():
    films = [
        Film(f"F{i}", "PG", "2 hours, 0 minutes", (Screening("1", (f"10:{i * 5:02d} AM",)),))
        for i in range(5)
    ]
    cfg = _cfg(lunch=False, dinner=False, break_minutes=0)
    rng = make_rng(3)
    picks = {tuple(_films(generate_variation(films, DAY, show_all, cfg, rng).all_audiences)) for _ in range(30)}
    assert len(picks) > 1


def test_variation_does_not_mutate_input_order(listings):
    films = listings[DAY]
    before = [f.title for f in films]
    generate_variation(films, DAY, show_all, _cfg(), make_rng(0))
    assert [f.title for f in films] == before


def _random_listing(rng):
    ratings = ["G", "PG", "PG-13", "R", "NR"]
    films = []
    for i in range(rng.randint(3, 12)):
        times = []
        for _ in range(rng.randint(1, 4)):
            hour = rng.randint(9, 23)
            minute = rng.choice([0, 5, 10, 15, 20, 30, 40, 45, 50])
            suffix = "AM" if hour < 12 else "PM"
            times.append(f"{(hour - 1) % 12 + 1}:{minute:02d} {suffix}")
        films.append(
            Film(
                title=f"Film {i}",
                rating=rng.choice(ratings),
                duration=f"{rng.randint(1, 2)} hours, {rng.randint(0, 59)} minutes",
                screenings=(Screening(f"Screen {rng.randint(1, 8)}", tuple(times)),),
            )
        )
    return films


@pytest.mark.slow
@pytest.mark.parametrize("seed", range(40))
def test_schedules_hold_invariants_for_random_listings(seed):
    rng = random.Random(seed)
    films = _random_listing(rng)
    prefs = SchedulePreferences(rng.random() < 0.7, rng.random() < 0.7, rng.choice([0, 10, 15, 30, 60]))
    cfg = PlannerConfig(preferences=prefs)
    hidden = VisibilityFilter({f.title for f in films if rng.random() < 0.2})

    for paired in (
        build_paired_schedule(films, DAY, hidden.is_visible, cfg, make_rng(seed)),
        generate_variation(films, DAY, hidden.is_visible, cfg, make_rng(seed)),
    ):
        validate_schedule(events_frame(paired.all_audiences.events), DAY, cfg)
        validate_schedule(events_frame(paired.family.events), DAY, cfg, family_only=True)
        for result in (paired.all_audiences, paired.family):
            assert not {e.title for e in result.film_events} & hidden.hidden


def test_orchestrator_plan_and_next_variation(listings, capsys):
    orch = Orchestrator(listings, _cfg(), seed=5)
    first = orch.plan(DAY)
    assert first.variation == 0
    second = orch.next_variation(DAY)
    third = orch.next_variation(DAY)
    assert (second.variation, third.variation) == (1, 2)

    out = capsys.readouterr().out
    assert "[INFO] Orchestrator: Building schedules for 2025-03-01" in out
    assert "Variation #3" in out


def test_orchestrator_unknown_date_yields_meals_only(listings, capsys):
    paired = Orchestrator(listings, _cfg(), seed=1).plan("2031-01-01")
    assert paired.all_audiences.film_events == []
    assert [e.kind for e in paired.family.events] == ["meal", "meal"]
    assert "[WARN] No listings for 2031-01-01" in capsys.readouterr().out
