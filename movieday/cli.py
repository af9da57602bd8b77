from __future__ import annotations

import argparse
from typing import List

from .config import PlannerConfig, SchedulePreferences, load_config
from .data_io import available_dates, events_frame, read_listings, read_schedule, write_schedule
from .domain.models import ScheduleResult
from .engine.base import make_rng
from .engine.orchestrator import Orchestrator, PairedSchedule
from .engine.throughput import ThroughputScheduler
from .intervals import build_showtime_events
from .validator import summarize_schedule, validate_schedule
from .visibility import VisibilityFilter


def _load_cfg(args: argparse.Namespace) -> PlannerConfig:
    cfg = load_config(args.config)
    prefs = cfg.preferences
    if getattr(args, "preset", None):
        prefs = cfg.preset(args.preset).preferences
    overrides = {}
    if getattr(args, "no_lunch", False):
        overrides["include_lunch"] = False
    if getattr(args, "no_dinner", False):
        overrides["include_dinner"] = False
    if getattr(args, "break_minutes", None) is not None:
        overrides["break_minutes"] = args.break_minutes
    if overrides:
        merged = {
            "include_lunch": prefs.include_lunch,
            "include_dinner": prefs.include_dinner,
            "break_minutes": prefs.break_minutes,
        }
        merged.update(overrides)
        prefs = SchedulePreferences(**merged)
    return cfg.with_preferences(prefs)


def _pick_date(args: argparse.Namespace, listings) -> str:
    dates = available_dates(listings)
    if args.date:
        if args.date not in listings:
            raise SystemExit(f"No listings for {args.date}; available: {', '.join(dates) or 'none'}")
        return args.date
    if not dates:
        raise SystemExit("Listings file has no dates")
    return dates[0]


def _print_result(name: str, result: ScheduleResult, verbose: bool) -> None:
    print(f"\n== {name} ==")
    print(summarize_schedule(events_frame(result.events)))
    if verbose:
        for r in result.rejections:
            print(f"[DEBUG] {r.title} @ {r.showtime}: {r.reason}")


def _write_pair(args: argparse.Namespace, paired: PairedSchedule, cfg: PlannerConfig) -> None:
    if args.out_family:
        n = write_schedule(args.out_family, paired.family.events, cfg.timezone)
        print(f"[OK] Wrote {n} family events to {args.out_family}")
    if args.out_all:
        n = write_schedule(args.out_all, paired.all_audiences.events, cfg.timezone)
        print(f"[OK] Wrote {n} all-movies events to {args.out_all}")


def _cmd_dates(args: argparse.Namespace) -> None:
    listings = read_listings(args.listings)
    for d in available_dates(listings):
        print(f"{d}  {len(listings[d])} films")


def _cmd_plan(args: argparse.Namespace) -> None:
    cfg = _load_cfg(args)
    listings = read_listings(args.listings)
    selected_date = _pick_date(args, listings)
    visibility = VisibilityFilter(args.hide)
    orch = Orchestrator(listings, cfg, visibility.is_visible, seed=args.seed)

    paired = orch.plan(selected_date)
    for _ in range(args.variations):
        paired = orch.next_variation(selected_date)

    _print_result("Family-Friendly Schedule", paired.family, args.verbose)
    _print_result("All Movies Schedule", paired.all_audiences, args.verbose)
    _write_pair(args, paired, cfg)


def _cmd_shuffle(args: argparse.Namespace) -> None:
    cfg = _load_cfg(args)
    listings = read_listings(args.listings)
    selected_date = _pick_date(args, listings)
    visibility = VisibilityFilter(args.hide)
    orch = Orchestrator(listings, cfg, visibility.is_visible, seed=args.seed)

    orch.plan(selected_date)
    for _ in range(args.count):
        paired = orch.next_variation(selected_date)
        _print_result("Family-Friendly Schedule", paired.family, args.verbose)
        _print_result("All Movies Schedule", paired.all_audiences, args.verbose)
    _write_pair(args, paired, cfg)


def _cmd_throughput(args: argparse.Namespace) -> None:
    cfg = load_config(args.config)
    listings = read_listings(args.listings)
    selected_date = _pick_date(args, listings)
    visibility = VisibilityFilter(args.hide)
    result = ThroughputScheduler(cfg).make_schedule(
        listings[selected_date], selected_date, visibility.is_visible, make_rng(None)
    )
    _print_result("Optimized Schedule", result, args.verbose)
    if args.out:
        n = write_schedule(args.out, result.events, cfg.timezone)
        print(f"[OK] Wrote {n} events to {args.out}")


def _cmd_timeline(args: argparse.Namespace) -> None:
    cfg = load_config(args.config)
    listings = read_listings(args.listings)
    selected_date = _pick_date(args, listings)
    visibility = VisibilityFilter(args.hide)
    events, skipped = build_showtime_events(listings[selected_date], selected_date, visibility.is_visible, cfg)
    for s in skipped:
        print(f"[WARN] Skipped {s.title} at {s.showtime!r}: {s.reason}")
    for e in events:
        print(f"{e.start:%H:%M}-{e.end:%H:%M}  {e.label}")
    if args.out:
        n = write_schedule(args.out, events, cfg.timezone)
        print(f"[OK] Wrote {n} events to {args.out}")


def _cmd_validate(args: argparse.Namespace) -> None:
    cfg = _load_cfg(args)
    df = read_schedule(args.schedule)
    try:
        validate_schedule(df, args.date, cfg, family_only=args.family, check_breaks=not args.no_breaks)
    except ValueError as e:
        raise SystemExit(f"[ERROR] Validation failed: {e}")
    print("Validation passed.")


def _cmd_summarize(args: argparse.Namespace) -> None:
    print(summarize_schedule(read_schedule(args.schedule)))


def _add_listing_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--listings", required=True, help="Path to listings JSON")
    p.add_argument("--date", help="ISO date (default: first date in listings)")
    p.add_argument("--config", help="Path to config YAML/JSON")
    p.add_argument("--hide", action="append", default=[], metavar="TITLE", help="Hide a film (repeatable)")
    p.add_argument("-v", "--verbose", action="store_true", help="Print why candidates were rejected")


def _add_preference_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--preset", help="Quick preset label, e.g. 'Movie Marathon'")
    p.add_argument("--no-lunch", action="store_true")
    p.add_argument("--no-dinner", action="store_true")
    p.add_argument("--break-minutes", type=int, help="Gap between films, clamped to 0-60")


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="movieday", description="Plan a day of movies at one theater")
    sub = parser.add_subparsers(dest="command", required=True)

    d = sub.add_parser("dates", help="List dates in a listings file")
    d.add_argument("--listings", required=True)
    d.set_defaults(func=_cmd_dates)

    p = sub.add_parser("plan", help="Build family and all-movies schedules")
    _add_listing_args(p)
    _add_preference_args(p)
    p.add_argument("--seed", type=int, help="Random seed for reproducible schedules")
    p.add_argument("--variations", type=int, default=0, help="Reshuffle this many times before printing")
    p.add_argument("--out-family", help="Write the family schedule (CSV or JSON)")
    p.add_argument("--out-all", help="Write the all-movies schedule (CSV or JSON)")
    p.set_defaults(func=_cmd_plan)

    sh = sub.add_parser("shuffle", help="Reshuffle the day and print each new variation")
    _add_listing_args(sh)
    _add_preference_args(sh)
    sh.add_argument("--seed", type=int, help="Random seed for reproducible schedules")
    sh.add_argument("--count", type=int, default=1, help="How many variations to print")
    sh.add_argument("--out-family", help="Write the last family schedule (CSV or JSON)")
    sh.add_argument("--out-all", help="Write the last all-movies schedule (CSV or JSON)")
    sh.set_defaults(func=_cmd_shuffle)

    t = sub.add_parser("throughput", help="Fit as many films as possible")
    _add_listing_args(t)
    t.add_argument("--out", help="Write the schedule (CSV or JSON)")
    t.set_defaults(func=_cmd_throughput)

    tl = sub.add_parser("timeline", help="List every visible showing")
    _add_listing_args(tl)
    tl.add_argument("--out", help="Write the events (CSV or JSON)")
    tl.set_defaults(func=_cmd_timeline)

    v = sub.add_parser("validate", help="Validate a schedule file")
    v.add_argument("--schedule", required=True)
    v.add_argument("--date", required=True)
    v.add_argument("--config")
    v.add_argument("--family", action="store_true", help="Apply the family rating gate")
    v.add_argument("--no-breaks", action="store_true", help="Skip break spacing checks")
    _add_preference_args(v)
    v.set_defaults(func=_cmd_validate)

    s = sub.add_parser("summarize", help="Summarize a schedule file")
    s.add_argument("--schedule", required=True)
    s.set_defaults(func=_cmd_summarize)

    args = parser.parse_args(argv)
    if getattr(args, "variations", 0) < 0:
        parser.error("--variations must be >= 0")
    if getattr(args, "count", 1) < 1:
        parser.error("--count must be >= 1")
    try:
        args.func(args)
    except ValueError as e:
        raise SystemExit(f"[ERROR] {e}")


if __name__ == "__main__":
    main()
