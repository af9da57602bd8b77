"""Movie day planner for a single theater.

Modules:
- config: preferences, presets and planner configuration (YAML or JSON)
- timeplan: showtime and duration parsing
- domain: films, screenings, candidate intervals and scheduled events
- visibility: hidden-title set used by the film filter
- constraints: eligibility and meal-window predicates
- intervals: candidate expansion and the full showtime timeline
- engine: comfortable and throughput packers, paired orchestration
- data_io: listings and schedule IO helpers
- validator: post-generation validations and summaries
- cli: command-line interface entrypoints
"""

__all__ = [
    "config",
    "timeplan",
    "domain",
    "visibility",
    "constraints",
    "intervals",
    "engine",
    "data_io",
    "validator",
    "cli",
]
