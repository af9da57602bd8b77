"""Scheduling engine with comfortable and throughput packers."""

from .base import BaseScheduler, make_rng
from .comfortable import ComfortableScheduler, order_aligned, order_candidates
from .orchestrator import Orchestrator, PairedSchedule, build_paired_schedule, generate_variation
from .throughput import ThroughputScheduler

__all__ = [
    "BaseScheduler",
    "ComfortableScheduler",
    "ThroughputScheduler",
    "Orchestrator",
    "PairedSchedule",
    "build_paired_schedule",
    "generate_variation",
    "make_rng",
    "order_aligned",
    "order_candidates",
]
