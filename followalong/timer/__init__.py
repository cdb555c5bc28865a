"""Timer package."""

from .timeline import (
    Category,
    Style,
    RoundSpec,
    Segment,
    Workout,
    build_timeline,
    kb_round_index,
    load_workout,
    rounds_from_payload,
    DEFAULT_ROUND_SECONDS,
    REST_SECONDS,
    HALF_TIME_REST_SECONDS,
)
from .cues import CueDispatcher, DEFAULT_THRESHOLDS
from .engine import TimerEngine, TimerState, Phase
from .transport import TransportController, TransportSnapshot, format_clock

__all__ = [
    "Category",
    "Style",
    "RoundSpec",
    "Segment",
    "Workout",
    "build_timeline",
    "kb_round_index",
    "load_workout",
    "rounds_from_payload",
    "DEFAULT_ROUND_SECONDS",
    "REST_SECONDS",
    "HALF_TIME_REST_SECONDS",
    "CueDispatcher",
    "DEFAULT_THRESHOLDS",
    "TimerEngine",
    "TimerState",
    "Phase",
    "TransportController",
    "TransportSnapshot",
    "format_clock",
]
