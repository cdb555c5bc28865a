"""Flatten a workout's rounds into a single countdown timeline.

Rest rules
----------
- Every round except the last is followed by a 60 s "Rest".
- The boxing round at position ``boxing_round_count - 1`` is followed by
  a 300 s "Half-time Rest" instead of the ordinary rest.
- Boxing rounds use their own duration (default 180 s); kettlebell rounds
  are always 180 s.

Example (``boxing_round_count=2``)::

    Boxing r1, Boxing r2, Kettlebell r3
    → r1, Rest(60), r2, Half-time Rest(300), r3
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Sequence

logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class Category(Enum):
    BOXING = "Boxing"
    KETTLEBELL = "Kettlebell"
    REST = "Rest"


class Style(Enum):
    EMOM = "EMOM"
    AMRAP = "AMRAP"
    LADDER = "LADDER"


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_ROUND_SECONDS = 180
REST_SECONDS = 60
HALF_TIME_REST_SECONDS = 5 * 60
DEFAULT_BOXING_ROUNDS = 5

REST_NAME = "Rest"
HALF_TIME_REST_NAME = "Half-time Rest"


# ── data ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class RoundSpec:
    """One authored work round, before rests are inserted."""

    id: str
    name: str
    category: Category
    style: Style | None = None
    duration: int | None = None  # boxing only
    items: tuple = ()


@dataclass(frozen=True)
class Segment:
    """One timed unit of the flattened session (work round or rest)."""

    id: str
    name: str
    duration: int
    category: Category
    style: Style | None = None
    items: tuple = ()

    @property
    def is_rest(self) -> bool:
        return self.category == Category.REST


IMPLICIT_SEGMENT = Segment(
    id="implicit",
    name="Round",
    duration=DEFAULT_ROUND_SECONDS,
    category=Category.BOXING,
)


# ── builder ───────────────────────────────────────────────────────────────


def _round_duration(spec: RoundSpec) -> int:
    if spec.category == Category.BOXING:
        if spec.duration is None:
            return DEFAULT_ROUND_SECONDS
        return max(0, int(spec.duration))
    return DEFAULT_ROUND_SECONDS


def build_timeline(
    rounds: Sequence[RoundSpec],
    boxing_round_count: int = DEFAULT_BOXING_ROUNDS,
) -> tuple[Segment, ...]:
    """Return the ordered segments for *rounds* with rests inserted."""
    total = len(rounds)
    segments: list[Segment] = []

    for idx, spec in enumerate(rounds):
        segments.append(Segment(
            id=spec.id,
            name=spec.name,
            duration=_round_duration(spec),
            category=spec.category,
            style=spec.style,
            items=tuple(spec.items),
        ))

        is_last = idx == total - 1
        if spec.category == Category.BOXING and idx == boxing_round_count - 1:
            if is_last:
                logger.warning(
                    "Half-time rest follows the final round %r; "
                    "the session will end on a rest",
                    spec.id,
                )
            segments.append(Segment(
                id=f"{spec.id}-halftime",
                name=HALF_TIME_REST_NAME,
                duration=HALF_TIME_REST_SECONDS,
                category=Category.REST,
            ))
        elif not is_last:
            segments.append(Segment(
                id=f"{spec.id}-rest",
                name=REST_NAME,
                duration=REST_SECONDS,
                category=Category.REST,
            ))

    return tuple(segments)


def total_seconds(timeline: Iterable[Segment]) -> int:
    return sum(seg.duration for seg in timeline)


def kb_round_index(timeline: Sequence[Segment], index: int) -> int | None:
    """0-based number of the latest kettlebell round at or before *index*.

    A rest reports the kettlebell round it follows.  ``None`` before the
    first kettlebell round or when *index* is out of range.
    """
    if not 0 <= index < len(timeline):
        return None
    count = sum(
        1 for seg in timeline[: index + 1]
        if seg.category == Category.KETTLEBELL
    )
    return count - 1 if count else None


# ── payload parsing ───────────────────────────────────────────────────────


def _parse_category(value: Any) -> Category:
    if value == Category.BOXING.value:
        return Category.BOXING
    if value != Category.KETTLEBELL.value:
        logger.warning("Unknown round category %r, timing as kettlebell", value)
    return Category.KETTLEBELL


def _parse_style(value: Any) -> Style | None:
    try:
        return Style(value)
    except ValueError:
        return None


def rounds_from_payload(rows: Iterable[dict]) -> list[RoundSpec]:
    """Convert API round dicts to :class:`RoundSpec`, ordered by ``order``."""
    ordered = sorted(rows, key=lambda r: r.get("order") or 0)
    specs: list[RoundSpec] = []
    for i, row in enumerate(ordered):
        duration = row.get("duration_s")
        specs.append(RoundSpec(
            id=str(row.get("round_id") or f"round-{i + 1}"),
            name=row.get("name") or f"Round {i + 1}",
            category=_parse_category(row.get("category")),
            style=_parse_style(row.get("style")),
            duration=int(duration) if duration is not None else None,
            items=tuple(row.get("items") or ()),
        ))
    return specs


@dataclass(frozen=True)
class Workout:
    workout_id: str
    workout_name: str
    rounds: tuple[RoundSpec, ...]


def load_workout(path: Path | str) -> Workout:
    """Read a workout JSON file.

    Accepts either a bare list of rounds or an object with a ``rounds``
    key (plus optional ``workout_id`` / ``workout_name``).
    """
    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, list):
        data = {"rounds": data}
    return Workout(
        workout_id=str(data.get("workout_id") or path.stem),
        workout_name=data.get("workout_name") or path.stem,
        rounds=tuple(rounds_from_payload(data.get("rounds") or [])),
    )
