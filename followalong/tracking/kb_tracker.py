"""Per-round kettlebell results entered during a follow-along session.

The timer never reads these; the view asks the transport for the current
``kb_round_index`` and routes +/- taps here.

EMOM rounds record reps for each of the three minutes; AMRAP and LADDER
rounds record completed rounds.  All counts clamp at zero.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from ..timer.timeline import Category, Segment, Style


EMOM_MINUTES = 3


@dataclass
class KbRoundState:
    round_index: int
    name: str
    style: Style | None = None
    completed_rounds: int = 0
    minute_reps: list[int] = field(default_factory=lambda: [0] * EMOM_MINUTES)
    notes: str | None = None

    @property
    def total_reps(self) -> int:
        return sum(self.minute_reps)

    def to_result(self) -> dict:
        result: dict = {
            "roundIndex": self.round_index,
            "name": self.name,
            "style": self.style.value if self.style else None,
            "notes": self.notes,
        }
        if self.style == Style.EMOM:
            result["emom"] = {"minuteReps": list(self.minute_reps)}
            result["totalReps"] = self.total_reps
        else:
            result["completedRounds"] = self.completed_rounds
        return result


class KbTracker:
    """In-memory rep/round counts, one row per kettlebell segment."""

    def __init__(self, kb_segments: Sequence[Segment]) -> None:
        self._meta = [
            (seg.name or f"Kettlebell {i + 1}", seg.style)
            for i, seg in enumerate(kb_segments)
        ]
        self._rows: list[KbRoundState] = []
        self.reset()

    @classmethod
    def from_timeline(cls, timeline: Sequence[Segment]) -> "KbTracker":
        return cls([seg for seg in timeline if seg.category == Category.KETTLEBELL])

    def __len__(self) -> int:
        return len(self._rows)

    def get_state(self, kb_index: int) -> KbRoundState:
        return self._rows[kb_index]

    # ── AMRAP / LADDER ────────────────────────────────────────────────

    def set_rounds(self, kb_index: int, rounds: int) -> None:
        self._rows[kb_index].completed_rounds = max(0, int(rounds))

    def inc_rounds(self, kb_index: int, delta: int) -> None:
        row = self._rows[kb_index]
        row.completed_rounds = max(0, row.completed_rounds + delta)

    # ── EMOM ──────────────────────────────────────────────────────────

    def set_minute(self, kb_index: int, minute: int, value: int) -> None:
        if not 0 <= minute < EMOM_MINUTES:
            return
        self._rows[kb_index].minute_reps[minute] = max(0, int(value))

    def inc_minute(self, kb_index: int, minute: int, delta: int) -> None:
        if not 0 <= minute < EMOM_MINUTES:
            return
        reps = self._rows[kb_index].minute_reps
        reps[minute] = max(0, reps[minute] + delta)

    # ── whole tracker ─────────────────────────────────────────────────

    def reset(self) -> None:
        self._rows = [
            KbRoundState(round_index=i, name=name, style=style)
            for i, (name, style) in enumerate(self._meta)
        ]

    def results(self) -> list[dict]:
        """Rows shaped for the completions API."""
        return [row.to_result() for row in self._rows]
