"""Transport façade over :class:`TimerEngine`.

The controller is what views and the command line talk to: a read-only
view of the session (current segment, countdown, lookahead) plus the
play / pause / prev / next / reset buttons.  Engine signals are
re-emitted unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from PyQt6.QtCore import QObject, pyqtSignal

from ..settings import Settings
from .cues import CueDispatcher, AudioBackend, HapticBackend, minute_index
from .engine import Phase, TimerEngine
from .timeline import (
    Segment,
    Workout,
    build_timeline,
    kb_round_index,
)


def format_clock(seconds: int) -> str:
    """``MM:SS`` readout; negative seconds show as ``00``."""
    seconds = max(seconds, 0)
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


@dataclass(frozen=True)
class TransportSnapshot:
    index: int
    total_segments: int
    remaining: int
    duration: int
    running: bool
    phase: Phase
    current: Segment
    next_segment: Segment | None


class TransportController(QObject):
    """Public session API: state readout plus transport controls."""

    tick = pyqtSignal(int)
    round_changed = pyqtSignal(int, object)
    minute_changed = pyqtSignal(int)
    running_changed = pyqtSignal(bool)
    finished = pyqtSignal()

    def __init__(
        self,
        timeline: Sequence[Segment],
        parent: QObject | None = None,
        *,
        thresholds: Iterable[int] | None = None,
        muted: bool = False,
        audio: AudioBackend | None = None,
        haptics: HapticBackend | None = None,
        db_enabled: bool = False,
    ) -> None:
        super().__init__(parent)

        cues = CueDispatcher(
            thresholds, audio=audio, haptics=haptics, muted=muted,
        )
        self._engine = TimerEngine(
            timeline, parent=self, cues=cues, db_enabled=db_enabled,
        )

        self._engine.tick.connect(self.tick)
        self._engine.round_changed.connect(self.round_changed)
        self._engine.minute_changed.connect(self.minute_changed)
        self._engine.running_changed.connect(self.running_changed)
        self._engine.finished.connect(self.finished)

    @classmethod
    def for_workout(
        cls,
        workout: Workout,
        settings: Settings,
        parent: QObject | None = None,
        *,
        audio: AudioBackend | None = None,
        haptics: HapticBackend | None = None,
        db_enabled: bool | None = None,
    ) -> "TransportController":
        """Build the timeline for *workout* and configure from *settings*."""
        timeline = build_timeline(workout.rounds, settings.boxing_round_count)
        controller = cls(
            timeline,
            parent,
            thresholds=settings.thresholds,
            muted=settings.muted,
            audio=audio,
            haptics=haptics,
            db_enabled=settings.log_sessions if db_enabled is None else db_enabled,
        )
        controller._engine.workout_id = workout.workout_id
        controller._engine.workout_name = workout.workout_name
        return controller

    # ── state ─────────────────────────────────────────────────────────

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    @property
    def timeline(self) -> tuple[Segment, ...]:
        return self._engine.timeline

    @property
    def current(self) -> Segment:
        return self._engine.current

    @property
    def remaining(self) -> int:
        return self._engine.remaining

    @property
    def running(self) -> bool:
        return self._engine.running

    @property
    def phase(self) -> Phase:
        return self._engine.phase

    @property
    def duration(self) -> int:
        return self._engine.duration

    @property
    def index(self) -> int:
        return self._engine.index

    @property
    def total_segments(self) -> int:
        return self._engine.total_segments

    @property
    def next_segment(self) -> Segment | None:
        nxt = self._engine.index + 1
        timeline = self._engine.timeline
        return timeline[nxt] if nxt < len(timeline) else None

    @property
    def progress(self) -> float:
        """0.0 → 1.0 through the current segment."""
        duration = self.duration
        elapsed = duration - self.remaining
        return max(0.0, min(1.0, elapsed / max(1, duration)))

    @property
    def kb_round_index(self) -> int | None:
        return kb_round_index(self._engine.timeline, self._engine.index)

    @property
    def active_minute(self) -> int:
        """Minute of the current segment being worked (0-based)."""
        return minute_index(self.duration, self.remaining)

    @property
    def muted(self) -> bool:
        return self._engine.cues.muted

    @muted.setter
    def muted(self, value: bool) -> None:
        self._engine.cues.muted = value

    def snapshot(self) -> TransportSnapshot:
        return TransportSnapshot(
            index=self.index,
            total_segments=self.total_segments,
            remaining=self.remaining,
            duration=self.duration,
            running=self.running,
            phase=self.phase,
            current=self.current,
            next_segment=self.next_segment,
        )

    def header_label(self) -> str:
        """e.g. ``"Round 3/10 • BOX"``."""
        side = "BOX" if self.kb_round_index is None else "BELL"
        return f"Round {self.index + 1}/{self.total_segments} • {side}"

    # ── controls ──────────────────────────────────────────────────────

    def play(self) -> None:
        self._engine.play()

    def pause(self) -> None:
        self._engine.pause()

    def toggle(self) -> None:
        if self._engine.running:
            self._engine.pause()
        else:
            self._engine.play()

    def reset(self) -> None:
        self._engine.reset()

    def next(self) -> None:
        self._engine.next()

    def prev(self) -> None:
        self._engine.prev()

    def set_index(self, index: int) -> None:
        self._engine.set_index(index)
