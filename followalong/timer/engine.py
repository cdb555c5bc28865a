"""Follow-along timer state machine.

States
------
IDLE        Not ticking.  Any index, any remaining time.
RUNNING     Counting down one second per ``QTimer`` timeout.
FINISHED    The last segment ran out.  Only reached automatically.

Transitions
-----------
IDLE → RUNNING                       (play)
RUNNING → IDLE                       (pause / next / prev / set_index / reset)
RUNNING → RUNNING, index + 1         (segment ran out, more segments left)
RUNNING → FINISHED                   (last segment ran out)
FINISHED → IDLE                      (pause / next / prev / set_index / reset)

A finish is reported once per pass: play() does nothing until reset or
navigation loads a segment again.

Tick handling
-------------
Each tick reads and writes the engine's one :class:`TimerState` object.
Manual navigation stops the ``QTimer`` before touching that state, and a
tick arriving while ``running`` is False does nothing, so a stale tick can
never undo a manual jump.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Sequence

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .cues import CueDispatcher
from .timeline import IMPLICIT_SEGMENT, Segment, total_seconds

logger = logging.getLogger(__name__)


TICK_INTERVAL_MS = 1000


class Phase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"


@dataclass
class TimerState:
    index: int = 0
    remaining: int = 0
    running: bool = False


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Qt-driven countdown over a fixed timeline of segments.

    Signals
    -------
    tick(remaining_seconds: int)
        Emitted after every applied tick and after manual jumps.
    round_changed(index: int, segment: Segment)
        Emitted whenever the current index changes.
    minute_changed(minute_index: int)
        Emitted when the elapsed minute within a segment changes,
        including minute 0 of every new segment.
    running_changed(running: bool)
    finished()
        Emitted once when the last segment runs out.
    """

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
        cues: CueDispatcher | None = None,
        db_enabled: bool = False,
    ) -> None:
        super().__init__(parent)

        self._timeline: tuple[Segment, ...] = tuple(timeline) or (IMPLICIT_SEGMENT,)
        self._cues = cues or CueDispatcher()
        self._cues.on_minute_change = self.minute_changed.emit
        self._db_enabled = db_enabled

        self._state = TimerState(remaining=self._timeline[0].duration)
        self._finished = False
        # set when the last segment runs out; cleared only by re-entering a segment
        self._pass_complete = False

        # ── session log ───────────────────────────────────────────────
        self.workout_id: str = ""
        self.workout_name: str = ""
        self._start_time: datetime | None = None
        self._db_session_id: int | None = None

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self._on_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def timeline(self) -> tuple[Segment, ...]:
        return self._timeline

    @property
    def cues(self) -> CueDispatcher:
        return self._cues

    @property
    def index(self) -> int:
        return self._state.index

    @property
    def remaining(self) -> int:
        return self._state.remaining

    @property
    def running(self) -> bool:
        return self._state.running

    @property
    def phase(self) -> Phase:
        if self._state.running:
            return Phase.RUNNING
        if self._finished:
            return Phase.FINISHED
        return Phase.IDLE

    @property
    def current(self) -> Segment:
        return self._timeline[self._state.index]

    @property
    def duration(self) -> int:
        return self.current.duration

    @property
    def total_segments(self) -> int:
        return len(self._timeline)

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def play(self) -> None:
        """Start or resume ticking from the current position."""
        if self._state.running or self._pass_complete:
            return
        if self._db_enabled and self._db_session_id is None:
            self._persist_start()
        self._cues.start_cue()
        self._set_running(True)

    def pause(self) -> None:
        self._set_running(False)
        self._finished = False

    def reset(self) -> None:
        """Back to the first segment, stopped, with a full countdown."""
        self._set_running(False)
        self._finished = False
        self._pass_complete = False
        self._db_session_id = None  # abandoned, left incomplete
        self._start_time = None
        moved = self._state.index != 0
        self._state.index = 0
        self._state.remaining = self._timeline[0].duration
        self._cues.reset()
        if moved:
            self.round_changed.emit(0, self._timeline[0])
        self.tick.emit(self._state.remaining)

    def next(self) -> None:
        self.set_index(self._state.index + 1)

    def prev(self) -> None:
        self.set_index(self._state.index - 1)

    def set_index(self, index: int) -> None:
        """Jump to *index* (clamped).  Always stops the clock first.

        After a finish, landing on the same segment reloads it so a
        one-segment session can be run again.
        """
        self._set_running(False)
        self._finished = False
        target = max(0, min(len(self._timeline) - 1, int(index)))
        moved = target != self._state.index
        if not moved and not self._pass_complete:
            return
        self._pass_complete = False
        self._enter(target)
        if moved:
            self.round_changed.emit(target, self._timeline[target])
        self.tick.emit(self._state.remaining)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _set_running(self, running: bool) -> None:
        if running:
            self._qt_timer.start()
        else:
            self._qt_timer.stop()
        if self._state.running != running:
            self._state.running = running
            self.running_changed.emit(running)

    def _enter(self, index: int) -> None:
        self._state.index = index
        self._state.remaining = self._timeline[index].duration
        self._cues.reset()

    def _on_tick(self) -> None:
        state = self._state
        if not state.running:
            return

        prev = state.remaining
        nxt = prev - 1
        self._cues.on_tick(self._timeline[state.index].duration, prev, nxt)

        if nxt >= 0:
            state.remaining = nxt
            self.tick.emit(nxt)
            return

        next_index = state.index + 1
        if next_index >= len(self._timeline):
            self._finish_session()
            return

        self._enter(next_index)
        self._cues.transition_cue()
        logger.debug(
            "Advanced to segment %d/%d (%s)",
            next_index + 1, len(self._timeline), self._timeline[next_index].name,
        )
        self.round_changed.emit(next_index, self._timeline[next_index])
        self.tick.emit(state.remaining)

    def _finish_session(self) -> None:
        self._cues.finish_cue()
        self._state.remaining = 0
        self._finished = True
        self._pass_complete = True
        self._set_running(False)

        if self._db_enabled:
            self._persist_completed(datetime.now())

        logger.info("Session finished after %d segments", len(self._timeline))
        self.tick.emit(0)
        self.finished.emit()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: database persistence
    # ══════════════════════════════════════════════════════════════════

    def _persist_start(self) -> None:
        from ..database.db import get_session
        from ..database.models import WorkoutSession

        self._start_time = datetime.now()
        with get_session() as db:
            record = WorkoutSession(
                workout_id=self.workout_id or None,
                workout_name=self.workout_name or None,
                start_time=self._start_time,
                segments_total=len(self._timeline),
                completed=False,
            )
            db.add(record)
            db.flush()
            self._db_session_id = record.id

    def _persist_completed(self, end_time: datetime) -> None:
        if self._db_session_id is None:
            return
        from ..database.db import get_session
        from ..database.models import WorkoutSession

        with get_session() as db:
            record = db.get(WorkoutSession, self._db_session_id)
            if record:
                record.end_time = end_time
                record.duration_seconds = total_seconds(self._timeline)
                record.completed = True
        self._db_session_id = None
