"""Cue derivation for the follow-along timer.

Two events are derived from every tick, both purely observational:

Minute boundary
    ``minute = (duration - max(next, 0)) // 60``.  Reported whenever it
    differs from the last reported minute.  The tracker is cleared on
    every segment change so minute 0 of a new segment always fires.

Threshold crossing
    The first configured mark ``m`` (largest first) with
    ``prev > m >= next`` plays one beep.  Marks that are not strictly
    inside the segment's duration are skipped for that segment.

Audio and haptic backends are best-effort: any exception they raise is
logged at DEBUG and dropped.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Protocol

logger = logging.getLogger(__name__)


DEFAULT_THRESHOLDS: tuple[int, ...] = (120, 60)

BEEP = "beep"
BELL = "bell"


class AudioBackend(Protocol):
    def play(self, name: str) -> None: ...


class HapticBackend(Protocol):
    def pulse_soft(self) -> None: ...
    def pulse_medium(self) -> None: ...
    def pulse_strong(self) -> None: ...


# ── pure helpers ──────────────────────────────────────────────────────────


def normalize_thresholds(marks: Iterable[int] | None) -> tuple[int, ...]:
    """Positive marks, de-duplicated, largest first.  Empty → defaults."""
    cleaned = sorted({int(m) for m in marks or () if int(m) > 0}, reverse=True)
    return tuple(cleaned) if cleaned else DEFAULT_THRESHOLDS


def minute_index(duration: int, remaining: int) -> int:
    return (duration - max(remaining, 0)) // 60


def crossed(prev: int, nxt: int, mark: int) -> bool:
    return prev > mark and nxt <= mark


def crossed_threshold(
    thresholds: Iterable[int], duration: int, prev: int, nxt: int
) -> int | None:
    """Return the single mark crossed between *prev* and *nxt*, if any."""
    for mark in thresholds:
        if 0 < mark < duration and crossed(prev, nxt, mark):
            return mark
    return None


# ── dispatcher ────────────────────────────────────────────────────────────


class CueDispatcher:
    """Turns tick transitions into minute events, beeps and pulses."""

    def __init__(
        self,
        thresholds: Iterable[int] | None = None,
        *,
        audio: AudioBackend | None = None,
        haptics: HapticBackend | None = None,
        muted: bool = False,
        on_minute_change: Callable[[int], None] | None = None,
    ) -> None:
        self._thresholds = normalize_thresholds(thresholds)
        self._audio = audio
        self._haptics = haptics
        self._muted = muted
        self.on_minute_change = on_minute_change
        self._last_minute: int | None = None

    # ── configuration ─────────────────────────────────────────────────

    @property
    def thresholds(self) -> tuple[int, ...]:
        return self._thresholds

    @thresholds.setter
    def thresholds(self, marks: Iterable[int] | None) -> None:
        self._thresholds = normalize_thresholds(marks)

    @property
    def muted(self) -> bool:
        return self._muted

    @muted.setter
    def muted(self, value: bool) -> None:
        self._muted = value

    @property
    def last_minute_index(self) -> int | None:
        return self._last_minute

    def reset(self) -> None:
        """Forget the last minute so the next tick reports a fresh one."""
        self._last_minute = None

    # ── tick ──────────────────────────────────────────────────────────

    def on_tick(self, duration: int, prev: int, nxt: int) -> None:
        minute = minute_index(duration, nxt)
        if minute != self._last_minute:
            self._last_minute = minute
            if self.on_minute_change is not None:
                self.on_minute_change(minute)

        if crossed_threshold(self._thresholds, duration, prev, nxt) is not None:
            self._sound(BEEP)
            self._pulse("pulse_soft")

    # ── transport cues ────────────────────────────────────────────────

    def start_cue(self) -> None:
        """Beep on play; also unlocks audio output on some platforms."""
        self._sound(BEEP)

    def transition_cue(self) -> None:
        self._sound(BEEP)
        self._pulse("pulse_medium")

    def finish_cue(self) -> None:
        self._sound(BELL)
        self._pulse("pulse_strong")

    # ── backends ──────────────────────────────────────────────────────

    def _sound(self, name: str) -> None:
        if self._muted or self._audio is None:
            return
        try:
            self._audio.play(name)
        except Exception:
            logger.debug("Audio cue %r failed", name, exc_info=True)

    def _pulse(self, kind: str) -> None:
        if self._haptics is None:
            return
        try:
            getattr(self._haptics, kind)()
        except Exception:
            logger.debug("Haptic cue %r failed", kind, exc_info=True)
