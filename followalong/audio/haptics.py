"""Vibration cues.

Desktop machines rarely have a vibration motor, so the actual device call
is injected as *driver*: any callable taking a pattern of millisecond
on/off durations (e.g. a gamepad rumble or a paired phone bridge).
Without a driver every pulse is a no-op.
"""

from __future__ import annotations

from typing import Callable, Sequence


PULSE_SOFT: tuple[int, ...] = (25,)
PULSE_MEDIUM: tuple[int, ...] = (30, 40, 30)
PULSE_STRONG: tuple[int, ...] = (50, 60, 50)


class Haptics:
    def __init__(
        self,
        driver: Callable[[Sequence[int]], None] | None = None,
        *,
        enabled: bool = True,
    ) -> None:
        self._driver = driver
        self.enabled = enabled

    @property
    def available(self) -> bool:
        return self._driver is not None

    def vibrate(self, pattern: Sequence[int]) -> None:
        if not self.enabled or self._driver is None:
            return
        self._driver(tuple(pattern))

    def pulse_soft(self) -> None:
        self.vibrate(PULSE_SOFT)

    def pulse_medium(self) -> None:
        self.vibrate(PULSE_MEDIUM)

    def pulse_strong(self) -> None:
        self.vibrate(PULSE_STRONG)
