"""Shared test helpers for FollowAlong."""

from followalong.timer.engine import TimerEngine
from followalong.timer.timeline import Category, RoundSpec, Segment, Style, build_timeline


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeAudio:
    def __init__(self):
        self.played: list[str] = []

    def play(self, name: str) -> None:
        self.played.append(name)


class BrokenAudio:
    def play(self, name: str) -> None:
        raise RuntimeError("playback blocked")


class FakeHaptics:
    def __init__(self):
        self.pulses: list[str] = []

    def pulse_soft(self):
        self.pulses.append("soft")

    def pulse_medium(self):
        self.pulses.append("medium")

    def pulse_strong(self):
        self.pulses.append("strong")


def seg(duration: int, name: str = "", category: Category = Category.BOXING,
        style: Style | None = None) -> Segment:
    return Segment(
        id=name or f"s{duration}",
        name=name or f"Segment {duration}",
        duration=duration,
        category=category,
        style=style,
    )


def boxing(n: int, duration: int | None = None) -> RoundSpec:
    return RoundSpec(id=f"b{n}", name=f"Boxing Round {n}",
                     category=Category.BOXING, duration=duration)


def kettlebell(n: int, style: Style = Style.EMOM) -> RoundSpec:
    return RoundSpec(id=f"k{n}", name=f"Kettlebells Round {n}",
                     category=Category.KETTLEBELL, style=style)


def boxing_timeline(rounds: int):
    """*rounds* boxing rounds with a half-time placed out of reach."""
    return build_timeline([boxing(i + 1) for i in range(rounds)], boxing_round_count=99)


def run_ticks(engine: TimerEngine, n: int) -> None:
    for _ in range(n):
        engine._on_tick()


def tick_until_finished(engine: TimerEngine, limit: int = 100_000) -> int:
    """Tick while running; return how many ticks it took."""
    count = 0
    while engine.running and count < limit:
        engine._on_tick()
        count += 1
    return count
