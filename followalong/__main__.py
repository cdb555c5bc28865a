"""Run a workout from the terminal: python -m followalong WORKOUT.json"""

import argparse
import logging
import sys

from PyQt6.QtWidgets import QApplication

from .audio import Haptics
from .audio.sounds import SoundManager
from .database.db import init_db
from .settings import load_settings
from .timer.timeline import load_workout
from .timer.transport import TransportController, format_clock


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="followalong",
        description="Hands-free round timer for boxing and kettlebell workouts.",
    )
    parser.add_argument("workout", help="workout JSON (list of rounds or {rounds: [...]})")
    parser.add_argument("--box-rounds", type=int, default=None,
                        help="boxing round followed by the half-time rest")
    parser.add_argument("--thresholds", type=int, nargs="+", default=None,
                        help="seconds-remaining marks that beep (default 120 60)")
    parser.add_argument("--mute", action="store_true", help="no audio cues")
    parser.add_argument("--no-db", action="store_true", help="don't log the session")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings()
    if args.box_rounds is not None:
        settings.boxing_round_count = args.box_rounds
    if args.thresholds:
        settings.thresholds = args.thresholds
    if args.mute:
        settings.muted = True
    if args.no_db:
        settings.log_sessions = False

    workout = load_workout(args.workout)
    if settings.log_sessions:
        init_db()

    app = QApplication(sys.argv[:1])
    app.setApplicationName("FollowAlong")

    sounds = SoundManager(parent=app)
    sounds.set_volume(settings.sound_volume)
    controller = TransportController.for_workout(
        workout,
        settings,
        audio=sounds,
        haptics=Haptics(enabled=settings.haptics_enabled),
    )

    def _show(remaining: int) -> None:
        nxt = controller.next_segment
        line = (
            f"\r{controller.header_label()}  {controller.current.name:<18} "
            f"{format_clock(remaining)}"
            f"  next: {nxt.name if nxt else '-'}"
        )
        print(line.ljust(72), end="", flush=True)

    def _on_round(index: int, segment) -> None:
        print()
        print(f"→ {segment.name} ({format_clock(segment.duration)})")

    controller.tick.connect(_show)
    controller.round_changed.connect(_on_round)
    controller.finished.connect(lambda: (print("\nWorkout complete!"), app.quit()))

    print(f"{workout.workout_name}: {controller.total_segments} segments")
    print(f"→ {controller.current.name} ({format_clock(controller.duration)})")
    _show(controller.remaining)
    controller.play()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
