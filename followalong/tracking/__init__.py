"""Kettlebell result tracking."""

from .kb_tracker import KbTracker, KbRoundState, EMOM_MINUTES

__all__ = ["KbTracker", "KbRoundState", "EMOM_MINUTES"]
