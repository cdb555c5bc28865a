"""Audio and haptic cue backends."""

from .haptics import Haptics, PULSE_SOFT, PULSE_MEDIUM, PULSE_STRONG

__all__ = ["Haptics", "PULSE_SOFT", "PULSE_MEDIUM", "PULSE_STRONG"]
