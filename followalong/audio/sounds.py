"""Cue sound synthesis and playback using numpy + QSoundEffect.

Both cues are generated programmatically as WAV files using sine-wave
synthesis with ADSR envelopes, then cached to disk.

Sound names
-----------
- ``beep``: short bright tone: play, threshold marks, segment changes
- ``bell``: triple boxing bell: end of the session
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

logger = logging.getLogger(__name__)


# ── paths ────────────────────────────────────────────────────────────────

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "FollowAlong"
SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SOUND_NAMES = ("beep", "bell")

# Relative loudness of each cue, scaled by the master volume.
SOUND_GAIN: dict[str, float] = {
    "beep": 0.85,
    "bell": 0.9,
}

SAMPLE_RATE = 44100


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _make_envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.ones(length, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    d_end = min(a + decay, length)
    if decay > 0 and d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    s_end = max(length - release, d_end)
    if s_end > d_end:
        env[d_end:s_end] = sustain_level
    if release > 0 and s_end < length:
        env[s_end:] = np.linspace(sustain_level, 0.0, length - s_end)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_beep() -> bytes:
    """Cue beep, 1 kHz, 180 ms, crisp attack so it cuts through music."""
    tone = _sine(1000.0, 0.18) * 0.7
    env = _make_envelope(len(tone), attack=60, decay=800, sustain_level=0.6, release=1500)
    # Trailing silence so QSoundEffect doesn't clip the release
    return _to_wav_bytes(np.concatenate([tone * env, np.zeros(int(SAMPLE_RATE * 0.04))]))


def _bell_strike() -> np.ndarray:
    """One ring bell strike: inharmonic partials, fast attack, long decay."""
    duration = 0.9
    partials = ((620.0, 0.45), (1240.0, 0.18), (1705.0, 0.10), (2480.0, 0.05))
    strike = sum(_sine(freq, duration) * amp for freq, amp in partials)
    env = _make_envelope(
        len(strike),
        attack=40,
        decay=int(SAMPLE_RATE * 0.15),
        sustain_level=0.35,
        release=int(SAMPLE_RATE * 0.7),
    )
    return strike * env


def _generate_triple_bell() -> bytes:
    """End of session: three overlapping bell strikes, 350 ms apart."""
    strike = _bell_strike()
    spacing = int(SAMPLE_RATE * 0.35)
    out = np.zeros(spacing * 2 + len(strike))
    for i in range(3):
        out[i * spacing: i * spacing + len(strike)] += strike
    return _to_wav_bytes(out * 0.8)


_GENERATORS: dict[str, callable] = {
    "beep": _generate_beep,
    "bell": _generate_triple_bell,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Synthesizes, caches and plays the timer's cue sounds.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(85)
        mgr.play("beep")
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._volume = 0.85  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

        self._ensure_wav_files()
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def set_volume(self, level: int) -> None:
        """Set master volume (0-100).  Updates all loaded effects."""
        self._volume = max(0, min(level, 100)) / 100.0
        for name, effect in self._effects.items():
            effect.setVolume(self._volume * SOUND_GAIN[name])

    def play(self, name: str) -> None:
        """Play a sound by name.  No-op if the name is unknown."""
        effect = self._effects.get(name)
        if effect is None:
            logger.debug("No sound loaded for %r", name)
            return
        if effect.isPlaying():
            effect.stop()  # restart from the top
        effect.play()

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files to the cache directory."""
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name, gen_fn in _GENERATORS.items():
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(gen_fn())

    def _load_effects(self) -> None:
        """Create QSoundEffect instances from cached WAV files."""
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if path.exists():
                effect = QSoundEffect(self)
                effect.setSource(QUrl.fromLocalFile(str(path)))
                effect.setVolume(self._volume * SOUND_GAIN[name])
                self._effects[name] = effect
