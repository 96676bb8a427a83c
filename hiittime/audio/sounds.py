"""Beep synthesis and playback using numpy + QSoundEffect.

Sounds are generated as WAV files from sine waves shaped by an ADSR
envelope, then cached to disk so later launches skip synthesis.

Sound names
-----------
- ``cue``           short beep for each of the last three seconds
- ``phase_change``  longer beep when work or rest begins
- ``complete``      rising three-beep finish
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..timer.sequencer import Phase, PhaseSequencer


logger = logging.getLogger(__name__)

# ── paths ────────────────────────────────────────────────────────────────

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "HIITTime"
SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SOUND_NAMES = (
    "cue",
    "phase_change",
    "complete",
)

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
    # Attack
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    # Decay
    d_end = min(a + decay, length)
    if decay > 0 and d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    # Sustain
    s_end = max(length - release, d_end)
    if s_end > d_end:
        env[d_end:s_end] = sustain_level
    # Release
    if release > 0 and s_end < length:
        env[s_end:] = np.linspace(sustain_level, 0.0, length - s_end)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _beep(freq: float, duration_s: float, level: float = 0.5) -> np.ndarray:
    tone = _sine(freq, duration_s) * level
    env = _make_envelope(
        len(tone),
        attack=int(SAMPLE_RATE * 0.005),
        decay=int(SAMPLE_RATE * 0.02),
        sustain_level=0.8,
        release=int(SAMPLE_RATE * 0.03),
    )
    return tone * env


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    # Clip and scale
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


def _generate_cue() -> bytes:
    """Countdown pip, 880 Hz for 120 ms."""
    return _to_wav_bytes(np.concatenate([
        _beep(880.0, 0.12),
        np.zeros(int(SAMPLE_RATE * 0.03)),
    ]))


def _generate_phase_change() -> bytes:
    """Go beep, an octave above the cue and held for 400 ms."""
    tone = _beep(1760.0, 0.4, level=0.45)
    overtone = _beep(880.0, 0.4, level=0.1)
    return _to_wav_bytes(tone + overtone)


def _generate_complete() -> bytes:
    """Finish: three rising beeps (A5 → C#6 → E6), last one held."""
    notes = [880.0, 1108.73, 1318.51]
    parts: list[np.ndarray] = []
    for i, freq in enumerate(notes):
        last = i == len(notes) - 1
        parts.append(_beep(freq, 0.5 if last else 0.15))
        if not last:
            parts.append(np.zeros(int(SAMPLE_RATE * 0.05)))
    return _to_wav_bytes(np.concatenate(parts))


_GENERATORS = {
    "cue": _generate_cue,
    "phase_change": _generate_phase_change,
    "complete": _generate_complete,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Synthesizes, caches and plays the workout beeps.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(70)
        mgr.connect_sequencer(sequencer)

    A sound that cannot be written or loaded is logged and skipped;
    playback problems never reach the sequencer.
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

        self._ensure_wav_files()
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def set_volume(self, level: int) -> None:
        """Set volume (0-100).  Updates all loaded effects."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def play(self, name: str) -> None:
        """Play a sound by name.  No-op if disabled or name unknown."""
        if not self._enabled:
            return
        effect = self._effects.get(name)
        if effect is None:
            logger.debug("No sound loaded for %r", name)
            return
        effect.play()

    def connect_sequencer(self, sequencer: PhaseSequencer) -> None:
        """Beep on cues, on work/rest starts, and on completion.

        Phase beeps follow the sequencer's cue toggle so one switch
        silences the whole workout.
        """
        sequencer.cue.connect(lambda: self.play("cue"))

        def on_phase(phase: Phase) -> None:
            if not sequencer.cue_enabled:
                return
            if phase in (Phase.WORKING, Phase.RESTING):
                self.play("phase_change")
            elif phase == Phase.COMPLETE:
                self.play("complete")

        sequencer.phase_changed.connect(on_phase)

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files to the cache directory."""
        try:
            self._sounds_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.warning("Sound cache %s unavailable: %s", self._sounds_dir, exc)
            return
        for name, gen_fn in _GENERATORS.items():
            path = self._sounds_dir / f"{name}.wav"
            if path.exists():
                continue
            try:
                path.write_bytes(gen_fn())
            except OSError as exc:
                logger.warning("Could not write %s: %s", path, exc)

    def _load_effects(self) -> None:
        """Create QSoundEffect instances from cached WAV files."""
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                continue
            effect = QSoundEffect(self)
            effect.setSource(QUrl.fromLocalFile(str(path)))
            effect.setVolume(self._volume)
            self._effects[name] = effect
