"""End-of-countdown sound: WAV validation, blocking playback, built-in chime.

``SoundNotifier`` checks its WAV file up front, so a missing or broken
file fails before any countdown starts.  ``play()`` blocks until the
clip has finished, then rearms the effect for the next phase.

When no file is given the built-in chime is synthesised with numpy
(sine waves shaped by an ADSR envelope) and cached to disk.
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QEventLoop, QObject, QTimer, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..errors import AudioError
from ..timer.engine import ensure_app

logger = logging.getLogger(__name__)


SAMPLE_RATE = 44100
CHIME_FILENAME = "chime.wav"

# Extra wait on top of the clip length before giving up on playingChanged.
PLAYBACK_GRACE_MS = 1500


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
    env = np.full(length, sustain_level, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    d_end = min(a + decay, length)
    if d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    r_start = max(length - release, d_end)
    if r_start < length:
        env[r_start:] = np.linspace(sustain_level, 0.0, length - r_start)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Float samples in -1..1 to mono 16-bit PCM WAV."""
    pcm = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(pcm.tobytes())
    return buf.getvalue()


def generate_chime() -> bytes:
    """Rising C5→E5→G5→C6 arpeggio with a held last note."""
    notes = [523.25, 659.25, 783.99, 1046.50]
    gap = np.zeros(int(SAMPLE_RATE * 0.03))
    parts: list[np.ndarray] = []
    for freq in notes[:-1]:
        tone = _sine(freq, 0.12) * 0.5
        parts.append(tone * _make_envelope(len(tone), attack=60, decay=150,
                                           sustain_level=0.3, release=200))
        parts.append(gap)
    last = _sine(notes[-1], 0.6) * 0.5 + _sine(notes[-1] * 2, 0.6) * 0.08
    parts.append(last * _make_envelope(len(last), attack=80, decay=400,
                                       sustain_level=0.5, release=SAMPLE_RATE // 4))
    return _to_wav_bytes(np.concatenate(parts))


def builtin_chime_path(cache_dir: Path) -> Path:
    """Path to the cached built-in chime, generating it on first use."""
    path = Path(cache_dir) / CHIME_FILENAME
    if not path.exists():
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(generate_chime())
        except OSError as exc:
            raise AudioError(f"não foi possível gerar o som padrão em {path}: {exc}") from exc
        logger.debug("Generated built-in chime at %s", path)
    return path


def wav_duration_ms(path: Path) -> int:
    """Length of a WAV file in milliseconds.  Raises AudioError if unreadable."""
    if not path.is_file():
        raise AudioError(f"arquivo de som não encontrado: {path}")
    try:
        with wave.open(str(path), "rb") as wf:
            frames = wf.getnframes()
            rate = wf.getframerate()
    except (wave.Error, EOFError) as exc:
        raise AudioError(f"formato de som não reconhecido em {path}: {exc}") from exc
    except OSError as exc:
        raise AudioError(f"não foi possível ler {path}: {exc}") from exc
    if frames == 0 or rate == 0:
        raise AudioError(f"arquivo de som vazio: {path}")
    return int(frames * 1000 / rate)


# ═══════════════════════════════════════════════════════════════════════════
#  NOTIFIER
# ═══════════════════════════════════════════════════════════════════════════


class SoundNotifier(QObject):
    """Plays one WAV file to completion after each countdown.

    Usage::

        notifier = SoundNotifier("bell.wav", volume=70)
        notifier.play()   # blocks, then rearms
    """

    def __init__(
        self,
        path: str | Path,
        parent: QObject | None = None,
        *,
        volume: int = 70,
    ) -> None:
        super().__init__(parent)
        self._path = Path(path)
        self._duration_ms = wav_duration_ms(self._path)
        self._volume = max(0, min(volume, 100)) / 100.0
        self._effect: QSoundEffect | None = None
        self._armed = True

    # ── public API ────────────────────────────────────────────────────

    @property
    def path(self) -> Path:
        return self._path

    @property
    def duration_ms(self) -> int:
        return self._duration_ms

    @property
    def volume(self) -> int:
        return round(self._volume * 100)

    @property
    def armed(self) -> bool:
        """True when the next ``play()`` starts from the beginning."""
        return self._armed

    def play(self) -> None:
        """Play the whole clip, blocking until it ends."""
        if not self._armed:
            self.rearm()
        ensure_app()
        effect = self._load_effect()

        loop = QEventLoop()
        timeout = QTimer()
        timeout.setSingleShot(True)
        timeout.timeout.connect(loop.quit)

        def on_playing_changed() -> None:
            if not effect.isPlaying():
                loop.quit()

        def on_status_changed() -> None:
            if effect.status() == QSoundEffect.Status.Error:
                loop.quit()

        effect.playingChanged.connect(on_playing_changed)
        effect.statusChanged.connect(on_status_changed)
        self._armed = False
        try:
            effect.play()
            if effect.status() != QSoundEffect.Status.Error:
                timeout.start(self._duration_ms + PLAYBACK_GRACE_MS)
                loop.exec()
        finally:
            timeout.stop()
            effect.playingChanged.disconnect(on_playing_changed)
            effect.statusChanged.disconnect(on_status_changed)

        if effect.status() == QSoundEffect.Status.Error:
            raise AudioError(f"não foi possível tocar {self._path} (dispositivo de áudio indisponível?)")
        if effect.isPlaying():
            logger.warning("Playback of %s did not report completion in time", self._path)
        self.rearm()

    def rearm(self) -> None:
        """Stop playback and reload the source so it plays from the start."""
        if self._effect is not None:
            self._effect.stop()
            self._effect.setSource(QUrl())
            self._effect.setSource(QUrl.fromLocalFile(str(self._path)))
        self._armed = True

    # ── internal ──────────────────────────────────────────────────────

    def _load_effect(self) -> QSoundEffect:
        if self._effect is None:
            effect = QSoundEffect(self)
            effect.setSource(QUrl.fromLocalFile(str(self._path)))
            effect.setVolume(self._volume)
            self._effect = effect
        return self._effect
