"""Audio package."""

from .sounds import SoundNotifier, builtin_chime_path, generate_chime, wav_duration_ms

__all__ = ["SoundNotifier", "builtin_chime_path", "generate_chime", "wav_duration_ms"]
