"""detimer: a countdown timer for live streams, with sprint/interval cycles."""

__version__ = "0.1.0"

from .errors import DetimerError, InvalidInput, SinkIOError, AudioError
from .timer import Duration, normalize, TickEngine, RunConfig, build_orchestration

__all__ = [
    "__version__",
    "DetimerError",
    "InvalidInput",
    "SinkIOError",
    "AudioError",
    "Duration",
    "normalize",
    "TickEngine",
    "RunConfig",
    "build_orchestration",
]
