"""Timer package."""

from .duration import Duration, normalize
from .engine import TickEngine, POLL_INTERVAL_MS, ensure_app
from .cycles import (
    CycleState,
    Phase,
    Mode,
    RunConfig,
    Orchestration,
    SingleShot,
    BoundedCycles,
    UnboundedCycles,
    select_mode,
    build_orchestration,
)

__all__ = [
    "Duration",
    "normalize",
    "TickEngine",
    "POLL_INTERVAL_MS",
    "ensure_app",
    "CycleState",
    "Phase",
    "Mode",
    "RunConfig",
    "Orchestration",
    "SingleShot",
    "BoundedCycles",
    "UnboundedCycles",
    "select_mode",
    "build_orchestration",
]
