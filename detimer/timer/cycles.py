"""Sprint / interval orchestration.

Modes
-----
SINGLE      One countdown, one notification, done.  No status label.
BOUNDED     ``cycles`` sprints separated by intervals.  The last sprint
            is not followed by an interval: ``cycles=2`` runs
            Sprint 1/2, Intervalo 1/2, Sprint 2/2.
UNBOUNDED   Sprint, interval, wait for the operator, repeat.  The interval
            is asked for each cycle when not configured; a zero interval
            or a stop from the operator ends the run.

The mode is chosen once from a validated :class:`RunConfig`; each mode is
its own class so the loops never re-check which options were given.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from ..errors import InvalidInput, SinkIOError
from .duration import Duration
from .engine import Sink, TickEngine

logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class Phase(Enum):
    SPRINT = "Sprint"
    INTERVAL = "Intervalo"


class Mode(Enum):
    SINGLE = "single"
    BOUNDED = "bounded"
    UNBOUNDED = "unbounded"


# ── collaborators ─────────────────────────────────────────────────────────


class Notifier(Protocol):
    def play(self) -> None: ...


class Operator(Protocol):
    def ask_interval(self) -> Duration: ...

    def wait_for_continue(self) -> bool: ...


# ── state ─────────────────────────────────────────────────────────────────


@dataclass
class CycleState:
    """Where a cycled run is.  ``remaining_cycles=None`` means unbounded."""

    remaining_cycles: int | None = None
    cycle_index: int = 1
    phase: Phase = Phase.SPRINT
    total_cycles: int | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        self.total_cycles = self.remaining_cycles

    @property
    def exhausted(self) -> bool:
        return self.remaining_cycles == 0

    @property
    def is_last_cycle(self) -> bool:
        return self.remaining_cycles == 1

    def label(self) -> str:
        """``Sprint 2``, ``Intervalo 2/4`` and so on."""
        if self.total_cycles is None:
            return f"{self.phase.value} {self.cycle_index}"
        return f"{self.phase.value} {self.cycle_index}/{self.total_cycles}"

    def advance(self) -> None:
        """Sprint → Interval of the same cycle; Interval → next Sprint."""
        if self.phase == Phase.SPRINT:
            self.phase = Phase.INTERVAL
            return
        self.phase = Phase.SPRINT
        self.cycle_index += 1
        if self.remaining_cycles is not None:
            self.remaining_cycles -= 1

    def finish(self) -> None:
        """Close a bounded run after its final sprint."""
        if self.remaining_cycles is not None:
            self.remaining_cycles = 0


# ── configuration ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class RunConfig:
    duration: Duration
    interval: Duration | None = None
    cycles: int | None = None
    interactive_interval: bool = False

    def validate(self) -> RunConfig:
        if self.cycles is not None:
            if self.cycles < 1:
                raise InvalidInput(f"o número de ciclos deve ser positivo: {self.cycles}")
            if self.interval is None:
                raise InvalidInput("ciclos fixos exigem a duração do intervalo")
        return self


def select_mode(config: RunConfig) -> Mode:
    config.validate()
    if config.interval is None and not config.interactive_interval:
        return Mode.SINGLE
    if config.cycles is not None:
        return Mode.BOUNDED
    return Mode.UNBOUNDED


# ── orchestrations ────────────────────────────────────────────────────────


class Orchestration:
    """Runs phases through a :class:`TickEngine`.

    Each phase writes its label to the status sink, counts down on the
    tick sink, then plays the notifier (blocking).  Any error aborts the
    whole run.
    """

    mode: Mode

    def __init__(
        self,
        engine: TickEngine,
        sink: Sink,
        status_sink: Sink | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self._engine = engine
        self._sink = sink
        self._status_sink = status_sink if status_sink is not None else sink
        self._notifier = notifier

    def run(self) -> None:
        """Run every phase of this mode.  Implemented by each subclass."""
        raise NotImplementedError

    def run_phase(self, duration: Duration, label: str | None = None) -> None:
        if label is not None:
            self._write_status(label)
            logger.info("%s started (%s)", label, duration.format())
        self._engine.run(duration, self._sink)
        if self._notifier is not None:
            self._notifier.play()
        if label is not None:
            logger.info("%s finished", label)

    def _write_status(self, label: str) -> None:
        try:
            self._status_sink.write(label)
        except SinkIOError:
            raise
        except OSError as exc:
            raise SinkIOError(f"falha ao escrever {label!r}: {exc}") from exc


class SingleShot(Orchestration):
    mode = Mode.SINGLE

    def __init__(self, duration: Duration, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._duration = duration

    def run(self) -> None:
        self.run_phase(self._duration.copy())


class BoundedCycles(Orchestration):
    mode = Mode.BOUNDED

    def __init__(
        self, sprint: Duration, interval: Duration, cycles: int, *args, **kwargs
    ) -> None:
        super().__init__(*args, **kwargs)
        self._sprint = sprint
        self._interval = interval
        self.state = CycleState(remaining_cycles=cycles)

    def run(self) -> None:
        state = self.state
        while not state.exhausted:
            self.run_phase(self._sprint.copy(), state.label())
            if state.is_last_cycle:
                state.finish()
                break
            state.advance()
            self.run_phase(self._interval.copy(), state.label())
            state.advance()


class UnboundedCycles(Orchestration):
    mode = Mode.UNBOUNDED

    def __init__(
        self,
        sprint: Duration,
        interval: Duration | None,
        operator: Operator,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self._sprint = sprint
        self._interval = interval
        self._operator = operator
        self.state = CycleState()

    def run(self) -> None:
        state = self.state
        while True:
            self.run_phase(self._sprint.copy(), state.label())
            state.advance()

            interval = self._resolve_interval()
            if interval.is_zero:
                logger.info("Zero-length interval, stopping at cycle %d", state.cycle_index)
                return
            self.run_phase(interval, state.label())
            state.advance()

            if not self._operator.wait_for_continue():
                logger.info("Operator stopped the run")
                return

    def _resolve_interval(self) -> Duration:
        if self._interval is not None:
            return self._interval.copy()
        return self._operator.ask_interval()


def build_orchestration(
    config: RunConfig,
    engine: TickEngine,
    sink: Sink,
    status_sink: Sink | None = None,
    notifier: Notifier | None = None,
    operator: Operator | None = None,
) -> Orchestration:
    """Pick the orchestration variant for *config*."""
    mode = select_mode(config)
    collaborators = (engine, sink, status_sink, notifier)

    if mode == Mode.SINGLE:
        return SingleShot(config.duration, *collaborators)
    if mode == Mode.BOUNDED:
        return BoundedCycles(config.duration, config.interval, config.cycles, *collaborators)
    if operator is None:
        raise InvalidInput("ciclos sem limite exigem um operador interativo")
    return UnboundedCycles(config.duration, config.interval, operator, *collaborators)
