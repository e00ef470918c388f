"""Shared test helpers for detimer."""

from __future__ import annotations

from detimer.timer.duration import Duration


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def __call__(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __len__(self):
        return len(self.items)

    @property
    def last(self):
        return self.items[-1] if self.items else None


class FakeClock:
    """Monotonic clock that moves forward *step* seconds on every read."""

    def __init__(self, step: float = 1.0, start: float = 0.0):
        self.now = start
        self.step = step
        self.reads = 0

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        self.reads += 1
        return value


class SequenceClock:
    """Clock returning scripted samples, one per read."""

    def __init__(self, samples):
        self._samples = list(samples)

    def push(self, *samples):
        self._samples.extend(samples)

    def __call__(self) -> float:
        return self._samples.pop(0)


class RecordingSink:
    """Sink keeping every line; optionally mirrors into a shared event log."""

    def __init__(self, events: list | None = None, tag: str = ""):
        self.lines: list[str] = []
        self._events = events
        self._tag = tag

    def write(self, line: str) -> None:
        self.lines.append(line)
        if self._events is not None:
            self._events.append(f"{self._tag}{line}")


class FailingSink(RecordingSink):
    """Raises OSError on the *fail_on*-th write (1-based)."""

    def __init__(self, fail_on: int):
        super().__init__()
        self.fail_on = fail_on
        self.attempts = 0

    def write(self, line: str) -> None:
        self.attempts += 1
        if self.attempts == self.fail_on:
            raise OSError(28, "No space left on device")
        super().write(line)


class FakeNotifier:
    def __init__(self, events: list | None = None, error: Exception | None = None):
        self.plays = 0
        self._events = events
        self._error = error

    def play(self) -> None:
        self.plays += 1
        if self._events is not None:
            self._events.append("<som>")
        if self._error is not None:
            raise self._error


class ScriptedOperator:
    """Operator gate answering from pre-scripted lists."""

    def __init__(self, intervals=(), continues=()):
        self.intervals: list[Duration] = list(intervals)
        self.continues: list[bool] = list(continues)
        self.asked = 0
        self.waited = 0

    def ask_interval(self) -> Duration:
        self.asked += 1
        return self.intervals.pop(0)

    def wait_for_continue(self) -> bool:
        self.waited += 1
        return self.continues.pop(0)
