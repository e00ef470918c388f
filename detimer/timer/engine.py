"""Tick engine for detimer.

Drives a single :class:`Duration` from its starting value down to zero in
real time, writing ``MM:SS`` to a sink once per elapsed second.

Timing
------
A ``QTimer`` wakes the engine every ``poll_interval_ms``.  Each wake-up
samples the clock and computes how many *whole* seconds passed since the
last tick; nothing happens below one second.  When one or more seconds
have passed the duration is decremented by that count, written, and the
last-tick timestamp moves to the sampled time (not to an ideal boundary),
so a slow sink delays later ticks instead of piling them up.

Termination
-----------
When ``seconds`` underflows it borrows from ``minutes``.  If ``minutes``
goes negative the countdown is over: ``run()`` returns without writing
the negative state and leaves the duration at ``00:00``.  So ``00:03``
produces ``00:03``, ``00:02``, ``00:01``, ``00:00`` and stops on the
following second.
"""

from __future__ import annotations

import logging
import sys
import time
from typing import Callable, Protocol

from PyQt6.QtCore import QCoreApplication, QEventLoop, QObject, QTimer, pyqtSignal

from ..errors import DetimerError, SinkIOError
from .duration import Duration

logger = logging.getLogger(__name__)


POLL_INTERVAL_MS = 100

_app: QCoreApplication | None = None


class Sink(Protocol):
    def write(self, line: str) -> None: ...


def ensure_app() -> QCoreApplication:
    """Return the running Qt application, creating a headless one if needed."""
    global _app
    app = QCoreApplication.instance()
    if app is None:
        _app = app = QCoreApplication(sys.argv[:1])
    return app


class TickEngine(QObject):
    """Counts one duration down to zero.

    Signals
    -------
    tick(text: str)
        Emitted after every successful sink write with the written value.
    """

    tick = pyqtSignal(str)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        poll_interval_ms: int = POLL_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._clock = clock

        self._duration: Duration | None = None
        self._sink: Sink | None = None
        self._last_tick: float = 0.0
        self._running: bool = False
        self._error: DetimerError | None = None
        self._loop: QEventLoop | None = None

        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(max(0, poll_interval_ms))
        self._qt_timer.timeout.connect(self._on_poll)

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def poll_interval_ms(self) -> int:
        return self._qt_timer.interval()

    # ── public API ────────────────────────────────────────────────────

    def run(self, duration: Duration, sink: Sink) -> None:
        """Block until *duration* reaches zero.

        *duration* is mutated in place.  Raises :class:`SinkIOError` as soon
        as a write fails; ticks already written stay written.
        """
        ensure_app()
        self._begin(duration, sink)
        if not self._running:
            self._raise_pending()
            return

        self._loop = QEventLoop()
        self._qt_timer.start()
        try:
            self._loop.exec()
        finally:
            self._qt_timer.stop()
            self._loop = None
            self._running = False

        self._raise_pending()

    # ── internal ──────────────────────────────────────────────────────

    def _begin(self, duration: Duration, sink: Sink) -> None:
        self._duration = duration
        self._sink = sink
        self._error = None
        self._running = True
        logger.debug("Countdown started at %s", duration.format())
        self._last_tick = self._clock()
        self._emit()

    def _on_poll(self) -> None:
        if not self._running:
            return

        now = self._clock()
        elapsed = int(now - self._last_tick)
        if elapsed < 1:
            return

        d = self._duration
        d.seconds -= elapsed
        while d.seconds < 0:
            d.seconds += 60
            d.minutes -= 1
            if d.minutes < 0:
                d.minutes = d.seconds = 0
                logger.debug("Countdown finished")
                self._finish()
                return

        self._emit()
        if self._running:
            self._last_tick = now

    def _emit(self) -> None:
        text = self._duration.format()
        try:
            self._sink.write(text)
        except DetimerError as exc:
            self._fail(exc)
            return
        except OSError as exc:
            error = SinkIOError(f"falha ao escrever {text!r}: {exc}")
            error.__cause__ = exc
            self._fail(error)
            return
        self.tick.emit(text)

    def _fail(self, error: DetimerError) -> None:
        logger.debug("Countdown aborted: %s", error)
        self._error = error
        self._finish()

    def _finish(self) -> None:
        self._running = False
        self._qt_timer.stop()
        if self._loop is not None:
            self._loop.quit()

    def _raise_pending(self) -> None:
        error, self._error = self._error, None
        if error is not None:
            raise error
