"""Periodic display refreshers with guaranteed cancellation."""
import datetime
import logging
import threading
from typing import Callable, Optional
from ..config import settings
from ..models import Event
from .formatting import format_elapsed
from .forms import to_input_value

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime.datetime]


class IntervalTimer:
    """
    Calls `callback` every `interval` seconds on a daemon thread.

    cancel() stops the timer, waits for the worker to exit and may be
    called any number of times.
    """

    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self.interval = interval
        self.callback = callback
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("Timer already started")
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            try:
                self.callback()
            except Exception:
                logger.exception("Timer callback failed")

    def cancel(self) -> None:
        self._stopped.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stopped.is_set()


class ElapsedTicker:
    """Pushes the running time of the displayed event to `on_tick` every tick (1 s by default)."""

    def __init__(self, on_tick: Callable[[str], None], interval: Optional[float] = None,
                 clock: Clock = datetime.datetime.now) -> None:
        self.on_tick = on_tick
        self.interval = interval if interval is not None else settings.tick_seconds
        self.clock = clock
        self.event: Optional[Event] = None
        self._timer: Optional[IntervalTimer] = None

    def show(self, event: Optional[Event]) -> None:
        """Switch to a new event, cancelling the previous ticker."""
        self.stop()
        self.event = event
        if event is None or not event.is_open:
            self.on_tick("00:00:00")
            return
        self._tick()
        self._timer = IntervalTimer(self.interval, self._tick)
        self._timer.start()

    def _tick(self) -> None:
        if self.event is not None:
            self.on_tick(format_elapsed(self.event.start_time, self.clock()))

    def stop(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    @property
    def is_running(self) -> bool:
        return self._timer is not None and self._timer.is_running


class StartTimeDefault:
    """Keeps the form's default start time at 'now', refreshed every 30 seconds by default."""

    def __init__(self, on_update: Callable[[str], None], interval: Optional[float] = None,
                 clock: Clock = datetime.datetime.now) -> None:
        self.on_update = on_update
        self.clock = clock
        if interval is None:
            interval = settings.default_refresh_seconds
        self._timer = IntervalTimer(interval, self._refresh)

    def _refresh(self) -> None:
        self.on_update(to_input_value(self.clock()))

    def start(self) -> None:
        self._refresh()
        self._timer.start()

    def stop(self) -> None:
        self._timer.cancel()
