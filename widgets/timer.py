"""Cancellable repeating task and the countdown built on it."""

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class RepeatingTask:
    """Runs `callback` every `interval` seconds on a daemon thread.

    The task does nothing until start() is called and keeps running until
    stop(). stop() may be called any number of times, including from inside
    the callback.
    """

    def __init__(self, interval: float, callback: Callable[[], None]):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.interval = interval
        self.callback = callback
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and not self._stop_event.is_set()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="repeating-task", daemon=True)
        self._thread.start()
        logger.debug("Repeating task started (every %.2fs)", self.interval)

    def stop(self) -> None:
        if self._stop_event.is_set():
            return
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        logger.debug("Repeating task stopped")

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval):
            self.callback()


class CountdownTimer:
    """A counter that steps down by one per tick and stops itself at zero.

    tick() runs on the task thread while the UI reads `count`, so every
    access to the counter goes through a lock. The task is always stopped
    outside the lock: stopping joins the thread, which may be waiting on it.
    """

    def __init__(
        self,
        start_count: int = 10,
        interval: float = 1.0,
        on_change: Optional[Callable[[int], None]] = None,
    ):
        if start_count < 0:
            raise ValueError(f"start_count must not be negative, got {start_count}")
        self.start_count = start_count
        self.interval = interval
        self.on_change = on_change
        self._count = start_count
        self._lock = threading.Lock()
        self._task: Optional[RepeatingTask] = None

    @property
    def count(self) -> int:
        with self._lock:
            return self._count

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._task is not None

    @property
    def is_finished(self) -> bool:
        return self.count == 0

    def start(self) -> None:
        """Begin counting down; no-op while running or already at zero."""
        with self._lock:
            if self._task is not None or self._count == 0:
                return
            self._task = RepeatingTask(self.interval, self.tick)
            task = self._task
        task.start()
        logger.debug("Countdown started at %d", self.count)

    def tick(self) -> None:
        """Decrement once; reaching zero stops the running task."""
        finished_task: Optional[RepeatingTask] = None
        with self._lock:
            if self._count > 0:
                self._count -= 1
            count = self._count
            if count == 0:
                finished_task, self._task = self._task, None
        if finished_task is not None:
            finished_task.stop()
            logger.debug("Countdown reached zero")
        if self.on_change is not None:
            self.on_change(count)

    def stop(self) -> None:
        with self._lock:
            task, self._task = self._task, None
        if task is not None:
            task.stop()

    def reset(self, start_count: Optional[int] = None) -> None:
        """Stop and restore the start count (optionally a new one)."""
        self.stop()
        with self._lock:
            if start_count is not None:
                self.start_count = start_count
            self._count = self.start_count
        logger.debug("Countdown reset to %d", self.start_count)
