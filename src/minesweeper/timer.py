"""
Elapsed-time counter for a single game.

The timer only counts whole seconds. Something outside the engine
(an event loop, a UI refresh, a test) calls tick() once per second, or
catch_up() to convert wall-clock time into ticks.
"""
import time
from typing import Callable


class GameTimer:
    """Counts whole seconds between start() and stop()."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """
        Initialize the timer.

        Args:
            clock: Source of monotonic time in seconds, used by catch_up().
        """
        self._clock = clock
        self._elapsed = 0
        self._running = False
        self._last_tick = 0.0

    @property
    def elapsed_seconds(self) -> int:
        return self._elapsed

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Start counting from the current elapsed value."""
        if self._running:
            return
        self._running = True
        self._last_tick = self._clock()

    def stop(self) -> None:
        """Freeze the counter."""
        self._running = False

    def reset(self) -> None:
        """Stop and zero the counter."""
        self._running = False
        self._elapsed = 0

    def tick(self) -> int:
        """Add one second if running. Returns the elapsed seconds."""
        if self._running:
            self._elapsed += 1
            self._last_tick = self._clock()
        return self._elapsed

    def catch_up(self) -> int:
        """
        Apply one tick per whole second the clock advanced since the
        last tick. Returns the elapsed seconds.
        """
        if not self._running:
            return self._elapsed

        whole_seconds = int(self._clock() - self._last_tick)
        if whole_seconds > 0:
            self._elapsed += whole_seconds
            self._last_tick += whole_seconds
        return self._elapsed
