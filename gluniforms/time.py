import time


class Timer:
    """Simple tool for keeping time."""

    def __init__(self, rate=60):
        """Initialize the timer.

        Parameters
        ----------
        rate : int | float
            Sample rate in times per second.
        """

        now = time.time()
        self._previous_tick = now
        self.internal_dt = 1 / rate  # number of seconds between ticks
        self.next = now + self.internal_dt

    @staticmethod
    def now():
        """Convenience method."""

        return time.time()

    def tick(self, rate=None):
        """Block until the next tick occurs. Returns the time since previous
        tick.

        Parameters
        ----------
        rate : int, optional
            Override the sample rate assigned in __init__. This effect wont
            persist past this tick.

        Returns
        -------
        float:
            The number of seconds since the previous tick() call.
        """

        dt = 1 / rate if rate else self.internal_dt
        prev_time = self._previous_tick
        remaining_time = prev_time + dt - time.time()

        if remaining_time > 0:
            time.sleep(remaining_time)
        time_now = time.time()

        self._previous_tick = time_now
        self.next = time_now + dt
        return time_now - prev_time

    def remaining(self, *, now=None):
        """Calculates how much time is remaining until next tick.

        Parameters
        ----------
        now : float, optional
            Keyword argument to pass in the current time instead of
            calculating it in the function call. Can be calculated with
            Timer.now().

        Returns
        -------
        float:
            The number of seconds remaining until the next tick. Can be
            negative.
        """

        return self.next - (now or time.time())


class AnimationClock:
    """Monotonic elapsed time since `start()`. Never reset."""

    def __init__(self, time_func=time.perf_counter):
        self._time_func = time_func
        self._started_at = None

    def __repr__(self):
        return f"<{self.__class__.__name__}(elapsed={self.elapsed:.3f})>"

    @property
    def is_running(self):
        return self._started_at is not None

    def start(self):
        """Start counting. Starting an already running clock does nothing."""

        if self._started_at is None:
            self._started_at = self._time_func()

    @property
    def elapsed(self):
        """Seconds since the clock was started, 0.0 before that."""

        if self._started_at is None:
            return 0.0
        return self._time_func() - self._started_at
