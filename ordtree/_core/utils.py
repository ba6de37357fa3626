import time
from typing import Optional


class Timer:
    """
    Wall-clock timer for logging how long an operation took.

    Usage:
        with Timer() as timer:
            tree.remove(position)
        print(timer.elapsed_time)       # e.g., 0.001
    """

    def __init__(self):
        self._elapsed_time: Optional[float] = None
        self._start_time: Optional[float] = None
        self.start()

    @property
    def elapsed_time(self) -> Optional[float]:
        """Return the last recorded elapsed time, rounded to milliseconds."""
        return round(self._elapsed_time, 3) if self._elapsed_time is not None else None

    def start(self) -> None:
        self._start_time = time.perf_counter()
        self._elapsed_time = None

    def stop(self) -> None:
        if self._start_time is not None:
            self._elapsed_time = time.perf_counter() - self._start_time

    def __enter__(self) -> 'Timer':
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
        return None
