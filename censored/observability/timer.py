#!filepath: censored/observability/timer.py
import time
from contextlib import contextmanager
from typing import Dict


class Timer:
    """
    High-resolution named timer.
    - start(name)
    - end(name) -> elapsed seconds
    - measure(name) context manager; result available via last(name)
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._start: Dict[str, float] = {}
        self._last: Dict[str, float] = {}

    def start(self, name: str):
        if not self.enabled:
            return
        self._start[name] = time.perf_counter()

    def end(self, name: str) -> float:
        if not self.enabled:
            return 0.0
        if name not in self._start:
            return 0.0
        elapsed = time.perf_counter() - self._start.pop(name)
        self._last[name] = elapsed
        return elapsed

    @contextmanager
    def measure(self, name: str):
        self.start(name)
        try:
            yield self
        finally:
            self.end(name)

    def last(self, name: str) -> float:
        return self._last.get(name, 0.0)
