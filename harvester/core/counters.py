# File: harvester/core/counters.py

from dataclasses import dataclass
from threading import Lock


@dataclass(frozen=True)
class CounterSnapshot:
    valid: int
    skipped: int

    @property
    def total(self) -> int:
        return self.valid + self.skipped


class AtomicCounter:
    """
    A non-negative integer that only moves by +1.
    Each counter owns its lock, so valid and skipped updates never contend.
    """

    def __init__(self):
        self._value = 0
        self._lock = Lock()

    def increment(self) -> int:
        """Fetch-and-add. Returns the value after the increment."""
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


class AggregateCounters:
    """
    Run-wide valid/skipped row tallies shared by every worker of one run.
    Created once per run and never reset.
    """

    def __init__(self):
        self._valid = AtomicCounter()
        self._skipped = AtomicCounter()

    def increment_valid(self) -> int:
        return self._valid.increment()

    def increment_skipped(self) -> int:
        return self._skipped.increment()

    @property
    def valid(self) -> int:
        return self._valid.value

    @property
    def skipped(self) -> int:
        return self._skipped.value

    def snapshot(self) -> CounterSnapshot:
        """
        Reads both tallies. Only meaningful once all walk work has joined.
        """
        return CounterSnapshot(valid=self.valid, skipped=self.skipped)
