from abc import ABC, abstractmethod
from typing import List
from .models import RunRecord

class IRunLog(ABC):
    @abstractmethod
    def append(self, record: RunRecord) -> None:
        """Appends one run record to the log artifact. Never truncates."""
        pass

class IRunRepository(ABC):
    @abstractmethod
    def save(self, record: RunRecord) -> int:
        """Persists one run record. Returns its row id."""
        pass

    @abstractmethod
    def recent_runs(self, limit: int = 10) -> List[RunRecord]:
        """Newest runs first."""
        pass
