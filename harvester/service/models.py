from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from harvester.core.config.settings import Settings
from harvester.core.counters import CounterSnapshot
from harvester.features.run_summary.domain.models import RunRecord
from harvester.features.tree_walker.domain.models import WalkSummary

@dataclass(frozen=True)
class HarvestConfig:
    """
    Everything one run needs, resolved up front by the caller.
    """
    root_path: Path
    output_path: Path
    log_path: Path
    file_pattern: str = "CustomerData*.csv"
    max_workers: int = 8
    encoding: str = "utf-8-sig"
    database_url: Optional[str] = None

    def __post_init__(self):
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")
        if not self.file_pattern:
            raise ValueError("file_pattern cannot be empty.")

    @classmethod
    def from_settings(cls, settings: Settings, **overrides) -> "HarvestConfig":
        values = dict(
            root_path=settings.ROOT_DIR,
            output_path=settings.OUTPUT_PATH,
            log_path=settings.LOG_PATH,
            file_pattern=settings.FILE_PATTERN,
            max_workers=settings.MAX_WORKERS,
            encoding=settings.ENCODING,
            database_url=settings.DATABASE_URL,
        )
        # None means "not given on the command line"
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

@dataclass(frozen=True)
class HarvestReport:
    counters: CounterSnapshot
    walk: WalkSummary
    record: RunRecord
    rows_written: int
