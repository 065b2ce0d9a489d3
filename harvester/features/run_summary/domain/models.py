from dataclasses import dataclass
from datetime import datetime
from typing import Optional

@dataclass(frozen=True)
class RunRecord:
    """
    Aggregate metrics for one completed run.
    """
    logged_at: datetime
    elapsed_seconds: float
    valid_rows: int
    skipped_rows: int
    root_path: Optional[str] = None
    output_path: Optional[str] = None

    def __post_init__(self):
        if self.elapsed_seconds < 0:
            raise ValueError("Elapsed time cannot be negative.")
        if self.valid_rows < 0 or self.skipped_rows < 0:
            raise ValueError("Row counts cannot be negative.")

    @property
    def total_rows(self) -> int:
        return self.valid_rows + self.skipped_rows
