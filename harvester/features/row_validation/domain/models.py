from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from harvester.core.common.enums import ErrorKind, SkipReason

# A data row needs at least this many non-blank fields
MIN_FIELDS = 10

# Date tag used when the directory path is too shallow to carry year/month/day
UNKNOWN_DATE = "Unknown"

@dataclass(frozen=True)
class ValidRow:
    """
    A row that passed validation, already normalized for the output file.
    """
    line: str

@dataclass(frozen=True)
class SkippedRow:
    reason: SkipReason
    field_count: int = 0

ValidationOutcome = Union[ValidRow, SkippedRow]

@dataclass
class FileResult:
    """
    Report returned after one file has been processed.
    """
    path: Path
    valid: int = 0
    skipped: int = 0
    written: int = 0
    error: Optional[ErrorKind] = None
    skip_reasons: List[SkipReason] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None
