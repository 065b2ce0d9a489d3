from dataclasses import dataclass, field
from pathlib import Path
from typing import List

@dataclass(frozen=True)
class DirectoryListing:
    """
    One level of a directory: its child folders and the files that
    matched the scan pattern.
    """
    subdirectories: List[Path] = field(default_factory=list)
    files: List[Path] = field(default_factory=list)

@dataclass
class WalkSummary:
    """
    Report returned after a walk has fully joined.
    Only mutated from the event loop thread.
    """
    directories_visited: int = 0
    directories_failed: int = 0
    files_found: int = 0
    files_processed: int = 0
    files_failed: int = 0
    errors: List[str] = field(default_factory=list)
