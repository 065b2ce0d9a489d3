from pathlib import Path
from ..domain.interfaces import IRunLog
from ..domain.models import RunRecord

SEPARATOR = "-" * 44

class TextRunLog(IRunLog):
    """
    Five-line plain text entry per run, appended to a growing log file.
    """

    def __init__(self, path: Path, encoding: str = "utf-8"):
        self.path = Path(path)
        self.encoding = encoding

    def append(self, record: RunRecord) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a", encoding=self.encoding) as f:
            f.write(self.format_entry(record))

    @staticmethod
    def format_entry(record: RunRecord) -> str:
        # Local wall-clock time, like the rest of the operator-facing output
        timestamp = record.logged_at.astimezone().strftime("%Y-%m-%d %H:%M:%S")
        return (
            f"Log Entry: {timestamp}\n"
            f"Total Execution Time: {record.elapsed_seconds:.3f} seconds\n"
            f"Total Valid Rows: {record.valid_rows}\n"
            f"Total Skipped Rows: {record.skipped_rows}\n"
            f"{SEPARATOR}\n"
        )
