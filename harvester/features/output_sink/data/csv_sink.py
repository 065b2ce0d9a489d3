import logging
from pathlib import Path
from threading import Lock
from typing import Sequence

from harvester.core.common.errors import OutputInitializationError
from ..domain.interfaces import IOutputSink
from ..domain.models import OUTPUT_HEADER

logger = logging.getLogger(__name__)

class CsvOutputSink(IOutputSink):
    """
    Mutex-guarded single writer for the merged output file.
    Every append call holds the lock for its whole batch, so batches from
    different files never interleave.
    """

    def __init__(self, path: Path, header: str = OUTPUT_HEADER, encoding: str = "utf-8"):
        self.path = Path(path)
        self.header = header
        self.encoding = encoding
        self._lock = Lock()
        self._initialized = False
        self._rows_written = 0

    def initialize(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self._lock, open(self.path, "w", encoding=self.encoding, newline="") as f:
                f.write(self.header + "\n")
                self._rows_written = 0
                self._initialized = True
        except OSError as e:
            raise OutputInitializationError(f"Could not initialize output file {self.path}: {e}") from e

        logger.info(f"Output initialized: {self.path}")

    def append(self, lines: Sequence[str]) -> None:
        if not self._initialized:
            raise RuntimeError("append() called before initialize()")
        if not lines:
            return

        # One write call per batch; the buffer is built outside the lock
        payload = "".join(f"{line}\n" for line in lines)

        with self._lock:
            with open(self.path, "a", encoding=self.encoding, newline="") as f:
                f.write(payload)
            self._rows_written += len(lines)

    @property
    def rows_written(self) -> int:
        with self._lock:
            return self._rows_written
