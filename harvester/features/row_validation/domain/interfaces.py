from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator, List

class IRowReader(ABC):
    """
    Contract for reading delimited rows out of one file.
    """

    @abstractmethod
    def read_rows(self, path: Path) -> Iterator[List[str]]:
        """
        Yields every non-blank row, header included, as trimmed fields.
        Raises OSError / csv.Error / UnicodeDecodeError on file-level failures.
        """
        pass
