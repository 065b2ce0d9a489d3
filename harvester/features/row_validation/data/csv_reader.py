import csv
from pathlib import Path
from typing import Iterator, List

from ..domain.interfaces import IRowReader

class CsvRowReader(IRowReader):
    """
    Comma-delimited reader built on the csv module.
    Strict quoting, so a malformed quoted field fails the whole file.
    """

    def __init__(self, encoding: str = "utf-8-sig", delimiter: str = ","):
        self.encoding = encoding
        self.delimiter = delimiter

    def read_rows(self, path: Path) -> Iterator[List[str]]:
        with open(path, "r", encoding=self.encoding, newline="") as f:
            reader = csv.reader(f, delimiter=self.delimiter, strict=True)
            for row in reader:
                if self._is_blank_line(row):
                    continue
                yield [field.strip() for field in row]

    @staticmethod
    def _is_blank_line(row: List[str]) -> bool:
        # ",,,," is a row of empty fields, not a blank line
        return not row or (len(row) == 1 and not row[0].strip())
