import csv
import logging
from pathlib import Path
from typing import List, Optional

from harvester.core.common.errors import classify_error
from harvester.core.counters import AggregateCounters
from harvester.features.output_sink.domain.interfaces import IOutputSink

from ..data.csv_reader import CsvRowReader
from ..domain.interfaces import IRowReader
from ..domain.models import FileResult, ValidRow, ValidationOutcome
from ..domain.rules import classify_row

logger = logging.getLogger(__name__)

class RowValidator:
    """
    Processes one CustomerData file: classifies rows, hands the valid batch
    to the sink, and bumps the shared counters.
    """

    def __init__(self,
                 counters: AggregateCounters,
                 sink: IOutputSink,
                 reader: Optional[IRowReader] = None):
        self.counters = counters
        self.sink = sink
        self.reader = reader or CsvRowReader()

    def process_file(self, path: Path, date: str) -> FileResult:
        """
        Never raises for file-level problems. A file that cannot be read or
        written contributes nothing to the output or to the counters.
        """
        result = FileResult(path=path)

        # 1. Read and classify the whole file before touching shared state
        try:
            outcomes = self._classify_file(path, date)
        except (OSError, csv.Error, UnicodeDecodeError) as e:
            result.error = classify_error(e)
            logger.error(f"Skipping file {path} [{result.error.value}]: {e}")
            return result

        valid_lines = [o.line for o in outcomes if isinstance(o, ValidRow)]

        # 2. One sink call per file, only when there is something to write
        # A failed write leaves the counters untouched so output lines always equal valid
        if valid_lines:
            try:
                self.sink.append(valid_lines)
            except OSError as e:
                result.error = classify_error(e)
                logger.error(f"Failed to write {len(valid_lines)} rows from {path} [{result.error.value}]: {e}")
                return result
            result.written = len(valid_lines)

        # 3. Count each classified row exactly once
        for outcome in outcomes:
            if isinstance(outcome, ValidRow):
                self.counters.increment_valid()
                result.valid += 1
            else:
                self.counters.increment_skipped()
                result.skipped += 1
                result.skip_reasons.append(outcome.reason)

        logger.debug(f"Processed {path}: {result.valid} valid, {result.skipped} skipped")
        return result

    def _classify_file(self, path: Path, date: str) -> List[ValidationOutcome]:
        outcomes: List[ValidationOutcome] = []
        header_skipped = False

        for fields in self.reader.read_rows(path):
            # The first line is always a header, whatever it contains
            if not header_skipped:
                header_skipped = True
                continue
            outcomes.append(classify_row(fields, date))

        return outcomes
