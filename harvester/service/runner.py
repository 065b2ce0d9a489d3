import asyncio
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from harvester.core.common.enums import RunState
from harvester.core.counters import AggregateCounters
from harvester.core.database.connection import build_session_factory
from harvester.features.output_sink.data.csv_sink import CsvOutputSink
from harvester.features.row_validation.data.csv_reader import CsvRowReader
from harvester.features.row_validation.service.validator import RowValidator
from harvester.features.run_summary.data.repository import SqlRunRepository
from harvester.features.run_summary.data.text_log import TextRunLog
from harvester.features.run_summary.domain.interfaces import IRunRepository
from harvester.features.run_summary.service.summary import RunSummary
from harvester.features.tree_walker.service.walker import PathWalker

from .models import HarvestConfig, HarvestReport

logger = logging.getLogger(__name__)

class HarvestRunner:
    """
    One run of the harvester: IDLE -> WALKING -> SUMMARIZING -> DONE.

    The output header is written before any worker exists, and the summary
    is written only after the top-level walk has joined every task.
    """

    def __init__(self, config: HarvestConfig, repository: Optional[IRunRepository] = None):
        self.config = config
        self.state = RunState.IDLE

        self.counters = AggregateCounters()
        self.sink = CsvOutputSink(config.output_path)
        self.validator = RowValidator(
            counters=self.counters,
            sink=self.sink,
            reader=CsvRowReader(encoding=config.encoding)
        )
        self.summary = RunSummary(
            counters=self.counters,
            run_log=TextRunLog(config.log_path),
            repository=repository if repository is not None else self._build_repository()
        )

    def run(self) -> HarvestReport:
        """
        Raises OutputInitializationError if the output header cannot be
        written. Every other failure is handled inside the walk.
        """
        self._advance(RunState.IDLE, RunState.WALKING)
        started = time.perf_counter()

        logger.info(f"Starting harvest of: {self.config.root_path}")

        # Fatal on failure: nothing written afterwards could be trusted
        self.sink.initialize()

        with ThreadPoolExecutor(max_workers=self.config.max_workers,
                                thread_name_prefix="harvester") as executor:
            walker = PathWalker(
                validator=self.validator,
                executor=executor,
                file_pattern=self.config.file_pattern
            )
            walk_summary = asyncio.run(walker.walk(Path(self.config.root_path)))

        elapsed = time.perf_counter() - started

        # Barrier passed: every spawned task has completed
        self._advance(RunState.WALKING, RunState.SUMMARIZING)
        record = self.summary.log_summary(
            elapsed,
            root_path=str(self.config.root_path),
            output_path=str(self.config.output_path)
        )
        self._advance(RunState.SUMMARIZING, RunState.DONE)

        logger.info(
            f"Harvest complete in {elapsed:.3f}s. "
            f"Valid: {record.valid_rows}, skipped: {record.skipped_rows}"
        )
        return HarvestReport(
            counters=self.counters.snapshot(),
            walk=walk_summary,
            record=record,
            rows_written=self.sink.rows_written
        )

    def _advance(self, expected: RunState, target: RunState) -> None:
        if self.state != expected:
            raise RuntimeError(f"Cannot move to {target.value}: run is {self.state.value}, expected {expected.value}")
        self.state = target

    def _build_repository(self) -> Optional[IRunRepository]:
        if not self.config.database_url:
            return None
        try:
            return SqlRunRepository(build_session_factory(self.config.database_url))
        except (SQLAlchemyError, OSError) as e:
            logger.warning(f"Run history disabled, database unavailable: {e}")
            return None


def run_harvest(config: HarvestConfig) -> HarvestReport:
    """Convenience wrapper for a single run."""
    return HarvestRunner(config).run()
