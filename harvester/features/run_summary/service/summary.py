import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from harvester.core.common.errors import classify_error
from harvester.core.counters import AggregateCounters

from ..domain.interfaces import IRunLog, IRunRepository
from ..domain.models import RunRecord

logger = logging.getLogger(__name__)

class RunSummary:
    """
    Persists the aggregate metrics of a run once the walk has fully joined.
    Writes to the text log and, when configured, to the run history table.
    """

    def __init__(self,
                 counters: AggregateCounters,
                 run_log: IRunLog,
                 repository: Optional[IRunRepository] = None):
        self.counters = counters
        self.run_log = run_log
        self.repository = repository

    def log_summary(self,
                    elapsed_seconds: float,
                    root_path: Optional[str] = None,
                    output_path: Optional[str] = None) -> RunRecord:
        """
        Never raises for write failures: the output data is already on disk
        and stays valid whether or not the summary could be recorded.
        """
        snapshot = self.counters.snapshot()
        record = RunRecord(
            logged_at=datetime.now(timezone.utc),
            elapsed_seconds=elapsed_seconds,
            valid_rows=snapshot.valid,
            skipped_rows=snapshot.skipped,
            root_path=root_path,
            output_path=output_path
        )

        try:
            self.run_log.append(record)
        except OSError as e:
            logger.error(f"Failed to write run log [{classify_error(e).value}]: {e}")

        if self.repository is not None:
            try:
                run_id = self.repository.save(record)
                logger.debug(f"Run history saved as #{run_id}")
            except SQLAlchemyError as e:
                logger.error(f"Failed to save run history: {e}")

        return record
