from datetime import timezone
from typing import List
from sqlalchemy.orm import sessionmaker
from .sql_models import RunModel
from ..domain.interfaces import IRunRepository
from ..domain.models import RunRecord

class SqlRunRepository(IRunRepository):
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def save(self, record: RunRecord) -> int:
        with self.session_factory() as db:
            try:
                run = RunModel(
                    logged_at=record.logged_at,
                    elapsed_seconds=record.elapsed_seconds,
                    valid_rows=record.valid_rows,
                    skipped_rows=record.skipped_rows,
                    root_path=record.root_path,
                    output_path=record.output_path
                )
                db.add(run)
                db.commit()
                db.refresh(run)
                return run.id
            except Exception as e:
                db.rollback()
                raise e

    def recent_runs(self, limit: int = 10) -> List[RunRecord]:
        with self.session_factory() as db:
            rows = (
                db.query(RunModel)
                .order_by(RunModel.logged_at.desc(), RunModel.id.desc())
                .limit(limit)
                .all()
            )
            return [self._to_record(r) for r in rows]

    @staticmethod
    def _to_record(row: RunModel) -> RunRecord:
        # SQLite drops tzinfo; values are always stored as UTC
        logged_at = row.logged_at
        if logged_at.tzinfo is None:
            logged_at = logged_at.replace(tzinfo=timezone.utc)

        return RunRecord(
            logged_at=logged_at,
            elapsed_seconds=row.elapsed_seconds,
            valid_rows=row.valid_rows,
            skipped_rows=row.skipped_rows,
            root_path=row.root_path,
            output_path=row.output_path
        )
