from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Float, DateTime
from harvester.core.database.base import Base

def utc_now():
    return datetime.now(timezone.utc)

class RunModel(Base):
    __tablename__ = "harvest_runs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    logged_at = Column(DateTime(timezone=True), default=utc_now, nullable=False, index=True)
    elapsed_seconds = Column(Float, nullable=False)

    valid_rows = Column(Integer, nullable=False, default=0)
    skipped_rows = Column(Integer, nullable=False, default=0)

    root_path = Column(String, nullable=True)
    output_path = Column(String, nullable=True)
