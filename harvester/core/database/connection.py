# File: harvester/core/database/connection.py

from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker

from .base import Base


def build_engine(database_url: str) -> Engine:
    # check_same_thread=False is needed only for SQLite
    connect_args = {"check_same_thread": False} if "sqlite" in database_url else {}

    # SQLite creates the file but not its folder
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    return create_engine(
        database_url,
        echo=False,
        pool_pre_ping=True,
        connect_args=connect_args
    )


def build_session_factory(database_url: str) -> sessionmaker:
    """
    Creates the engine, makes sure every registered table exists,
    and returns a session factory bound to it.
    """
    engine = build_engine(database_url)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
