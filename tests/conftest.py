# File: tests/conftest.py

import os
import sys
import pytest
from pathlib import Path
from sqlalchemy_utils import database_exists, create_database

# 1. Add project root to path
sys.path.append(os.getcwd())

from harvester.core.counters import AggregateCounters
from harvester.core.database.connection import build_session_factory
from harvester.features.output_sink.data.csv_sink import CsvOutputSink
from harvester.features.run_summary.data.repository import SqlRunRepository

INPUT_HEADER = "First Name,Last Name,Street Number,Street,City,Province,Postal Code,Country,Phone Number,email Address"


@pytest.fixture
def make_row():
    """
    Builds one valid 10-field customer row. Pass overrides by index.
    """
    def _make(i: int = 0, **overrides):
        fields = [
            f"First{i}", f"Last{i}", str(100 + i), "Spring Garden Rd", "Halifax",
            "Nova Scotia", "B3H 1A1", "Canada", "902-555-0100", f"user{i}@example.com",
        ]
        for key, value in overrides.items():
            fields[int(key.lstrip("f"))] = value
        return fields
    return _make


@pytest.fixture
def write_csv():
    """
    Writes a CustomerData-style file: header line plus the given rows.
    Rows can be field lists or raw strings.
    """
    def _write(path: Path, rows, header: str = INPUT_HEADER) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = [header]
        for row in rows:
            lines.append(row if isinstance(row, str) else ",".join(row))
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write


@pytest.fixture
def counters():
    return AggregateCounters()


@pytest.fixture
def sink(tmp_path):
    """An initialized output sink in a temp folder."""
    s = CsvOutputSink(tmp_path / "output" / "Output.csv")
    s.initialize()
    return s


@pytest.fixture
def database_url(tmp_path):
    """
    Fresh SQLite database per test.
    """
    url = f"sqlite:///{tmp_path / 'harvester_test.db'}"
    if not database_exists(url):
        create_database(url)
    return url


@pytest.fixture
def run_repository(database_url):
    return SqlRunRepository(build_session_factory(database_url))


@pytest.fixture
def sample_tree(tmp_path, make_row, write_csv):
    """
    Creates:
    /data
      CustomerData_root.csv          (2 valid)              -> Unknown
      notes.csv                      (ignored, wrong name)
      /2017/1/1
        CustomerData1.csv            (3 valid, 2 skipped)   -> 2017/1/1
        CustomerData2.csv            (header only)
      /2017/1/2
        CustomerData1.csv            (1 valid)              -> 2017/1/2
        customer_summary.csv         (ignored, wrong name)
      /2018/5
        CustomerData1.csv            (1 valid, 1 skipped)   -> Unknown
    """
    root = tmp_path / "data"
    root.mkdir()

    write_csv(root / "CustomerData_root.csv", [make_row(1), make_row(2)])
    write_csv(root / "notes.csv", [make_row(99)])

    write_csv(root / "2017" / "1" / "1" / "CustomerData1.csv", [
        make_row(10),
        make_row(11),
        make_row(12),
        make_row(13)[:9],
        make_row(14, f4="   "),
    ])
    write_csv(root / "2017" / "1" / "1" / "CustomerData2.csv", [])

    write_csv(root / "2017" / "1" / "2" / "CustomerData1.csv", [make_row(20)])
    write_csv(root / "2017" / "1" / "2" / "customer_summary.csv", [make_row(98)])

    write_csv(root / "2018" / "5" / "CustomerData1.csv", [make_row(30), make_row(31, f0="")])

    return root
