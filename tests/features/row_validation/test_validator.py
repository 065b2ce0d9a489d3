import pytest
from typing import List, Sequence

from harvester.core.common.enums import ErrorKind, SkipReason
from harvester.features.output_sink.domain.interfaces import IOutputSink
from harvester.features.row_validation.data.csv_reader import CsvRowReader
from harvester.features.row_validation.service.validator import RowValidator

DATE = "2017/1/1"


class RecordingSink(IOutputSink):
    """Keeps every append call so tests can inspect batching."""

    def __init__(self, fail: bool = False):
        self.calls: List[List[str]] = []
        self.fail = fail

    def initialize(self) -> None:
        pass

    def append(self, lines: Sequence[str]) -> None:
        if self.fail:
            raise OSError("disk full")
        self.calls.append(list(lines))


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture
def validator(counters, recording_sink):
    return RowValidator(counters=counters, sink=recording_sink)


def test_valid_rows_are_written_as_one_batch(tmp_path, write_csv, make_row, validator, recording_sink, counters):
    path = write_csv(tmp_path / "CustomerData1.csv", [make_row(1), make_row(2), make_row(3)])

    result = validator.process_file(path, DATE)

    assert result.ok
    assert result.valid == 3
    assert result.written == 3
    assert len(recording_sink.calls) == 1
    assert recording_sink.calls[0] == [",".join(make_row(i)) + f",{DATE}" for i in (1, 2, 3)]
    assert counters.valid == 3
    assert counters.skipped == 0


def test_mixed_rows_are_counted_once_each(tmp_path, write_csv, make_row, validator, recording_sink, counters):
    path = write_csv(tmp_path / "CustomerData1.csv", [
        make_row(1),
        make_row(2)[:5],
        make_row(3, f9=""),
        make_row(4),
    ])

    result = validator.process_file(path, DATE)

    assert (result.valid, result.skipped) == (2, 2)
    assert result.skip_reasons == [SkipReason.TOO_FEW_FIELDS, SkipReason.BLANK_FIELD]
    assert len(recording_sink.calls[0]) == 2
    assert counters.snapshot().total == 4


def test_first_line_is_discarded_even_if_it_looks_like_data(tmp_path, write_csv, make_row, validator, counters):
    path = write_csv(tmp_path / "CustomerData1.csv", [make_row(2)], header=",".join(make_row(1)))

    result = validator.process_file(path, DATE)

    assert result.valid == 1
    assert counters.valid == 1


def test_header_only_file_makes_no_sink_call(tmp_path, write_csv, validator, recording_sink, counters):
    path = write_csv(tmp_path / "CustomerData1.csv", [])

    result = validator.process_file(path, DATE)

    assert result.ok
    assert recording_sink.calls == []
    assert counters.snapshot().total == 0


def test_all_invalid_rows_make_no_sink_call(tmp_path, write_csv, make_row, validator, recording_sink, counters):
    path = write_csv(tmp_path / "CustomerData1.csv", [make_row(1)[:3], make_row(2, f0=" ")])

    result = validator.process_file(path, DATE)

    assert recording_sink.calls == []
    assert result.skipped == 2
    assert counters.skipped == 2


def test_blank_lines_are_not_rows(tmp_path, make_row, validator, counters):
    path = tmp_path / "CustomerData1.csv"
    path.write_text("\n" + "header\n" + "\n" + ",".join(make_row(1)) + "\n   \n\n", encoding="utf-8")

    result = validator.process_file(path, DATE)

    assert (result.valid, result.skipped) == (1, 0)
    assert counters.snapshot().total == 1


def test_fields_are_trimmed_and_quotes_handled(tmp_path, write_csv, make_row, validator, recording_sink):
    fields = make_row(1)
    raw = ",".join([f"  {fields[0]}  ", '"Spring Garden Rd"'] + fields[2:])
    path = write_csv(tmp_path / "CustomerData1.csv", [raw])

    validator.process_file(path, DATE)

    assert recording_sink.calls[0][0] == f"{fields[0]},Spring Garden Rd," + ",".join(fields[2:]) + f",{DATE}"


def test_utf8_bom_is_tolerated(tmp_path, make_row, validator, counters):
    path = tmp_path / "CustomerData1.csv"
    path.write_bytes(("\ufeffheader\n" + ",".join(make_row(1)) + "\n").encode("utf-8"))

    validator.process_file(path, DATE)

    assert counters.valid == 1


def test_missing_file_contributes_nothing(tmp_path, validator, recording_sink, counters):
    result = validator.process_file(tmp_path / "CustomerData_missing.csv", DATE)

    assert result.error == ErrorKind.PATH_NOT_FOUND
    assert recording_sink.calls == []
    assert counters.snapshot().total == 0


def test_malformed_file_contributes_nothing(tmp_path, make_row, validator, recording_sink, counters):
    path = tmp_path / "CustomerData1.csv"
    path.write_text(
        "header\n" + ",".join(make_row(1)) + "\n" + 'a,"bro"ken,c,d,e,f,g,h,i,j\n',
        encoding="utf-8"
    )

    result = validator.process_file(path, DATE)

    assert result.error == ErrorKind.PARSE_FAILURE
    assert recording_sink.calls == []
    assert counters.snapshot().total == 0


def test_undecodable_file_is_a_parse_failure(tmp_path, counters, recording_sink):
    path = tmp_path / "CustomerData1.csv"
    path.write_bytes(b"header\n\xff\xfe\xfa,bad\n")
    validator = RowValidator(counters=counters, sink=recording_sink, reader=CsvRowReader(encoding="utf-8"))

    result = validator.process_file(path, DATE)

    assert result.error == ErrorKind.PARSE_FAILURE
    assert counters.snapshot().total == 0


def test_failed_write_leaves_counters_untouched(tmp_path, write_csv, make_row, counters):
    path = write_csv(tmp_path / "CustomerData1.csv", [make_row(1), make_row(2)[:2]])
    validator = RowValidator(counters=counters, sink=RecordingSink(fail=True))

    result = validator.process_file(path, DATE)

    assert result.error == ErrorKind.IO_FAILURE
    assert result.written == 0
    assert counters.snapshot().total == 0


def test_validator_writes_through_real_sink(tmp_path, write_csv, make_row, counters, sink):
    path = write_csv(tmp_path / "in" / "CustomerData1.csv", [make_row(1), make_row(2)])
    validator = RowValidator(counters=counters, sink=sink)

    validator.process_file(path, DATE)

    lines = sink.path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 3
    assert lines[1] == ",".join(make_row(1)) + f",{DATE}"
    assert sink.rows_written == counters.valid == 2
