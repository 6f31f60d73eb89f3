"""
Unit Tests for NCDC Record Parsing and Reading

Tests verify:
1. DATE parsing and tenths-of-degree scaling
2. Missing-value sentinel handling
3. Malformed record rejection
4. CSV reading (extra columns, re-iteration, missing columns)
"""

import pytest
from datetime import date
from pathlib import Path
import sys

# Add src to path
src_path = Path(__file__).parent.parent.parent / 'src'
sys.path.insert(0, str(src_path))

from ncdc import DailyRecord, NCDCDailyReader, iter_records, parse_date
from common.errors import RecordFormatError


FIXTURE_CSV = Path(__file__).parent.parent / 'fixtures' / 'kenai_daily_sample.csv'


# Test Cases: Record Parsing

def test_parse_record():
    """Test a complete record is parsed and scaled"""
    record = DailyRecord.from_raw({"DATE": "20150616", "TMIN": "56", "TMAX": "172"})

    assert record.day == date(2015, 6, 16)
    assert record.tmin == pytest.approx(5.6)
    assert record.tmax == pytest.approx(17.2)
    assert record.is_complete


def test_parse_record_custom_scale():
    """Test a custom scale factor"""
    record = DailyRecord.from_raw({"DATE": "20150616", "TMIN": "5.6", "TMAX": "17.2"}, scale_factor=1.0)

    assert record.tmin == pytest.approx(5.6)
    assert record.tmax == pytest.approx(17.2)


def test_parse_record_whitespace():
    """Test surrounding whitespace is tolerated"""
    record = DailyRecord.from_raw({"DATE": " 20150616 ", "TMIN": " -42", "TMAX": "10 "})

    assert record.day == date(2015, 6, 16)
    assert record.tmin == pytest.approx(-4.2)


def test_missing_sentinel():
    """Test -9999 marks a value as missing"""
    record = DailyRecord.from_raw({"DATE": "20150616", "TMIN": "-9999", "TMAX": "172"})

    assert record.tmin is None
    assert record.tmax == pytest.approx(17.2)
    assert not record.is_complete


def test_empty_value_is_missing():
    """Test an empty field marks a value as missing"""
    record = DailyRecord.from_raw({"DATE": "20150616", "TMIN": "56", "TMAX": ""})

    assert record.tmax is None
    assert not record.is_complete


def test_extra_fields_ignored():
    """Test fields other than DATE/TMIN/TMAX are ignored"""
    record = DailyRecord.from_raw({
        "STATION": "GHCND:USW00026523",
        "DATE": "20150616",
        "TMIN": "56",
        "TMAX": "172",
        "PRCP": "3",
    })

    assert record.is_complete


@pytest.mark.parametrize("row", [
    {"DATE": "2015-06-16", "TMIN": "56", "TMAX": "172"},
    {"DATE": "20151316", "TMIN": "56", "TMAX": "172"},
    {"DATE": "20150616", "TMIN": "warm", "TMAX": "172"},
    {"DATE": "20150616", "TMIN": "nan", "TMAX": "172"},
    {"DATE": "20150616", "TMIN": "56"},
])
def test_malformed_records_rejected(row):
    """Test malformed or incomplete rows raise RecordFormatError"""
    with pytest.raises(RecordFormatError):
        DailyRecord.from_raw(row)


def test_parse_date():
    """Test YYYYMMDD parsing"""
    assert parse_date("20150101") == date(2015, 1, 1)
    assert parse_date("20161231") == date(2016, 12, 31)

    with pytest.raises(ValueError):
        parse_date("150101")


# Test Cases: CSV Reader

def test_reader_yields_required_fields():
    """Test the reader yields DATE/TMIN/TMAX as strings, in file order"""
    rows = list(NCDCDailyReader(FIXTURE_CSV))

    assert len(rows) == 10
    assert rows[0] == {"DATE": "20150610", "TMIN": "56", "TMAX": "172"}
    assert rows[3]["TMAX"] == "-9999"
    assert all(set(row) == {"DATE", "TMIN", "TMAX"} for row in rows)


def test_reader_restartable():
    """Test the reader can be iterated more than once"""
    reader = NCDCDailyReader(FIXTURE_CSV)

    assert list(reader) == list(reader)


def test_reader_custom_delimiter(tmp_path):
    """Test a semicolon-delimited export"""
    path = tmp_path / "station.csv"
    path.write_text("DATE;TMAX;TMIN\n20150616;200;50\n20150617;220;60\n")

    rows = list(NCDCDailyReader(path, delimiter=";"))

    assert rows == [
        {"DATE": "20150616", "TMIN": "50", "TMAX": "200"},
        {"DATE": "20150617", "TMIN": "60", "TMAX": "220"},
    ]


def test_reader_missing_column(tmp_path):
    """Test a file without TMIN is rejected"""
    path = tmp_path / "station.csv"
    path.write_text("DATE,TMAX\n20150616,200\n")

    with pytest.raises(RecordFormatError):
        list(NCDCDailyReader(path))


def test_reader_missing_file(tmp_path):
    """Test a missing file raises RecordFormatError"""
    with pytest.raises(RecordFormatError):
        list(NCDCDailyReader(tmp_path / "absent.csv"))


def test_iter_records_sources():
    """Test paths become readers and iterables pass through"""
    assert isinstance(iter_records(FIXTURE_CSV), NCDCDailyReader)
    assert isinstance(iter_records(str(FIXTURE_CSV)), NCDCDailyReader)

    rows = [{"DATE": "20150616", "TMIN": "50", "TMAX": "200"}]
    assert iter_records(rows) is rows


if __name__ == "__main__":
    # Run tests with pytest
    pytest.main([__file__, "-v", "--tb=short"])
