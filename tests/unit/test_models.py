from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from roster.domain.errors import InvalidRecordError, SourceError
from roster.domain.models import FIELD_SEPARATOR, PageResult, Record
from roster.store import RecordStore


def test_from_raw_accepts_remote_shape():
    record = Record.from_raw({"id": 7, "name": "Mila", "birthDate": "2019-03-02", "extra": 1})
    assert record.id == "7"
    assert record.name == "Mila"
    assert record.birth_date == date(2019, 3, 2)


def test_from_raw_accepts_column_names():
    record = Record.from_raw({"id": "a1", "name": "Ben", "birth_date": date(2017, 1, 30)})
    assert record.birth_date == date(2017, 1, 30)


@pytest.mark.parametrize(
    "raw",
    [
        {"name": "Mila", "birthDate": "2019-03-02"},
        {"id": "1", "birthDate": "2019-03-02"},
        {"id": "1", "name": "Mila"},
        {"id": "1", "name": "Mila", "birthDate": "yesterday"},
        {"id": "", "name": "Mila", "birthDate": "2019-03-02"},
        {"id": True, "name": "Mila", "birthDate": "2019-03-02"},
    ],
)
def test_from_raw_rejects_malformed_entries(raw):
    with pytest.raises(InvalidRecordError):
        Record.from_raw(raw)


def test_from_raw_rejects_non_objects():
    with pytest.raises(InvalidRecordError):
        Record.from_raw(["1", "Mila", "2019-03-02"])  # type: ignore[arg-type]


def test_invalid_record_error_is_a_source_error():
    assert issubclass(InvalidRecordError, SourceError)


def test_records_are_frozen():
    record = Record(id="1", name="Mila", birth_date="2019-03-02")
    with pytest.raises(ValidationError):
        record.name = "Other"  # type: ignore[misc]


def test_search_text_covers_display_fields():
    record = Record(id="42", name="Mila Berger", birth_date="2019-03-02")
    assert record.search_text().split(FIELD_SEPARATOR) == ["42", "mila berger", "2019-03-02"]


def test_page_result_from_raw_parses_header_count():
    result = PageResult.from_raw([{"id": 1, "name": "Mila", "birthDate": "2019-03-02"}], "25")
    assert result.total_count == 25
    assert [r.id for r in result.records] == ["1"]


@pytest.mark.parametrize("count", ["abc", None, "-1"])
def test_page_result_rejects_bad_counts(count):
    with pytest.raises(InvalidRecordError):
        PageResult.from_raw([], count)


def test_page_result_rejects_whole_page_on_one_bad_entry():
    entries = [
        {"id": 1, "name": "Mila", "birthDate": "2019-03-02"},
        {"id": 2, "name": "Ben", "birthDate": "02/03/2019"},
    ]
    with pytest.raises(InvalidRecordError):
        PageResult.from_raw(entries, 2)


def test_store_replace_swaps_wholesale():
    store = RecordStore()
    first = (Record(id="1", name="Mila", birth_date="2019-03-02"),)
    store.replace(first, 1)
    assert store.records == first
    store.replace([], 0)
    assert store.records == ()
    assert store.total_count == 0
    assert len(store) == 0


def test_store_rejects_negative_count():
    with pytest.raises(ValueError):
        RecordStore().replace([], -1)
