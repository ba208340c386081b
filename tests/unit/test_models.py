"""Unit tests for the canonical page record."""

from datetime import datetime, timezone

import pytest

from src.models import ContentRecord, parse_timestamp
from tests.fixtures.sample_pages import page_document


class TestParseTimestamp:
    """Test cases for parse_timestamp."""

    def test_zulu_suffix_is_utc(self):
        value = parse_timestamp("2024-01-15T10:30:00.000Z")

        assert value == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def test_explicit_offset(self):
        value = parse_timestamp("2024-01-15T12:30:00+02:00")

        assert value == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_is_none(self, value):
        assert parse_timestamp(value) is None

    def test_garbage_raises_value_error(self):
        with pytest.raises(ValueError):
            parse_timestamp("yesterday")


class TestContentRecord:
    """Test cases for ContentRecord.from_api_response."""

    def test_from_full_document(self):
        record = ContentRecord.from_api_response(
            page_document(100, title="Runbook", body="<p>v3</p>", space_id=77,
                          parent_id=33296, version=3)
        )

        assert record.id == 100
        assert record.title == "Runbook"
        assert record.body_markup == "<p>v3</p>"
        assert record.space_id == 77
        assert record.parent_id == 33296
        assert record.version_number == 3
        assert record.created_at == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
        assert record.version_created_at == datetime(2024, 1, 16, 9, 0, tzinfo=timezone.utc)

    def test_numeric_ids_are_accepted(self):
        data = page_document(100)
        data["id"] = 100
        data["spaceId"] = 77
        data["parentId"] = 5

        record = ContentRecord.from_api_response(data)

        assert (record.id, record.space_id, record.parent_id) == (100, 77, 5)

    def test_page_at_space_root_has_parent_zero(self):
        record = ContentRecord.from_api_response(page_document(100, parent_id=None))

        assert record.parent_id == 0

    def test_missing_body_is_empty(self):
        data = page_document(100)
        del data["body"]

        assert ContentRecord.from_api_response(data).body_markup == ""

    def test_missing_version_raises(self):
        data = page_document(100)
        del data["version"]

        with pytest.raises(KeyError):
            ContentRecord.from_api_response(data)

    def test_missing_id_raises(self):
        data = page_document(100)
        del data["id"]

        with pytest.raises(KeyError):
            ContentRecord.from_api_response(data)

    def test_records_are_immutable(self):
        record = ContentRecord.from_api_response(page_document(100))

        with pytest.raises(AttributeError):
            record.title = "changed"
