"""Tests for query parameter parsing."""

from datetime import datetime, timezone

import pytest

from services.exceptions import InvalidDateFormatError
from utils.query_params import parse_datetime


class TestParseDatetime:
    def test_absent(self):
        assert parse_datetime(None, "from") is None
        assert parse_datetime("  ", "from") is None

    def test_zulu_suffix(self):
        """A trailing Z is read as UTC."""
        assert parse_datetime("2025-09-01T10:00:00Z", "from") == datetime(
            2025, 9, 1, 10, 0, tzinfo=timezone.utc
        )

    def test_offset(self):
        value = parse_datetime("2025-09-01T00:00:00+08:00", "to")
        assert value.utcoffset().total_seconds() == 8 * 3600

    def test_bare_date(self):
        assert parse_datetime("2025-09-01", "from") == datetime(2025, 9, 1)

    def test_invalid(self):
        with pytest.raises(InvalidDateFormatError, match="Invalid to format"):
            parse_datetime("yesterday", "to")
