"""Tests for source position tracking."""

import pytest

from ast_benchmark.position import Cursor, location_from_index


class TestLocationFromIndex:
    """Tests for offset to (line, column) conversion."""

    @pytest.mark.parametrize("index,expected", [
        (0, (1, 1)),
        (3, (1, 4)),
        (4, (2, 1)),
        (6, (2, 3)),
        (7, (3, 1)),
    ])
    def test_multiline_offsets(self, index, expected):
        """Test offsets across several lines."""
        assert location_from_index("abc\nde\nf", index) == expected

    def test_offset_past_end(self):
        """Test offsets beyond the text map to the end position."""
        assert location_from_index("ab", 10) == (1, 3)

    def test_empty_source(self):
        """Test the start of an empty text."""
        assert location_from_index("", 0) == (1, 1)

    def test_tab_counts_as_one_column(self):
        """Test tabs advance the column by one."""
        assert location_from_index("\tx", 1) == (1, 2)


class TestCursor:
    """Tests for the running cursor."""

    def test_starts_at_origin(self):
        """Test a new cursor is at line 1, column 1."""
        assert Cursor().snapshot() == (1, 1)

    def test_newline_resets_column(self):
        """Test newline moves to the next line."""
        cursor = Cursor()
        for ch in "ab\nc":
            cursor.advance(ch)
        assert cursor.snapshot() == (2, 2)
