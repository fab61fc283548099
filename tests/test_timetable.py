"""
Unit tests for timetable layout
"""
from datetime import date

import pytest

from pki.analytics.timetable import (
    block_position,
    blocks_for_day_and_hour,
    build_time_blocks,
    decimal_hour,
    week_days,
)


@pytest.mark.unit
class TestTimeBlocks:
    """Test block construction and placement."""

    def test_decimal_hour(self):
        assert decimal_hour("09:30") == pytest.approx(9.5)
        assert decimal_hour("00:00") == 0

    def test_undated_entries_skipped(self, make_entry):
        blocks = build_time_blocks([
            make_entry("09:00", "10:00", day=date(2026, 1, 5)),
            make_entry("11:00", "12:00", day=None),
        ])
        assert len(blocks) == 1
        assert blocks[0].start_hour == 9
        assert blocks[0].end_hour == 10

    def test_blocks_for_hour(self, make_entry):
        day = date(2026, 1, 5)
        blocks = build_time_blocks([make_entry("09:30", "11:15", day=day)])

        covered = [h for h in range(24) if blocks_for_day_and_hour(blocks, day, h)]
        assert covered == [9, 10, 11]
        assert blocks_for_day_and_hour(blocks, date(2026, 1, 6), 10) == []

    def test_position_within_hour(self, make_entry):
        block = build_time_blocks([make_entry("09:15", "09:45", day=date(2026, 1, 5))])[0]
        position = block_position(block)

        assert position.top == pytest.approx(25)
        assert position.height == pytest.approx(50)

    def test_height_clipped_to_cell(self, make_entry):
        block = build_time_blocks([make_entry("09:30", "11:00", day=date(2026, 1, 5))])[0]
        position = block_position(block)

        assert position.top == pytest.approx(50)
        assert position.height == pytest.approx(50)

    def test_week_days(self):
        days = week_days(date(2026, 1, 14))
        assert days[0] == date(2026, 1, 12)
        assert days[-1] == date(2026, 1, 18)
        assert len(days) == 7
