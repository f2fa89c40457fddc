"""Unit tests for clocks and timestamp parsing."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from fitview.kernel.time import FrozenClock, SystemClock, in_same_month, parse_timestamp


class TestClocks:
    def test_system_clock_is_aware(self) -> None:
        assert SystemClock().now().tzinfo is not None

    def test_frozen_clock(self) -> None:
        clock = FrozenClock(datetime(2024, 6, 15, 12, tzinfo=UTC))
        assert clock.today() == date(2024, 6, 15)
        clock.advance(days=20)
        assert clock.now() == datetime(2024, 7, 5, 12, tzinfo=UTC)


class TestParseTimestamp:
    def test_zulu_suffix(self) -> None:
        assert parse_timestamp("2024-06-01T10:00:00.000Z") == datetime(2024, 6, 1, 10, tzinfo=UTC)

    def test_offset_is_kept(self) -> None:
        parsed = parse_timestamp("2024-06-01T10:00:00+02:00")
        assert parsed is not None
        assert parsed.utcoffset() == timedelta(hours=2)

    def test_naive_becomes_utc(self) -> None:
        assert parse_timestamp(datetime(2024, 1, 1)) == datetime(2024, 1, 1, tzinfo=UTC)

    def test_aware_datetime_passes_through(self) -> None:
        moment = datetime(2024, 1, 1, tzinfo=timezone(timedelta(hours=-5)))
        assert parse_timestamp(moment) is moment

    @pytest.mark.parametrize("value", [None, "", "yesterday", 1717236000, object()])
    def test_invalid_is_none(self, value: object) -> None:
        assert parse_timestamp(value) is None


class TestInSameMonth:
    def test_same_month(self) -> None:
        ref = datetime(2024, 6, 30, tzinfo=UTC)
        assert in_same_month(datetime(2024, 6, 1, tzinfo=UTC), ref)

    def test_other_year(self) -> None:
        ref = datetime(2024, 6, 30, tzinfo=UTC)
        assert not in_same_month(datetime(2023, 6, 1, tzinfo=UTC), ref)

    def test_none(self) -> None:
        assert not in_same_month(None, datetime(2024, 6, 30, tzinfo=UTC))
