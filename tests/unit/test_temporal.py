"""Tests for the ISO-UTC parser and temporal interval helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from stac_entities.temporal import center_datetime, iso_to_date, union_datetime

UTC = timezone.utc

d1 = datetime(2019, 1, 1, tzinfo=UTC)
d2 = datetime(2020, 1, 1, tzinfo=UTC)
d3 = datetime(2021, 1, 1, tzinfo=UTC)
d4 = datetime(2022, 1, 1, tzinfo=UTC)


class TestIsoToDate:
    """Tests for iso_to_date()."""

    @pytest.mark.unit
    def test_zulu(self) -> None:
        assert iso_to_date("2020-12-14T18:02:31Z") == datetime(2020, 12, 14, 18, 2, 31, tzinfo=UTC)

    @pytest.mark.unit
    def test_zero_offset_with_fraction(self) -> None:
        result = iso_to_date("2020-01-01T12:13:14.523+00:00")

        assert result == datetime(2020, 1, 1, 12, 13, 14, 523000, tzinfo=UTC)

    @pytest.mark.unit
    def test_result_is_timezone_aware(self) -> None:
        result = iso_to_date("2020-01-01T00:00:00Z")

        assert result is not None
        assert result.utcoffset() == timedelta(0)

    @pytest.mark.unit
    def test_fraction_keeps_decimal_meaning(self) -> None:
        """.5 is half a second, digits beyond microseconds are cut."""
        half = iso_to_date("2020-01-01T00:00:00.5Z")
        long = iso_to_date("2020-01-01T00:00:00.123456789Z")

        assert half is not None and half.microsecond == 500000
        assert long is not None and long.microsecond == 123456

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value",
        [
            "2020-01-01T12:13:14.5+07:00",
            "2020-01-01T12:13:14-05:00",
        ],
    )
    def test_rejects_non_utc_offsets(self, value: str) -> None:
        assert iso_to_date(value) is None

    @pytest.mark.unit
    def test_space_separator_and_lowercase(self) -> None:
        assert iso_to_date("2020-01-01 00:00:00z") == datetime(2020, 1, 1, tzinfo=UTC)

    @pytest.mark.unit
    def test_negative_zero_offset_is_utc(self) -> None:
        """RFC 3339 writes UTC with an unknown local offset as -00:00."""
        assert iso_to_date("2020-01-01T00:00:00-00:00") == datetime(2020, 1, 1, tzinfo=UTC)

    @pytest.mark.unit
    def test_without_designator(self) -> None:
        assert iso_to_date("2020-01-01T00:00:00") == datetime(2020, 1, 1, tzinfo=UTC)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value",
        [None, "", "2020", "2020-01-0", "2020-13-01T00:00:00Z", "yesterday at noon", 20200101],
    )
    def test_malformed_is_none(self, value: object) -> None:
        assert iso_to_date(value) is None

    @pytest.mark.unit
    def test_years_out_of_range_are_none(self) -> None:
        """Python datetimes only cover the years 1 to 9999."""
        assert iso_to_date("-0001-01-01T00:00:00Z") is None
        assert iso_to_date("10000-01-01T00:00:00Z") is None

    @given(st.datetimes(min_value=datetime(1, 1, 1), max_value=datetime(9999, 12, 31)))
    @settings(max_examples=50)
    @pytest.mark.unit
    def test_parses_own_isoformat(self, value: datetime) -> None:
        text = value.strftime("%Y-%m-%dT%H:%M:%S.%f") + "Z"
        # strftime pads years below 1000 inconsistently across platforms
        text = f"{value.year:04d}{text[text.index('-'):]}"

        assert iso_to_date(text) == value.replace(tzinfo=UTC)


class TestCenterDatetime:
    """Tests for center_datetime()."""

    @pytest.mark.unit
    def test_midpoint(self) -> None:
        start = datetime(2020, 1, 1, tzinfo=UTC)
        end = datetime(2020, 1, 3, tzinfo=UTC)

        assert center_datetime(start, end) == datetime(2020, 1, 2, tzinfo=UTC)


class TestUnionDatetime:
    """Tests for union_datetime()."""

    @pytest.mark.unit
    def test_closed_intervals(self) -> None:
        assert union_datetime([[d2, d3], [d1, d4]]) == [d1, d4]

    @pytest.mark.unit
    def test_open_start_dominates(self) -> None:
        assert union_datetime([[d2, d3], [None, d4]]) == [None, d4]

    @pytest.mark.unit
    def test_open_end_dominates(self) -> None:
        assert union_datetime([[d2, None], [d1, d4]]) == [d1, None]

    @pytest.mark.unit
    def test_empty(self) -> None:
        assert union_datetime([]) is None
        assert union_datetime(None) is None

    @pytest.mark.unit
    def test_malformed_entries_are_skipped(self) -> None:
        assert union_datetime([[d2], None, [d1, d3]]) == [d1, d3]
        assert union_datetime([[d2]]) is None

    @given(
        st.lists(
            st.tuples(
                st.datetimes(timezones=st.just(UTC)),
                st.datetimes(timezones=st.just(UTC)),
            ).map(sorted),
            min_size=1,
            max_size=5,
        )
    )
    @settings(max_examples=50)
    @pytest.mark.unit
    def test_union_covers_all_intervals(self, intervals: list[list[datetime]]) -> None:
        start, end = union_datetime(intervals)  # type: ignore[misc]

        assert start is not None and end is not None
        for lower, upper in intervals:
            assert start <= lower
            assert end >= upper
