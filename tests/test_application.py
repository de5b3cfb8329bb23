"""Tests for applying durations to time points, epoch milliseconds and dates."""

import logging
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from calspan import AmountOutOfRange, Duration

UTC = timezone.utc


def test_sub_day_duration_leaves_date_unchanged():
    """Test that durations finer than a day are a no-op on calendar dates."""
    day = date(2025, 3, 1)

    assert Duration.hours(5).added_to(day) == day
    assert Duration.hours(5).subtracted_from(day) == day
    assert Duration.milliseconds(1).added_to(day) == day


def test_hours_worth_of_days_still_leaves_date_unchanged():
    """Test that the unit decides, not the amount: 48 hours does not move a date."""
    day = date(2025, 3, 1)

    assert Duration.hours(48).added_to(day) == day


def test_sub_day_no_op_is_logged(caplog):
    """Test that the sub-day no-op on dates leaves a debug record."""
    with caplog.at_level(logging.DEBUG, logger="calspan.duration"):
        Duration.minutes(10).added_to(date(2025, 3, 1))

    assert "finer than a day" in caplog.text


def test_days_added_to_date():
    """Test that days move a date across month and leap-year boundaries."""
    assert Duration.days(3).added_to(date(2025, 2, 27)) == date(2025, 3, 2)
    assert Duration.days(1).subtracted_from(date(2025, 3, 1)) == date(2025, 2, 28)
    assert Duration.days(1).subtracted_from(date(2024, 3, 1)) == date(2024, 2, 29)


def test_weeks_added_to_date():
    """Test that weeks move a date by whole days across a year boundary."""
    assert Duration.weeks(2).added_to(date(2025, 12, 25)) == date(2026, 1, 8)
    assert Duration.weeks(1).subtracted_from(date(2025, 1, 3)) == date(2024, 12, 27)


def test_months_added_to_date_clip_to_month_end():
    """Test that adding months clips to the last day of a shorter month."""
    assert Duration.months(1).added_to(date(2025, 1, 31)) == date(2025, 2, 28)
    assert Duration.months(1).added_to(date(2024, 1, 31)) == date(2024, 2, 29)
    assert Duration.months(2).added_to(date(2025, 1, 31)) == date(2025, 3, 31)


def test_quarters_and_years_added_to_date():
    """Test that quarters and years are added as months."""
    assert Duration.quarters(1).added_to(date(2025, 11, 30)) == date(2026, 2, 28)
    assert Duration.years(1).added_to(date(2024, 2, 29)) == date(2025, 2, 28)
    assert Duration.years(1).subtracted_from(date(2025, 3, 31)) == date(2024, 3, 31)


def test_fixed_duration_added_to_datetime():
    """Test that fixed-length durations shift a datetime by exact milliseconds."""
    start = datetime(2025, 1, 1, tzinfo=UTC)

    assert Duration.hours(26).added_to(start) == datetime(2025, 1, 2, 2, tzinfo=UTC)
    assert Duration.milliseconds(1500).added_to(start) == datetime(
        2025, 1, 1, 0, 0, 1, 500000, tzinfo=UTC
    )
    assert Duration.seconds(1).subtracted_from(start) == datetime(
        2024, 12, 31, 23, 59, 59, tzinfo=UTC
    )


def test_fixed_duration_is_elapsed_time_across_dst():
    """Test that 24 hours across spring-forward lands an hour later on the clock."""
    pacific = ZoneInfo("US/Pacific")
    before = datetime(2025, 3, 8, 12, 0, tzinfo=pacific)

    after = Duration.hours(24).added_to(before)

    assert after == datetime(2025, 3, 9, 13, 0, tzinfo=pacific)
    assert after.tzinfo is pacific
    assert after.hour == 13


def test_fixed_duration_round_trips_on_datetime():
    """Test that subtracting a fixed duration undoes adding it."""
    point = datetime(2025, 6, 15, 8, 30, tzinfo=ZoneInfo("Europe/London"))
    duration = Duration.days_hours_minutes_seconds_milliseconds(3, 4, 5, 6, 7)

    assert duration.subtracted_from(duration.added_to(point)) == point


def test_month_added_to_last_day_of_31_day_month():
    """Test that January 31st plus a month clips to the end of February."""
    point = datetime(2025, 1, 31, 12, 0, tzinfo=UTC)

    expected = datetime(2025, 2, 28, 12, 0, tzinfo=UTC)
    assert Duration.months(1).added_to(point) == expected


def test_year_subtracted_from_leap_day():
    """Test that a year before a leap day lands on February 28th."""
    point = datetime(2024, 2, 29, tzinfo=UTC)

    assert Duration.years(1).subtracted_from(point) == datetime(2023, 2, 28, tzinfo=UTC)


def test_calendar_units_use_reference_zone():
    """Test that months are counted on the calendar of the reference zone."""
    point = datetime(2025, 1, 30, 20, 0, tzinfo=UTC)

    # In UTC it is still January 30th
    assert Duration.months(1).added_to(point) == datetime(2025, 2, 28, 20, tzinfo=UTC)

    # In Tokyo it is already January 31st, 05:00
    in_tokyo = Duration.months(1).added_to(point, tz="Asia/Tokyo")
    assert in_tokyo == datetime(2025, 2, 27, 20, tzinfo=UTC)
    assert in_tokyo.tzinfo is UTC

    also_tokyo = Duration.months(1).added_to(point, tz=ZoneInfo("Asia/Tokyo"))
    assert also_tokyo == in_tokyo


def test_month_landing_in_dst_gap_resolves_to_real_time():
    """Test that a month landing on a skipped wall time yields a real local time."""
    pacific = ZoneInfo("US/Pacific")
    # 2:30am on March 9th 2025 does not exist in Pacific time
    point = datetime(2025, 2, 9, 2, 30, tzinfo=pacific)

    shifted = Duration.months(1).added_to(point, tz="US/Pacific")

    assert shifted == datetime(2025, 3, 9, 3, 30, tzinfo=pacific)
    assert shifted.hour == 3
    assert shifted.utcoffset() == timedelta(hours=-7)
    assert shifted.astimezone(UTC) == datetime(2025, 3, 9, 10, 30, tzinfo=UTC)


def test_durations_added_to_epoch_milliseconds():
    """Test that epoch milliseconds shift by base units or by calendar months."""
    assert Duration.hours(1).added_to(0) == 3_600_000
    assert Duration.seconds(2).subtracted_from(5_000) == 3_000
    # January has 31 days
    assert Duration.months(1).added_to(0) == 31 * 86_400_000
    # and so does December
    assert Duration.months(1).subtracted_from(0) == -31 * 86_400_000


def test_naive_datetime_is_rejected():
    """Test that naive datetimes are rejected with a hint."""
    with pytest.raises(TypeError, match="timezone-aware"):
        Duration.days(1).added_to(datetime(2025, 1, 1))


def test_unsupported_point_types_are_rejected():
    """Test that strings and bools are not accepted as time points."""
    with pytest.raises(TypeError, match="datetime, date, or int"):
        Duration.days(1).added_to("2025-01-01")  # type: ignore[call-overload]

    with pytest.raises(TypeError):
        Duration.days(1).added_to(True)  # type: ignore[call-overload]


def test_calendar_amount_must_fit_32_bits():
    """Test that calendar amounts beyond 32 bits fail before any arithmetic."""
    point = datetime(2025, 1, 1, tzinfo=UTC)

    with pytest.raises(AmountOutOfRange, match="is out of range"):
        Duration.months(2**31).added_to(point)

    with pytest.raises(AmountOutOfRange, match="is out of range"):
        Duration.years(2**28).subtracted_from(date(2025, 1, 1))

    with pytest.raises(OverflowError):
        Duration.years(2**28).added_to(0)


def test_32_bit_bounds_are_inclusive():
    """Test that amounts at the 32-bit bounds pass the field check."""
    # Both bounds get past the field check and fail on the calendar instead
    with pytest.raises(AmountOutOfRange, match="outside the supported calendar"):
        Duration.months(2**31 - 1).added_to(0)

    with pytest.raises(AmountOutOfRange, match="outside the supported calendar"):
        Duration.months(2**31).subtracted_from(0)


def test_results_beyond_the_calendar_fail_with_hint():
    """Test that results past year 9999 raise AmountOutOfRange with a hint."""
    with pytest.raises(AmountOutOfRange, match="year 1 to 9999"):
        Duration.months(200_000).added_to(date(2025, 1, 1))

    with pytest.raises(AmountOutOfRange, match="outside the supported calendar"):
        Duration.days(10**7).added_to(date(2025, 1, 1))

    with pytest.raises(AmountOutOfRange, match="outside the supported calendar"):
        Duration.weeks(10**6).added_to(datetime(2025, 1, 1, tzinfo=UTC))

    with pytest.raises(OverflowError):
        Duration.years(9000).subtracted_from(date(2025, 1, 1))
