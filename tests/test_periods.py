from datetime import date, datetime, timezone

import pytest

from cabinet.core.periods import (
    Period, in_period, period_bounds, start_of_week, to_local, week_days, WORKING_HOURS
)


class TestPeriodBounds:

    def test_day(self):
        assert period_bounds(Period.DAY, date(2031, 3, 15)) == (
            datetime(2031, 3, 15), datetime(2031, 3, 16)
        )

    def test_month_rolls_over_year(self):
        assert period_bounds(Period.MONTH, date(2031, 12, 31)) == (
            datetime(2031, 12, 1), datetime(2032, 1, 1)
        )

    def test_year(self):
        assert period_bounds(Period.YEAR, date(2031, 7, 4)) == (
            datetime(2031, 1, 1), datetime(2032, 1, 1)
        )


class TestInPeriod:

    @pytest.mark.parametrize("moment, period, expected", [
        (datetime(2031, 3, 15, 0, 0), Period.DAY, True),
        (datetime(2031, 3, 15, 23, 59, 59), Period.DAY, True),
        (datetime(2031, 3, 16, 0, 0), Period.DAY, False),
        (datetime(2031, 3, 1), Period.MONTH, True),
        (datetime(2031, 4, 1), Period.MONTH, False),
        (datetime(2030, 3, 15), Period.MONTH, False),
        (datetime(2031, 12, 31, 23, 0), Period.YEAR, True),
        (datetime(2032, 1, 1), Period.YEAR, False),
    ])
    def test_half_open_windows(self, moment, period, expected):
        assert in_period(moment, period, date(2031, 3, 15)) is expected

    def test_same_period_implies_same_calendar_fields(self):
        anchor = date(2031, 3, 15)
        moment = datetime(2031, 3, 28, 18, 30)
        assert in_period(moment, Period.YEAR, anchor) and moment.year == anchor.year
        assert in_period(moment, Period.MONTH, anchor) and moment.month == anchor.month
        assert not in_period(moment, Period.DAY, anchor)

    def test_aware_timestamps_use_clinic_time(self):
        # 23:30 UTC on 31 January is already February in Paris
        moment = datetime(2031, 1, 31, 23, 30, tzinfo=timezone.utc)
        assert to_local(moment) == datetime(2031, 2, 1, 0, 30)
        assert in_period(moment, Period.MONTH, date(2031, 2, 10))
        assert not in_period(moment, Period.MONTH, date(2031, 1, 10))


class TestWeek:

    def test_week_starts_on_monday(self):
        # 2030-01-09 is a Wednesday
        assert start_of_week(date(2030, 1, 9)) == date(2030, 1, 7)

    def test_sunday_belongs_to_previous_week(self):
        assert start_of_week(date(2030, 1, 13)) == date(2030, 1, 7)

    def test_six_working_days(self):
        days = week_days(date(2030, 1, 9))
        assert len(days) == 6
        assert days[0] == date(2030, 1, 7)
        assert days[-1] == date(2030, 1, 12)
        assert days[-1].weekday() == 5

    def test_eleven_hourly_slots(self):
        assert WORKING_HOURS == list(range(8, 19))
