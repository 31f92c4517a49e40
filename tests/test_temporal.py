"""Tests for calendar keys, labels and boundaries.

**Feature: trade-analytics**
"""

from datetime import datetime, timedelta

import pytest
import pytz
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.analytics import temporal

from tests.helpers import make_trade

# Millisecond precision, the resolution of period end boundaries.
moments = st.datetimes(min_value=datetime(2000, 1, 1), max_value=datetime(2099, 12, 31)).map(
    lambda d: d.replace(microsecond=d.microsecond // 1000 * 1000)
)

NEW_YORK = pytz.timezone("America/New_York")


class TestKeys:
    """
    **Feature: trade-analytics, Property 3: Calendar Keys**

    Keys are zero padded and follow the ISO week calendar.
    """

    def test_day_and_month_keys(self):
        d = datetime(2024, 3, 5, 14, 7)

        assert temporal.day_key(d) == "2024-03-05"
        assert temporal.month_key(d) == "2024-03"

    @pytest.mark.parametrize(
        "d, expected",
        [
            (datetime(2024, 1, 1), "2024-W01"),
            (datetime(2024, 12, 30), "2025-W01"),
            (datetime(2021, 1, 1), "2020-W53"),
            (datetime(2023, 1, 1), "2022-W52"),
            (datetime(2024, 7, 15), "2024-W29"),
        ],
    )
    def test_week_key_uses_iso_year(self, d, expected):
        assert temporal.week_key(d) == expected

    @pytest.mark.parametrize(
        "d, index, label",
        [
            (datetime(2024, 1, 7), 0, "Sun"),
            (datetime(2024, 1, 8), 1, "Mon"),
            (datetime(2024, 1, 13), 6, "Sat"),
        ],
    )
    def test_weekday_index_starts_on_sunday(self, d, index, label):
        assert temporal.weekday_index(d) == index
        assert temporal.weekday_label(index) == label

    @given(d=moments)
    @settings(max_examples=100)
    def test_same_week_shares_key(self, d):
        monday = temporal.week_start(d)
        sunday = temporal.week_end(d)

        assert temporal.week_key(monday) == temporal.week_key(d) == temporal.week_key(sunday)
        assert temporal.week_key(sunday + timedelta(milliseconds=1)) != temporal.week_key(d)


class TestLabels:
    @pytest.mark.parametrize(
        "hour, label",
        [(0, "12AM"), (1, "1AM"), (11, "11AM"), (12, "12PM"), (13, "1PM"), (23, "11PM")],
    )
    def test_hour_label(self, hour, label):
        assert temporal.hour_label(hour) == label

    def test_week_label_names_monday(self):
        assert temporal.week_label(datetime(2025, 1, 8)) == "Week of Jan 6"

    def test_month_label(self):
        assert temporal.month_label(datetime(2024, 1, 20)) == "January 2024"


class TestBoundaries:
    """
    **Feature: trade-analytics, Property 4: Period Boundaries**

    Every moment falls inside the boundaries of its own day, week and month.
    """

    def test_day_bounds(self):
        d = datetime(2024, 3, 5, 14, 7, 33)

        assert temporal.day_start(d) == datetime(2024, 3, 5)
        assert temporal.day_end(d) == datetime(2024, 3, 5, 23, 59, 59, 999000)

    def test_week_runs_monday_to_sunday(self):
        d = datetime(2024, 1, 10, 12)

        assert temporal.week_start(d) == datetime(2024, 1, 8)
        assert temporal.week_end(d) == datetime(2024, 1, 14, 23, 59, 59, 999000)

    def test_sunday_belongs_to_preceding_monday(self):
        assert temporal.week_start(datetime(2024, 1, 14, 18)) == datetime(2024, 1, 8)

    def test_month_end_in_leap_february(self):
        assert temporal.month_end(datetime(2024, 2, 10)) == datetime(2024, 2, 29, 23, 59, 59, 999000)

    def test_month_end_in_december(self):
        assert temporal.month_end(datetime(2024, 12, 3)) == datetime(2024, 12, 31, 23, 59, 59, 999000)

    def test_aware_datetimes_keep_zone(self):
        d = NEW_YORK.localize(datetime(2024, 3, 5, 14))

        start = temporal.day_start(d)

        assert start.tzinfo.zone == "America/New_York"
        assert start == NEW_YORK.localize(datetime(2024, 3, 5))

    def test_week_across_spring_forward(self):
        # Clocks moved forward on Sunday 2024-03-10.
        d = NEW_YORK.localize(datetime(2024, 3, 10, 15))

        assert temporal.week_start(d) == NEW_YORK.localize(datetime(2024, 3, 4))
        assert temporal.week_start(d).tzname() == "EST"
        assert temporal.week_end(d).tzname() == "EDT"

    def test_month_across_fall_back(self):
        # Clocks moved back on Sunday 2024-11-03.
        d = NEW_YORK.localize(datetime(2024, 11, 1, 10))

        assert temporal.month_start(d).tzname() == "EDT"
        assert temporal.month_end(d) == NEW_YORK.localize(datetime(2024, 11, 30, 23, 59, 59, 999000))
        assert temporal.month_end(d).tzname() == "EST"

    def test_day_end_after_transition(self):
        d = NEW_YORK.localize(datetime(2024, 3, 10, 1, 30))

        assert temporal.day_end(d) - temporal.day_start(d) == timedelta(hours=22, minutes=59, seconds=59,
                                                                         milliseconds=999)

    @given(d=moments, zone=st.sampled_from(["America/New_York", "Europe/London", "Australia/Sydney"]))
    @settings(max_examples=100)
    def test_aware_boundaries_are_local_midnight(self, d, zone):
        local = pytz.timezone(zone).localize(d)

        for start in (temporal.day_start(local), temporal.week_start(local), temporal.month_start(local)):
            assert (start.hour, start.minute, start.second) == (0, 0, 0)
            assert start.replace(tzinfo=None) == start.tzinfo.normalize(start).replace(tzinfo=None)
        for end in (temporal.day_end(local), temporal.week_end(local), temporal.month_end(local)):
            assert (end.hour, end.minute, end.second) == (23, 59, 59)
            assert end.replace(tzinfo=None) == end.tzinfo.normalize(end).replace(tzinfo=None)

    @given(d=moments)
    @settings(max_examples=100)
    def test_moment_is_inside_its_periods(self, d):
        assert temporal.day_start(d) <= d <= temporal.day_end(d)
        assert temporal.week_start(d) <= d <= temporal.week_end(d)
        assert temporal.month_start(d) <= d <= temporal.month_end(d)
        assert temporal.week_start(d).weekday() == 0


class TestOrderings:
    def test_chronological_is_stable(self):
        same = datetime(2024, 1, 2, 10)
        first = make_trade(10, exit_time=same, symbol="A")
        second = make_trade(20, exit_time=same, symbol="B")
        earlier = make_trade(30, exit_time=same - timedelta(hours=1), symbol="C")

        ordered = temporal.chronological([first, second, earlier])

        assert [t.symbol for t in ordered] == ["C", "A", "B"]

    def test_chronological_does_not_modify_input(self):
        trades = [make_trade(10, exit_time=datetime(2024, 1, 3)), make_trade(20, exit_time=datetime(2024, 1, 2))]
        original = list(trades)

        temporal.chronological(trades)

        assert trades == original

    def test_chronological_mixes_naive_and_aware(self):
        naive = make_trade(10, exit_time=datetime(2024, 1, 2, 12), symbol="N")
        tokyo = make_trade(20, exit_time=pytz.timezone("Asia/Tokyo").localize(datetime(2024, 1, 2, 20)), symbol="T")
        utc = make_trade(30, exit_time=pytz.utc.localize(datetime(2024, 1, 2, 9)), symbol="U")

        ordered = temporal.chronological([naive, tokyo, utc])

        # Tokyo 20:00 is 11:00 UTC; naive values count as UTC.
        assert [t.symbol for t in ordered] == ["U", "T", "N"]
