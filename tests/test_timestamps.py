from __future__ import annotations

import io

import pytest

from orginline import messages as m
from orginline.inline import Plain, Timestamp, TimestampKind, parseInline
from orginline.timestamp import (
    Date,
    RepeatKind,
    Repetition,
    RepeatUnit,
    Stamp,
    StampRange,
    Time,
    looksLikeDate,
    parseDate,
    parseRepeater,
    parseTime,
)


def test_active_date():
    assert parseInline("<2018-10-16 Tue>") == [
        Timestamp(TimestampKind.Date, Stamp(Date(2018, 10, 16), None, None, active=True)),
    ]


def test_inactive_date():
    assert parseInline("[2020-01-01]") == [
        Timestamp(TimestampKind.Date, Stamp(Date(2020, 1, 1), active=False)),
    ]


def test_deadline_with_repeater():
    [node] = parseInline("DEADLINE: <2008-02-10 Sun +1w>")
    assert node.kind is TimestampKind.Deadline
    assert node.value == Stamp(
        Date(2008, 2, 10),
        time=None,
        repetition=Repetition(RepeatKind.Cumulative, 1, RepeatUnit.Week),
    )


def test_scheduled_with_time():
    assert parseInline("SCHEDULED: <2004-12-25 Sat 10:00>") == [
        Timestamp(TimestampKind.Scheduled, Stamp(Date(2004, 12, 25), Time(10, 0))),
    ]


def test_closed():
    [node] = parseInline("CLOSED: [2021-03-04 Thu 09:15]")
    assert node == Timestamp(TimestampKind.Closed, Stamp(Date(2021, 3, 4), Time(9, 15), active=False))


def test_time_and_repeater():
    [node] = parseInline("<2004-12-25 Sat 10:00 ++2d>")
    assert node.value == Stamp(
        Date(2004, 12, 25),
        Time(10, 0),
        Repetition(RepeatKind.CatchUp, 2, RepeatUnit.Day),
    )


def test_day_name_is_optional():
    [node] = parseInline("<2020-01-01 10:00 .+1m>")
    assert node.value == Stamp(
        Date(2020, 1, 1),
        Time(10, 0),
        Repetition(RepeatKind.Restart, 1, RepeatUnit.Month),
    )


def test_clock_started():
    assert parseInline("CLOCK: [2018-09-25 Tue 13:49]") == [
        Timestamp(TimestampKind.Clock, Stamp(Date(2018, 9, 25), Time(13, 49), active=False)),
    ]


def test_clock_stopped():
    [node] = parseInline("CLOCK: [2018-09-25 Tue 13:49]--[2018-09-25 Tue 13:50]")
    assert node.kind is TimestampKind.Clock
    assert node.isRange
    assert node.value == StampRange(
        Stamp(Date(2018, 9, 25), Time(13, 49), active=False),
        Stamp(Date(2018, 9, 25), Time(13, 50), active=False),
    )


def test_range():
    [node] = parseInline("<2004-08-23 Mon>--<2004-08-26 Thu>")
    assert node == Timestamp(
        TimestampKind.Range,
        StampRange(Stamp(Date(2004, 8, 23)), Stamp(Date(2004, 8, 26))),
    )
    assert node.span == (0, 34)


def test_range_endpoint_cant_be_a_clock():
    nodes = parseInline("<2004-08-23 Mon>--CLOCK: <2004-08-26 Thu>")
    assert not any(isinstance(n, Timestamp) and n.isRange for n in nodes)


def test_keyword_needs_word_start():
    assert parseInline("fooDEADLINE: <2020-01-01>") == [
        Plain("fooDEADLINE: "),
        Timestamp(TimestampKind.Date, Stamp(Date(2020, 1, 1))),
    ]
    assert parseInline("due DEADLINE: <2020-01-01>")[1].kind is TimestampKind.Deadline


@pytest.mark.parametrize(
    "text",
    [
        "<2020-01-01 Wed 10:00 +1w extra>",
        "<2020-01-01 Wed bogus>",
        "<2020-01-01 Wed 10:00 nope>",
        "<2020-01-01 Wed 25:00>",
        "<2020-01-01",
        "<>",
        "DEADLINE: nothing",
    ],
)
def test_malformed_is_literal(text):
    assert parseInline(text) == [Plain(text)]


def test_invalid_date_warns():
    fh = io.StringIO()
    with m.withMessageState(fh=fh, printMode="plain", silent=False, printOn="everything") as state:
        assert parseInline("<2019-02-30 Sat>") == [Plain("<2019-02-30 Sat>")]
        assert state.categoryCounts["warning"] == 1
    assert fh.getvalue() == (
        "WARNING at 1:1: Invalid date '2019-02-30' in timestamp <2019-02-30 Sat>, treating it as plain text.\n"
    )


def test_date_functions():
    assert parseDate("2024-02-29") == Date(2024, 2, 29)
    assert parseDate("2023-02-29") is None
    assert parseDate("24-02-29") is None
    assert looksLikeDate("2023-02-29")
    assert not looksLikeDate("Tue")
    assert str(Date(2024, 2, 9)) == "2024-02-09"


def test_time_functions():
    assert parseTime("9:05") == Time(9, 5)
    assert parseTime("24:00") == Time(24, 0)
    assert parseTime("25:00") is None
    assert parseTime("10:60") is None
    assert parseTime("1000") is None


def test_time_past_end_of_day():
    assert parseTime("23:59") == Time(23, 59)
    assert parseTime("24:30") is None
    assert parseTime("24:01") is None
    assert parseInline("<2020-01-01 24:30>") == [Plain("<2020-01-01 24:30>")]


def test_repeater_function():
    date = Date(2020, 1, 1)
    assert parseRepeater("+3y", date, None, "+") == (date, None, Repetition(RepeatKind.Cumulative, 3, RepeatUnit.Year))
    assert parseRepeater("+3x", date, Time(1, 0), "+") == (date, Time(1, 0), None)
    assert parseRepeater("+3y", date, None, ".") == (date, None, None)


def test_stamp_str():
    stamp = Stamp(Date(2020, 1, 1), Time(9, 0), Repetition(RepeatKind.Restart, 1, RepeatUnit.Week), active=False)
    assert str(stamp) == "[2020-01-01 09:00 .+1w]"
    assert str(StampRange(Stamp(Date(2020, 1, 1)), Stamp(Date(2020, 1, 2)))) == "<2020-01-01>--<2020-01-02>"
