from __future__ import annotations

import datetime
import re
from dataclasses import dataclass
from enum import Enum

from . import t

# The date/time pieces of a timestamp like <2007-05-16 Wed 12:30 +1w>.
# These are pure functions over single whitespace-free tokens;
# finding the tokens is the inline parser's job.


@dataclass(frozen=True)
class Date:
    year: int
    month: int
    day: int

    def __json__(self) -> t.JSONT:
        return {"year": self.year, "month": self.month, "day": self.day}

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


@dataclass(frozen=True)
class Time:
    hour: int
    minute: int

    def __json__(self) -> t.JSONT:
        return {"hour": self.hour, "minute": self.minute}

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


class RepeatKind(Enum):
    # +1w: shift by the interval once per completion
    Cumulative = "+"
    # ++1w: shift by the interval until the date is in the future
    CatchUp = "++"
    # .+1w: shift to today plus the interval
    Restart = ".+"


class RepeatUnit(Enum):
    Hour = "h"
    Day = "d"
    Week = "w"
    Month = "m"
    Year = "y"


@dataclass(frozen=True)
class Repetition:
    kind: RepeatKind
    value: int
    unit: RepeatUnit

    def __json__(self) -> t.JSONT:
        return {"kind": self.kind.name, "value": self.value, "unit": self.unit.name}

    def __str__(self) -> str:
        return f"{self.kind.value}{self.value}{self.unit.value}"


@dataclass(frozen=True)
class Stamp:
    date: Date
    time: Time | None = None
    repetition: Repetition | None = None
    active: bool = True

    def __json__(self) -> t.JSONT:
        return {
            "date": self.date.__json__(),
            "time": self.time.__json__() if self.time else None,
            "repetition": self.repetition.__json__() if self.repetition else None,
            "active": self.active,
        }

    @classmethod
    def fromJson(cls, data: t.JSONT) -> Stamp:
        time = data.get("time")
        rep = data.get("repetition")
        return cls(
            date=Date(**data["date"]),
            time=Time(**time) if time else None,
            repetition=Repetition(
                kind=RepeatKind[rep["kind"]],
                value=rep["value"],
                unit=RepeatUnit[rep["unit"]],
            )
            if rep
            else None,
            active=data.get("active", True),
        )

    def __str__(self) -> str:
        parts = [str(self.date)]
        if self.time:
            parts.append(str(self.time))
        if self.repetition:
            parts.append(str(self.repetition))
        inner = " ".join(parts)
        return f"<{inner}>" if self.active else f"[{inner}]"


@dataclass(frozen=True)
class StampRange:
    start: Stamp
    stop: Stamp

    def __json__(self) -> t.JSONT:
        return {"start": self.start.__json__(), "stop": self.stop.__json__()}

    @classmethod
    def fromJson(cls, data: t.JSONT) -> StampRange:
        return cls(start=Stamp.fromJson(data["start"]), stop=Stamp.fromJson(data["stop"]))

    def __str__(self) -> str:
        return f"{self.start}--{self.stop}"


dateRe = re.compile(r"(\d{4})-(\d{2})-(\d{2})")
timeRe = re.compile(r"(\d{1,2}):(\d{2})")
repeaterRe = re.compile(r"(\+\+|\.\+|\+)(\d+)([hdwmy])")


def looksLikeDate(token: str) -> bool:
    return dateRe.fullmatch(token) is not None


def parseDate(token: str) -> Date | None:
    match = dateRe.fullmatch(token)
    if match is None:
        return None
    year, month, day = (int(x) for x in match.groups())
    try:
        datetime.date(year, month, day)
    except ValueError:
        return None
    return Date(year, month, day)


def parseTime(token: str) -> Time | None:
    match = timeRe.fullmatch(token)
    if match is None:
        return None
    hour, minute = int(match[1]), int(match[2])
    # 24:00 is the end of the day; nothing later is.
    if minute > 59 or hour > 24 or (hour == 24 and minute != 0):
        return None
    return Time(hour, minute)


def parseRepeater(
    token: str,
    date: Date,
    time: Time | None,
    leadChar: str,
) -> tuple[Date, Time | None, Repetition | None]:
    """
    Reads a repeater token like "+1w", "++2d" or ".+1m".
    `leadChar` is the token's first character, which the caller
    has already used to decide this is a repeater rather than a time.
    The date and time are passed through unchanged;
    a malformed repeater just yields no repetition.
    """
    if leadChar not in "+." or not token.startswith(leadChar):
        return date, time, None
    match = repeaterRe.fullmatch(token)
    if match is None:
        return date, time, None
    repetition = Repetition(
        kind=RepeatKind(match[1]),
        value=int(match[2]),
        unit=RepeatUnit(match[3]),
    )
    return date, time, repetition
