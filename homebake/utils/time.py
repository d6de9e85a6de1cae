"""Shift time windows in the bakery's civil timezone.

The bakery runs on West Africa Time: a fixed UTC+1 offset with no daylight
saving. Production and sales rows are stored with UTC timestamps, so every
"current shift" query needs the shift's civil bounds converted to UTC.

Each shift has a defining boundary (00:00 for morning, 15:00 for night). For
the first 30 seconds after a boundary the window is *cleared*: callers must
report "no data yet" instead of querying a range that has just moved.
"""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum

from homebake.core.config import settings

logger = logging.getLogger(__name__)

LOCAL_UTC_OFFSET: timedelta = timedelta(hours=1)
LOCAL_TIMEZONE: timezone = timezone(LOCAL_UTC_OFFSET, "WAT")
CLEARING_GRACE_SECONDS: int = 30

MORNING_BOUNDARY_HOUR: int = 0
NIGHT_BOUNDARY_HOUR: int = 15
WINDOW_OPEN_TIME: time = time(0, 0, CLEARING_GRACE_SECONDS)
MORNING_CLOSE_TIME: time = time(23, 59, 59)
NIGHT_OPEN_TIME: time = time(NIGHT_BOUNDARY_HOUR, 0, CLEARING_GRACE_SECONDS)
NIGHT_CLOSE_TIME: time = time(14, 59, 59)


class InvalidArgument(ValueError):
    """Raised for an unknown shift name or an out-of-range civil time."""


class ShiftName(str, Enum):
    """Recurring operational period used to bucket production and sales."""

    MORNING = "morning"
    NIGHT = "night"

    @classmethod
    def parse(cls, value: object) -> ShiftName:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidArgument(f"Unknown shift: {value!r}") from exc


def _check_field(name: str, value: object, low: int, high: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    if not low <= value <= high:
        raise InvalidArgument(f"{name} out of range: {value} (expected {low}..{high})")


@dataclass(frozen=True, order=True)
class CivilInstant:
    """Calendar date-time as read on a wall clock in the bakery's timezone."""

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0

    def __post_init__(self) -> None:
        _check_field("year", self.year, 1, 9999)
        _check_field("month", self.month, 1, 12)
        _check_field("day", self.day, 1, calendar.monthrange(self.year, self.month)[1])
        _check_field("hour", self.hour, 0, 23)
        _check_field("minute", self.minute, 0, 59)
        _check_field("second", self.second, 0, 59)

    @classmethod
    def from_datetime(cls, value: datetime) -> CivilInstant:
        """Build from a naive civil datetime; sub-second precision is dropped."""
        return cls(value.year, value.month, value.day, value.hour, value.minute, value.second)

    @classmethod
    def from_utc(cls, moment: datetime) -> CivilInstant:
        """Convert an absolute instant to civil time. Naive values are taken as UTC."""
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        try:
            local = moment.astimezone(LOCAL_TIMEZONE)
        except OverflowError as exc:
            raise InvalidArgument(f"{moment.isoformat()} has no civil time within the calendar") from exc
        return cls.from_datetime(local.replace(tzinfo=None))

    @classmethod
    def combine(cls, day: date, at: time) -> CivilInstant:
        return cls(day.year, day.month, day.day, at.hour, at.minute, at.second)

    def to_datetime(self) -> datetime:
        return datetime(self.year, self.month, self.day, self.hour, self.minute, self.second)

    def date(self) -> date:
        return date(self.year, self.month, self.day)

    def isoformat(self) -> str:
        return self.to_datetime().isoformat()


@dataclass(frozen=True)
class ActiveWindow:
    """UTC bounds, inclusive on both ends, of a shift's current occurrence."""

    start_utc: datetime
    end_utc: datetime

    cleared = False

    @property
    def duration(self) -> timedelta:
        return self.end_utc - self.start_utc


@dataclass(frozen=True)
class ClearedWindow:
    """The shift boundary was crossed less than 30 seconds ago."""

    cleared = True


CLEARED: ClearedWindow = ClearedWindow()
ShiftWindow = ActiveWindow | ClearedWindow


def local_to_utc(instant: CivilInstant) -> datetime:
    """Return the aware UTC datetime for a civil instant.

    Subtracting the offset rolls the hour back across day, month and year
    boundaries with Gregorian month lengths, leap-year February included.
    """
    try:
        shifted = instant.to_datetime() - LOCAL_UTC_OFFSET
    except OverflowError as exc:
        raise InvalidArgument(f"{instant.isoformat()} has no representable UTC instant") from exc
    return shifted.replace(tzinfo=timezone.utc)


def _coerce_instant(value: CivilInstant | datetime) -> CivilInstant:
    if isinstance(value, CivilInstant):
        return value
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return CivilInstant.from_utc(value)
        return CivilInstant.from_datetime(value)
    raise InvalidArgument(f"Expected a civil instant, got {type(value).__name__}")


def _civil_day(day: date, offset_days: int) -> date:
    try:
        return day + timedelta(days=offset_days)
    except OverflowError as exc:
        raise InvalidArgument(f"{day.isoformat()} has no civil day {offset_days:+d} within the calendar") from exc


def _in_clearing_window(instant: CivilInstant, boundary_hour: int) -> bool:
    return instant.hour == boundary_hour and instant.minute == 0 and instant.second < CLEARING_GRACE_SECONDS


def resolve(shift: ShiftName | str, now_local: CivilInstant | datetime) -> ShiftWindow:
    """Resolve the UTC window holding the data of ``shift``'s current occurrence.

    ``now_local`` is the current wall-clock time in the bakery's timezone. A
    naive ``datetime`` is read as civil time; an aware one is converted first.

    Morning covers 00:00:30-23:59:59 of the current civil day. Night covers
    15:00:30 of one day to 14:59:59 of the next: the occurrence that started
    today once the clock is past 15:00, otherwise the one that started
    yesterday.
    """
    shift_name = ShiftName.parse(shift)
    instant = _coerce_instant(now_local)

    boundary = MORNING_BOUNDARY_HOUR if shift_name is ShiftName.MORNING else NIGHT_BOUNDARY_HOUR
    if _in_clearing_window(instant, boundary):
        logger.debug("[SHIFT] %s window cleared at %s", shift_name.value, instant.isoformat())
        return CLEARED

    today = instant.date()
    if shift_name is ShiftName.MORNING:
        start = CivilInstant.combine(today, WINDOW_OPEN_TIME)
        end = CivilInstant.combine(today, MORNING_CLOSE_TIME)
    elif instant.hour >= NIGHT_BOUNDARY_HOUR:
        start = CivilInstant.combine(today, NIGHT_OPEN_TIME)
        end = CivilInstant.combine(_civil_day(today, 1), NIGHT_CLOSE_TIME)
    else:
        start = CivilInstant.combine(_civil_day(today, -1), NIGHT_OPEN_TIME)
        end = CivilInstant.combine(today, NIGHT_CLOSE_TIME)

    window = ActiveWindow(start_utc=local_to_utc(start), end_utc=local_to_utc(end))
    logger.debug(
        "[SHIFT] %s window for %s: %s -> %s",
        shift_name.value,
        instant.isoformat(),
        window.start_utc.isoformat(),
        window.end_utc.isoformat(),
    )
    return window


def now_local() -> CivilInstant:
    """Read the system clock as civil time."""
    return CivilInstant.from_utc(datetime.now(timezone.utc))


def cleared_reason(shift: ShiftName) -> str:
    if shift is ShiftName.MORNING:
        return "Morning shift cleared at midnight (00:00)"
    return "Night shift cleared at 3:00 PM (15:00)"


def next_clear_hint(shift: ShiftName) -> str:
    if shift is ShiftName.MORNING:
        return "Next clear: Tomorrow at 00:00"
    return "Next clear: Today at 15:00"


def current_shift(instant: CivilInstant) -> ShiftName:
    """Shift staff are working at ``instant``, used as the dashboard default."""
    clock = time(instant.hour, instant.minute, instant.second)
    if settings.morning_shift_start <= clock < settings.night_shift_start:
        return ShiftName.MORNING
    return ShiftName.NIGHT


def civil_day_window(day: date) -> tuple[datetime, datetime]:
    """Return the UTC [start, end) boundaries of a civil calendar day."""
    start = local_to_utc(CivilInstant.combine(day, time(0, 0)))
    return start, start + timedelta(days=1)
