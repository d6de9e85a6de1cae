"""Shift window resolution tests."""

from datetime import date, datetime, time, timedelta, timezone

import pytest

from homebake.utils import time as shift_time
from homebake.utils.time import (
    CLEARED,
    ActiveWindow,
    CivilInstant,
    InvalidArgument,
    ShiftName,
    civil_day_window,
    current_shift,
    local_to_utc,
    resolve,
)


def _utc(*parts: int) -> datetime:
    return datetime(*parts, tzinfo=timezone.utc)


def test_morning_window_covers_current_civil_day() -> None:
    window = resolve(ShiftName.MORNING, CivilInstant(2025, 6, 15, 9, 30, 0))

    assert window == ActiveWindow(start_utc=_utc(2025, 6, 14, 23, 0, 30), end_utc=_utc(2025, 6, 15, 22, 59, 59))


def test_night_window_before_boundary_is_yesterdays_shift() -> None:
    window = resolve(ShiftName.NIGHT, CivilInstant(2025, 6, 15, 10, 0, 0))

    assert window == ActiveWindow(start_utc=_utc(2025, 6, 14, 14, 0, 30), end_utc=_utc(2025, 6, 15, 13, 59, 59))


def test_night_window_after_boundary_is_todays_shift() -> None:
    window = resolve(ShiftName.NIGHT, CivilInstant(2025, 6, 15, 16, 0, 0))

    assert window == ActiveWindow(start_utc=_utc(2025, 6, 15, 14, 0, 30), end_utc=_utc(2025, 6, 16, 13, 59, 59))


@pytest.mark.parametrize("second", [0, 1, 15, 29])
def test_morning_clears_for_thirty_seconds_after_midnight(second: int) -> None:
    assert resolve(ShiftName.MORNING, CivilInstant(2025, 6, 15, 0, 0, second)) is CLEARED


@pytest.mark.parametrize("second", [0, 1, 15, 29])
def test_night_clears_for_thirty_seconds_after_fifteen_hundred(second: int) -> None:
    assert resolve(ShiftName.NIGHT, CivilInstant(2025, 6, 15, 15, 0, second)) is CLEARED


@pytest.mark.parametrize(
    ("shift", "instant"),
    [
        (ShiftName.MORNING, CivilInstant(2025, 6, 15, 15, 0, 10)),
        (ShiftName.MORNING, CivilInstant(2025, 6, 15, 0, 1, 0)),
        (ShiftName.NIGHT, CivilInstant(2025, 6, 15, 0, 0, 10)),
        (ShiftName.NIGHT, CivilInstant(2025, 6, 15, 15, 1, 0)),
    ],
)
def test_other_boundary_does_not_clear(shift: ShiftName, instant: CivilInstant) -> None:
    assert isinstance(resolve(shift, instant), ActiveWindow)


def test_morning_becomes_active_at_thirty_seconds_past_midnight() -> None:
    window = resolve(ShiftName.MORNING, CivilInstant(2025, 6, 15, 0, 0, 30))

    assert isinstance(window, ActiveWindow)
    assert window.start_utc == _utc(2025, 6, 14, 23, 0, 30)


def test_night_becomes_active_at_thirty_seconds_past_fifteen_hundred() -> None:
    window = resolve(ShiftName.NIGHT, CivilInstant(2025, 6, 15, 15, 0, 30))

    assert window.start_utc == _utc(2025, 6, 15, 14, 0, 30)
    assert window.end_utc == _utc(2025, 6, 16, 13, 59, 59)


def test_night_at_last_second_before_boundary_ends_today() -> None:
    window = resolve(ShiftName.NIGHT, CivilInstant(2025, 6, 15, 14, 59, 59))

    assert window.end_utc == local_to_utc(CivilInstant(2025, 6, 15, 14, 59, 59))
    assert window.end_utc == _utc(2025, 6, 15, 13, 59, 59)


def test_night_yesterday_rolls_back_into_february_of_common_year() -> None:
    window = resolve(ShiftName.NIGHT, CivilInstant(2025, 3, 1, 8, 0, 0))

    assert window.start_utc == _utc(2025, 2, 28, 14, 0, 30)
    assert window.end_utc == _utc(2025, 3, 1, 13, 59, 59)


def test_night_yesterday_rolls_back_into_leap_day() -> None:
    window = resolve(ShiftName.NIGHT, CivilInstant(2024, 3, 1, 8, 0, 0))

    assert window.start_utc == _utc(2024, 2, 29, 14, 0, 30)


def test_night_tomorrow_rolls_over_year_end() -> None:
    window = resolve(ShiftName.NIGHT, CivilInstant(2025, 12, 31, 20, 0, 0))

    assert window.start_utc == _utc(2025, 12, 31, 14, 0, 30)
    assert window.end_utc == _utc(2026, 1, 1, 13, 59, 59)


def test_morning_start_rolls_back_to_previous_year_in_utc() -> None:
    window = resolve(ShiftName.MORNING, CivilInstant(2025, 1, 1, 12, 0, 0))

    assert window.start_utc == _utc(2024, 12, 31, 23, 0, 30)
    assert window.end_utc == _utc(2025, 1, 1, 22, 59, 59)


@pytest.mark.parametrize(
    "instant",
    [
        CivilInstant(2025, 6, 15, 0, 0, 30),
        CivilInstant(2025, 6, 15, 14, 59, 59),
        CivilInstant(2025, 6, 15, 15, 0, 30),
        CivilInstant(2025, 6, 15, 23, 59, 59),
        CivilInstant(2024, 2, 29, 3, 0, 0),
    ],
)
@pytest.mark.parametrize("shift", list(ShiftName))
def test_active_windows_span_just_under_a_day(shift: ShiftName, instant: CivilInstant) -> None:
    window = resolve(shift, instant)

    assert window.start_utc < window.end_utc
    assert window.duration == timedelta(hours=23, minutes=59, seconds=29)


def test_resolve_is_repeatable() -> None:
    instant = CivilInstant(2025, 6, 15, 16, 0, 0)

    assert resolve("night", instant) == resolve(ShiftName.NIGHT, instant)


def test_unknown_shift_is_rejected() -> None:
    with pytest.raises(InvalidArgument):
        resolve("afternoon", CivilInstant(2025, 6, 15, 9, 0, 0))


def test_shift_parse_is_case_sensitive() -> None:
    with pytest.raises(InvalidArgument):
        ShiftName.parse("Morning")
    with pytest.raises(InvalidArgument):
        ShiftName.parse(None)


@pytest.mark.parametrize(
    "fields",
    [
        (2025, 6, 15, 24, 0, 0),
        (2025, 6, 15, -1, 0, 0),
        (2025, 6, 15, 10, 60, 0),
        (2025, 6, 15, 10, 0, 60),
        (2025, 2, 29, 10, 0, 0),
        (2025, 13, 1, 10, 0, 0),
        (2025, 4, 31, 10, 0, 0),
    ],
)
def test_out_of_range_civil_time_is_rejected(fields: tuple[int, ...]) -> None:
    with pytest.raises(InvalidArgument):
        CivilInstant(*fields)


def test_non_integer_civil_field_is_rejected() -> None:
    with pytest.raises(InvalidArgument):
        CivilInstant(2025, 6, 15, "10", 0, 0)  # type: ignore[arg-type]


def test_resolve_rejects_unsupported_instant_type() -> None:
    with pytest.raises(InvalidArgument):
        resolve(ShiftName.MORNING, "2025-06-15T09:30:00")  # type: ignore[arg-type]


def test_naive_datetime_is_read_as_civil_time() -> None:
    assert resolve(ShiftName.MORNING, datetime(2025, 6, 15, 9, 30)) == resolve(
        ShiftName.MORNING, CivilInstant(2025, 6, 15, 9, 30, 0)
    )


def test_aware_datetime_is_converted_to_civil_time() -> None:
    # 23:30 UTC is already 00:30 the next civil day
    window = resolve(ShiftName.MORNING, _utc(2025, 6, 14, 23, 30, 0))

    assert window.start_utc == _utc(2025, 6, 14, 23, 0, 30)


def test_aware_datetime_inside_clearing_window() -> None:
    assert resolve(ShiftName.NIGHT, _utc(2025, 6, 15, 14, 0, 5)) is CLEARED


def test_from_utc_crosses_civil_midnight() -> None:
    assert CivilInstant.from_utc(_utc(2025, 12, 31, 23, 15, 0)) == CivilInstant(2026, 1, 1, 0, 15, 0)
    assert CivilInstant.from_utc(datetime(2025, 6, 15, 8, 0)) == CivilInstant(2025, 6, 15, 9, 0, 0)


def test_local_to_utc_keeps_minutes_and_seconds() -> None:
    assert local_to_utc(CivilInstant(2025, 3, 1, 0, 42, 17)) == _utc(2025, 2, 28, 23, 42, 17)


@pytest.mark.parametrize(
    ("shift", "instant"),
    [
        (ShiftName.NIGHT, CivilInstant(9999, 12, 31, 16, 0, 0)),
        (ShiftName.NIGHT, CivilInstant(1, 1, 1, 10, 0, 0)),
        (ShiftName.MORNING, CivilInstant(1, 1, 1, 10, 0, 0)),
    ],
)
def test_windows_beyond_the_calendar_are_rejected(shift: ShiftName, instant: CivilInstant) -> None:
    with pytest.raises(InvalidArgument):
        resolve(shift, instant)


def test_aware_instant_beyond_the_calendar_is_rejected() -> None:
    with pytest.raises(InvalidArgument):
        resolve(ShiftName.MORNING, _utc(9999, 12, 31, 23, 30, 0))


def test_windows_at_calendar_edges_still_resolve() -> None:
    last_morning = resolve(ShiftName.MORNING, CivilInstant(9999, 12, 31, 12, 0, 0))
    first_night = resolve(ShiftName.NIGHT, CivilInstant(1, 1, 2, 10, 0, 0))

    assert last_morning.end_utc == _utc(9999, 12, 31, 22, 59, 59)
    assert first_night.start_utc == _utc(1, 1, 1, 14, 0, 30)


def test_now_local_uses_fixed_offset(monkeypatch) -> None:
    class _FrozenDatetime(datetime):
        @classmethod
        def now(cls, tz=None):
            return datetime(2025, 6, 15, 14, 0, 10, tzinfo=timezone.utc)

    monkeypatch.setattr(shift_time, "datetime", _FrozenDatetime)

    assert shift_time.now_local() == CivilInstant(2025, 6, 15, 15, 0, 10)


@pytest.mark.parametrize(
    ("clock", "expected"),
    [
        (time(9, 59, 59), ShiftName.NIGHT),
        (time(10, 0, 0), ShiftName.MORNING),
        (time(21, 59, 59), ShiftName.MORNING),
        (time(22, 0, 0), ShiftName.NIGHT),
        (time(2, 0, 0), ShiftName.NIGHT),
    ],
)
def test_current_shift_follows_configured_hours(clock: time, expected: ShiftName) -> None:
    instant = CivilInstant.combine(date(2025, 6, 15), clock)

    assert current_shift(instant) is expected


def test_civil_day_window_is_offset_by_one_hour() -> None:
    start, end = civil_day_window(date(2025, 6, 15))

    assert start == _utc(2025, 6, 14, 23, 0, 0)
    assert end == _utc(2025, 6, 15, 23, 0, 0)
