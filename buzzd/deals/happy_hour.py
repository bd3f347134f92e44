"""
Happy-hour activity resolution.

Deal lists, venue pages and recommendations all resolve activity here.
Apart from ``local_now``, nothing here reads the clock: the current
wall-clock time is always passed in as ``now``.

Accepted ``valid_days`` forms:

* ``Daily`` / ``All Days`` / ``Everyday`` (any case)
* ``Weekdays`` / ``Weekends``
* an inclusive range such as ``Mon-Fri``; ``Fri-Sun`` wraps past Saturday
* a comma list such as ``Mon, Wed, Fri`` (items may themselves be ranges)
* a single day name

Accepted time forms: ``17:00`` (``17:00:00`` too), ``1700``, ``930``, ``9``.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Iterable
from zoneinfo import ZoneInfo

from .models import Deal, HappyHourStatus

logger = logging.getLogger(__name__)

# Day indices run Sun=0 .. Sat=6
DAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
_DAY_INDEX = {name.lower(): i for i, name in enumerate(DAY_NAMES)}
_EVERY_DAY = {"daily", "all days", "everyday"}
_WEEKEND = {0, 6}
MINUTES_PER_DAY = 24 * 60


class InvalidTimeFormat(ValueError):
    """A happy-hour time string that cannot be read as a time of day."""


def local_now(tz_name: str) -> datetime:
    """Current wall-clock time in *tz_name* (timezone-aware)."""
    return datetime.now(ZoneInfo(tz_name))


def day_index(moment: datetime) -> int:
    return (moment.weekday() + 1) % 7


def _minutes_of(moment: datetime) -> int:
    return moment.hour * 60 + moment.minute


def _lookup_day(token: str) -> int | None:
    return _DAY_INDEX.get(token.strip().lower()[:3])


def _matches_day(days: str, today: int) -> bool:
    if "-" in days:
        start_token, _, end_token = days.partition("-")
        start, end = _lookup_day(start_token), _lookup_day(end_token)
        if start is None or end is None:
            logger.debug("Unrecognised day range %r", days)
            return False
        if start <= end:
            return start <= today <= end
        return today >= start or today <= end
    return _lookup_day(days) == today


def is_day_valid(valid_days: str | None, now: datetime) -> bool:
    """Whether a deal with *valid_days* runs on ``now``'s calendar day."""
    if not valid_days:
        return False

    days = valid_days.strip().lower()
    today = day_index(now)

    if days in _EVERY_DAY:
        return True
    if days == "weekends":
        return today in _WEEKEND
    if days == "weekdays":
        return today not in _WEEKEND

    if "," in days:
        return any(_matches_day(part, today) for part in days.split(",") if part.strip())
    return _matches_day(days, today)


def parse_time_to_minutes(value: str | int | None) -> int:
    """
    Convert a happy-hour time string to minutes since midnight.

    Raises ``InvalidTimeFormat`` for empty or non-numeric input.
    """
    if value is None:
        raise InvalidTimeFormat("missing time")

    raw = str(value).strip()
    if ":" in raw:
        parts = raw.split(":")
        hours_str, minutes_str = parts[0], parts[1] or "0"
    elif len(raw) <= 2:
        hours_str, minutes_str = raw, "0"
    elif len(raw) == 3:
        hours_str, minutes_str = raw[0], raw[1:]
    else:
        hours_str, minutes_str = raw[:2], raw[2:]

    if not (hours_str.isdecimal() and minutes_str.isdecimal()):
        raise InvalidTimeFormat(f"cannot parse time {value!r}")
    return int(hours_str) * 60 + int(minutes_str)


def _window(deal: Deal) -> tuple[int, int]:
    return parse_time_to_minutes(deal.hh_start_time), parse_time_to_minutes(deal.hh_end_time)


def _in_window(current: int, start: int, end: int) -> bool:
    if start <= end:
        return start <= current <= end
    # Window crosses midnight, e.g. 22:00-02:00
    return current >= start or current <= end


def _closing_minute(current: int, start: int, end: int) -> int:
    """Minutes from today's midnight to when an active window closes."""
    if start > end and current >= start:
        return end + MINUTES_PER_DAY
    return end


def is_within_happy_hour(deal: Deal, now: datetime) -> bool:
    """True when *deal* runs today and ``now`` falls inside its window."""
    if not is_day_valid(deal.valid_days, now):
        return False
    try:
        start, end = _window(deal)
    except InvalidTimeFormat:
        logger.warning("Deal %s has malformed happy hour times, treating as inactive", deal.id, exc_info=True)
        return False
    return _in_window(_minutes_of(now), start, end)


def happy_hour_status(deals: Iterable[Deal], now: datetime) -> HappyHourStatus:
    """
    Summarise a venue's (or any list's) happy hour for ``now``'s day.

    - Some deal active: ``end_time`` belongs to the active deal that closes
      last, counting an overnight window as closing tomorrow.
    - None active but some run today: ``start_time`` is the earliest start.
    - Nothing runs today: inactive, no times.
    """
    todays: list[tuple[Deal, int, int]] = []
    for deal in deals:
        if not is_day_valid(deal.valid_days, now):
            continue
        try:
            start, end = _window(deal)
        except InvalidTimeFormat:
            logger.warning("Skipping deal %s with malformed happy hour times", deal.id, exc_info=True)
            continue
        todays.append((deal, start, end))

    if not todays:
        return HappyHourStatus()

    current = _minutes_of(now)
    active = [entry for entry in todays if _in_window(current, entry[1], entry[2])]
    if active:
        latest = sorted(active, key=lambda entry: _closing_minute(current, entry[1], entry[2]))[-1]
        earliest = min(active, key=lambda entry: entry[1])
        return HappyHourStatus(
            is_active=True,
            start_time=earliest[0].hh_start_time,
            end_time=latest[0].hh_end_time,
            has_happy_hour_today=True,
        )

    earliest = min(todays, key=lambda entry: entry[1])
    return HappyHourStatus(start_time=earliest[0].hh_start_time, has_happy_hour_today=True)


def next_start(deal: Deal, now: datetime, horizon_days: int = 7) -> datetime | None:
    """When *deal*'s next window opens after ``now``, or ``None`` if never."""
    try:
        start = parse_time_to_minutes(deal.hh_start_time)
    except InvalidTimeFormat:
        logger.warning("Deal %s has malformed start time", deal.id, exc_info=True)
        return None

    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    for offset in range(horizon_days + 1):
        day = midnight + timedelta(days=offset)
        candidate = day + timedelta(minutes=start)
        if candidate > now and is_day_valid(deal.valid_days, day):
            return candidate
    return None


def ends_at(deal: Deal, now: datetime) -> datetime | None:
    """When the window *deal* is currently in closes; ``None`` if inactive."""
    if not is_within_happy_hour(deal, now):
        return None
    start, end = _window(deal)

    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight + timedelta(minutes=_closing_minute(_minutes_of(now), start, end))


def format_time(value: str) -> str:
    """``"1700"`` / ``"17:00"`` -> ``"5:00 PM"``."""
    hour, minute = divmod(parse_time_to_minutes(value), 60)
    hour %= 24
    period = "PM" if hour >= 12 else "AM"
    return f"{hour % 12 or 12}:{minute:02d} {period}"


def time_range_display(start_time: str, end_time: str) -> str:
    try:
        return f"{format_time(start_time)} - {format_time(end_time)}"
    except InvalidTimeFormat:
        logger.warning("Cannot format time range %r - %r", start_time, end_time)
        return f"{start_time} - {end_time}"


def days_display(valid_days: str) -> str:
    lowered = valid_days.strip().lower()
    if lowered in _EVERY_DAY:
        return "Every day"
    if lowered == "weekdays":
        return "Mon-Fri"
    if lowered == "weekends":
        return "Sat-Sun"
    return valid_days
