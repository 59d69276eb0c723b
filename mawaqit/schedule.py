"""
Time arithmetic for the daily schedule.

Prayer times arrive as wall-clock ``HH:MM`` strings for a single day. This
module derives the two night points (Midnight and the start of the Last
Third), projects everything onto concrete datetimes, and finds the next
upcoming event for the countdown.

The night runs from today's Maghrib to tomorrow's Fajr, so Fajr is always
taken on the following calendar day when measuring its length.
"""

import datetime
import math

from mawaqit.prayer_api import EXTRA_EVENTS, PRAYER_NAMES

MINUTES_PER_DAY = 24 * 60


def parse_hhmm(time_str: str) -> int:
    """Convert 'HH:MM' (optionally followed by a suffix) to minutes since midnight."""
    try:
        hour, minute = map(int, time_str[:5].split(":"))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid time string: {time_str!r}") from exc
    if not (0 <= hour < 24 and 0 <= minute < 60):
        raise ValueError(f"Invalid time string: {time_str!r}")
    return hour * 60 + minute


def format_minutes(minutes: float) -> str:
    """Format (possibly fractional, possibly >= 24h) minutes as 'HH:MM'."""
    hour = math.floor(minutes / 60) % 24
    minute = math.floor(minutes % 60)
    return f"{hour:02d}:{minute:02d}"


def night_bounds(maghrib: str, fajr_next: str) -> tuple:
    """Return (start, length) of the night in minutes, start being today's Maghrib."""
    start = parse_hhmm(maghrib)
    length = parse_hhmm(fajr_next) + MINUTES_PER_DAY - start
    return start, length


def midnight_minutes(maghrib: str, fajr_next: str) -> float:
    start, length = night_bounds(maghrib, fajr_next)
    return start + length / 2


def last_third_minutes(maghrib: str, fajr_next: str) -> float:
    start, length = night_bounds(maghrib, fajr_next)
    return start + length * 2 / 3


def extra_times(timings: dict, tomorrow_timings: dict) -> dict:
    """Midnight and Last Third as 'HH:MM' strings."""
    maghrib = timings["Maghrib"]
    fajr_next = tomorrow_timings["Fajr"]
    return {
        "Midnight": format_minutes(midnight_minutes(maghrib, fajr_next)),
        "LastThird": format_minutes(last_third_minutes(maghrib, fajr_next)),
    }


def time_str_to_dt(time_str: str, day: datetime.date, tz=None) -> datetime.datetime:
    """
    Convert 'HH:MM' on the given day to a datetime.
    Timezone-aware when tz (a pytz zone) is given, naive otherwise.
    """
    minutes = parse_hhmm(time_str)
    naive = datetime.datetime.combine(day, datetime.time(minutes // 60, minutes % 60))
    if tz is None:
        return naive
    return tz.localize(naive)


def build_schedule(timings: dict, tomorrow_timings: dict, day: datetime.date, tz=None) -> list:
    """
    Chronologically sorted [(name, datetime), ...] for the six daily times
    plus Midnight and LastThird, all projected onto ``day``.
    """
    all_times = dict((name, timings[name]) for name in PRAYER_NAMES)
    all_times.update(extra_times(timings, tomorrow_timings))
    events = [
        (name, time_str_to_dt(all_times[name], day, tz))
        for name in PRAYER_NAMES + EXTRA_EVENTS
    ]
    events.sort(key=lambda event: event[1])
    return events


def next_event(timings: dict, tomorrow_timings: dict, now: datetime.datetime, tz=None) -> tuple:
    """
    Return (name, datetime) of the first event strictly after ``now``.

    Once everything today has passed, the night points that fall before
    tomorrow's Fajr and tomorrow's Fajr itself are considered on the next
    day, so a result is always returned.
    """
    today = now.date()
    for name, event_dt in build_schedule(timings, tomorrow_timings, today, tz):
        if event_dt > now:
            return name, event_dt

    tomorrow = today + datetime.timedelta(days=1)
    fajr_next = tomorrow_timings["Fajr"]
    candidates = [("Fajr", time_str_to_dt(fajr_next, tomorrow, tz))]
    fajr_minutes = parse_hhmm(fajr_next)
    for name, time_str in extra_times(timings, tomorrow_timings).items():
        if parse_hhmm(time_str) < fajr_minutes:
            candidates.append((name, time_str_to_dt(time_str, tomorrow, tz)))
    return min(candidates, key=lambda event: event[1])


def seconds_until(target_dt: datetime.datetime, now: datetime.datetime = None) -> int:
    """Return seconds from now until target_dt (can be negative if past)."""
    if now is None:
        now = datetime.datetime.now(target_dt.tzinfo)
    delta = target_dt - now
    return int(delta.total_seconds())


def format_countdown(seconds: int) -> str:
    """Format seconds into an H:MM:SS countdown string (hours unpadded)."""
    if seconds < 0:
        seconds = 0
    h = seconds // 3600
    m = (seconds % 3600) // 60
    s = seconds % 60
    return f"{h}:{m:02d}:{s:02d}"
