"""
View model behind the widget.

Holds one day's data (today's timings plus tomorrow's, for the next Fajr)
and turns it into the strings the window shows on each tick. Nothing here
touches Tkinter, so the whole display state can be exercised in tests.
"""

import datetime
import logging

import pytz

from mawaqit import i18n
from mawaqit.prayer_api import DEFAULT_METHOD, EXTRA_EVENTS, PRAYER_NAMES, fetch_prayer_times
from mawaqit.schedule import extra_times, format_countdown, next_event, seconds_until

logger = logging.getLogger(__name__)


def zone_for(name: str):
    """pytz zone for an IANA name, UTC when unknown."""
    try:
        return pytz.timezone(name)
    except (pytz.UnknownTimeZoneError, AttributeError):
        logger.warning("Unknown timezone %r, using UTC", name)
        return pytz.utc


class Dashboard:
    def __init__(self, language: str = i18n.DEFAULT_LANGUAGE):
        self.language = i18n.normalize_language(language)
        self.location = {}
        self.tz = pytz.utc
        self.today = {}
        self.tomorrow = {}
        self.extras = {}
        self.day = None

    @property
    def loaded(self) -> bool:
        return bool(self.today and self.tomorrow)

    def set_language(self, lang: str) -> None:
        self.language = i18n.normalize_language(lang)

    def toggle_language(self) -> str:
        self.language = i18n.toggle_language(self.language)
        return self.language

    def fetch(
        self,
        location: dict,
        method: int = DEFAULT_METHOD,
        today: datetime.date = None,
        fetch=fetch_prayer_times,
        timeout: int = 10,
    ) -> dict:
        """
        Fetch today's and tomorrow's timings for the location and return the
        new state without touching this dashboard; hand it to ``apply`` on
        the thread that owns the display. Raises whatever the fetch raises.
        """
        tz = zone_for(location.get("timezone"))
        if today is None:
            today = datetime.datetime.now(tz).date()
        tomorrow = today + datetime.timedelta(days=1)
        lat, lon = location["lat"], location["lon"]

        today_data = fetch(lat, lon, today, method=method, timeout=timeout)
        tomorrow_data = fetch(lat, lon, tomorrow, method=method, timeout=timeout)

        return {
            "location": dict(location),
            "tz": tz,
            "today": today_data,
            "tomorrow": tomorrow_data,
            "day": today,
            "extras": extra_times(today_data["timings"], tomorrow_data["timings"]),
        }

    def apply(self, state: dict) -> None:
        """Swap in a state built by ``fetch``."""
        self.location = state["location"]
        self.tz = state["tz"]
        self.today = state["today"]
        self.tomorrow = state["tomorrow"]
        self.day = state["day"]
        self.extras = state["extras"]
        logger.info(
            "Loaded %s: midnight %s, last third %s",
            self.day.isoformat(), self.extras["Midnight"], self.extras["LastThird"],
        )

    def load(self, location: dict, **kwargs) -> None:
        """Fetch and apply in one step; existing data is kept on failure."""
        self.apply(self.fetch(location, **kwargs))

    # ── static text ──────────────────────────────────────────────────────
    def rows(self) -> list:
        """[(key, label, "HH:MM"), ...] for the six daily times and the two night points."""
        lang = self.language
        timings = dict(self.today.get("timings", {}))
        timings.update(self.extras)
        return [
            (name, i18n.row_label(name, lang), timings.get(name, "--:--"))
            for name in PRAYER_NAMES + EXTRA_EVENTS
        ]

    def dates(self, now: datetime.datetime = None) -> dict:
        """Localized Gregorian and Hijri date lines."""
        if now is None:
            now = datetime.datetime.now(self.tz)
        hijri = self.today.get("hijri")
        return {
            "gregorian": i18n.format_gregorian(now.date(), self.language),
            "hijri": i18n.format_hijri(hijri, self.language) if hijri else "",
        }

    def location_text(self) -> str:
        if not self.location:
            return ""
        return i18n.format_location(self.location["city"], self.location["country"], self.language)

    # ── per-second state ─────────────────────────────────────────────────
    def tick(self, now: datetime.datetime = None) -> dict:
        """
        Countdown state for this instant:
            next_name, next_dt, next_label, timer, highlight, clock
        The highlight key is always the next event's name.
        """
        if now is None:
            now = datetime.datetime.now(self.tz)
        name, event_dt = next_event(
            self.today["timings"], self.tomorrow["timings"], now, self.tz
        )
        secs = seconds_until(event_dt, now)
        return {
            "next_name": name,
            "next_dt": event_dt,
            "next_label": i18n.ui_text("next_prefix", self.language) + i18n.prayer_label(name, self.language),
            "timer": format_countdown(secs),
            "highlight": name,
            "clock": now.strftime("%H:%M:%S"),
        }
