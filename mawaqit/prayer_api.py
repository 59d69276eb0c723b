"""Fetch prayer times, Hijri date and calculation methods from the Aladhan API."""

import datetime
import logging

import requests

logger = logging.getLogger(__name__)

ALADHAN_BASE = "https://api.aladhan.com/v1"

PRAYER_NAMES = ["Fajr", "Sunrise", "Dhuhr", "Asr", "Maghrib", "Isha"]
EXTRA_EVENTS = ["Midnight", "LastThird"]

# Calculation method: 4 = Umm Al-Qura, Makkah
# 2 = ISNA, 3 = MWL, 5 = Egypt, 8 = Gulf, 15 = Moonsighting, 23 = Jordan
DEFAULT_METHOD = 4
DEFAULT_TIMEOUT = 10


def _get_data(url: str, params: dict = None, timeout: int = DEFAULT_TIMEOUT):
    """GET an Aladhan endpoint and return its ``data`` member."""
    resp = requests.get(url, params=params, timeout=timeout)
    resp.raise_for_status()
    body = resp.json()
    if body.get("code") != 200:
        raise ValueError(f"Aladhan API error: {body.get('status')}")
    if "data" not in body:
        raise ValueError("Aladhan API error: response has no data")
    return body["data"]


def fetch_prayer_times(
    lat: float,
    lon: float,
    date: datetime.date = None,
    method: int = DEFAULT_METHOD,
    timeout: int = DEFAULT_TIMEOUT,
) -> dict:
    """
    Fetch prayer times and Hijri date for given coordinates and date.

    Returns a dict with:
        timings: {prayer_name: "HH:MM"} for the six daily times
        hijri: {day, month_en, month_ar, weekday_en, weekday_ar, year}
        gregorian: {date_str, weekday}
    Raises requests.RequestException or ValueError on failure.
    """
    if date is None:
        date = datetime.date.today()
    date_str = date.strftime("%d-%m-%Y")
    url = f"{ALADHAN_BASE}/timings/{date_str}"
    params = {
        "latitude": lat,
        "longitude": lon,
        "method": method,
    }
    logger.info("Fetching timings for %s (%.4f, %.4f) method=%s", date_str, lat, lon, method)
    data = _get_data(url, params, timeout)

    try:
        raw_timings = data["timings"]
        hijri_data = data["date"]["hijri"]
        greg_data = data["date"]["gregorian"]
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Malformed Aladhan response: missing {exc}") from exc

    # Keep only the six daily times, dropping any " (TZ)" suffix
    timings = {}
    for name in PRAYER_NAMES:
        raw = raw_timings.get(name)
        if not raw:
            raise ValueError(f"Malformed Aladhan response: no time for {name}")
        timings[name] = raw[:5]

    hijri = {
        "day": hijri_data["day"],
        "month_en": hijri_data["month"]["en"],
        "month_ar": hijri_data["month"]["ar"],
        "weekday_en": hijri_data.get("weekday", {}).get("en", ""),
        "weekday_ar": hijri_data.get("weekday", {}).get("ar", ""),
        "year": hijri_data["year"],
    }

    gregorian = {
        "date_str": greg_data.get("date", date_str),
        "weekday": greg_data.get("weekday", {}).get("en", ""),
    }

    return {"timings": timings, "hijri": hijri, "gregorian": gregorian}


def fetch_methods(timeout: int = DEFAULT_TIMEOUT) -> dict:
    """
    Fetch the calculation methods Aladhan supports.

    Returns the raw mapping, e.g. {"MWL": {"id": 3, "name": "Muslim World League", ...}}.
    """
    logger.info("Fetching calculation methods")
    data = _get_data(f"{ALADHAN_BASE}/methods", timeout=timeout)
    if not isinstance(data, dict):
        raise ValueError("Malformed Aladhan response: methods is not a mapping")
    return data
