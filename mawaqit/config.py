"""Runtime settings read from environment variables."""

import logging
import os

from dotenv import find_dotenv, load_dotenv

from mawaqit.i18n import DEFAULT_LANGUAGE, SUPPORTED
from mawaqit.prayer_api import DEFAULT_METHOD, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

ENV_PREFIX = "MAWAQIT_"

DEFAULT_SETTINGS = {
    "language": DEFAULT_LANGUAGE,
    "method": DEFAULT_METHOD,
    "timeout": DEFAULT_TIMEOUT,
    "log_level": "INFO",
    "location": None,
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env(environ, name: str):
    value = environ.get(ENV_PREFIX + name, "").strip()
    return value or None


def _int_setting(environ, name: str, default: int) -> int:
    raw = _env(environ, name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s%s=%r: not an integer", ENV_PREFIX, name, raw)
        return default
    if value <= 0:
        logger.warning("Ignoring %s%s=%r: must be positive", ENV_PREFIX, name, raw)
        return default
    return value


def manual_location(environ=None) -> dict | None:
    """
    Location pinned through MAWAQIT_LAT / MAWAQIT_LON, or None.
    City, country and timezone are optional.
    """
    if environ is None:
        environ = os.environ
    lat = _env(environ, "LAT")
    lon = _env(environ, "LON")
    if lat is None or lon is None:
        return None
    try:
        lat_f = float(lat)
        lon_f = float(lon)
    except ValueError:
        logger.warning("Ignoring manual location %r, %r: not numbers", lat, lon)
        return None
    if not (-90 <= lat_f <= 90 and -180 <= lon_f <= 180):
        logger.warning("Ignoring manual location %s, %s: out of range", lat_f, lon_f)
        return None
    return {
        "city": _env(environ, "CITY") or "Unknown",
        "country": _env(environ, "COUNTRY") or "",
        "lat": lat_f,
        "lon": lon_f,
        "timezone": _env(environ, "TIMEZONE") or "UTC",
    }


def load_settings(environ=None) -> dict:
    """
    Build the settings dict from the environment, falling back to defaults.
    Without an explicit environ, a .env file in the working directory is
    loaded first; real environment variables win over it.
    """
    if environ is None:
        load_dotenv(find_dotenv(usecwd=True), override=False)
        environ = os.environ
    settings = dict(DEFAULT_SETTINGS)

    lang = _env(environ, "LANG")
    if lang is not None:
        lang = lang.lower()
        if lang in SUPPORTED:
            settings["language"] = lang
        else:
            logger.warning("Ignoring %sLANG=%r: expected one of %s", ENV_PREFIX, lang, SUPPORTED)

    settings["method"] = _int_setting(environ, "METHOD", DEFAULT_METHOD)
    settings["timeout"] = _int_setting(environ, "TIMEOUT", DEFAULT_TIMEOUT)

    level = _env(environ, "LOG_LEVEL")
    if level is not None:
        level = level.upper()
        if level in LOG_LEVELS:
            settings["log_level"] = level
        else:
            logger.warning("Ignoring %sLOG_LEVEL=%r", ENV_PREFIX, level)

    settings["location"] = manual_location(environ)
    return settings
