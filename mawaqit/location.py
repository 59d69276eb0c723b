"""Location detection: manual setting, then IP geolocation, then Makkah."""

import logging

import requests

logger = logging.getLogger(__name__)

DEFAULT_LOCATION = {
    "city": "Makkah",
    "country": "Saudi Arabia",
    "lat": 21.4225,
    "lon": 39.8262,
    "timezone": "Asia/Riyadh",
}

IPAPI_CO_URL = "https://ipapi.co/json/"
IP_API_URL = "http://ip-api.com/json/"


def _from_ipapi_co(timeout: int) -> dict | None:
    resp = requests.get(IPAPI_CO_URL, timeout=timeout)
    resp.raise_for_status()
    data = resp.json()
    if not isinstance(data, dict):
        raise ValueError(f"unexpected ipapi.co payload: {type(data).__name__}")
    if data.get("error") or not (data.get("latitude") and data.get("longitude")):
        logger.info("ipapi.co returned no coordinates: %s", data.get("reason", "unknown reason"))
        return None
    return {
        "city": data.get("city") or "Unknown",
        "country": data.get("country_name") or "",
        "lat": float(data["latitude"]),
        "lon": float(data["longitude"]),
        "timezone": data.get("timezone") or "UTC",
    }


def _from_ip_api(timeout: int) -> dict | None:
    resp = requests.get(
        IP_API_URL,
        params={"fields": "city,country,lat,lon,timezone,status,message"},
        timeout=timeout,
    )
    resp.raise_for_status()
    data = resp.json()
    if not isinstance(data, dict):
        raise ValueError(f"unexpected ip-api.com payload: {type(data).__name__}")
    if data.get("status") != "success":
        logger.info("ip-api.com lookup failed: %s", data.get("message", "unknown reason"))
        return None
    return {
        "city": data.get("city") or "Unknown",
        "country": data.get("country") or "",
        "lat": float(data["lat"]),
        "lon": float(data["lon"]),
        "timezone": data.get("timezone") or "UTC",
    }


PROVIDERS = (
    ("ipapi.co", _from_ipapi_co),
    ("ip-api.com", _from_ip_api),
)


def get_location(manual: dict = None, timeout: int = 5) -> dict:
    """
    Resolve the user's location.

    Returns a dict with: city, country, lat, lon, timezone.
    Tries the manual location, then each IP provider in turn, and falls
    back to DEFAULT_LOCATION. Never raises.
    """
    if manual:
        logger.info("Using manual location %s", manual.get("city"))
        return dict(manual)

    for name, provider in PROVIDERS:
        try:
            location = provider(timeout)
        except (requests.RequestException, ValueError, KeyError, TypeError) as exc:
            logger.warning("Location lookup via %s failed: %s", name, exc)
            continue
        if location:
            logger.info("Located via %s: %s, %s", name, location["city"], location["country"])
            return location

    logger.warning("All location providers failed, using %s", DEFAULT_LOCATION["city"])
    return dict(DEFAULT_LOCATION)
