"""Tests for the location module."""

import unittest
from unittest.mock import MagicMock, patch

import requests

from mawaqit.location import (
    DEFAULT_LOCATION,
    IP_API_URL,
    IPAPI_CO_URL,
    get_location,
)

IPAPI_CO_OK = {
    "city": "Amman",
    "country_name": "Jordan",
    "latitude": 31.9522,
    "longitude": 35.2332,
    "timezone": "Asia/Amman",
}

IP_API_OK = {
    "status": "success",
    "city": "Cairo",
    "country": "Egypt",
    "lat": 30.0444,
    "lon": 31.2357,
    "timezone": "Africa/Cairo",
}


def _mock_resp(body):
    mock_resp = MagicMock()
    mock_resp.json.return_value = body
    mock_resp.raise_for_status = MagicMock()
    return mock_resp


def _by_url(responses):
    """side_effect for requests.get that answers per URL (exceptions are raised)."""
    def _get(url, *args, **kwargs):
        result = responses[url]
        if isinstance(result, Exception):
            raise result
        return _mock_resp(result)
    return _get


class TestGetLocation(unittest.TestCase):
    @patch("mawaqit.location.requests.get")
    def test_uses_ipapi_co_first(self, mock_get):
        mock_get.side_effect = _by_url({IPAPI_CO_URL: IPAPI_CO_OK, IP_API_URL: IP_API_OK})

        loc = get_location()
        self.assertEqual(loc["city"], "Amman")
        self.assertEqual(loc["country"], "Jordan")
        self.assertAlmostEqual(loc["lat"], 31.9522)
        self.assertEqual(loc["timezone"], "Asia/Amman")
        self.assertEqual(mock_get.call_count, 1)

    @patch("mawaqit.location.requests.get")
    def test_falls_through_to_ip_api(self, mock_get):
        mock_get.side_effect = _by_url({
            IPAPI_CO_URL: requests.ConnectionError("rate limited"),
            IP_API_URL: IP_API_OK,
        })

        loc = get_location()
        self.assertEqual(loc["city"], "Cairo")
        self.assertAlmostEqual(loc["lon"], 31.2357)

    @patch("mawaqit.location.requests.get")
    def test_ipapi_co_error_payload_moves_on(self, mock_get):
        mock_get.side_effect = _by_url({
            IPAPI_CO_URL: {"error": True, "reason": "RateLimited"},
            IP_API_URL: IP_API_OK,
        })

        loc = get_location()
        self.assertEqual(loc["city"], "Cairo")

    @patch("mawaqit.location.requests.get")
    def test_missing_city_is_unknown(self, mock_get):
        body = dict(IPAPI_CO_OK, city=None)
        mock_get.side_effect = _by_url({IPAPI_CO_URL: body, IP_API_URL: IP_API_OK})

        loc = get_location()
        self.assertEqual(loc["city"], "Unknown")

    @patch("mawaqit.location.requests.get")
    def test_falls_back_to_makkah(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("offline")

        loc = get_location()
        self.assertEqual(loc, DEFAULT_LOCATION)
        self.assertEqual(loc["city"], "Makkah")
        self.assertAlmostEqual(loc["lat"], 21.4225)

    @patch("mawaqit.location.requests.get")
    def test_falls_back_on_api_error_status(self, mock_get):
        mock_get.side_effect = _by_url({
            IPAPI_CO_URL: {},
            IP_API_URL: {"status": "fail", "message": "reserved range"},
        })

        loc = get_location()
        self.assertEqual(loc["city"], DEFAULT_LOCATION["city"])

    @patch("mawaqit.location.requests.get")
    def test_fallback_is_a_copy(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("offline")

        loc = get_location()
        loc["city"] = "Elsewhere"
        self.assertEqual(DEFAULT_LOCATION["city"], "Makkah")

    @patch("mawaqit.location.requests.get")
    def test_null_payload_moves_on(self, mock_get):
        mock_get.side_effect = _by_url({IPAPI_CO_URL: None, IP_API_URL: IP_API_OK})

        loc = get_location()
        self.assertEqual(loc["city"], "Cairo")

    @patch("mawaqit.location.requests.get")
    def test_list_payloads_fall_back_to_makkah(self, mock_get):
        mock_get.side_effect = _by_url({IPAPI_CO_URL: [], IP_API_URL: ["fail"]})

        with self.assertLogs("mawaqit.location", level="WARNING"):
            loc = get_location()
        self.assertEqual(loc, DEFAULT_LOCATION)

    @patch("mawaqit.location.requests.get")
    def test_manual_location_skips_lookup(self, mock_get):
        manual = {
            "city": "Ciseeng", "country": "ID",
            "lat": -6.5567, "lon": 106.5614, "timezone": "Asia/Jakarta",
        }
        loc = get_location(manual)
        self.assertEqual(loc, manual)
        mock_get.assert_not_called()


if __name__ == "__main__":
    unittest.main()
