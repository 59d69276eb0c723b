"""Tests for the notifier module."""

import datetime
import unittest
from unittest.mock import MagicMock, patch

from mawaqit.notifier import ArrivalWatcher, _send_plyer, notify_event


class TestNotifyEvent(unittest.TestCase):
    @patch("mawaqit.notifier._send_plyer")
    def test_english_message(self, mock_plyer):
        notify_event("Maghrib", "en")
        mock_plyer.assert_called_once()
        title, message = mock_plyer.call_args[0][:2]
        self.assertIn("Maghrib", title)
        self.assertEqual(message, "It is now time for Maghrib")

    @patch("mawaqit.notifier._send_plyer")
    def test_arabic_message(self, mock_plyer):
        notify_event("LastThird", "ar")
        title, message = mock_plyer.call_args[0][:2]
        self.assertIn("الثلث الأخير", title)
        self.assertIn("الثلث الأخير", message)

    @patch("mawaqit.notifier._send_plyer")
    def test_calls_callback(self, mock_plyer):
        cb = MagicMock()
        notify_event("Fajr", "en", callback=cb)
        cb.assert_called_once()


class TestSendPlyer(unittest.TestCase):
    @patch("mawaqit.notifier.plyer_notification")
    def test_passes_through(self, mock_notification):
        _send_plyer("title", "message", timeout=5)
        kwargs = mock_notification.notify.call_args[1]
        self.assertEqual(kwargs["title"], "title")
        self.assertEqual(kwargs["timeout"], 5)

    @patch("mawaqit.notifier.plyer_notification")
    def test_backend_failure_is_logged(self, mock_notification):
        mock_notification.notify.side_effect = NotImplementedError("no backend")
        with self.assertLogs("mawaqit.notifier", level="WARNING"):
            _send_plyer("title", "message")


class TestArrivalWatcher(unittest.TestCase):
    def setUp(self):
        self.watcher = ArrivalWatcher()
        self.asr = datetime.datetime(2026, 10, 18, 15, 20)
        self.maghrib = datetime.datetime(2026, 10, 18, 18, 0)
        self.isha = datetime.datetime(2026, 10, 18, 19, 30)

    def test_first_observation_is_silent(self):
        self.assertIsNone(self.watcher.observe("Asr", self.asr, self.asr))

    def test_same_event_is_silent(self):
        before = self.asr - datetime.timedelta(seconds=1)
        self.watcher.observe("Asr", self.asr, before)
        self.assertIsNone(self.watcher.observe("Asr", self.asr, before))

    def test_change_reports_previous_event(self):
        self.watcher.observe("Asr", self.asr, self.asr - datetime.timedelta(seconds=1))
        self.assertEqual(self.watcher.observe("Maghrib", self.maghrib, self.asr), "Asr")
        self.assertIsNone(self.watcher.observe("Maghrib", self.maghrib, self.asr))

    def test_moved_event_is_not_an_arrival(self):
        now = datetime.datetime(2026, 10, 18, 19, 0)
        self.watcher.observe("Isha", self.isha, now)
        later = self.isha + datetime.timedelta(minutes=15)
        self.assertIsNone(self.watcher.observe("Isha", later, now))

    def test_replaced_event_before_its_time_is_silent(self):
        now = datetime.datetime(2026, 10, 18, 15, 0)
        self.watcher.observe("Asr", self.asr, now)
        self.assertIsNone(self.watcher.observe("Maghrib", self.maghrib, now))

    def test_reset_forgets(self):
        self.watcher.observe("Asr", self.asr, self.asr - datetime.timedelta(seconds=1))
        self.watcher.reset()
        self.assertIsNone(self.watcher.observe("Maghrib", self.maghrib, self.asr))


if __name__ == "__main__":
    unittest.main()
