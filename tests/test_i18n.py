"""Tests for the i18n module."""

import datetime
import unittest

from mawaqit import i18n

HIJRI = {
    "day": "07",
    "month_en": "Jumādá al-ūlá",
    "month_ar": "جُمادى الأولى",
    "weekday_en": "Al Ahad",
    "weekday_ar": "الاحد",
    "year": "1448",
}


class TestLabels(unittest.TestCase):
    def test_every_event_has_both_languages(self):
        self.assertEqual(set(i18n.PRAYER_LABELS["ar"]), set(i18n.PRAYER_LABELS["en"]))
        self.assertEqual(len(i18n.PRAYER_LABELS["ar"]), 8)

    def test_last_third_row_label_differs_in_arabic(self):
        self.assertEqual(i18n.prayer_label("LastThird", "ar"), "الثلث الأخير")
        self.assertEqual(i18n.row_label("LastThird", "ar"), "بداية الثلث الأخير")
        self.assertEqual(i18n.row_label("LastThird", "en"), "Last Third")
        self.assertEqual(i18n.row_label("Fajr", "ar"), "الفجر")

    def test_unknown_language_uses_default(self):
        self.assertEqual(i18n.prayer_label("Isha", "fr"), "العشاء")

    def test_method_name(self):
        self.assertEqual(i18n.method_name("Kuwait", "ar"), "الكويت")
        self.assertEqual(i18n.method_name("Kuwait", "en"), "Kuwait")
        self.assertEqual(i18n.method_name("Somewhere New", "ar"), "Somewhere New")


class TestLanguage(unittest.TestCase):
    def test_toggle(self):
        self.assertEqual(i18n.toggle_language("ar"), "en")
        self.assertEqual(i18n.toggle_language("en"), "ar")

    def test_direction(self):
        self.assertEqual(i18n.text_direction("ar"), "rtl")
        self.assertEqual(i18n.text_direction("en"), "ltr")

    def test_toggle_button_names_the_other_language(self):
        self.assertEqual(i18n.ui_text("toggle", "ar"), "English")
        self.assertEqual(i18n.ui_text("toggle", "en"), "العربية")


class TestFormatting(unittest.TestCase):
    def test_gregorian_english(self):
        self.assertEqual(
            i18n.format_gregorian(datetime.date(2026, 10, 18), "en"),
            "Sunday, October 18, 2026",
        )

    def test_gregorian_arabic(self):
        self.assertEqual(
            i18n.format_gregorian(datetime.date(2026, 10, 18), "ar"),
            "الأحد، ١٨ أكتوبر ٢٠٢٦",
        )

    def test_hijri(self):
        self.assertEqual(i18n.format_hijri(HIJRI, "en"), "Al Ahad, 07 Jumādá al-ūlá 1448")
        self.assertEqual(i18n.format_hijri(HIJRI, "ar"), "الاحد, 07 جُمادى الأولى 1448")

    def test_hijri_without_weekday(self):
        hijri = dict(HIJRI, weekday_en="", weekday_ar="")
        self.assertEqual(i18n.format_hijri(hijri, "en"), "07 Jumādá al-ūlá 1448")
        self.assertEqual(i18n.format_hijri(hijri, "ar"), "07 جُمادى الأولى 1448")

    def test_location(self):
        self.assertEqual(i18n.format_location("Makkah", "Saudi Arabia", "en"), "Makkah, Saudi Arabia")
        self.assertEqual(i18n.format_location("Makkah", "Saudi Arabia", "ar"), "Makkah، Saudi Arabia")


if __name__ == "__main__":
    unittest.main()
