"""Arabic / English string tables and date formatting."""

import datetime

SUPPORTED = ("ar", "en")
DEFAULT_LANGUAGE = "ar"

PRAYER_LABELS = {
    "ar": {
        "Fajr": "الفجر",
        "Sunrise": "الشروق",
        "Dhuhr": "الظهر",
        "Asr": "العصر",
        "Maghrib": "المغرب",
        "Isha": "العشاء",
        "Midnight": "منتصف الليل",
        "LastThird": "الثلث الأخير",
    },
    "en": {
        "Fajr": "Fajr",
        "Sunrise": "Sunrise",
        "Dhuhr": "Dhuhr",
        "Asr": "Asr",
        "Maghrib": "Maghrib",
        "Isha": "Isha",
        "Midnight": "Midnight",
        "LastThird": "Last Third",
    },
}

# Row labels that differ from the short names used in the next-event line
ROW_LABELS = {
    "ar": {"LastThird": "بداية الثلث الأخير"},
    "en": {},
}

METHOD_NAMES_AR = {
    "Muslim World League": "رابطة العالم الإسلامي",
    "Islamic Society of North America (ISNA)": "الاتحاد الإسلامي بأمريكا الشمالية (ISNA)",
    "Egyptian General Authority of Survey": "الهيئة المصرية العامة للمساحة",
    "Umm Al-Qura University, Makkah": "أم القرى، مكة المكرمة",
    "University of Islamic Sciences, Karachi": "جامعة العلوم الإسلامية كراتشي",
    "Institute of Geophysics, University of Tehran": "معهد الجيوفيزياء، جامعة طهران",
    "Shia Ithna-Ashari, Leva Institute, Qum": "الشيعة الإثنا عشرية، معهد ليفا، قم",
    "Gulf Region": "الخليج",
    "Kuwait": "الكويت",
    "Qatar": "قطر",
    "Majlis Ugama Islam Singapura, Singapore": "مجلس الشريعة الإسلامية سنغافورة",
    "Union Organization Islamic de France": "الاتحاد الفرنسي للمنظمات الإسلامية",
    "Diyanet İşleri Başkanlığı, Turkey (experimental)": "رئاسة الشؤون الدينية، تركيا (تجريبي)",
    "Spiritual Administration of Muslims of Russia": "الإدارة الروحية لمسلمي روسيا",
    "Moonsighting Committee Worldwide (Moonsighting.com)": "لجنة رؤية الهلال العالمية",
    "Dubai (experimental)": "دبي (تجريبي)",
    "Jabatan Kemajuan Islam Malaysia (JAKIM)": "وزارة الشؤون الإسلامية بماليزيا (جاكيم)",
    "Tunisia": "تونس",
    "Algeria": "الجزائر",
    "Kementerian Agama Republik Indonesia": "وزارة الشؤون الدينية بجمهورية إندونيسيا",
    "Morocco": "المغرب",
    "Comunidade Islamica de Lisboa": "الجالية الإسلامية بلشبونة",
    "Ministry of Awqaf, Islamic Affairs and Holy Places, Jordan": "وزارة الأوقاف والشؤون الإسلامية والمقدسات، الأردن",
    "Custom": "مخصص",
}

UI_STRINGS = {
    "ar": {
        "title": "مواقيت الصلاة",
        "method_label": "طريقة الحساب",
        "toggle": "English",
        "next_prefix": "الحدث القادم: ",
        "loading": "جارٍ التحميل…",
        "error": "تعذر تحميل البيانات",
        "event_arrived": "حان الآن وقت {name}",
    },
    "en": {
        "title": "Prayer Times",
        "method_label": "Calculation Method",
        "toggle": "العربية",
        "next_prefix": "Next: ",
        "loading": "Loading…",
        "error": "Could not load data",
        "event_arrived": "It is now time for {name}",
    },
}

AR_WEEKDAYS = ["الاثنين", "الثلاثاء", "الأربعاء", "الخميس", "الجمعة", "السبت", "الأحد"]
EN_WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

AR_MONTHS = [
    "يناير", "فبراير", "مارس", "أبريل", "مايو", "يونيو",
    "يوليو", "أغسطس", "سبتمبر", "أكتوبر", "نوفمبر", "ديسمبر",
]
EN_MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

_ARABIC_INDIC_DIGITS = str.maketrans("0123456789", "٠١٢٣٤٥٦٧٨٩")


def normalize_language(lang: str) -> str:
    return lang if lang in SUPPORTED else DEFAULT_LANGUAGE


def toggle_language(lang: str) -> str:
    return "en" if lang == "ar" else "ar"


def text_direction(lang: str) -> str:
    return "rtl" if lang == "ar" else "ltr"


def ui_text(key: str, lang: str) -> str:
    return UI_STRINGS[normalize_language(lang)][key]


def prayer_label(name: str, lang: str) -> str:
    """Short localized name, as used in the next-event line."""
    return PRAYER_LABELS[normalize_language(lang)][name]


def row_label(name: str, lang: str) -> str:
    """Localized label for a row in the times list."""
    lang = normalize_language(lang)
    return ROW_LABELS[lang].get(name, PRAYER_LABELS[lang][name])


def method_name(name_en: str, lang: str) -> str:
    """Localized calculation-method name; unknown names pass through."""
    if lang == "ar":
        return METHOD_NAMES_AR.get(name_en, name_en)
    return name_en


def to_arabic_digits(text: str) -> str:
    return str(text).translate(_ARABIC_INDIC_DIGITS)


def format_gregorian(date: datetime.date, lang: str) -> str:
    """
    Long Gregorian date.

    ar: 'السبت، ١٨ أكتوبر ٢٠٢٦'
    en: 'Saturday, October 18, 2026'
    """
    if lang == "ar":
        weekday = AR_WEEKDAYS[date.weekday()]
        month = AR_MONTHS[date.month - 1]
        return to_arabic_digits(f"{weekday}، {date.day} {month} {date.year}")
    weekday = EN_WEEKDAYS[date.weekday()]
    month = EN_MONTHS[date.month - 1]
    return f"{weekday}, {month} {date.day}, {date.year}"


def format_hijri(hijri: dict, lang: str) -> str:
    """Hijri date as 'weekday, day month year' from the Aladhan hijri block."""
    suffix = "ar" if lang == "ar" else "en"
    date = f"{hijri['day']} {hijri['month_' + suffix]} {hijri['year']}"
    weekday = hijri.get("weekday_" + suffix)
    if not weekday:
        return date
    return f"{weekday}, {date}"


def format_location(city: str, country: str, lang: str) -> str:
    if lang == "ar":
        return f"{city}، {country}"
    return f"{city}, {country}"
