"""Ordering of calculation methods for the method dropdown."""

import unicodedata

from mawaqit.i18n import METHOD_NAMES_AR, method_name
from mawaqit.prayer_api import DEFAULT_METHOD


def method_entries(methods: dict) -> list:
    """
    Flatten the Aladhan methods mapping into
    [{key, id, name_en, name_ar}, ...]. Nameless entries become 'Custom'.
    """
    entries = []
    for method in methods.values():
        if not isinstance(method, dict) or "id" not in method:
            continue
        name_en = method.get("name") or "Custom"
        entries.append({
            "key": str(method["id"]),
            "id": method["id"],
            "name_en": name_en,
            "name_ar": METHOD_NAMES_AR.get(name_en, name_en),
        })
    return entries


_ALEF_FORMS = str.maketrans("أإآٱ", "اااا")


def _arabic_sort_key(name: str) -> str:
    # ignore punctuation, spacing and tashkeel; hamza/madda alef sorts as bare alef
    return "".join(
        ch for ch in name.translate(_ALEF_FORMS)
        if not unicodedata.category(ch).startswith(("P", "Z", "Mn"))
    )


def order_methods(entries: list, previous: str = None, default_id: int = DEFAULT_METHOD) -> list:
    """
    Put the default entry first (the previous selection if still present,
    else the method with default_id, else the first entry) followed by the
    rest sorted by Arabic name.
    """
    if not entries:
        return []
    default = None
    if previous is not None:
        default = next((e for e in entries if e["key"] == str(previous)), None)
    if default is None:
        default = next((e for e in entries if e["id"] == default_id), entries[0])
    others = [e for e in entries if e["key"] != default["key"]]
    others.sort(key=lambda e: _arabic_sort_key(e["name_ar"] or ""))
    return [default] + others


def method_options(entries: list, lang: str) -> list:
    """[(key, label), ...] in dropdown order; entries must already be ordered."""
    return [(e["key"], method_name(e["name_en"], lang)) for e in entries]
