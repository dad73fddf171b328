"""Bilingual (English/Arabic) display helpers."""

from __future__ import annotations

from typing import Literal

from bean_variants.schema import LocalizedLabel, PlainLabel

Language = Literal["en", "ar"]

NORMAL_ADDITION = LocalizedLabel(name="Normal", name_ar="عادي")

MESSAGES: dict[str, dict[str, str]] = {
    "select_variation": {
        "en": "Please select a variation",
        "ar": "يرجى اختيار نوع المنتج",
    },
    "out_of_stock": {
        "en": "Out of stock",
        "ar": "نفذت الكمية",
    },
    "only_left": {
        "en": "Only {count} left",
        "ar": "متبقي {count} فقط",
    },
    "added_to_cart": {
        "en": "{quantity} × {name} added to cart",
        "ar": "تمت إضافة {quantity} × {name} إلى السلة",
    },
    "unavailable": {
        "en": "This product is currently unavailable",
        "ar": "هذا المنتج غير متوفر حاليا",
    },
}


def facet_label(value: PlainLabel | LocalizedLabel | None, language: str = "en") -> str:
    """Reduce a facet value to a display string in the given language."""
    if value is None:
        return ""
    if isinstance(value, PlainLabel):
        return value.label

    if language == "ar":
        for candidate in (value.name_ar, value.arabic_name, value.display_name_ar):
            if candidate:
                return candidate

    for candidate in (value.name, value.display_name):
        if candidate:
            return candidate

    return "" if value.value is None else str(value.value)


def is_normal(label: str | None) -> bool:
    """Return True when a display label is the "Normal" addition sentinel."""
    if not label:
        return False
    folded = label.strip().casefold()
    return folded in {
        facet_label(NORMAL_ADDITION, "en").casefold(),
        facet_label(NORMAL_ADDITION, "ar").casefold(),
    }


class Translator:
    """Active display language plus lookups for storefront messages."""

    def __init__(self, language: str = "en"):
        self.language: Language = "ar" if language == "ar" else "en"

    def content_by_lang(self, en: str, ar: str | None) -> str:
        if self.language == "ar" and ar:
            return ar
        return en

    def t(self, key: str, default: str | None = None, **params: object) -> str:
        entry = MESSAGES.get(key)
        if entry:
            template = entry.get(self.language) or entry["en"]
        else:
            template = default if default is not None else key
        return template.format(**params) if params else template

    def label(self, value: PlainLabel | LocalizedLabel | None) -> str:
        return facet_label(value, self.language)
