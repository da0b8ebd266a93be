#!filepath: src/azkar_app/categories.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Tuple

MORNING = "أذكار الصباح"
EVENING = "أذكار المساء"
SLEEP = "أذكار النوم"
WAKING = "أذكار الاستيقاظ"
ADHAN = "أذكار الآذان"
ABLUTION = "أذكار الوضوء"
MOSQUE = "أذكار المسجد"
HOME = "أذكار المنزل"
TOILET = "أذكار الخلاء"
FOOD = "أذكار الطعام"
HAJJ = "أذكار الحج والعمرة"
AFTER_PRAYER = "أذكار بعد الصلاة"
PRAYER = "أذكار الصلاة"
QURAN_COMPLETION = "دعاء ختم القرآن الكريم"
PROPHETS = "أدعية الأنبياء"
QURANIC = "الأدعية القرآنية"
MISCELLANEOUS = "أذكار متفرقة"
RUQYAH = "الرقية الشرعية"
COMPREHENSIVE = "جوامع الدعاء"
DECEASED = "أدعية للميت"
NAMES_OF_ALLAH = "أسماء الله الحسنى"
VIRTUE_OF_DUA = "فضل الدعاء"
VIRTUE_OF_DHIKR = "فضل الذكر"
VIRTUE_OF_QURAN = "فضل القرآن"
VIRTUE_OF_SURAHS = "فضل السور"

# Label given to records that arrive without any category.
UNCATEGORIZED = "أذكار متنوعة"

# Order of the category grid shown to users.
CANONICAL_CATEGORIES: Tuple[str, ...] = (
    MORNING,
    EVENING,
    AFTER_PRAYER,
    WAKING,
    SLEEP,
    PRAYER,
    ADHAN,
    MOSQUE,
    ABLUTION,
    HOME,
    TOILET,
    FOOD,
    HAJJ,
    QURAN_COMPLETION,
    QURANIC,
    PROPHETS,
    RUQYAH,
    MISCELLANEOUS,
    COMPREHENSIVE,
    VIRTUE_OF_DUA,
    VIRTUE_OF_DHIKR,
    VIRTUE_OF_QURAN,
    VIRTUE_OF_SURAHS,
    NAMES_OF_ALLAH,
    DECEASED,
)


@dataclass(frozen=True, slots=True)
class CategoryRule:
    """One substring rule of the category normalizer.

    Args:
        label: Canonical label produced when the rule matches.
        triggers: Alternatives, each a group of substrings that must all be
            present in the raw label.
    """

    label: str
    triggers: Tuple[Tuple[str, ...], ...]

    def matches(self, text: str) -> bool:
        return any(all(part in text for part in group) for group in self.triggers)


def _any_of(*words: str) -> Tuple[Tuple[str, ...], ...]:
    return tuple((w,) for w in words)


# Evaluated top to bottom, first match wins. Several labels share trigger
# words, so the order is part of the contract.
CATEGORY_RULES: Tuple[CategoryRule, ...] = (
    CategoryRule(MORNING, _any_of("صباح", "Morning")),
    CategoryRule(EVENING, _any_of("مساء", "Evening")),
    CategoryRule(SLEEP, _any_of("نوم", "Sleep")),
    CategoryRule(WAKING, _any_of("استيقاظ", "Wake")),
    CategoryRule(ADHAN, _any_of("آذان", "Adhan")),
    CategoryRule(ABLUTION, _any_of("وضوء", "Ablution")),
    CategoryRule(MOSQUE, _any_of("مسجد", "Mosque")),
    CategoryRule(HOME, _any_of("منزل", "Home")),
    CategoryRule(TOILET, _any_of("خلاء", "Toilet")),
    CategoryRule(FOOD, _any_of("طعام", "Food")),
    CategoryRule(HAJJ, _any_of("حج", "Hajj", "عمرة")),
    CategoryRule(AFTER_PRAYER, (("صلاة", "بعد"), ("Post Prayer",))),
    CategoryRule(QURAN_COMPLETION, (("قرآن", "ختم"), ("قرآن", "دعاء"))),
    CategoryRule(PROPHETS, _any_of("انبياء", "أنبياء")),
    CategoryRule(QURANIC, _any_of("قرآني")),
    CategoryRule(MISCELLANEOUS, _any_of("متفرق")),
    CategoryRule(RUQYAH, _any_of("رقية", "شرعية")),
    CategoryRule(COMPREHENSIVE, _any_of("جوامع")),
    CategoryRule(DECEASED, _any_of("ميت")),
    CategoryRule(NAMES_OF_ALLAH, _any_of("أسماء الله")),
)


def normalize_category(raw_label: Any) -> str:
    """Map a free-text category label to its canonical label.

    Unknown labels are returned trimmed, so they still get their own bucket.

    Args:
        raw_label: Label as found in a data source, any language or casing.

    Returns:
        str: Canonical label, or the trimmed input when no rule matches.
    """
    text = "" if raw_label is None else str(raw_label).strip()
    for rule in CATEGORY_RULES:
        if rule.matches(text):
            return rule.label
    return text


def rule_labels() -> List[str]:
    """Return the labels the rules can produce, in priority order."""
    return [r.label for r in CATEGORY_RULES]
