"""Shared constants for heading discovery and anchor generation."""

from __future__ import annotations

MAX_ANCHOR_LENGTH = 70

# Fragment id of the rendered table of contents; back-to-top links point here.
MENU_ANCHOR = "tocmenu"

# Cyrillic to Latin, ISO 9 flavoured. Soft and hard signs are dropped.
CYRILLIC_TO_LATIN: dict[str, str] = {
    "А": "A", "Б": "B", "В": "V", "Г": "G", "Д": "D", "Е": "E", "Ё": "YO", "Ж": "ZH",
    "З": "Z", "И": "I", "Й": "J", "К": "K", "Л": "L", "М": "M", "Н": "N", "О": "O",
    "П": "P", "Р": "R", "С": "S", "Т": "T", "У": "U", "Ф": "F", "Х": "H", "Ц": "TS",
    "Ч": "CH", "Ш": "SH", "Щ": "SHH", "Ъ": "", "Ы": "Y", "Ь": "", "Э": "E", "Ю": "YU",
    "Я": "YA",
    "а": "a", "б": "b", "в": "v", "г": "g", "д": "d", "е": "e", "ё": "yo", "ж": "zh",
    "з": "z", "и": "i", "й": "j", "к": "k", "л": "l", "м": "m", "н": "n", "о": "o",
    "п": "p", "р": "r", "с": "s", "т": "t", "у": "u", "ф": "f", "х": "h", "ц": "ts",
    "ч": "ch", "ш": "sh", "щ": "shh", "ъ": "", "ы": "y", "ь": "", "э": "e", "ю": "yu",
    "я": "ya",
    # Ukrainian, Belarusian, Serbian, Macedonian
    "Ѓ": "G", "Ґ": "G", "Є": "YE", "Ѕ": "Z", "Ј": "J", "І": "I", "Ї": "YI", "Ќ": "K",
    "Љ": "L", "Њ": "N", "Ў": "U", "Џ": "DH",
    "ѓ": "g", "ґ": "g", "є": "ye", "ѕ": "z", "ј": "j", "і": "i", "ї": "yi", "ќ": "k",
    "љ": "l", "њ": "n", "ў": "u", "џ": "dh",
}

TRANSLITERATION_TABLE = str.maketrans(CYRILLIC_TO_LATIN)

# Tags removed from TOC text under the "all" policy.
TOC_UNSAFE_TAGS: tuple[str, ...] = ("a", "img")

# Marker tokens recognised inside a selector specification.
EMBED_MARKER = "embed"
NO_TO_MENU_MARKER = "no_to_menu"


__all__ = [
    "CYRILLIC_TO_LATIN",
    "EMBED_MARKER",
    "MAX_ANCHOR_LENGTH",
    "MENU_ANCHOR",
    "NO_TO_MENU_MARKER",
    "TOC_UNSAFE_TAGS",
    "TRANSLITERATION_TABLE",
]
