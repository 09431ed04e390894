"""Turkish-aware text helpers for city and district labels."""

from __future__ import annotations

import re

_TURKISH_ALPHABET = "abcçdefgğhıijklmnoöpqrsştuüvwxyz"
_LETTER_RANK = {letter: index for index, letter in enumerate(_TURKISH_ALPHABET)}
# circumflexed vowels sort with their plain letter
_LETTER_RANK.update({"â": _LETTER_RANK["a"], "î": _LETTER_RANK["i"], "û": _LETTER_RANK["u"]})

_ASCII_FOLD = str.maketrans(
    {
        "ç": "c",
        "ğ": "g",
        "ı": "i",
        "ö": "o",
        "ş": "s",
        "ü": "u",
        "â": "a",
        "î": "i",
        "û": "u",
    }
)


def turkish_lower(value: str) -> str:
    """Lower-case with Turkish dotted/dotless i rules."""

    return value.replace("I", "ı").replace("İ", "i").lower()


def fold_ascii(value: str) -> str:
    """Trim, lower-case and strip Turkish diacritics: ``" Kıbrıs "`` -> ``"kibris"``."""

    return turkish_lower(value.strip()).translate(_ASCII_FOLD)


def turkish_sort_key(value: str) -> tuple:
    """Sort key ordering labels by the Turkish alphabet (``Çankaya`` after ``Cihanbeyli``)."""

    ranks = []
    for char in turkish_lower(value):
        if char in _LETTER_RANK:
            ranks.append((2, _LETTER_RANK[char]))
        elif char.isdigit():
            ranks.append((1, ord(char)))
        elif char.isalpha():
            ranks.append((3, ord(char)))
        else:
            ranks.append((0, ord(char)))
    return (tuple(ranks), value)


def sort_turkish(values) -> list[str]:
    return sorted(values, key=turkish_sort_key)


# Districts whose URL slugs lose their Turkish letters.
_SLUG_SPELLINGS: dict[str, str] = {
    "bahcelievler": "Bahçelievler",
    "besiktas": "Beşiktaş",
    "beyoglu": "Beyoğlu",
    "buyukcekmece": "Büyükçekmece",
    "cekmekoy": "Çekmeköy",
    "gungoren": "Güngören",
    "kagithane": "Kağıthane",
    "kadikoy": "Kadıköy",
    "kucukcekmece": "Küçükçekmece",
    "sariyer": "Sarıyer",
    "sile": "Şile",
    "sisli": "Şişli",
    "umraniye": "Ümraniye",
    "uskudar": "Üsküdar",
    "eyupsultan": "Eyüpsultan",
    "bakirkoy": "Bakırköy",
    "avcilar": "Avcılar",
    "basaksehir": "Başakşehir",
    "arnavutkoy": "Arnavutköy",
    "catalca": "Çatalca",
    "beylikduzu": "Beylikdüzü",
    "bayrampasa": "Bayrampaşa",
    "gaziosmanpasa": "Gaziosmanpaşa",
    "atasehir": "Ataşehir",
    "cankaya": "Çankaya",
    "kecioren": "Keçiören",
    "polatli": "Polatlı",
    "karsiyaka": "Karşıyaka",
    "cigli": "Çiğli",
    "bayrakli": "Bayraklı",
    "nilufer": "Nilüfer",
    "yildirim": "Yıldırım",
    "muratpasa": "Muratpaşa",
    "konyaalti": "Konyaaltı",
    "dosemealti": "Döşemealtı",
    "yuregir": "Yüreğir",
    "cukurova": "Çukurova",
    "saricam": "Sarıçam",
}

_SLUG_PATTERN = re.compile(
    r"\b(" + "|".join(re.escape(slug) for slug in _SLUG_SPELLINGS) + r")\b",
    re.IGNORECASE,
)


def restore_turkish_spelling(value: str) -> str:
    """Replace known ASCII district slugs with their Turkish spelling.

    Words not in the table are left untouched, so already-correct input
    passes through unchanged.
    """

    return _SLUG_PATTERN.sub(lambda match: _SLUG_SPELLINGS[match.group(0).lower()], value)
