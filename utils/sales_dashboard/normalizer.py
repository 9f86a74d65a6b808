# utils/sales_dashboard/normalizer.py
"""
Name and label normalization.

Vendor names are typed by hand in the spreadsheet, so the same person shows
up as "daniel ortiz", "DANIEL ORTÍZ" or "Daniel  Ortiz". Everything that
groups by vendor goes through normalize_vendor_name() first.

Month labels arrive either as "1".."12" or as Spanish month names. Branch
names have one known accent variant (Querétaro / Queretaro).
"""

import unicodedata
from typing import Any, Optional

from .constants import (
    BRANCH_ALIASES,
    MONTH_MAPPING,
    MONTH_ORDER,
    VENDOR_ALIASES,
)

_MONTH_LOOKUP = {name.lower(): index + 1 for index, name in enumerate(MONTH_ORDER)}


def _alias_key(name: str) -> str:
    decomposed = unicodedata.normalize("NFKD", name.casefold())
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def _capitalize_word(word: str) -> str:
    first = word[0].upper()
    if len(first) != 1:
        # e.g. "ß" -> "SS" would change the word length on every pass
        first = word[0]
    return first + word[1:].lower()


def normalize_vendor_name(raw_name: Any) -> str:
    """
    Canonical vendor name.

    Trims and collapses whitespace, resolves known aliases ignoring case and accents,
    otherwise title-cases each word. Missing input gives "".
    """
    if raw_name is None:
        return ""

    collapsed = " ".join(str(raw_name).split())
    if not collapsed:
        return ""

    alias = VENDOR_ALIASES.get(_alias_key(collapsed))
    if alias:
        return alias

    return " ".join(_capitalize_word(word) for word in collapsed.split(" "))


def month_number(label: Any) -> Optional[int]:
    """1-12 for a numeric or Spanish month label, None if unrecognized."""
    if label is None:
        return None

    text = str(label).strip()
    if not text:
        return None

    try:
        value = float(text)
    except ValueError:
        return _MONTH_LOOKUP.get(text.lower())

    if value.is_integer() and 1 <= value <= 12:
        return int(value)
    return None


def month_name(label: Any) -> str:
    """Canonical Spanish month name; unrecognized labels pass through unchanged."""
    number = month_number(label)
    if number is None:
        return "" if label is None else str(label)
    return MONTH_MAPPING[number]


def canonical_branch(branch: Any) -> str:
    """Branch name with known accent variants folded to the Metas spelling."""
    if branch is None:
        return ""
    text = str(branch)
    return BRANCH_ALIASES.get(text, text)


def branches_match(left: Any, right: Any) -> bool:
    return canonical_branch(left) == canonical_branch(right)
