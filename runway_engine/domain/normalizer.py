"""Merchant description normalization for grouping recurring transactions"""

import re
from typing import Optional

from runway_engine.domain.models import Transaction


UNCATEGORIZED = "Uncategorized"

REGION_CODES = {"ZA", "CPT", "JHB", "GP", "GAUTENG"}
LEGAL_SUFFIXES = {"PTY", "LTD"}
BANKING_JARGON = {
    "DEBIT", "ORDER", "PAYMENT", "INSTALMENT", "EFT", "MAG", "TAPE",
    "ELECTRONIC", "FUNDS", "TRANSFER", "INTERNAL",
}
MONTHS = {
    "JANUARY", "FEBRUARY", "MARCH", "APRIL", "MAY", "JUNE", "JULY", "AUGUST",
    "SEPTEMBER", "OCTOBER", "NOVEMBER", "DECEMBER",
    "JAN", "FEB", "MAR", "APR", "JUN", "JUL", "AUG", "SEP", "SEPT", "OCT", "NOV", "DEC",
}
STOP_TOKENS = REGION_CODES | LEGAL_SUFFIXES | BANKING_JARGON | MONTHS

_APOSTROPHES = re.compile(r"&APOS;|['’]")
_INTERNAL_ACCOUNT = re.compile(r"INT-ACC")
_WORD = re.compile(r"[A-Z]+")


def normalize_description(description: Optional[str]) -> str:
    """
    Collapse a raw merchant string into a canonical grouping key.

    "DEBIT ORDER NETFLIX.COM 12345 JAN" -> "NETFLIX COM"
    "Checkers Hyper 0042 CPT"           -> "CHECKERS HYPER"

    Digits and punctuation split words; region codes, legal suffixes, banking
    jargon and month names are dropped as whole words. The first one or two
    surviving words form the key, so the result is a fixed point of this function.
    """
    if description is None or not description.strip():
        return UNCATEGORIZED

    clean = description.upper()
    if clean.strip() == UNCATEGORIZED.upper():
        return UNCATEGORIZED

    clean = _APOSTROPHES.sub("", clean)
    clean = _INTERNAL_ACCOUNT.sub(" ", clean)

    words = [w for w in _WORD.findall(clean) if w not in STOP_TOKENS]
    if not words:
        return UNCATEGORIZED
    return " ".join(words[:2])


def group_key(txn: Transaction) -> str:
    """Merchant grouping key used for recurring-cost detection"""
    return normalize_description(txn.description)


def category_key(txn: Transaction) -> str:
    """Category label when supplied, else the merchant grouping key"""
    if txn.category and txn.category.strip():
        return txn.category.strip()
    return group_key(txn)
