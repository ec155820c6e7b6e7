# menu_extract/parsers/script_split.py
"""
Tamil / Latin script splitting for bilingual dish names.

Menus print names as "நண்டு கறி (Crab Curry)", "Crab Curry / நண்டு கறி",
"Crab Curry - நண்டு கறி" or just one script. split_scripts() pulls the Tamil
runs out as one field and leaves the Latin remainder, minus bracket and
separator punctuation, as the other.
"""

from __future__ import annotations

import re
from typing import Tuple

# Tamil block U+0B80–U+0BFF; ZWJ/ZWNJ occur inside OCR'd Tamil words.
TAMIL_RUN_RE = re.compile(r"[\u0B80-\u0BFF\u200c\u200d]+(?:\s+[\u0B80-\u0BFF\u200c\u200d]+)*")
_TAMIL_CHAR_RE = re.compile(r"[\u0B80-\u0BFF]")
_LATIN_LETTER_RE = re.compile(r"[A-Za-z\u00C0-\u024F]")

_BRACKETS_RE = re.compile(r"[()\[\]{}]")
_EDGE_SEPARATORS = " \t-–—/|:;,.·•*"
_WS_RE = re.compile(r"\s+")

# Quantity / unit tokens: "2pcs", "x2", "500", "ml", "1/2", "plate".
_UNITS = r"(?:x|nos?|pcs?|pieces?|g|gms?|kg|ml|l|ltrs?|cups?|plates?|portions?|servings?)"
_QTY_TOKEN_RE = re.compile(r"x?\d+(?:[./]\d+)?" + _UNITS + r"?|" + _UNITS, re.IGNORECASE)
_TOKEN_SPLIT_RE = re.compile(r"[\s.,]+")


def contains_tamil(text: str) -> bool:
    return bool(text) and _TAMIL_CHAR_RE.search(text) is not None


def contains_latin(text: str) -> bool:
    return bool(text) and _LATIN_LETTER_RE.search(text) is not None


def is_quantity_only(text: str) -> bool:
    """True for leftovers like "2pcs" or "x 2 plates" that carry no dish name."""
    tokens = [t for t in _TOKEN_SPLIT_RE.split(text or "") if t]
    return bool(tokens) and all(_QTY_TOKEN_RE.fullmatch(t) for t in tokens)


def _tidy(text: str) -> str:
    text = _BRACKETS_RE.sub(" ", text)
    text = _WS_RE.sub(" ", text)
    return text.strip(_EDGE_SEPARATORS)


def split_scripts(raw: str) -> Tuple[str, str]:
    """
    Split a raw dish name into (tamil, english).

    Either side may be "" when the name is single-script.
      "நண்டு கறி (Crab Curry)"   -> ("நண்டு கறி", "Crab Curry")
      "Hoppers"                  -> ("", "Hoppers")
      "புட்டு"                   -> ("புட்டு", "")
      "கொத்து ரொட்டி 2pcs"        -> ("கொத்து ரொட்டி", "")
    """
    if not raw:
        return "", ""
    tamil_runs = [m.group(0).strip() for m in TAMIL_RUN_RE.finditer(raw)]
    tamil = _WS_RE.sub(" ", " ".join(r for r in tamil_runs if r)).strip()

    latin = _tidy(TAMIL_RUN_RE.sub(" ", raw))
    # Separator-only or quantity-only leftovers ("/", "2pcs") are not a name.
    if not contains_latin(latin) or is_quantity_only(latin):
        latin = ""
    return tamil, latin
