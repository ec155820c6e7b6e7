# menu_extract/mappers/dish_matcher.py
"""
Knowledge-Base Matcher — map a raw dish name onto a canonical KB entry.

Match tiers (best score wins; ties keep knowledge base order):
  exact    normalized name equals an entry's Tamil or English name   → 95
  partial  one name contains the other, shorter side >= 4 chars      → 55 + 20 * coverage
  fuzzy    SequenceMatcher ratio >= 0.82 on names >= 4 chars         → 55 + 10 * ratio

coverage = len(shorter) / len(longer), so "crab curry" inside
"jaffna crab curry" scores ~66.8 while a near-complete containment approaches 75.

Normalization: NFKC, casefold, Latin diacritics stripped (Tamil vowel signs
are combining marks too and must survive), punctuation dropped, whitespace
collapsed.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from difflib import SequenceMatcher
from typing import List, Optional, Tuple

from ..knowledge_base import DishKnowledgeBase, DishKnowledgeEntry

EXACT_CONFIDENCE = 95.0
PARTIAL_BASE = 55.0
PARTIAL_SPAN = 20.0
FUZZY_SPAN = 10.0

_FUZZY_THRESHOLD = 0.82   # similarity ratio to consider a fuzzy match
_FUZZY_MIN_LEN = 4        # minimum normalized name length for fuzzy/partial comparison

_WHITESPACE_RE = re.compile(r"\s+")
_LATIN_MAX = 0x024F


def _is_latin(ch: str) -> bool:
    return ord(ch) <= _LATIN_MAX


def normalize_name(text: str) -> str:
    """Comparable form of a dish name in either script."""
    if not text:
        return ""
    s = unicodedata.normalize("NFKC", text).casefold()

    out: List[str] = []
    base = ""
    for ch in unicodedata.normalize("NFD", s):
        cat = unicodedata.category(ch)
        if cat.startswith("M"):
            if base and _is_latin(base):
                continue
            out.append(ch)
            continue
        base = ch
        if cat.startswith("P") or cat.startswith("S"):
            out.append(" ")
        else:
            out.append(ch)

    s = unicodedata.normalize("NFC", "".join(out))
    return _WHITESPACE_RE.sub(" ", s).strip()


def _similarity(a: str, b: str) -> float:
    return SequenceMatcher(None, a, b).ratio()


@dataclass(frozen=True)
class DishMatch:
    entry: DishKnowledgeEntry
    match_confidence: float
    kind: str            # "exact" | "partial" | "fuzzy"
    matched_on: str      # normalized KB name that matched

    @property
    def canonical_english(self) -> str:
        return self.entry.english

    @property
    def canonical_tamil(self) -> str:
        return self.entry.tamil

    @property
    def category(self) -> str:
        return self.entry.default_category

    @property
    def is_exact(self) -> bool:
        return self.kind == "exact"


class DishMatcher:
    def __init__(self, knowledge_base: DishKnowledgeBase):
        self.knowledge_base = knowledge_base
        self._index: List[Tuple[DishKnowledgeEntry, Tuple[str, ...]]] = [
            (e, tuple(n for n in (normalize_name(e.tamil), normalize_name(e.english)) if n))
            for e in knowledge_base
        ]

    def _score(self, cand: str, name: str) -> Optional[Tuple[float, str]]:
        if cand == name:
            return EXACT_CONFIDENCE, "exact"

        best: Optional[Tuple[float, str]] = None
        shorter, longer = (cand, name) if len(cand) <= len(name) else (name, cand)
        if len(shorter) >= _FUZZY_MIN_LEN and shorter in longer:
            coverage = len(shorter) / len(longer)
            best = (PARTIAL_BASE + PARTIAL_SPAN * coverage, "partial")

        if len(cand) >= _FUZZY_MIN_LEN and len(name) >= _FUZZY_MIN_LEN:
            ratio = _similarity(cand, name)
            if ratio >= _FUZZY_THRESHOLD:
                score = PARTIAL_BASE + FUZZY_SPAN * ratio
                if best is None or score > best[0]:
                    best = (score, "fuzzy")
        return best

    def match(self, raw_name: str) -> Optional[DishMatch]:
        """Best KB match for a raw name, or None."""
        cand = normalize_name(raw_name)
        if not cand:
            return None

        best: Optional[DishMatch] = None
        for entry, names in self._index:
            for name in names:
                scored = self._score(cand, name)
                if scored is None:
                    continue
                score, kind = scored
                if best is None or score > best.match_confidence:
                    best = DishMatch(entry, round(score, 2), kind, name)
                    if kind == "exact":
                        return best
        return best

    def match_any(self, *names: str) -> Optional[DishMatch]:
        """Best match across several name variants (first wins on ties)."""
        best: Optional[DishMatch] = None
        for n in names:
            if not n:
                continue
            m = self.match(n)
            if m is not None and (best is None or m.match_confidence > best.match_confidence):
                best = m
        return best
