"""
menu_extract/category_infer.py

Section-header detection and header → canonical category mapping for
bilingual menu text.

Goals:
- Decide whether a line is a section header ("Rice Dishes", "கறி வகைகள்")
  or something else (dish line, noise).
- Map header text and element category hints onto the canonical names in the
  category header table.
- Resolve the final category of an enriched item.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Optional, Pattern

from .config import ExtractionConfig
from .parsers.price_parser import has_price_token
from .parsers.script_split import contains_tamil


# ------------------------
# Data structures
# ------------------------

@dataclass
class CategoryGuess:
    category: str
    key: str          # header-table key that fired ("" when none did)
    reason: str = ""


# ------------------------
# Detector
# ------------------------

class CategoryDetector:
    def __init__(
        self,
        header_table: Dict[str, str],
        default_category: str,
        max_length: int = 40,
        max_words: int = 5,
    ):
        self.header_table = dict(header_table)
        self.default_category = default_category
        self.max_length = max_length
        self.max_words = max_words
        self._canonical = {v.casefold(): v for v in self.header_table.values()}
        # Latin keys match whole words, plural s/es allowed ("Price List" is not "rice").
        self._latin_keys: Dict[str, Pattern[str]] = {
            key: re.compile(r"\b" + re.escape(key.strip()) + r"(?:e?s)?\b", re.IGNORECASE)
            for key in self.header_table
            if not contains_tamil(key)
        }

    @classmethod
    def from_config(cls, config: ExtractionConfig) -> "CategoryDetector":
        return cls(
            config.category_header_table,
            config.default_category,
            max_length=config.header_max_length,
            max_words=config.header_max_words,
        )

    def match_key(self, text: str) -> Optional[str]:
        """First header-table key found in text, in table order (Latin keys as whole words)."""
        if not text:
            return None
        for key in self.header_table:
            pat = self._latin_keys.get(key)
            if pat is None:
                if key in text:
                    return key
            elif pat.search(text):
                return key
        return None

    def detect_header(self, line: str) -> Optional[CategoryGuess]:
        """
        A header carries no price token, is short, and contains a table key.
        Returns the canonical category or None.
        """
        s = (line or "").strip()
        if not s:
            return None
        if has_price_token(s):
            return None
        if len(s) > self.max_length or len(s.split()) > self.max_words:
            return None
        key = self.match_key(s)
        if key is None:
            return None
        return CategoryGuess(self.header_table[key], key, f"header '{s}' matched '{key}'")

    def canonicalize(self, hint: Optional[str]) -> Optional[str]:
        """
        Map a free-form category hint onto the canonical vocabulary.

        Canonical names pass through unchanged; otherwise the first matching
        table key decides; an unrecognized hint is kept as written.
        """
        if hint is None:
            return None
        s = " ".join(hint.split())
        if not s:
            return None
        canon = self._canonical.get(s.casefold())
        if canon:
            return canon
        key = self.match_key(s)
        if key is not None:
            return self.header_table[key]
        return s

    def resolve(self, hint: Optional[str], kb_category: Optional[str] = None) -> CategoryGuess:
        """
        Final category for an item:
          hint present   → canonicalized hint
          no hint, KB hit → the dish's default category
          otherwise      → default category
        """
        canon = self.canonicalize(hint)
        if canon:
            return CategoryGuess(canon, "", "hint")
        if kb_category:
            return CategoryGuess(kb_category, "", "knowledge base")
        return CategoryGuess(self.default_category, "", "default")

    def is_default(self, category: str) -> bool:
        return category == self.default_category
