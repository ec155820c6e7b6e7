# menu_extract/attribute_classifier.py
"""
Attribute Classifier — vegetarian / spicy / halal / gluten-free flags and
ingredient extraction from a dish name + description.

Pure keyword matching against ExtractionConfig vocabularies:
  - Latin-script keywords: case-insensitive, word-bounded, plural s/es allowed
    ("chili" matches "Chilies", "prawn" matches "Prawns")
  - Tamil keywords: plain substring

Vegetarian is tri-state at the text level (True / False / None). Non-veg
keywords win over veg keywords ("Vegetable Chicken Kottu" is not vegetarian).
The final item flags merge the text verdict with the knowledge base entry:

  is_vegetarian: non-veg keyword → False
                 else KB entry value (when matched)
                 else True on a veg keyword
                 else False
  is_spicy:      text verdict OR KB entry value

"curry" alone is not spicy; it counts only next to a heat word ("Jaffna",
"masala", "roast"...), since Jaffna curries are hot but a korma is not.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional, Pattern, Set, Tuple

from .config import ExtractionConfig
from .parsers.script_split import contains_tamil

if TYPE_CHECKING:  # pragma: no cover
    from .knowledge_base import DishKnowledgeEntry

TAG_HALAL = "Halal"
TAG_SPICY = "Spicy"
TAG_VEGETARIAN = "Vegetarian"
TAG_GLUTEN_FREE = "Gluten-Free"

# "Ingredients: rice flour, coconut; salt" / "Contains nuts" / "Made with dhal and onion"
LISTED_INGREDIENTS_RE = re.compile(
    r"\b(?:ingredients?|contains?|made\s+with)\b[\s:\uFF1A]*(?P<items>[^.\n]+)", re.IGNORECASE
)
_LIST_SPLIT_RE = re.compile(r"\s*[,;\u060C]\s*|\s+(?:and|&)\s+", re.IGNORECASE)
MAX_LISTED_INGREDIENTS = 10


def _latin_pattern(words: List[str]) -> Optional[Pattern[str]]:
    latin = [w.strip() for w in words if w and w.strip() and not contains_tamil(w)]
    if not latin:
        return None
    # Longest first so "cuttle fish" wins over "fish" in the alternation.
    alts = "|".join(re.escape(w) for w in sorted(latin, key=len, reverse=True))
    return re.compile(r"\b(?:" + alts + r")(?:e?s)?\b", re.IGNORECASE)


def _tamil_words(words: List[str]) -> Tuple[str, ...]:
    return tuple(w.strip() for w in words if w and w.strip() and contains_tamil(w))


def listed_ingredients(text: str) -> List[str]:
    """Items of an explicit ingredient list, split on commas, semicolons and "and"."""
    m = LISTED_INGREDIENTS_RE.search(text or "")
    if not m:
        return []
    out: List[str] = []
    for part in _LIST_SPLIT_RE.split(m.group("items")):
        item = part.strip(" \t-:()")
        if 2 < len(item) < 30:
            out.append(item)
    return out[:MAX_LISTED_INGREDIENTS]


@dataclass
class DishAttributes:
    """Text-level verdicts, before the knowledge base is consulted."""
    vegetarian: Optional[bool] = None
    spicy: bool = False
    halal: bool = False
    gluten_free: bool = False
    ingredients: List[str] = field(default_factory=list)


class AttributeClassifier:
    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or ExtractionConfig()
        self._sets: Dict[str, Tuple[Optional[Pattern[str]], Tuple[str, ...]]] = {}
        for tag, scripts in self.config.dietary_keyword_sets.items():
            words = list(scripts.get("english", [])) + list(scripts.get("tamil", []))
            self._sets[tag] = (_latin_pattern(words), _tamil_words(words))

        # Ingredient vocabulary keeps its order, so one pattern per word.
        self._ingredients: List[Tuple[str, Optional[Pattern[str]]]] = []
        for word in self.config.ingredient_vocabulary:
            w = word.strip()
            pat = None if contains_tamil(w) else re.compile(
                r"\b" + re.escape(w) + r"(?:e?s)?\b", re.IGNORECASE
            )
            self._ingredients.append((w, pat))

    # ── keyword primitives ───────────────────────────

    def has_tag(self, text: str, tag: str) -> bool:
        if not text or tag not in self._sets:
            return False
        latin, tamil = self._sets[tag]
        if latin is not None and latin.search(text):
            return True
        return any(w in text for w in tamil)

    # ── text-level verdicts ──────────────────────────

    def classify_vegetarian(self, text: str) -> Optional[bool]:
        if self.has_tag(text, "non_vegetarian"):
            return False
        if self.has_tag(text, "vegetarian"):
            return True
        return None

    def classify_spicy(self, text: str) -> bool:
        if self.has_tag(text, "spicy"):
            return True
        return self.has_tag(text, "curry") and self.has_tag(text, "curry_heat")

    def classify_halal(self, text: str) -> Optional[bool]:
        return True if self.has_tag(text, "halal") else None

    def extract_ingredients(self, text: str) -> List[str]:
        """
        Ingredients the menu lists explicitly ("Ingredients: ..."), then
        vocabulary hits in vocabulary order. Capitalized, de-duplicated.
        """
        found: List[str] = []
        seen: Set[str] = set()
        if not text:
            return found

        words = listed_ingredients(text)
        for word, pat in self._ingredients:
            hit = pat.search(text) if pat is not None else word in text
            if hit:
                words.append(word)

        for word in words:
            label = word[:1].upper() + word[1:]
            if label.casefold() in seen:
                continue
            seen.add(label.casefold())
            found.append(label)
        return found

    def classify(self, name: str, description: str = "") -> DishAttributes:
        text = " ".join(p for p in (name, description) if p)
        return DishAttributes(
            vegetarian=self.classify_vegetarian(text),
            spicy=self.classify_spicy(text),
            halal=self.has_tag(text, "halal"),
            gluten_free=self.has_tag(text, "gluten_free"),
            ingredients=self.extract_ingredients(text),
        )

    # ── final flags ──────────────────────────────────

    @staticmethod
    def final_flags(
        attrs: DishAttributes,
        entry: Optional["DishKnowledgeEntry"] = None,
    ) -> Tuple[bool, bool]:
        """(is_vegetarian, is_spicy) after merging with the KB entry."""
        if attrs.vegetarian is False:
            veg = False
        elif entry is not None:
            veg = entry.is_vegetarian
        else:
            veg = attrs.vegetarian is True
        spicy = attrs.spicy or (entry is not None and entry.is_spicy)
        return veg, spicy

    @staticmethod
    def dietary_tags(attrs: DishAttributes, is_vegetarian: bool, is_spicy: bool) -> Set[str]:
        tags: Set[str] = set()
        if attrs.halal:
            tags.add(TAG_HALAL)
        if is_spicy:
            tags.add(TAG_SPICY)
        if is_vegetarian:
            tags.add(TAG_VEGETARIAN)
        if attrs.gluten_free:
            tags.add(TAG_GLUTEN_FREE)
        return tags
