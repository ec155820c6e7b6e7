# menu_extract/menu_types.py
"""
Menu Extraction Types — source units, candidates, items, parsed menu.

Lifecycle:
  TextBlock | [ElementDescriptor]      (produced by OCR / HTML adapters)
    → MenuCandidate                    (strategy output, transient, frozen)
    → MenuItem                         (enriched, scored)
    → Category → ParsedMenu            (validator output, returned to caller)

Python attributes are snake_case; ParsedMenu.to_dict() emits the camelCase
output contract consumed by catalog import and the review UI.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple


# ────────────────────────────────────────────────
# Raw source units
# ────────────────────────────────────────────────

@dataclass(frozen=True)
class TextBlock:
    """Multi-line, script-mixed text (OCR output or pasted menu text)."""
    text: str
    ocr_confidence: Optional[float] = None  # 0–100 mean word confidence, when OCR produced it


_HEADING_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6"}


@dataclass(frozen=True)
class ElementDescriptor:
    """
    DOM-like element: tag, own rendered text, attributes, nested children.

    `text` is the element's own text only; use full_text() for the subtree.
    """
    tag: str
    text: str = ""
    children: Tuple["ElementDescriptor", ...] = ()
    attributes: Dict[str, str] = field(default_factory=dict)

    @property
    def classes(self) -> List[str]:
        return (self.attributes.get("class") or "").split()

    @property
    def is_heading(self) -> bool:
        return self.tag.lower() in _HEADING_TAGS

    def full_text(self) -> str:
        parts = [self.text.strip()] if self.text and self.text.strip() else []
        for child in self.children:
            t = child.full_text()
            if t:
                parts.append(t)
        return " ".join(parts)

    def iter_lines(self) -> Iterator[str]:
        """Own text, then each descendant's, in document order (one per element)."""
        if self.text and self.text.strip():
            yield self.text.strip()
        for child in self.children:
            yield from child.iter_lines()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ElementDescriptor":
        """Build from the JSON shape {tag, text, attributes, children}."""
        if not isinstance(data, dict):
            raise ValueError("element descriptor must be an object")
        tag = data.get("tag")
        if not isinstance(tag, str) or not tag.strip():
            raise ValueError("element descriptor requires a non-empty 'tag'")
        attrs = data.get("attributes") or {}
        if not isinstance(attrs, dict):
            raise ValueError("'attributes' must be an object")
        children = data.get("children") or []
        if not isinstance(children, list):
            raise ValueError("'children' must be a list")
        return cls(
            tag=tag.strip().lower(),
            text=str(data.get("text") or ""),
            children=tuple(cls.from_dict(c) for c in children),
            attributes={str(k): str(v) for k, v in attrs.items()},
        )


# ────────────────────────────────────────────────
# Strategy output
# ────────────────────────────────────────────────

class SourceStrategy(str, Enum):
    STRUCTURED_ELEMENT = "structured_element"
    TEXT_LINE = "text_line"
    PRICE_PATTERN = "price_pattern"


@dataclass(frozen=True)
class MenuCandidate:
    """Unvalidated, unenriched extraction result."""
    raw_name: str
    raw_description: str
    raw_price_token: str
    category_hint: Optional[str]
    source_strategy: SourceStrategy


@dataclass(frozen=True)
class SourceDocument:
    """
    What strategies see: the text view of the input, plus the element tree when
    the caller supplied elements. `ocr_derived` decides price calibration.
    """
    text: str
    elements: Optional[Tuple[ElementDescriptor, ...]] = None
    ocr_derived: bool = False
    ocr_confidence: Optional[float] = None

    @property
    def has_elements(self) -> bool:
        return self.elements is not None


# ────────────────────────────────────────────────
# Final units
# ────────────────────────────────────────────────

@dataclass
class MenuItem:
    name_english: str
    name_tamil: str
    description: str
    price: Optional[Decimal]
    category: str
    is_vegetarian: bool = False
    is_spicy: bool = False
    is_halal: Optional[bool] = None
    dietary_tags: Set[str] = field(default_factory=set)
    ingredients: List[str] = field(default_factory=list)
    confidence: float = 0.0
    currency: str = "LKR"
    source_strategy: Optional[SourceStrategy] = None
    match_kind: Optional[str] = None  # "exact" | "partial" | "fuzzy" | None

    @property
    def display_name(self) -> str:
        return self.name_english or self.name_tamil

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nameEnglish": self.name_english,
            "nameTamil": self.name_tamil,
            "description": self.description,
            "price": float(self.price) if self.price is not None else None,
            "currency": self.currency,
            "category": self.category,
            "isVegetarian": self.is_vegetarian,
            "isSpicy": self.is_spicy,
            "isHalal": self.is_halal,
            "dietaryTags": sorted(self.dietary_tags),
            "ingredients": list(self.ingredients),
            "confidence": self.confidence,
        }


@dataclass
class Category:
    name: str
    items: List[MenuItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "items": [i.to_dict() for i in self.items]}


@dataclass
class ParsedMenu:
    categories: List[Category] = field(default_factory=list)
    strategy: Optional[SourceStrategy] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_items(self) -> int:
        return sum(len(c.items) for c in self.categories)

    @property
    def total_categories(self) -> int:
        return len(self.categories)

    def items(self) -> List[MenuItem]:
        return [i for c in self.categories for i in c.items]

    def category(self, name: str) -> Optional[Category]:
        for c in self.categories:
            if c.name == name:
                return c
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "categories": [c.to_dict() for c in self.categories],
            "totalItems": self.total_items,
            "totalCategories": self.total_categories,
            "strategy": self.strategy.value if self.strategy else None,
            "meta": dict(self.meta),
        }
