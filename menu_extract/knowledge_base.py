# menu_extract/knowledge_base.py
"""
Dish Knowledge Base — canonical Jaffna dishes with bilingual names.

Each entry carries the Tamil and English name, the category the dish belongs to
when a menu gives no section header, and its known vegetarian / spice profile.

The KB is immutable after load and is injected into MenuExtractor; nothing in
the pipeline reaches for a global. default_knowledge_base() is a cached loader
for callers that just want the bundled data set.

Record format (JSON list):
  {"tamil": "...", "english": "...", "defaultCategory": "...",
   "isVegetarian": bool, "isSpicy": bool}
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .errors import KnowledgeBaseError

log = logging.getLogger(__name__)

DEFAULT_KB_PATH = Path(__file__).parent / "data" / "jaffna_dishes.json"


@dataclass(frozen=True)
class DishKnowledgeEntry:
    tamil: str
    english: str
    default_category: str
    is_vegetarian: bool
    is_spicy: bool

    @classmethod
    def from_record(cls, rec: Dict[str, Any], index: Optional[int] = None) -> "DishKnowledgeEntry":
        if not isinstance(rec, dict):
            raise KnowledgeBaseError("record must be an object", index)

        tamil = rec.get("tamil")
        english = rec.get("english")
        category = rec.get("defaultCategory", rec.get("default_category"))
        veg = rec.get("isVegetarian", rec.get("is_vegetarian"))
        spicy = rec.get("isSpicy", rec.get("is_spicy"))

        for label, val in (("tamil", tamil), ("english", english), ("defaultCategory", category)):
            if not isinstance(val, str) or not val.strip():
                raise KnowledgeBaseError(f"'{label}' must be a non-empty string", index)
        for label, val in (("isVegetarian", veg), ("isSpicy", spicy)):
            if not isinstance(val, bool):
                raise KnowledgeBaseError(f"'{label}' must be a boolean", index)

        return cls(
            tamil=tamil.strip(),
            english=english.strip(),
            default_category=category.strip(),
            is_vegetarian=veg,
            is_spicy=spicy,
        )


class DishKnowledgeBase:
    """Ordered, read-only collection of DishKnowledgeEntry. Safe to share across threads."""

    def __init__(self, entries: Iterable[DishKnowledgeEntry] = ()):
        self._entries: Tuple[DishKnowledgeEntry, ...] = tuple(entries)

    @classmethod
    def from_records(cls, records: Any) -> "DishKnowledgeBase":
        if not isinstance(records, list):
            raise KnowledgeBaseError("knowledge base must be a JSON list of records")
        entries = [DishKnowledgeEntry.from_record(r, i) for i, r in enumerate(records)]
        return cls(entries)

    @property
    def entries(self) -> Tuple[DishKnowledgeEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DishKnowledgeEntry]:
        return iter(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def categories(self) -> List[str]:
        """Default categories in first-seen order."""
        seen: List[str] = []
        for e in self._entries:
            if e.default_category not in seen:
                seen.append(e.default_category)
        return seen


def load_knowledge_base(path: Union[str, Path]) -> DishKnowledgeBase:
    """Load and validate a KB file. Malformed records raise KnowledgeBaseError."""
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except OSError as e:
        raise KnowledgeBaseError(f"cannot read knowledge base {p}: {e}") from e
    except json.JSONDecodeError as e:
        raise KnowledgeBaseError(f"knowledge base {p} is not valid JSON: {e}") from e

    kb = DishKnowledgeBase.from_records(data)
    log.info("Loaded %d dishes from %s", len(kb), p)
    return kb


@lru_cache(maxsize=1)
def default_knowledge_base() -> DishKnowledgeBase:
    """The bundled Jaffna dish set, loaded once per process."""
    return load_knowledge_base(DEFAULT_KB_PATH)
