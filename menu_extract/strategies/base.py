# menu_extract/strategies/base.py
"""
Strategy interface shared by the three extraction strategies.

The extractor holds an ordered list of strategies and calls try_extract() on
each until one yields a candidate with a name. A strategy that does not apply
to the input returns an empty list.
"""

from __future__ import annotations

import re
from typing import List, Protocol

from ..menu_types import MenuCandidate, SourceDocument, SourceStrategy

_WS_RE = re.compile(r"\s+")


class ExtractionStrategy(Protocol):
    source_strategy: SourceStrategy

    def try_extract(self, source: SourceDocument) -> List[MenuCandidate]:
        ...


def has_named_candidate(candidates: List[MenuCandidate]) -> bool:
    return any(c.raw_name.strip() for c in candidates)


def collapse_ws(text: str) -> str:
    """Collapse whitespace and control characters to single spaces."""
    cleaned = "".join(" " if (ord(ch) < 32 or ord(ch) == 127) else ch for ch in text or "")
    return _WS_RE.sub(" ", cleaned).strip()
