# menu_extract/strategies/price_pattern.py
"""
Price-Pattern strategy — last resort when neither structure nor line layout
yields a named dish.

Scans the whole text for strict price tokens; whatever sits between the
previous token and this one is the dish name. OCR often breaks a name and
its price across lines, so newlines inside a segment are just whitespace.
"""

from __future__ import annotations

import logging
from typing import List

from ..config import ExtractionConfig
from ..menu_types import MenuCandidate, SourceDocument, SourceStrategy
from ..parsers.price_parser import iter_strict_prices, parse_amount
from .base import collapse_ws

log = logging.getLogger(__name__)

_SEPARATORS = " \t.…·•-–—:|_*,;/"


class PricePatternStrategy:
    source_strategy = SourceStrategy.PRICE_PATTERN

    def __init__(self, min_name_length: int = 4, max_name_length: int = 100):
        self.min_name_length = min_name_length
        self.max_name_length = max_name_length

    @classmethod
    def from_config(cls, config: ExtractionConfig) -> "PricePatternStrategy":
        return cls(config.fallback_name_min_length, config.fallback_name_max_length)

    def try_extract(self, source: SourceDocument) -> List[MenuCandidate]:
        text = source.text or ""
        out: List[MenuCandidate] = []
        prev_end = 0

        for pm in iter_strict_prices(text):
            segment = text[prev_end:pm.start]
            prev_end = pm.end

            name = collapse_ws(segment).strip(_SEPARATORS)
            if not (self.min_name_length <= len(name) <= self.max_name_length):
                log.debug("fallback: rejected name %r (length %d)", name[:40], len(name))
                continue
            amount = parse_amount(pm.token)
            if amount is None or amount <= 0:
                log.debug("fallback: rejected non-positive price %r", pm.token)
                continue

            out.append(MenuCandidate(
                raw_name=name,
                raw_description="",
                raw_price_token=pm.token,
                category_hint=None,
                source_strategy=self.source_strategy,
            ))

        return out
