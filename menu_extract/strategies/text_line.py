# menu_extract/strategies/text_line.py
"""
Text-Line strategy — one dish per priced line, section headers set category.

  Rice Dishes                               → header, active category "Rice"
  நண்டு கறி (Jaffna Crab Curry) LKR 1200     → dish line
  Hoppers ........ Rs. 80  with coconut sambol → name / price / description
  Made with rice flour and coconut milk      → description of the line above

Lines are processed in document order; a header stays active until the next
header. Dish lines seen before any header fall under the default category.
A dish line with no description of its own takes the next line as its
description when that line is neither a header nor priced. Other lines that
are neither header nor priced are dropped.

A line carrying several named prices ("Crab Curry LKR 1200 Hoppers LKR 80")
is a run-on paragraph, not a dish line; it is left to the price-pattern
fallback.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..category_infer import CategoryDetector
from ..menu_types import MenuCandidate, SourceDocument, SourceStrategy
from ..parsers.price_parser import find_price_token, has_price_token, iter_strict_prices
from .base import collapse_ws

log = logging.getLogger(__name__)

# Dot leaders, dashes, colons and bullets between name and price.
_NAME_TRAIL = " \t.…·•-–—:|_*"
_DESC_LEAD = " \t-–—:|,;"

DESCRIPTION_MIN_LENGTH = 10
DESCRIPTION_MAX_LENGTH = 200


def named_price_count(line: str) -> int:
    """Strict price tokens in the line that have some text before them."""
    count = 0
    prev_end = 0
    for pm in iter_strict_prices(line):
        if any(ch.isalpha() for ch in line[prev_end:pm.start]):
            count += 1
        prev_end = pm.end
    return count


class TextLineStrategy:
    source_strategy = SourceStrategy.TEXT_LINE

    def __init__(self, detector: CategoryDetector):
        self.detector = detector

    def _continuation(self, line: Optional[str]) -> str:
        """Description text from the line after a dish, or ""."""
        if not line:
            return ""
        if has_price_token(line) or self.detector.detect_header(line) is not None:
            return ""
        text = collapse_ws(line)
        if len(text) < DESCRIPTION_MIN_LENGTH:
            return ""
        return text[:DESCRIPTION_MAX_LENGTH].rstrip()

    def try_extract(self, source: SourceDocument) -> List[MenuCandidate]:
        out: List[MenuCandidate] = []
        active: Optional[str] = None
        lines = [ln.strip() for ln in (source.text or "").splitlines()]
        lines = [ln for ln in lines if ln]

        for i, line in enumerate(lines):
            header = self.detector.detect_header(line)
            if header is not None:
                active = header.category
                log.debug("header %r -> %s", line, active)
                continue

            pm = find_price_token(line)
            if pm is None:
                continue
            if named_price_count(line) > 1:
                log.debug("run-on line with several prices skipped: %r", line[:60])
                continue

            name = collapse_ws(line[:pm.start]).rstrip(_NAME_TRAIL)
            desc = collapse_ws(line[pm.end:]).lstrip(_DESC_LEAD).strip()
            if not name and desc:
                # "LKR 450 Chicken Kottu": price printed first
                name, desc = desc, ""
            if name and not desc and i + 1 < len(lines):
                desc = self._continuation(lines[i + 1])

            out.append(MenuCandidate(
                raw_name=name,
                raw_description=desc,
                raw_price_token=pm.token,
                category_hint=active or self.detector.default_category,
                source_strategy=self.source_strategy,
            ))

        return out
