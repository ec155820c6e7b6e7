# menu_extract/strategies/structured_element.py
"""
Structured-Element strategy — menu items from a DOM-like element tree.

Container discovery tries hints in priority order and uses every match of the
first hint that matches anything:
    .menu-item  .food-item  .dish  .product  [class*=menu]  [class*=food]  [class*=dish]

Hint syntax:
    .x          class token equals x
    [class*=x]  class attribute contains x
    word        tag name

Within a container the first descendant matching a name / description / price
hint (hint order, then document order) supplies that field. Category comes
from the nearest data-category on the container or an ancestor, else the
nearest heading that precedes the container or one of its ancestors.

A container without a name yields nothing. A container without a price yields
a candidate with an empty price token, which the validator rejects.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from ..menu_types import ElementDescriptor, MenuCandidate, SourceDocument, SourceStrategy
from ..parsers.price_parser import find_bare_amount, find_price_token
from .base import collapse_ws

log = logging.getLogger(__name__)

CONTAINER_HINTS: Tuple[str, ...] = (
    ".menu-item", ".food-item", ".dish", ".product",
    "[class*=menu]", "[class*=food]", "[class*=dish]",
)
NAME_HINTS: Tuple[str, ...] = (
    ".name", ".title", "h3", "h4", ".item-name", "[class*=name]", "[class*=title]",
)
DESCRIPTION_HINTS: Tuple[str, ...] = (
    ".description", ".desc", "p", ".item-desc", "[class*=description]",
)
PRICE_HINTS: Tuple[str, ...] = (
    ".price", ".amount", "[class*=price]", "[class*=cost]", "[class*=amount]",
)


def matches_hint(el: ElementDescriptor, hint: str) -> bool:
    if hint.startswith("."):
        return hint[1:] in el.classes
    if hint.startswith("[class*=") and hint.endswith("]"):
        needle = hint[len("[class*="):-1].strip("'\"")
        return needle in (el.attributes.get("class") or "")
    return el.tag.lower() == hint.lower()


# ── tree walking ─────────────────────────────────────

@dataclass(frozen=True)
class _Located:
    """An element plus its position: (siblings, index) for itself and each ancestor, root first."""
    element: ElementDescriptor
    path: Tuple[Tuple[Tuple[ElementDescriptor, ...], int], ...]

    def ancestors(self) -> List[ElementDescriptor]:
        """Self first, then parents outward."""
        return [sibs[i] for sibs, i in reversed(self.path)]

    def contains(self, other: "_Located") -> bool:
        n = len(self.path)
        if len(other.path) <= n:
            return False
        return all(a[0] is b[0] and a[1] == b[1] for a, b in zip(self.path, other.path))


def _walk(roots: Sequence[ElementDescriptor]) -> Iterator[_Located]:
    def rec(siblings, path):
        for i, el in enumerate(siblings):
            here = path + ((siblings, i),)
            yield _Located(el, here)
            yield from rec(el.children, here)
    yield from rec(tuple(roots), ())


def _descendants(el: ElementDescriptor) -> Iterator[ElementDescriptor]:
    for child in el.children:
        yield child
        yield from _descendants(child)


def _first_match(
    container: ElementDescriptor,
    hints: Sequence[str],
    exclude: Sequence[ElementDescriptor] = (),
) -> Optional[ElementDescriptor]:
    for hint in hints:
        for el in _descendants(container):
            if any(el is x for x in exclude):
                continue
            if matches_hint(el, hint) and collapse_ws(el.full_text()):
                return el
    return None


# ── strategy ─────────────────────────────────────────

class StructuredElementStrategy:
    source_strategy = SourceStrategy.STRUCTURED_ELEMENT

    def __init__(
        self,
        container_hints: Sequence[str] = CONTAINER_HINTS,
        name_hints: Sequence[str] = NAME_HINTS,
        description_hints: Sequence[str] = DESCRIPTION_HINTS,
        price_hints: Sequence[str] = PRICE_HINTS,
    ):
        self.container_hints = tuple(container_hints)
        self.name_hints = tuple(name_hints)
        self.description_hints = tuple(description_hints)
        self.price_hints = tuple(price_hints)

    def find_containers(self, roots: Sequence[ElementDescriptor]) -> List[_Located]:
        located = list(_walk(roots))
        for hint in self.container_hints:
            hits = [loc for loc in located if matches_hint(loc.element, hint)]
            if not hits:
                continue
            # Wildcard hints also hit wrappers ("menu-section"); keep the innermost.
            inner = [h for h in hits if not any(h.contains(o) for o in hits if o is not h)]
            log.debug("containers: hint %s matched %d (%d innermost)", hint, len(hits), len(inner))
            return inner
        return []

    def _price_token(self, container: ElementDescriptor, price_el: Optional[ElementDescriptor]) -> str:
        if price_el is not None:
            text = collapse_ws(price_el.full_text())
            pm = find_price_token(text) or find_bare_amount(text)
            if pm is not None:
                return pm.token
        pm = find_price_token(collapse_ws(container.full_text()))
        return pm.token if pm is not None else ""

    @staticmethod
    def _category_hint(loc: _Located) -> Optional[str]:
        for el in loc.ancestors():
            cat = el.attributes.get("data-category")
            if cat and cat.strip():
                return cat.strip()
        for siblings, idx in reversed(loc.path):
            for prev in reversed(siblings[:idx]):
                if prev.is_heading:
                    text = collapse_ws(prev.full_text())
                    if text:
                        return text
        return None

    def try_extract(self, source: SourceDocument) -> List[MenuCandidate]:
        if not source.elements:
            return []

        out: List[MenuCandidate] = []
        for loc in self.find_containers(source.elements):
            container = loc.element
            name_el = _first_match(container, self.name_hints)
            if name_el is None:
                log.debug("container <%s class=%r> has no name; skipped",
                          container.tag, container.attributes.get("class"))
                continue
            price_el = _first_match(container, self.price_hints, exclude=(name_el,))
            desc_el = _first_match(
                container, self.description_hints,
                exclude=tuple(e for e in (name_el, price_el) if e is not None),
            )

            out.append(MenuCandidate(
                raw_name=collapse_ws(name_el.full_text()),
                raw_description=collapse_ws(desc_el.full_text()) if desc_el is not None else "",
                raw_price_token=self._price_token(container, price_el),
                category_hint=self._category_hint(loc),
                source_strategy=self.source_strategy,
            ))

        return out
