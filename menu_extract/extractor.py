# menu_extract/extractor.py
"""
Extraction Orchestrator — raw menu content in, validated ParsedMenu out.

Usage:
    from menu_extract.extractor import MenuExtractor
    from menu_extract.knowledge_base import default_knowledge_base

    extractor = MenuExtractor(default_knowledge_base())
    menu = extractor.extract(text="Rice Dishes\\nநண்டு கறி (Jaffna Crab Curry) LKR 1200")
    menu.to_dict()   # {"categories": [...], "totalItems": 1, ...}

Flow per document:
  1. Strategies in priority order (structured → text-line → price-pattern);
     the first that yields a named candidate wins, the rest never run.
  2. Each candidate is enriched: price normalized, names split by script,
     KB match, attributes, category, confidence.
  3. Validator drops incomplete / low-confidence items and groups the rest.

Text input is treated as OCR output and its prices are calibrated by
config.price_calibration_factor. Element input (scraped HTML) is not.

The extractor holds no per-call state; one instance can serve many threads.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Union

from .attribute_classifier import AttributeClassifier
from .category_infer import CategoryDetector
from .config import ExtractionConfig
from .contracts import build_parsed_menu
from .errors import ContractViolation
from .knowledge_base import DishKnowledgeBase, default_knowledge_base
from .mappers.dish_matcher import DishMatcher
from .menu_types import (
    ElementDescriptor,
    MenuCandidate,
    MenuItem,
    ParsedMenu,
    SourceDocument,
    TextBlock,
)
from .parsers.price_parser import is_strict_token, normalize_price
from .parsers.script_split import split_scripts
from .scoring.confidence import score_confidence
from .strategies.base import ExtractionStrategy, collapse_ws, has_named_candidate
from .strategies.price_pattern import PricePatternStrategy
from .strategies.structured_element import StructuredElementStrategy
from .strategies.text_line import TextLineStrategy

log = logging.getLogger(__name__)

TextInput = Union[str, TextBlock]
ElementsInput = Union[ElementDescriptor, Sequence[ElementDescriptor]]


class MenuExtractor:
    def __init__(
        self,
        knowledge_base: Optional[DishKnowledgeBase] = None,
        config: Optional[ExtractionConfig] = None,
        strategies: Optional[Sequence[ExtractionStrategy]] = None,
    ):
        self.config = config or ExtractionConfig()
        self.knowledge_base = knowledge_base if knowledge_base is not None else default_knowledge_base()
        self.detector = CategoryDetector.from_config(self.config)
        self.classifier = AttributeClassifier(self.config)
        self.matcher = DishMatcher(self.knowledge_base)
        if strategies is None:
            strategies = (
                StructuredElementStrategy(),
                TextLineStrategy(self.detector),
                PricePatternStrategy.from_config(self.config),
            )
        self.strategies: List[ExtractionStrategy] = list(strategies)

    # ── input handling ───────────────────────────────

    @staticmethod
    def _source_document(
        text: Optional[TextInput],
        elements: Optional[ElementsInput],
    ) -> SourceDocument:
        if (text is None) == (elements is None):
            raise ContractViolation("supply exactly one of 'text' or 'elements'")

        if text is not None:
            block = text if isinstance(text, TextBlock) else TextBlock(str(text))
            return SourceDocument(
                text=block.text or "",
                ocr_derived=True,
                ocr_confidence=block.ocr_confidence,
            )

        if isinstance(elements, ElementDescriptor):
            elements = (elements,)
        roots = tuple(elements)
        for el in roots:
            if not isinstance(el, ElementDescriptor):
                raise ContractViolation(f"elements must be ElementDescriptor, got {type(el).__name__}")
        lines = [line for el in roots for line in el.iter_lines()]
        return SourceDocument(text="\n".join(lines), elements=roots)

    # ── enrichment ───────────────────────────────────

    def enrich(self, cand: MenuCandidate, source: SourceDocument) -> Optional[MenuItem]:
        """Turn one candidate into a scored MenuItem; None when its price cannot be parsed."""
        factor = self.config.price_calibration_factor if source.ocr_derived else None
        price, err = normalize_price(cand.raw_price_token, factor)
        if err:
            log.debug("dropping %r: %s", cand.raw_name, err)
            return None

        tamil, english = split_scripts(cand.raw_name)
        match = self.matcher.match_any(tamil, english, cand.raw_name)
        entry = match.entry if match is not None else None
        if match is not None:
            if match.is_exact:
                english, tamil = match.canonical_english, match.canonical_tamil
            else:
                english = english or match.canonical_english
                tamil = tamil or match.canonical_tamil

        name_text = " ".join(p for p in (cand.raw_name, english, tamil) if p)
        attrs = self.classifier.classify(name_text, cand.raw_description)
        is_veg, is_spicy = self.classifier.final_flags(attrs, entry)

        category = self.detector.resolve(
            cand.category_hint, entry.default_category if entry is not None else None
        ).category

        confidence = score_confidence(
            match.match_confidence if match is not None else None,
            cand.source_strategy,
            both_names=bool(english and tamil),
            non_default_category=not self.detector.is_default(category),
            strict_price=is_strict_token(cand.raw_price_token),
        )

        return MenuItem(
            name_english=english,
            name_tamil=tamil,
            description=collapse_ws(cand.raw_description),
            price=price,
            category=category,
            is_vegetarian=is_veg,
            is_spicy=is_spicy,
            is_halal=True if attrs.halal else None,
            dietary_tags=self.classifier.dietary_tags(attrs, is_veg, is_spicy),
            ingredients=attrs.ingredients,
            confidence=confidence,
            source_strategy=cand.source_strategy,
            match_kind=match.kind if match is not None else None,
        )

    # ── entry point ──────────────────────────────────

    def extract(
        self,
        text: Optional[TextInput] = None,
        elements: Optional[ElementsInput] = None,
    ) -> ParsedMenu:
        source = self._source_document(text, elements)
        meta = {"input": "elements" if source.has_elements else "text"}
        if source.ocr_confidence is not None:
            meta["ocrConfidence"] = source.ocr_confidence

        if not source.text.strip() and not source.elements:
            log.info("Empty input; nothing to extract")
            return ParsedMenu(meta=meta)

        winner = None
        candidates: List[MenuCandidate] = []
        for strategy in self.strategies:
            found = strategy.try_extract(source)
            if has_named_candidate(found):
                winner, candidates = strategy.source_strategy, found
                break
            log.debug("strategy %s yielded no named candidate", strategy.source_strategy.value)

        if winner is None:
            log.info("No strategy produced candidates")
            return ParsedMenu(meta=meta)

        items: List[MenuItem] = []
        for cand in candidates:
            item = self.enrich(cand, source)
            if item is not None:
                items.append(item)

        menu, rejected = build_parsed_menu(items, winner, self.config.confidence_floor)
        for rej in rejected:
            log.debug("rejected item %d (%s): %s", rej["index"], rej["name"], "; ".join(rej["errors"]))
        menu.meta.update(meta)
        menu.meta["candidates"] = len(candidates)
        menu.meta["rejected"] = len(candidates) - menu.total_items

        log.info(
            "Extracted %d items in %d categories via %s (%d candidates)",
            menu.total_items, menu.total_categories, winner.value, len(candidates),
        )
        return menu


def extract_menu(
    text: Optional[TextInput] = None,
    elements: Optional[ElementsInput] = None,
    knowledge_base: Optional[DishKnowledgeBase] = None,
    config: Optional[ExtractionConfig] = None,
) -> ParsedMenu:
    """One-shot helper: build an extractor and run it once."""
    return MenuExtractor(knowledge_base, config).extract(text=text, elements=elements)
