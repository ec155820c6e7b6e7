# menu_extract/contracts.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from .menu_types import Category, ElementDescriptor, MenuItem, ParsedMenu, SourceStrategy

"""
Contracts & validators for extracted menu items.

- validate_menu_items(): the last gate before a ParsedMenu leaves the pipeline.
  Items missing both names, with no / non-positive price, or under the
  confidence floor are rejected (never defaulted).
- group_by_category(): first-seen category order, document order within.
- parse_extract_payload(): shape checks for the JSON body the portal accepts.

Consumers:
- menu_extract/extractor.py
- portal/app.py
"""

ValidationError = Dict[str, Any]


# ---------------------------------------------------------------------------
# Item validation
# ---------------------------------------------------------------------------

def item_errors(item: MenuItem, confidence_floor: float) -> List[str]:
    errs: List[str] = []
    if not (item.name_english or "").strip() and not (item.name_tamil or "").strip():
        errs.append("name is required (English or Tamil)")
    if item.price is None:
        errs.append("price is missing")
    elif item.price <= 0:
        errs.append("price must be positive")
    if item.confidence < confidence_floor:
        errs.append(f"confidence {item.confidence} below floor {confidence_floor}")
    return errs


def validate_menu_items(
    items: List[MenuItem],
    confidence_floor: float = 10.0,
) -> Tuple[List[MenuItem], List[ValidationError], Dict[str, int]]:
    """
    Returns:
      (clean_items, errors, summary_dict)
    """
    clean: List[MenuItem] = []
    errors: List[ValidationError] = []

    for idx, item in enumerate(items):
        errs = item_errors(item, confidence_floor)
        if errs:
            errors.append({"index": idx, "name": item.display_name, "errors": errs})
            continue
        clean.append(item)

    summary = {
        "total": len(items),
        "accepted": len(clean),
        "rejected": len(errors),
    }
    return clean, errors, summary


def group_by_category(items: List[MenuItem]) -> List[Category]:
    buckets: Dict[str, Category] = {}
    for item in items:
        cat = buckets.get(item.category)
        if cat is None:
            cat = buckets[item.category] = Category(item.category)
        cat.items.append(item)
    return list(buckets.values())


def build_parsed_menu(
    items: List[MenuItem],
    strategy: Optional[SourceStrategy] = None,
    confidence_floor: float = 10.0,
) -> Tuple[ParsedMenu, List[ValidationError]]:
    clean, errors, summary = validate_menu_items(items, confidence_floor)
    menu = ParsedMenu(
        categories=group_by_category(clean),
        strategy=strategy,
        meta={"candidates": summary["total"], "rejected": summary["rejected"]},
    )
    return menu, errors


# ---------------------------------------------------------------------------
# Request payload shape
# ---------------------------------------------------------------------------

PAYLOAD_KINDS = ("text", "elements", "html")


def parse_extract_payload(payload: Any) -> Tuple[Optional[str], Any, Optional[str]]:
    """
    Check a POST /api/menu/extract body. Exactly one of text / elements / html.

    Returns:
      (kind | None, value | None, error_message | None)
      elements are returned as a list of ElementDescriptor.
    """
    if not isinstance(payload, dict):
        return None, None, "body must be a JSON object"

    present = [k for k in PAYLOAD_KINDS if payload.get(k) is not None]
    if len(present) != 1:
        return None, None, "provide exactly one of 'text', 'elements' or 'html'"

    kind = present[0]
    value = payload[kind]

    if kind in ("text", "html"):
        if not isinstance(value, str):
            return None, None, f"'{kind}' must be a string"
        return kind, value, None

    if not isinstance(value, list):
        return None, None, "'elements' must be a list of element objects"
    try:
        elements = [ElementDescriptor.from_dict(e) for e in value]
    except ValueError as e:
        return None, None, f"invalid element: {e}"
    return kind, elements, None
