"""
Day 95 -- Confidence Scoring, Validator & Payload Contracts.

menu_extract/scoring/confidence.py, menu_extract/contracts.py

Covers:
  Confidence:
  - no-match baseline 40 weighted by strategy
  - completeness bonuses (+5 each)
  - clamp to 100, one decimal place
  - exact match always beats no match at equal completeness

  Validator:
  - drops items with no name, missing / zero / negative price, low confidence
  - keeps Tamil-only names
  - error rows carry index + reasons
  - grouping by first-seen category, insertion order within

  Payload contracts:
  - exactly one of text / elements / html
  - element dicts converted (and rejected when malformed)
"""

import sys
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from menu_extract.contracts import (
    build_parsed_menu,
    group_by_category,
    parse_extract_payload,
    validate_menu_items,
)
from menu_extract.menu_types import ElementDescriptor, MenuItem, SourceStrategy
from menu_extract.scoring.confidence import score_confidence


def _item(name="Hoppers", price="76.00", category="Bread", confidence=80.0, tamil=""):
    return MenuItem(
        name_english=name,
        name_tamil=tamil,
        description="",
        price=Decimal(price) if price is not None else None,
        category=category,
        confidence=confidence,
    )


class TestConfidence:
    def test_no_match_baselines(self):
        assert score_confidence(None, SourceStrategy.STRUCTURED_ELEMENT) == 40.0
        assert score_confidence(None, SourceStrategy.TEXT_LINE) == 38.0
        assert score_confidence(None, SourceStrategy.PRICE_PATTERN) == 32.0

    def test_bonuses(self):
        score = score_confidence(
            None, SourceStrategy.TEXT_LINE,
            both_names=True, non_default_category=True, strict_price=True,
        )
        assert score == 53.0

    def test_clamped(self):
        assert score_confidence(95.0, SourceStrategy.STRUCTURED_ELEMENT, True, True, True) == 100.0

    def test_one_decimal(self):
        assert score_confidence(66.76, SourceStrategy.TEXT_LINE) == 63.4

    @pytest.mark.parametrize("strategy", list(SourceStrategy))
    def test_exact_beats_no_match(self, strategy):
        for flags in [(False, False, False), (True, True, True), (False, True, True)]:
            assert score_confidence(95.0, strategy, *flags) > score_confidence(None, strategy, *flags)


class TestValidator:
    def test_drops_incomplete(self):
        items = [
            _item(),
            _item(name=""),
            _item(price=None),
            _item(price="0"),
            _item(price="-5.00"),
            _item(confidence=5.0),
        ]
        clean, errors, summary = validate_menu_items(items, confidence_floor=10.0)
        assert len(clean) == 1
        assert [e["index"] for e in errors] == [1, 2, 3, 4, 5]
        assert summary == {"total": 6, "accepted": 1, "rejected": 5}

    def test_reasons(self):
        _, errors, _ = validate_menu_items([_item(name="", price="0")])
        reasons = errors[0]["errors"]
        assert any("name" in r for r in reasons)
        assert any("positive" in r for r in reasons)

    def test_tamil_only_name_kept(self):
        clean, _, _ = validate_menu_items([_item(name="", tamil="அப்பம்")])
        assert len(clean) == 1

    def test_floor_boundary(self):
        clean, _, _ = validate_menu_items([_item(confidence=10.0)], confidence_floor=10.0)
        assert len(clean) == 1

    def test_grouping_order(self):
        a = _item(name="A", category="Soup")
        b = _item(name="B", category="Bread")
        c = _item(name="C", category="Soup")
        cats = group_by_category([a, b, c])
        assert [cat.name for cat in cats] == ["Soup", "Bread"]
        assert [i.name_english for i in cats[0].items] == ["A", "C"]

    def test_build_parsed_menu(self):
        menu, rejected = build_parsed_menu(
            [_item(), _item(name="", price="0")], SourceStrategy.TEXT_LINE
        )
        assert menu.total_items == 1
        assert menu.total_categories == 1
        assert len(rejected) == 1
        d = menu.to_dict()
        assert d["strategy"] == "text_line"
        assert d["categories"][0]["items"][0]["price"] == 76.0


class TestPayloadContract:
    def test_text(self):
        assert parse_extract_payload({"text": "Hoppers LKR 80"}) == ("text", "Hoppers LKR 80", None)

    def test_html(self):
        kind, value, err = parse_extract_payload({"html": "<div></div>"})
        assert (kind, err) == ("html", None)

    def test_elements(self):
        kind, value, err = parse_extract_payload({
            "elements": [{"tag": "DIV", "attributes": {"class": "menu-item"},
                          "children": [{"tag": "h3", "text": "Vadai"}]}]
        })
        assert err is None
        assert kind == "elements"
        assert isinstance(value[0], ElementDescriptor)
        assert value[0].tag == "div"
        assert value[0].children[0].text == "Vadai"

    @pytest.mark.parametrize("payload", [
        {},
        {"text": "a", "html": "b"},
        {"text": 5},
        {"elements": "div"},
        {"elements": [{"text": "no tag"}]},
        ["text"],
    ])
    def test_rejected(self, payload):
        kind, value, err = parse_extract_payload(payload)
        assert kind is None
        assert err
