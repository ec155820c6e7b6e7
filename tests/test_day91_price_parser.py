"""
Day 91 -- LKR Price Parser & Calibration.

menu_extract/parsers/price_parser.py

Covers:
  Token detection:
  - strict tokens: LKR / Rs. / Rs / රු before the amount
  - thousands separators and decimals
  - loose suffix tokens: "1200 LKR", "1200/-"
  - no false positive on words ending in "rs" ("Burgers 500")
  - global scan returns every strict token in order

  Normalization:
  - grouping commas stripped
  - calibration factor applied (N -> N * 0.95)
  - no factor -> printed value
  - empty token -> (None, None); token without digits -> error message
  - results quantized to 2 decimal places
"""

import sys
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from menu_extract.parsers.price_parser import (
    find_bare_amount,
    find_price_token,
    is_strict_token,
    iter_strict_prices,
    normalize_price,
    parse_amount,
)

FACTOR = Decimal("0.95")


class TestFindPriceToken:
    def test_lkr_prefix(self):
        pm = find_price_token("Hoppers LKR 80")
        assert pm is not None
        assert pm.strict is True
        assert pm.amount == "80"
        assert pm.token == "LKR 80"

    def test_rs_with_dot(self):
        pm = find_price_token("String Hoppers Rs. 120")
        assert pm.token == "Rs. 120"
        assert pm.strict

    def test_rs_without_space(self):
        pm = find_price_token("Vadai Rs60")
        assert pm.amount == "60"

    def test_sinhala_rupee_sign(self):
        pm = find_price_token("கொத்து ரொட்டி රු 750")
        assert pm.strict
        assert pm.amount == "750"

    def test_thousands_and_decimals(self):
        pm = find_price_token("Seafood Platter LKR 4,250.50")
        assert pm.amount == "4,250.50"

    def test_case_insensitive_marker(self):
        assert find_price_token("Idli lkr 150").amount == "150"

    def test_suffix_lkr(self):
        pm = find_price_token("Idli 2 pcs 150 LKR")
        assert pm is not None
        assert pm.strict is False
        assert pm.amount == "150"

    def test_suffix_slash_dash(self):
        pm = find_price_token("Kottu 1200/-")
        assert pm.token == "1200/-"
        assert not pm.strict

    def test_strict_preferred_over_suffix(self):
        pm = find_price_token("Combo 2 LKR 900")
        assert pm.strict
        assert pm.amount == "900"

    def test_no_false_positive_on_words(self):
        assert find_price_token("Burgers 500") is None
        assert find_price_token("Stars 4") is None

    def test_no_token(self):
        assert find_price_token("Rice Dishes") is None
        assert find_price_token("") is None

    def test_position(self):
        text = "Fish Curry LKR 950 with rice"
        pm = find_price_token(text)
        assert text[:pm.start].strip() == "Fish Curry"
        assert text[pm.end:].strip() == "with rice"


class TestGlobalScan:
    def test_all_tokens_in_order(self):
        text = "Vadai LKR 60 Idli LKR 150\nDosa Rs. 200"
        amounts = [pm.amount for pm in iter_strict_prices(text)]
        assert amounts == ["60", "150", "200"]

    def test_suffix_tokens_ignored_by_scan(self):
        assert list(iter_strict_prices("Kottu 1200/-")) == []

    def test_bare_amount(self):
        assert find_bare_amount("  850 ").amount == "850"
        assert find_bare_amount("free") is None


class TestStrictness:
    def test_strict(self):
        assert is_strict_token("LKR 100")
        assert is_strict_token("Rs. 80")

    def test_loose(self):
        assert not is_strict_token("100/-")
        assert not is_strict_token("850")
        assert not is_strict_token("")


class TestNormalizePrice:
    @pytest.mark.parametrize("token,expected", [
        ("LKR 100", Decimal("95.00")),
        ("LKR 200", Decimal("190.00")),
        ("LKR 1,200", Decimal("1140.00")),
        ("Rs. 80", Decimal("76.00")),
        ("LKR 99", Decimal("94.05")),
    ])
    def test_calibrated(self, token, expected):
        value, err = normalize_price(token, FACTOR)
        assert err is None
        assert value == expected

    def test_uncalibrated(self):
        value, err = normalize_price("රු 450.50")
        assert err is None
        assert value == Decimal("450.50")

    def test_two_decimal_places(self):
        value, _ = normalize_price("LKR 1", FACTOR)
        assert value == Decimal("0.95")
        assert value.as_tuple().exponent == -2

    def test_empty_token(self):
        assert normalize_price("", FACTOR) == (None, None)
        assert normalize_price("   ") == (None, None)

    def test_unparseable(self):
        value, err = normalize_price("LKR", FACTOR)
        assert value is None
        assert "unable to parse" in err

    def test_parse_amount_strips_commas(self):
        assert parse_amount("LKR 12,345") == Decimal("12345")
        assert parse_amount("abc") is None
