# menu_extract/parsers/price_parser.py
"""
Price Parser — LKR price tokens in Tamil/English menus.

Two token shapes:
  strict:  currency marker first        "LKR 1,200"  "Rs. 80"  "රු 450.50"
  loose:   amount first, marker after   "1200 LKR"   "250/-"
A bare amount (no marker) is only trusted inside an element already marked as
a price by the structured strategy.

normalize_price() strips grouping separators, parses a Decimal and applies the
calibration factor when one is given (OCR-derived prices only).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterator, Optional, Tuple

_AMOUNT = r"\d+(?:,\d{3})*(?:\.\d{1,2})?"

STRICT_PRICE_RE = re.compile(
    r"(?<![A-Za-z])(?P<currency>LKR|Rs\.?|රු)\s*(?P<amount>" + _AMOUNT + r")(?![\d,])",
    re.IGNORECASE,
)
SUFFIX_PRICE_RE = re.compile(
    r"(?<![\d.,])(?P<amount>" + _AMOUNT + r")\s*(?:(?P<currency>LKR|Rs\.?|රු)(?![A-Za-z])|/-)",
    re.IGNORECASE,
)
BARE_AMOUNT_RE = re.compile(r"(?<![\d.,])(?P<amount>" + _AMOUNT + r")(?![\d,])")

_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class PriceMatch:
    token: str    # raw token as seen in the text
    amount: str   # digits with separators, e.g. "1,200"
    start: int
    end: int
    strict: bool


def _to_match(m: "re.Match[str]", strict: bool) -> PriceMatch:
    return PriceMatch(
        token=m.group(0).strip(),
        amount=m.group("amount"),
        start=m.start(),
        end=m.end(),
        strict=strict,
    )


def find_price_token(text: str) -> Optional[PriceMatch]:
    """First strict token in the text, else first suffix-form token."""
    if not text:
        return None
    m = STRICT_PRICE_RE.search(text)
    if m:
        return _to_match(m, strict=True)
    m = SUFFIX_PRICE_RE.search(text)
    if m:
        return _to_match(m, strict=False)
    return None


def iter_strict_prices(text: str) -> Iterator[PriceMatch]:
    """All strict tokens in document order (global scan)."""
    for m in STRICT_PRICE_RE.finditer(text or ""):
        yield _to_match(m, strict=True)


def find_bare_amount(text: str) -> Optional[PriceMatch]:
    m = BARE_AMOUNT_RE.search(text or "")
    return _to_match(m, strict=False) if m else None


def has_price_token(text: str) -> bool:
    return find_price_token(text) is not None


def is_strict_token(token: str) -> bool:
    return bool(token) and STRICT_PRICE_RE.search(token) is not None


def parse_amount(token: str) -> Optional[Decimal]:
    """Decimal value of the first amount in a token, grouping commas removed."""
    if not token:
        return None
    m = BARE_AMOUNT_RE.search(token)
    if not m:
        return None
    try:
        return Decimal(m.group("amount").replace(",", ""))
    except InvalidOperation:
        return None


def normalize_price(
    token: str,
    calibration_factor: Optional[Decimal] = None,
) -> Tuple[Optional[Decimal], Optional[str]]:
    """
    Normalize a raw price token.

    Examples (factor 0.95):
      "LKR 1,200" -> (Decimal("1140.00"), None)
      "Rs. 80"    -> (Decimal("76.00"), None)
      ""          -> (None, None)            no price supplied
      "LKR abc"   -> (None, "unable to parse price 'LKR abc'")

    Returns:
      (price | None, error_message | None)
    """
    if token is None or not str(token).strip():
        return None, None
    value = parse_amount(str(token))
    if value is None:
        return None, f"unable to parse price {token!r}"
    if calibration_factor is not None:
        value = value * calibration_factor
    return value.quantize(_CENTS, rounding=ROUND_HALF_UP), None
