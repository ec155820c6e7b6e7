"""
Confidence Scoring — blends KB match quality, strategy reliability and
structural completeness into one 0–100 score per item.

  score = match_component * strategy_weight + bonuses

  match_component  KB match confidence, or 40 for an unknown dish
  strategy_weight  structured 1.00, text-line 0.95, price-pattern 0.80
  bonuses          +5 both script names, +5 non-default category, +5 strict price
"""

from typing import Dict, Optional

from ..menu_types import SourceStrategy

NO_MATCH_BASELINE = 40.0
COMPLETENESS_BONUS = 5.0

STRATEGY_WEIGHTS: Dict[SourceStrategy, float] = {
    SourceStrategy.STRUCTURED_ELEMENT: 1.00,
    SourceStrategy.TEXT_LINE: 0.95,
    SourceStrategy.PRICE_PATTERN: 0.80,
}


def score_confidence(
    match_confidence: Optional[float],
    strategy: SourceStrategy,
    both_names: bool = False,
    non_default_category: bool = False,
    strict_price: bool = False,
) -> float:
    base = match_confidence if match_confidence is not None else NO_MATCH_BASELINE
    score = base * STRATEGY_WEIGHTS[strategy]
    if both_names:
        score += COMPLETENESS_BONUS
    if non_default_category:
        score += COMPLETENESS_BONUS
    if strict_price:
        score += COMPLETENESS_BONUS
    return round(min(max(score, 0.0), 100.0), 1)
