# menu_extract/config.py
"""
Extraction configuration — every business vocabulary and tuning constant the
pipeline uses, injectable per extractor instance.

Defaults come from parsers/category_vocab.py and parsers/dietary_vocab.py.
Overrides come from a JSON file (camelCase keys, same names as the output
contract) passed to load_config() or named by MENU_EXTRACT_CONFIG.

Load-time validation is strict: a wrong type or unknown keyword-set tag raises
ConfigError immediately rather than surfacing mid-extraction.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .errors import ConfigError
from .parsers.category_vocab import CATEGORY_HEADER_TABLE, DEFAULT_CATEGORY
from .parsers.dietary_vocab import (
    DIETARY_KEYWORD_SETS,
    INGREDIENT_VOCABULARY,
    KeywordSets,
)

log = logging.getLogger(__name__)

CONFIG_ENV_VAR = "MENU_EXTRACT_CONFIG"

REQUIRED_KEYWORD_TAGS = (
    "vegetarian", "non_vegetarian", "spicy", "halal", "gluten_free",
    "curry", "curry_heat",
)


@dataclass
class ExtractionConfig:
    price_calibration_factor: Decimal = Decimal("0.95")
    confidence_floor: float = 10.0
    category_header_table: Dict[str, str] = field(
        default_factory=lambda: dict(CATEGORY_HEADER_TABLE)
    )
    ingredient_vocabulary: List[str] = field(
        default_factory=lambda: list(INGREDIENT_VOCABULARY)
    )
    dietary_keyword_sets: KeywordSets = field(
        default_factory=lambda: copy.deepcopy(DIETARY_KEYWORD_SETS)
    )
    default_category: str = DEFAULT_CATEGORY
    header_max_length: int = 40
    header_max_words: int = 5
    fallback_name_min_length: int = 4
    fallback_name_max_length: int = 100

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if not isinstance(self.price_calibration_factor, Decimal):
            try:
                self.price_calibration_factor = Decimal(str(self.price_calibration_factor))
            except (InvalidOperation, ValueError):
                raise ConfigError(
                    f"priceCalibrationFactor must be numeric, got {self.price_calibration_factor!r}"
                )
        if self.price_calibration_factor <= 0:
            raise ConfigError("priceCalibrationFactor must be positive")

        if isinstance(self.confidence_floor, bool) or not isinstance(self.confidence_floor, (int, float)):
            raise ConfigError("confidenceFloor must be a number")
        if not 0 <= self.confidence_floor <= 100:
            raise ConfigError("confidenceFloor must be within 0-100")

        table = self.category_header_table
        if not isinstance(table, dict) or not table:
            raise ConfigError("categoryHeaderTable must be a non-empty mapping")
        for k, v in table.items():
            if not isinstance(k, str) or not k.strip() or not isinstance(v, str) or not v.strip():
                raise ConfigError(f"categoryHeaderTable entry {k!r} -> {v!r} must map text to text")

        vocab = self.ingredient_vocabulary
        if not isinstance(vocab, list) or not all(isinstance(w, str) and w.strip() for w in vocab):
            raise ConfigError("ingredientVocabulary must be a list of non-empty strings")

        sets = self.dietary_keyword_sets
        if not isinstance(sets, dict):
            raise ConfigError("dietaryKeywordSets must be a mapping")
        missing = [t for t in REQUIRED_KEYWORD_TAGS if t not in sets]
        if missing:
            raise ConfigError(f"dietaryKeywordSets missing tags: {', '.join(missing)}")
        for tag, scripts in sets.items():
            if not isinstance(scripts, dict):
                raise ConfigError(f"dietaryKeywordSets[{tag!r}] must be an object")
            for script in ("english", "tamil"):
                words = scripts.get(script, [])
                if not isinstance(words, list) or not all(isinstance(w, str) for w in words):
                    raise ConfigError(f"dietaryKeywordSets[{tag!r}][{script!r}] must be a list of strings")

        if not isinstance(self.default_category, str) or not self.default_category.strip():
            raise ConfigError("defaultCategory must be a non-empty string")
        for name in ("header_max_length", "header_max_words",
                     "fallback_name_min_length", "fallback_name_max_length"):
            val = getattr(self, name)
            if isinstance(val, bool) or not isinstance(val, int) or val <= 0:
                raise ConfigError(f"{name} must be a positive integer")
        if self.fallback_name_min_length > self.fallback_name_max_length:
            raise ConfigError("fallbackNameMinLength exceeds fallbackNameMaxLength")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtractionConfig":
        """Build from camelCase (or snake_case) keys over the defaults."""
        if not isinstance(data, dict):
            raise ConfigError("config must be a JSON object")
        kwargs: Dict[str, Any] = {}
        unknown: List[str] = []
        for key, value in data.items():
            attr = _CONFIG_KEYS.get(key) or (key if key in _CONFIG_KEYS.values() else None)
            if attr is None:
                unknown.append(key)
                continue
            kwargs[attr] = value
        if unknown:
            raise ConfigError(f"unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**kwargs)


_CONFIG_KEYS: Dict[str, str] = {
    "priceCalibrationFactor": "price_calibration_factor",
    "confidenceFloor": "confidence_floor",
    "categoryHeaderTable": "category_header_table",
    "ingredientVocabulary": "ingredient_vocabulary",
    "dietaryKeywordSets": "dietary_keyword_sets",
    "defaultCategory": "default_category",
    "headerMaxLength": "header_max_length",
    "headerMaxWords": "header_max_words",
    "fallbackNameMinLength": "fallback_name_min_length",
    "fallbackNameMaxLength": "fallback_name_max_length",
}


def load_config(path: Optional[Union[str, Path]] = None) -> ExtractionConfig:
    """
    Load config overrides from JSON.

    Resolution: explicit path → $MENU_EXTRACT_CONFIG → built-in defaults.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or None
    if path is None:
        return ExtractionConfig()

    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read config file {p}: {e}") from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"config file {p} is not valid JSON: {e}") from e

    cfg = ExtractionConfig.from_dict(data)
    log.info("Loaded extraction config overrides from %s (%d keys)", p, len(data))
    return cfg
