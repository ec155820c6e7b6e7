# menu_extract/parsers/category_vocab.py
"""
Category Header Vocabulary — Jaffna menus (Tamil + English)

Single source of truth for section-header detection and header → canonical
category mapping. Used by category_infer.py and as the default for
ExtractionConfig.category_header_table.

Tamil keys are matched as substrings, Latin keys as whole words
(case-insensitive, plural s/es allowed). Table order decides, so more specific
keys must come before the shorter keys they contain
("main course" before "main", "curries" before "curry").
"""

from __future__ import annotations

from typing import Dict

DEFAULT_CATEGORY = "Main Course"

CATEGORY_HEADER_TABLE: Dict[str, str] = {
    # English
    "rice": "Rice",
    "biryani": "Rice",
    "breakfast": "Breakfast",
    "bread": "Bread",
    "hoppers": "Bread",
    "roti": "Bread",
    "kottu": "Kottu",
    "koththu": "Kottu",
    "noodles": "Noodles",
    "soup": "Soup",
    "curries": "Curries",
    "curry": "Curries",
    "seafood": "Seafood",
    "appetizer": "Appetizers",
    "starter": "Appetizers",
    "short eats": "Snacks",
    "snack": "Snacks",
    "main course": "Main Course",
    "mains": "Main Course",
    "dessert": "Dessert",
    "sweets": "Dessert",
    "dairy": "Dairy",
    "beverage": "Beverage",
    "drinks": "Beverage",
    "juice": "Beverage",
    # Tamil
    "சோறு": "Rice",
    "பிரியாணி": "Rice",
    "காலை": "Breakfast",
    "ரொட்டி": "Bread",
    "கொத்து": "Kottu",
    "சூப்": "Soup",
    "கறி": "Curries",
    "கடல் உணவு": "Seafood",
    "சிற்றுண்டி": "Snacks",
    "இனிப்பு": "Dessert",
    "பானம்": "Beverage",
    "பானங்கள்": "Beverage",
}
