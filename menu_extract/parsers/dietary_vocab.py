# menu_extract/parsers/dietary_vocab.py
"""
Dietary / Spice / Ingredient Vocabulary — Jaffna menus (Tamil + English)

Single source of truth for the attribute classifier's keyword sets. Every set
is split by script because matching differs:
  - english: case-insensitive, word-bounded, plural "s"/"es" accepted
  - tamil:   plain substring (Tamil vowel signs break \\b boundaries)

"curry" and "curry_heat" work as a pair: a curry word only signals spice when a
heat modifier appears in the same text.
"""

from __future__ import annotations

from typing import Dict, List

KeywordSets = Dict[str, Dict[str, List[str]]]

DIETARY_KEYWORD_SETS: KeywordSets = {
    "non_vegetarian": {
        "english": [
            "chicken", "mutton", "fish", "prawn", "shrimp", "beef", "pork",
            "crab", "meat", "lamb", "goat", "squid", "cuttlefish", "seafood",
            "lobster", "cuttle fish", "non-veg", "non veg",
        ],
        "tamil": [
            "கோழி", "ஆட்டு", "மட்டன்", "இறைச்சி", "மீன்", "இறால்",
            "நண்டு", "மாட்டு", "கணவாய்",
        ],
    },
    "vegetarian": {
        "english": ["veg", "vegetarian", "vegetable", "vegan", "paneer", "dhal", "dal"],
        "tamil": ["சைவ", "பருப்பு", "காய்கறி"],
    },
    "spicy": {
        "english": ["spicy", "hot", "chili", "chilli", "pepper", "devilled", "fiery"],
        "tamil": ["காரம்", "கார", "மிளகாய்"],
    },
    "curry": {
        "english": ["curry", "kari"],
        "tamil": ["கறி"],
    },
    "curry_heat": {
        "english": ["jaffna", "masala", "red", "black", "roast", "roasted", "devil"],
        "tamil": ["யாழ்ப்பாண", "வறுத்த"],
    },
    "halal": {
        "english": ["halal"],
        "tamil": ["ஹலால்"],
    },
    "gluten_free": {
        "english": ["gluten-free", "gluten free", "glutenfree"],
        "tamil": ["பசையம் இல்லாத"],
    },
}

# Proteins, starches, aromatics. Order here is output order.
INGREDIENT_VOCABULARY: List[str] = [
    # proteins
    "chicken", "mutton", "fish", "prawn", "crab", "beef", "egg", "squid",
    "paneer", "dhal",
    "கோழி", "மட்டன்", "மீன்", "இறால்", "நண்டு", "முட்டை",
    # starches
    "rice", "rice flour", "noodles", "kottu", "roti", "naan", "dosa",
    "potato", "சோறு", "அரிசி மா",
    # aromatics / base
    "coconut", "coconut milk", "curry leaves", "onion", "garlic", "ginger",
    "tomato", "tamarind", "cumin", "coriander", "turmeric", "chili",
    "pepper", "lime", "spices", "vegetables",
    "தேங்காய்", "வெங்காயம்", "பூண்டு", "இஞ்சி", "புளி", "கறிவேப்பிலை",
]
