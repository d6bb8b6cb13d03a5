# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: SearchIntent.py
# -----------------------------------------------------------------------------
"""
Heuristic search-intent extraction.

Pulls price bounds, a known category and a known brand out of a free-text
shopping query, and returns the remaining text as the semantic search terms.
Known categories/brands come from the catalog, so extraction only ever
proposes values that exist.
"""
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

_NUM = r"(\d{1,3}(?:,\d{3})+(?:\.\d{1,2})?|\d+(?:\.\d{1,2})?)"

_BETWEEN = re.compile(rf"\bbetween\s+\$?{_NUM}\s+(?:and|to)\s+\$?{_NUM}(?:\s*dollars?)?", re.IGNORECASE)
_RANGE = re.compile(rf"\${_NUM}\s*(?:-|to)\s*\$?{_NUM}", re.IGNORECASE)
_UNDER = re.compile(
    rf"\b(?:under|below|less\s+than|cheaper\s+than|up\s+to|no\s+more\s+than|max(?:imum)?)\s+\$?{_NUM}(?:\s*dollars?)?",
    re.IGNORECASE,
)
_OVER = re.compile(
    rf"\b(?:over|above|more\s+than|at\s+least|min(?:imum)?)\s+\$?{_NUM}(?:\s*dollars?)?",
    re.IGNORECASE,
)

_FILLER_PREFIXES = re.compile(
    r"^(?:(?:can|could)\s+you\s+)?(?:please\s+)?"
    r"(?:show\s+me|find\s+me|find|search\s+for|i'?m\s+looking\s+for|i\s+am\s+looking\s+for|looking\s+for|"
    r"i\s+need|i\s+want|do\s+you\s+have|do\s+you\s+sell|get\s+me)\s+(?:some\s+|any\s+|a\s+|an\s+)?",
    re.IGNORECASE,
)
_WHITESPACE = re.compile(r"\s+")
_TRAILING_PUNCT = re.compile(r"[\s?!.,;:]+$")


@dataclass
class SearchIntent:
    search_terms: str
    category: Optional[str] = None
    brand: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None

    @property
    def has_price_range(self) -> bool:
        return self.min_price is not None or self.max_price is not None


def _price(raw: str) -> float:
    return float(raw.replace(",", ""))


def _extract_price(text: str) -> Tuple[Optional[float], Optional[float], str]:
    """Returns (min, max, text with the price phrases removed)."""
    m = _BETWEEN.search(text) or _RANGE.search(text)
    if m:
        low, high = sorted((_price(m.group(1)), _price(m.group(2))))
        return low, high, text[:m.start()] + " " + text[m.end():]

    min_price: Optional[float] = None
    max_price: Optional[float] = None
    m = _UNDER.search(text)
    if m:
        max_price = _price(m.group(1))
        text = text[:m.start()] + " " + text[m.end():]
    m = _OVER.search(text)
    if m:
        min_price = _price(m.group(1))
        text = text[:m.start()] + " " + text[m.end():]
    return min_price, max_price, text


def _name_variants(name: str) -> List[str]:
    lowered = name.lower().strip()
    variants = {lowered, f"{lowered}s"}
    if lowered.endswith("s") and len(lowered) > 3:
        variants.add(lowered[:-1])
    return sorted(variants, key=len, reverse=True)


def match_known_value(text: str, known: Iterable[str]) -> Optional[str]:
    """Longest known value mentioned in `text` on word boundaries (case-insensitive)."""
    lowered = text.lower()
    for name in sorted((k for k in known if k and k.strip()), key=len, reverse=True):
        for variant in _name_variants(name):
            if re.search(rf"(?<!\w){re.escape(variant)}(?!\w)", lowered):
                return name
    return None


def clean_search_terms(text: str) -> str:
    cleaned = _WHITESPACE.sub(" ", text).strip()
    cleaned = _FILLER_PREFIXES.sub("", cleaned)
    cleaned = _TRAILING_PUNCT.sub("", cleaned)
    return cleaned.strip()


def extract_search_intent(
        query: str,
        *,
        categories: Iterable[str] = (),
        brands: Iterable[str] = (),
) -> SearchIntent:
    min_price, max_price, remainder = _extract_price(query or "")
    terms = clean_search_terms(remainder) or (query or "").strip()
    return SearchIntent(
        search_terms=terms,
        category=match_known_value(query or "", categories),
        brand=match_known_value(query or "", brands),
        min_price=min_price,
        max_price=max_price,
    )


def build_suggestions(
        query: str,
        *,
        categories: List[str],
        brands: List[str],
        has_category: bool,
        has_brand: bool,
        has_price_range: bool,
        limit: int = 5,
) -> List[str]:
    """Alternative queries to offer when a search comes back thin."""
    q = (query or "").strip()
    suggestions: List[str] = []
    if not has_category:
        suggestions.extend(f"{q} in {cat}" for cat in categories[:3])
    if not has_brand:
        suggestions.extend(f"{brand} {q}" for brand in brands[:2])
    if not has_price_range:
        suggestions.extend([f"{q} under $50", f"{q} under $100", f"affordable {q}"])
    return suggestions[:limit]
