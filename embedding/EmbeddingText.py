# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-26
# Description: EmbeddingText.py
# -----------------------------------------------------------------------------
"""
Deterministic product -> text conversion for embeddings.

The same product state always produces the same string: tags are sorted and
empty fields are dropped, so re-embedding an unchanged product yields an
identical vector.
"""
import re
from typing import Any, Iterable, List, Optional

_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^\w\s\-.,!?]")


def _clean_part(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def build_product_embedding_text(product: Any) -> str:
    """
    name, description, category, brand, tags, search keywords, SKU and price,
    space-joined. Works with ORM rows, dataclasses or anything with the
    same attribute names.
    """
    tags: Iterable[str] = getattr(product, "tags", None) or []
    price = getattr(product, "price", None)
    sku = getattr(product, "sku", None)

    parts: List[Optional[str]] = [
        _clean_part(getattr(product, "name", None)),
        _clean_part(getattr(product, "description", None)),
        _clean_part(getattr(product, "category", None)),
        _clean_part(getattr(product, "brand", None)),
        *[_clean_part(t) for t in sorted(tags)],
        _clean_part(getattr(product, "search_keywords", None)),
        f"SKU: {sku}" if sku else None,
        f"Price: ${float(price):.2f}" if price is not None else None,
    ]
    return " ".join(p for p in parts if p)


def prepare_text_for_embedding(text: str) -> str:
    """Collapse whitespace, drop unusual symbols and lower-case."""
    cleaned = _WHITESPACE.sub(" ", (text or "").strip())
    cleaned = _DISALLOWED.sub("", cleaned)
    return cleaned.lower()
