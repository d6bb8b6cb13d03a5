# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-28
# Description: MessageIntent.py
# -----------------------------------------------------------------------------
import re
from enum import Enum

SEARCH_KEYWORDS = (
    "find", "search", "looking for", "need", "want", "show me", "do you have",
    "available", "sell", "products", "items", "buy", "purchase", "browse",
)

INVENTORY_KEYWORDS = (
    "in stock", "available", "inventory", "quantity", "how many",
    "stock level", "out of stock", "sold out",
)

_VOICE_FILLERS = re.compile(r"\b(?:um+|uh+|erm+|hmm+)\b[,.]?", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")


class MessageIntent(str, Enum):
    SEARCH = "search"
    INVENTORY = "inventory"
    CHAT = "chat"


def _count_hits(text: str, keywords) -> int:
    return sum(1 for kw in keywords if kw in text)


def classify_message(message: str) -> MessageIntent:
    """
    Keyword-count intent. The larger hit count wins; a tie (including
    no hits at all) is plain chat.
    """
    text = (message or "").lower()
    search_hits = _count_hits(text, SEARCH_KEYWORDS)
    inventory_hits = _count_hits(text, INVENTORY_KEYWORDS)

    if search_hits > inventory_hits:
        return MessageIntent.SEARCH
    if inventory_hits > search_hits:
        return MessageIntent.INVENTORY
    return MessageIntent.CHAT


def normalise_voice_input(message: str) -> str:
    """Strip speech fillers ("um", "uh", ...) and collapse whitespace."""
    cleaned = _VOICE_FILLERS.sub(" ", message or "")
    return _WHITESPACE.sub(" ", cleaned).strip()
