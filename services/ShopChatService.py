# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-28
# Updated: 2026-02-05
# Description: ShopChatService.py
# -----------------------------------------------------------------------------
import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from chat.MessageIntent import MessageIntent, classify_message, normalise_voice_input
from chat.OllamaChat import Message, OllamaChat
from services.InventoryService import InventoryService
from services.ProductSearchService import ProductSearchService
from settings import CHAT_DEFAULTS, CHAT_HISTORY_KEEP, CHAT_HISTORY_MAX, CHAT_MAX_SESSIONS, LOW_STOCK_THRESHOLD
from utility.logging_utils import get_class_logger

SYSTEM_PROMPT = """You are an intelligent ecommerce shopping assistant that helps customers find products through both voice and text interactions.

CORE CAPABILITIES:
1. Product Search: find relevant products based on customer queries
2. Inventory Information: report stock levels and availability
3. Product Recommendations: suggest alternatives and related products
4. Shopping Guidance: help customers make informed purchasing decisions

PERSONALITY & TONE:
- Friendly, helpful and professional
- Enthusiastic about products without being pushy
- Clear and concise
- Patient with questions and clarifications

HANDLING EDGE CASES:
- If no products are found: suggest similar terms or broader categories
- If there are too many results: help narrow down with filters
- If something is out of stock: offer similar alternatives
- If the customer is price sensitive: show products in different price ranges

Voice input may contain speech recognition errors; interpret it naturally."""

ERROR_REPLY = "I'm sorry, I encountered an error while processing your request. Could you please try again?"
SEARCH_ERROR_REPLY = "I'm sorry, I encountered an error while searching for products. Please try again."
INVENTORY_ERROR_REPLY = "I'm sorry, I encountered an error while checking inventory. Please try again."
CHAT_FALLBACK_REPLY = (
    "I'm here to help you find products! You can ask me about specific items, "
    "browse categories, or let me know what you're looking for."
)
STREAM_ERROR_REPLY = "I'm sorry, I encountered an error. How can I help you find products today?"


def _short(text: str, limit: int = 100) -> str:
    return text if len(text) <= limit else text[:limit - 3] + "..."


def format_search_reply(message: str, result: Dict[str, Any]) -> str:
    products = result.get("products") or []
    if not products:
        reply = f'I couldn\'t find any products matching "{message}".'
        suggestions = result.get("suggestions") or []
        if suggestions:
            reply += " Here are some suggestions you might try:\n"
            reply += "".join(f"{i}. {s}\n" for i, s in enumerate(suggestions, start=1))
        return reply

    plural = "s" if len(products) > 1 else ""
    lines = [f'I found {len(products)} product{plural} for "{result.get("search_terms") or message}":', ""]
    for i, p in enumerate(products, start=1):
        lines.append(f"**{i}. {p['name']}**")
        lines.append(f"   Price: ${p['price']:.2f}")
        lines.append(f"   Stock: {p['quantity']} available")
        if p.get("category"):
            lines.append(f"   Category: {p['category']}")
        if p.get("brand"):
            lines.append(f"   Brand: {p['brand']}")
        if p.get("description"):
            lines.append(f"   {_short(p['description'])}")
        lines.append(f"   Relevance: {p['relevance_score'] * 100:.0f}%")
        lines.append("")

    if len(products) > 5:
        lines.extend([
            "Too many options? I can help you narrow down by:",
            "- Specific brand or category",
            "- Price range",
            "- Specific features you're looking for",
        ])
    return "\n".join(lines).rstrip() + "\n"


def format_inventory_reply(result: Dict[str, Any]) -> str:
    low = result.get("low_stock_products") or []
    if not low:
        return "All products appear to be well-stocked. Is there a specific product you'd like me to check?"
    lines = ["Here are products with low stock:", ""]
    lines.extend(
        f"{i}. {p['name']} (SKU: {p['sku']}) - {p['quantity']} remaining"
        for i, p in enumerate(low, start=1)
    )
    return "\n".join(lines) + "\n"


@dataclass
class ShopChatService:
    """
    Conversational entry point. Each message is classified by keyword
    intent and routed to product search, the low-stock listing or a plain
    LLM chat. Failures turn into an apology reply; nothing is raised.
    """

    search_service: ProductSearchService
    inventory_service: InventoryService
    chat_client: OllamaChat
    history_max: int = CHAT_HISTORY_MAX
    history_keep: int = CHAT_HISTORY_KEEP
    max_sessions: int = CHAT_MAX_SESSIONS
    temperature: float = CHAT_DEFAULTS["temperature"]
    max_tokens: int = CHAT_DEFAULTS["max_tokens"]
    logger: Optional[logging.Logger] = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)
        self._histories: "OrderedDict[str, List[Message]]" = OrderedDict()
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Transcript
    # ------------------------------------------------------------------
    def get_history(self, session_id: str = "default") -> List[Message]:
        with self._lock:
            return list(self._histories.get(session_id, []))

    def clear_history(self, session_id: str = "default") -> None:
        with self._lock:
            self._histories.pop(session_id, None)

    def _append(self, session_id: str, role: str, content: str) -> List[Message]:
        with self._lock:
            history = self._histories.setdefault(session_id, [])
            self._histories.move_to_end(session_id)
            history.append({"role": role, "content": content})
            if len(history) > self.history_max:
                del history[:-self.history_keep]
            while len(self._histories) > self.max_sessions:
                evicted, _ = self._histories.popitem(last=False)
                self.logger.debug("Evicted chat session %s (max_sessions=%d)", evicted, self.max_sessions)
            return list(history)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------
    def _handle_search(self, message: str) -> Tuple[str, List[Dict[str, Any]]]:
        try:
            result = self.search_service.search(message, max_results=10, in_stock_only=True)
        except Exception as e:
            self.logger.error("Product search from chat failed: %s", e, exc_info=True)
            return SEARCH_ERROR_REPLY, []
        return format_search_reply(message, result), result.get("products") or []

    def _handle_inventory(self) -> str:
        try:
            result = self.inventory_service.check_inventory(threshold=LOW_STOCK_THRESHOLD)
        except Exception as e:
            self.logger.error("Inventory check from chat failed: %s", e, exc_info=True)
            return INVENTORY_ERROR_REPLY
        return format_inventory_reply(result)

    def _handle_chat(self, history: List[Message]) -> str:
        try:
            return self.chat_client.complete(
                history,
                system_text=SYSTEM_PROMPT,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            self.logger.error("General chat failed: %s", e, exc_info=True)
            return CHAT_FALLBACK_REPLY

    def _prepare(self, message: str, is_voice_input: bool) -> str:
        text = (message or "").strip()
        if is_voice_input:
            text = normalise_voice_input(text)
        return text

    def process_message(
            self,
            message: str,
            *,
            is_voice_input: bool = False,
            session_id: str = "default",
    ) -> Dict[str, Any]:
        intent = MessageIntent.CHAT
        products: List[Dict[str, Any]] = []
        try:
            text = self._prepare(message, is_voice_input)
            intent = classify_message(text)
            self.logger.info("Chat message (session=%s, voice=%s) intent=%s", session_id, is_voice_input, intent.value)

            history = self._append(session_id, "user", text)
            if intent == MessageIntent.SEARCH:
                reply, products = self._handle_search(text)
            elif intent == MessageIntent.INVENTORY:
                reply = self._handle_inventory()
            else:
                reply = self._handle_chat(history)

            self._append(session_id, "assistant", reply)
        except Exception as e:
            self.logger.exception("process_message failed: %s", e)
            reply = ERROR_REPLY

        return {
            "response": reply,
            "intent": intent.value,
            "session_id": session_id,
            "products": products,
        }

    def stream_message(
            self,
            message: str,
            *,
            is_voice_input: bool = False,
            session_id: str = "default",
    ) -> Iterator[str]:
        """
        Yield reply chunks. Tool-backed intents produce a single chunk;
        plain chat streams token deltas from the model.
        """
        text = self._prepare(message, is_voice_input)
        if classify_message(text) != MessageIntent.CHAT:
            yield self.process_message(text, session_id=session_id)["response"]
            return

        history = self._append(session_id, "user", text)
        parts: List[str] = []
        try:
            stream = self.chat_client.chat_stream(
                OllamaChat.with_system(history, SYSTEM_PROMPT),
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
            for chunk in stream:
                parts.append(chunk)
                yield chunk
        except Exception as e:
            self.logger.error("Streaming chat failed: %s", e, exc_info=True)
            parts = [STREAM_ERROR_REPLY]
            yield STREAM_ERROR_REPLY

        self._append(session_id, "assistant", "".join(parts))
