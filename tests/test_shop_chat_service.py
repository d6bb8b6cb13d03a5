# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-12
# Description: test_shop_chat_service.py
# -----------------------------------------------------------------------------
import pytest

from fakes import FakeChat
from services.ShopChatService import (
    CHAT_FALLBACK_REPLY,
    INVENTORY_ERROR_REPLY,
    SEARCH_ERROR_REPLY,
    SYSTEM_PROMPT,
    ShopChatService,
    format_inventory_reply,
    format_search_reply,
)

HIT = {
    "id": "p1",
    "name": "Trail Runner 3",
    "description": "Light trail shoe",
    "price": 89.5,
    "quantity": 12,
    "category": "Footwear",
    "brand": "Acme",
    "sku": "TR-3",
    "image_url": None,
    "relevance_score": 0.87,
}


class StubSearch:
    def __init__(self, products=None, fail=False):
        self.products = products or []
        self.fail = fail
        self.queries = []

    def search(self, query, **kwargs):
        self.queries.append(query)
        if self.fail:
            raise RuntimeError("index offline")
        return {"products": self.products, "search_terms": query, "suggestions": ["shoes under $50"]}


class StubInventory:
    def __init__(self, low=None, fail=False):
        self.low = low or []
        self.fail = fail

    def check_inventory(self, **kwargs):
        if self.fail:
            raise RuntimeError("db offline")
        return {"threshold": 5, "low_stock_products": self.low}


def _service(search=None, inventory=None, chat=None, **kwargs) -> ShopChatService:
    return ShopChatService(
        search_service=search or StubSearch([HIT]),
        inventory_service=inventory or StubInventory(),
        chat_client=chat or FakeChat(),
        **kwargs,
    )


def test_search_intent_routes_to_search():
    search = StubSearch([HIT])
    out = _service(search=search).process_message("show me trail shoes")

    assert out["intent"] == "search"
    assert search.queries == ["show me trail shoes"]
    assert "Trail Runner 3" in out["response"]
    assert "$89.50" in out["response"]
    assert "Relevance: 87%" in out["response"]
    assert out["products"] == [HIT]


def test_no_results_offers_suggestions():
    out = _service(search=StubSearch([])).process_message("find unicorn saddles")

    assert 'couldn\'t find any products matching "find unicorn saddles"' in out["response"]
    assert "1. shoes under $50" in out["response"]
    assert out["products"] == []


def test_inventory_intent_lists_low_stock():
    low = [{"id": "p9", "name": "Tent Pegs", "sku": "PEG-1", "quantity": 2, "category": None}]
    out = _service(inventory=StubInventory(low)).process_message("how many left in stock?")

    assert out["intent"] == "inventory"
    assert "Tent Pegs (SKU: PEG-1) - 2 remaining" in out["response"]


def test_plain_chat_uses_system_prompt_and_history():
    chat = FakeChat(reply="Hi! What are you shopping for?")
    service = _service(chat=chat)

    out = service.process_message("hello there", session_id="s1")

    assert out["intent"] == "chat"
    assert out["response"] == "Hi! What are you shopping for?"
    sent = chat.calls[0]
    assert sent[0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert sent[-1] == {"role": "user", "content": "hello there"}
    assert [m["role"] for m in service.get_history("s1")] == ["user", "assistant"]


@pytest.mark.parametrize(
    "kwargs, message, expected",
    [
        ({"search": StubSearch(fail=True)}, "show me tents", SEARCH_ERROR_REPLY),
        ({"inventory": StubInventory(fail=True)}, "what is out of stock", INVENTORY_ERROR_REPLY),
        ({"chat": FakeChat(fail=True)}, "good morning", CHAT_FALLBACK_REPLY),
    ],
)
def test_failures_become_apologies(kwargs, message, expected):
    out = _service(**kwargs).process_message(message)
    assert out["response"] == expected


def test_voice_input_is_cleaned_before_routing():
    search = StubSearch([HIT])
    out = _service(search=search).process_message("um show me uh trail shoes", is_voice_input=True)

    assert out["intent"] == "search"
    assert search.queries == ["show me trail shoes"]


def test_history_is_trimmed():
    service = _service(history_max=4, history_keep=2)
    for text in ("hello", "how are you", "tell me a joke"):
        service.process_message(text)

    history = service.get_history()
    assert len(history) == 3
    assert history[-1]["role"] == "assistant"
    assert history[-2] == {"role": "user", "content": "tell me a joke"}


def test_sessions_are_isolated_and_clearable():
    service = _service()
    service.process_message("hello", session_id="a")
    service.process_message("hi", session_id="b")

    service.clear_history("a")

    assert service.get_history("a") == []
    assert len(service.get_history("b")) == 2


def test_oldest_session_is_evicted_past_max_sessions():
    service = _service(max_sessions=3)
    for session_id in ("a", "b", "c", "d"):
        service.process_message("hello", session_id=session_id)

    assert service.get_history("a") == []
    assert all(len(service.get_history(s)) == 2 for s in ("b", "c", "d"))


def test_recently_used_session_survives_eviction():
    service = _service(max_sessions=3)
    for session_id in ("a", "b", "c"):
        service.process_message("hello", session_id=session_id)

    service.process_message("still here", session_id="a")
    service.process_message("hello", session_id="d")

    assert service.get_history("b") == []
    assert len(service.get_history("a")) == 4
    assert len(service.get_history("c")) == 2


def test_stream_chat_yields_model_chunks():
    chat = FakeChat(reply="Sure thing")
    service = _service(chat=chat)

    chunks = list(service.stream_message("hello there"))

    assert "".join(chunks) == "Sure thing "
    assert service.get_history()[-1] == {"role": "assistant", "content": "Sure thing "}


def test_stream_tool_intent_is_one_chunk():
    chunks = list(_service().stream_message("show me trail shoes"))

    assert len(chunks) == 1
    assert "Trail Runner 3" in chunks[0]


def test_formatters_directly():
    assert format_inventory_reply({"low_stock_products": []}).startswith("All products appear to be well-stocked")
    many = {"products": [dict(HIT, id=f"p{i}") for i in range(6)], "search_terms": "shoes"}
    text = format_search_reply("shoes", many)
    assert text.startswith('I found 6 products for "shoes":')
    assert "Too many options?" in text
