# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-12
# Description: test_ollama_integration.py
# -----------------------------------------------------------------------------
import os

import pytest

from chat.OllamaChat import OllamaChat
from config.Config import Config
from embedding.ProductEmbedder import ProductEmbedder


def _skip_if_missing_prereqs():
    if not os.getenv(Config.ENV_VARS["ollama_base_url"]):
        pytest.skip("OLLAMA_BASE_URL not set; skipping Ollama integration test.")


@pytest.mark.integration
def test_ollama_chat_simple_roundtrip():
    _skip_if_missing_prereqs()

    chat = OllamaChat(cfg=Config.from_env())
    resp = chat.simple_chat(
        user_text="Reply with a single word: OK",
        system_text="You are a test assistant.",
        temperature=0.0,
        max_tokens=5,
    )

    assert isinstance(resp, dict)
    assert "OK" in resp["answer"].strip().upper()


@pytest.mark.integration
def test_ollama_embedding_dimension():
    _skip_if_missing_prereqs()

    cfg = Config.from_env()
    embedder = ProductEmbedder(cfg=cfg)

    vec = embedder.embed_text("waterproof hiking boots")
    assert len(vec) == cfg.vector_dimension
