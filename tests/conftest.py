# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-12
# Updated: 2026-02-11
# Description: conftest.py
# -----------------------------------------------------------------------------

import os
import sys
from pathlib import Path

import pytest

# add project root to sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))
sys.path.insert(0, str(ROOT / "tests"))

# keep unit runs quiet and self-contained
os.environ.setdefault("SHOP_LOG_TO_FILE", "0")
os.environ.setdefault("SHOP_MOUNT_UI", "0")

from catalog.CatalogDatabase import CatalogDatabase  # noqa: E402
from catalog.CatalogStore import CatalogStore  # noqa: E402
from fakes import FakeChat, FakeEmbedder, InMemoryVectorStore  # noqa: E402
from services.InventorySyncService import InventorySyncService  # noqa: E402


@pytest.fixture
def catalog() -> CatalogStore:
    store = CatalogStore(CatalogDatabase("sqlite://"))
    store.create_schema()
    yield store
    store.db.dispose()


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def vector_store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


@pytest.fixture
def chat_client() -> FakeChat:
    return FakeChat()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def sync_service(catalog, embedder, vector_store, sleeps) -> InventorySyncService:
    return InventorySyncService(
        catalog=catalog,
        embedder=embedder,
        vector_store=vector_store,
        low_stock_threshold=5,
        sleep=sleeps.append,
    )


@pytest.fixture
def make_product(catalog):
    counter = {"n": 0}

    def _make(name: str = "Trail Running Shoe", quantity: int = 10, **kwargs):
        counter["n"] += 1
        kwargs.setdefault("sku", f"SKU-{counter['n']:04d}")
        kwargs.setdefault("price", 99.0)
        kwargs.setdefault("description", f"{name} for everyday use")
        return catalog.create_product(name=name, quantity=quantity, **kwargs)

    return _make
