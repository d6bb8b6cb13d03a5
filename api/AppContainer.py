# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Updated: 2026-02-09
# Description: AppContainer.py
# -----------------------------------------------------------------------------
from functools import lru_cache

from catalog.CatalogDatabase import CatalogDatabase
from catalog.CatalogStore import CatalogStore
from chat.OllamaChat import OllamaChat
from config.Config import Config
from embedding.ProductEmbedder import ProductEmbedder
from health.TestRunner import TestRunner
from services.CatalogService import CatalogService
from services.HealthService import HealthService
from services.InventoryService import InventoryService
from services.InventorySyncService import InventorySyncService
from services.ProductSearchService import ProductSearchService
from services.ShopChatService import ShopChatService
from settings import RECOVER_STALE_JOBS_ON_STARTUP, STALE_JOB_MINUTES
from utility.logging_utils import get_class_logger
from vectorstore.ChromaProductVectorStore import ChromaProductVectorStore


class AppContainer:
    """
    Owns heavy object instantiation and application wiring.
    Singleton instances are provided via FastAPI dependencies.
    """

    def __init__(self, cfg: Config | None = None) -> None:
        self.logger = get_class_logger(self.__class__)

        # Configuration
        self.cfg = cfg or Config.from_env()
        self.logger.info("Configuration: %s", self.cfg.summary())

        # Core infrastructure
        self.database = CatalogDatabase(self.cfg.database_url)
        self.catalog = CatalogStore(self.database)
        self.catalog.create_schema()

        self.embedder = ProductEmbedder(cfg=self.cfg)
        self.vector_store = ChromaProductVectorStore(cfg=self.cfg)
        self.ollama_chat = OllamaChat(cfg=self.cfg)

        # Smoke tests / health
        self.test_runner = TestRunner(
            catalog=self.catalog,
            vector_store=self.vector_store,
            embedder=self.embedder,
            chat_client=self.ollama_chat,
        )
        self.health_service = HealthService(test_runner=self.test_runner)

        # Embedding lifecycle
        self.sync_service = InventorySyncService(
            catalog=self.catalog,
            embedder=self.embedder,
            vector_store=self.vector_store,
        )

        self.inventory_service = InventoryService(
            catalog=self.catalog,
            sync_service=self.sync_service,
            chat_client=self.ollama_chat,
        )

        self.search_service = ProductSearchService(
            catalog=self.catalog,
            embedder=self.embedder,
            vector_store=self.vector_store,
        )

        self.catalog_service = CatalogService(
            catalog=self.catalog,
            sync_service=self.sync_service,
        )

        self.chat_service = ShopChatService(
            search_service=self.search_service,
            inventory_service=self.inventory_service,
            chat_client=self.ollama_chat,
        )

        # A process that died mid-run leaves its bulk job RUNNING forever
        if RECOVER_STALE_JOBS_ON_STARTUP:
            self.sync_service.recover_stale_jobs(STALE_JOB_MINUTES)


@lru_cache
def get_app_container() -> AppContainer:
    # Built on first use so importing the API does not connect to anything
    return AppContainer()
