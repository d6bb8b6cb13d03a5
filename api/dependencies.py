# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-02-09
# Description: dependencies.py
# -----------------------------------------------------------------------------
from api.AppContainer import get_app_container
from config.Config import Config
from services.CatalogService import CatalogService
from services.HealthService import HealthService
from services.InventoryService import InventoryService
from services.InventorySyncService import InventorySyncService
from services.ProductSearchService import ProductSearchService
from services.ShopChatService import ShopChatService


def get_cfg() -> Config:
    return get_app_container().cfg


def get_health_service() -> HealthService:
    # use the singleton service from the container
    return get_app_container().health_service


def get_chat_service() -> ShopChatService:
    return get_app_container().chat_service


def get_search_service() -> ProductSearchService:
    return get_app_container().search_service


def get_inventory_service() -> InventoryService:
    return get_app_container().inventory_service


def get_sync_service() -> InventorySyncService:
    return get_app_container().sync_service


def get_catalog_service() -> CatalogService:
    return get_app_container().catalog_service
