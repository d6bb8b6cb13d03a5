# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-10
# Description: seed.py
# -----------------------------------------------------------------------------
"""
Load the sample catalog into the configured database.

    python -m scripts.seed            # catalog rows only
    python -m scripts.seed --embed    # then run an incremental embedding sync
"""
import argparse
from typing import Any, Dict, Iterable, Tuple

from catalog.CatalogDatabase import CatalogDatabase
from catalog.CatalogStore import CatalogStore
from config.Config import Config
from scripts.sample_products import SAMPLE_PRODUCTS
from utility.logging_utils import get_logger

logger = get_logger("scripts.seed")


def seed_catalog(catalog: CatalogStore, products: Iterable[Dict[str, Any]]) -> Tuple[int, int]:
    """Create each product unless its SKU already exists. Returns (created, skipped)."""
    created = skipped = 0
    for data in products:
        if catalog.get_product_by_sku(data["sku"]) is not None:
            logger.info("Skipping existing product: %s", data["name"])
            skipped += 1
            continue
        product = catalog.create_product(**data)
        logger.info("Created product: %s (id=%s)", product.name, product.id)
        created += 1
    return created, skipped


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the product catalog with sample data")
    parser.add_argument("--embed", action="store_true", help="run an incremental embedding sync afterwards")
    args = parser.parse_args()

    cfg = Config.from_env()
    catalog = CatalogStore(CatalogDatabase(cfg.database_url))
    catalog.create_schema()

    created, skipped = seed_catalog(catalog, SAMPLE_PRODUCTS)
    logger.info("Seeding summary: created=%d skipped=%d total=%d", created, skipped, len(SAMPLE_PRODUCTS))

    if args.embed:
        # Imported here so a plain seed does not need Ollama or Chroma
        from api.AppContainer import AppContainer

        result = AppContainer(cfg).sync_service.run_bulk_sync(mode="incremental")
        logger.info(result.message)
        return 0 if result.success else 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
