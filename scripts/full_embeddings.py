# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-10
# Description: full_embeddings.py
# -----------------------------------------------------------------------------
"""
Rebuild product embeddings from the catalog.

    python -m scripts.full_embeddings --mode full --batch-size 5 --delay 1.0
"""
import argparse

from api.AppContainer import AppContainer
from services.InventorySyncService import SYNC_MODES
from settings import BULK_DEFAULTS
from utility.logging_utils import get_logger

logger = get_logger("scripts.full_embeddings")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a bulk product embedding sync")
    parser.add_argument("--mode", choices=SYNC_MODES, default="full")
    parser.add_argument("--batch-size", type=int, default=BULK_DEFAULTS["batch_size"])
    parser.add_argument("--delay", type=float, default=BULK_DEFAULTS["inter_batch_delay"],
                        help="seconds to wait between batches")
    parser.add_argument("--progress-every", type=int, default=BULK_DEFAULTS["progress_every"])
    return parser


def main() -> int:
    args = build_parser().parse_args()
    container = AppContainer()

    if not container.embedder.healthcheck():
        logger.error("Embedding model %s is not reachable, aborting", container.cfg.embedding_model)
        return 1

    logger.info("Initial vector count: %d", container.vector_store.count())
    result = container.sync_service.run_bulk_sync(
        args.batch_size,
        args.delay,
        mode=args.mode,
        progress_every=args.progress_every,
    )
    logger.info(result.message)
    for failure in result.failures:
        logger.warning("Failed: %s", failure)
    logger.info("Final vector count: %d", container.vector_store.count())

    return 0 if result.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
