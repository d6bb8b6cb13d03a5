# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-26
# Description: errors.py
# -----------------------------------------------------------------------------


class EmbeddingError(RuntimeError):
    """Embedding provider returned nothing usable (empty, wrong size, or failed after retries)."""


class InsufficientEmbeddingText(EmbeddingError):
    def __init__(self, product_id: str, length: int, minimum: int):
        super().__init__(
            f"Product {product_id}: embedding text has {length} chars, need at least {minimum}"
        )
        self.product_id = product_id
