# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-30
# Description: ReconcilePolicy.py
# -----------------------------------------------------------------------------
from inventory.types import EmbeddingAction


def decide_embedding_action(
        previous_quantity: int,
        new_quantity: int,
        *,
        has_embedding: bool,
        has_vector_entry: bool,
        low_stock_threshold: int,
) -> EmbeddingAction:
    """
    Decide what a quantity change means for a product's vector. First match wins:

      1. out of stock or low stock  -> REMOVE if a vector entry exists, else NONE
      2. restocked (inactive -> active) -> ADD
      3. still active and embedded  -> REFRESH
      4. otherwise                  -> NONE

    Rule 1 is a gate: a restock that lands below the threshold never ADDs.
    """
    was_active = previous_quantity > 0
    is_active = new_quantity > 0
    is_low = new_quantity < low_stock_threshold

    if not is_active or is_low:
        return EmbeddingAction.REMOVE if (has_vector_entry or has_embedding) else EmbeddingAction.NONE

    if not was_active and is_active:
        return EmbeddingAction.ADD

    if is_active and has_embedding:
        return EmbeddingAction.REFRESH

    return EmbeddingAction.NONE


def is_search_eligible(quantity: int, is_active: bool, low_stock_threshold: int) -> bool:
    """A product belongs in the vector index when active and not low on stock."""
    return bool(is_active) and quantity > 0 and quantity >= low_stock_threshold
