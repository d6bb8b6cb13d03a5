# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-30
# Description: types.py
# -----------------------------------------------------------------------------
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class EmbeddingAction(str, Enum):
    NONE = "none"
    ADD = "add"
    REFRESH = "refresh"
    REMOVE = "remove"


@dataclass
class ReconcileOutcome:
    product_id: str
    action: EmbeddingAction
    applied: bool = False
    vector_id: Optional[str] = None
    job_id: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["action"] = self.action.value
        return d


@dataclass
class BulkSyncResult:
    """
    Counters for one bulk run.

    processed == successful + failed + skipped, and processed == total
    unless the run was aborted (success False).
    """
    job_id: Optional[str]
    mode: str
    total: int = 0
    processed: int = 0
    successful: int = 0
    failed: int = 0
    skipped: int = 0
    added: int = 0
    updated: int = 0
    removed: int = 0
    success: bool = True
    error: Optional[str] = None
    failures: List[Dict[str, str]] = field(default_factory=list)

    @property
    def message(self) -> str:
        if not self.success:
            return f"Embedding sync failed after {self.processed}/{self.total} items: {self.error}"
        return (
            f"Embedding sync complete. Processed: {self.processed}, Added: {self.added}, "
            f"Updated: {self.updated}, Removed: {self.removed}, Skipped: {self.skipped}, "
            f"Failed: {self.failed}"
        )

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["message"] = self.message
        return d


@dataclass
class InventoryUpdateResult:
    product_id: str
    new_quantity: int
    success: bool = True
    previous_quantity: Optional[int] = None
    was_active: Optional[bool] = None
    is_active: Optional[bool] = None
    embedding_action: str = EmbeddingAction.NONE.value
    embedding_applied: bool = False
    embedding_error: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class MaintenanceResult:
    processed: int = 0
    deactivated: int = 0
    embeddings_removed: int = 0
    failed: int = 0
    success: bool = True
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
