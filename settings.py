# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-09
# Updated: 2026-02-14
# Description: settings.py
# -----------------------------------------------------------------------------
import os
from typing import Any, Dict


def _env(name: str, default: str = "") -> str:
    """Read env var safely and strip whitespace."""
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int) -> int:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return int(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be an int, got {v!r}") from e


def _env_float(name: str, default: float) -> float:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return float(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be a float, got {v!r}") from e


def _env_bool(name: str, default: bool) -> bool:
    v = _env(name, "")
    if v == "":
        return default
    v = v.lower()
    if v in ("1", "true", "t", "yes", "y", "on"):
        return True
    if v in ("0", "false", "f", "no", "n", "off"):
        return False
    raise RuntimeError(f"Env var {name} must be a boolean, got {v!r}")


# -----------------------------------------------------------------------------
# Inventory
# -----------------------------------------------------------------------------
# Products with 0 < quantity < threshold are "low stock" and are kept out of search
LOW_STOCK_THRESHOLD = _env_int("LOW_STOCK_THRESHOLD", 5)

# Bulk inventory updates are applied in small sequential batches
INVENTORY_BATCH_SIZE = _env_int("SHOP_INVENTORY_BATCH_SIZE", 10)
INVENTORY_BATCH_DELAY_SECONDS = _env_float("SHOP_INVENTORY_BATCH_DELAY", 0.1)


# -----------------------------------------------------------------------------
# Embedding sync (bulk job)
# -----------------------------------------------------------------------------
BULK_DEFAULTS: Dict[str, Any] = {
    "batch_size": _env_int("SHOP_BULK_BATCH_SIZE", 5),
    "inter_batch_delay": _env_float("SHOP_BULK_BATCH_DELAY", 1.0),
    # job row progress is persisted every N processed items
    "progress_every": _env_int("SHOP_BULK_PROGRESS_EVERY", 10),
}

# Products whose embedding text is shorter than this are skipped
MIN_EMBED_TEXT_CHARS = _env_int("SHOP_MIN_EMBED_TEXT_CHARS", 10)

MAINTENANCE_BATCH_SIZE = _env_int("SHOP_MAINTENANCE_BATCH_SIZE", 50)

# RUNNING jobs without progress for this long are marked FAILED at startup
STALE_JOB_MINUTES = _env_int("SHOP_STALE_JOB_MINUTES", 60)
RECOVER_STALE_JOBS_ON_STARTUP = _env_bool("SHOP_RECOVER_STALE_JOBS_ON_STARTUP", True)

# Record one EmbeddingJob row per single-product reconciliation
TRACK_SINGLE_JOBS = _env_bool("SHOP_TRACK_SINGLE_JOBS", True)


# -----------------------------------------------------------------------------
# Search defaults (env-controlled)
# -----------------------------------------------------------------------------
SEARCH_DEFAULTS: Dict[str, Any] = {
    "max_results": _env_int("SHOP_SEARCH_DEFAULT_RESULTS", 10),
    "min_score": _env_float("SHOP_SEARCH_MIN_SCORE", 0.6),
    "in_stock_only": _env_bool("SHOP_SEARCH_IN_STOCK_ONLY", True),
}

# Hard ceiling on results per search
SEARCH_MAX_RESULTS = _env_int("SHOP_SEARCH_MAX_RESULTS", 20)

# Below this many results, suggestions are attached to the response
SEARCH_SUGGESTION_BELOW = _env_int("SHOP_SEARCH_SUGGESTION_BELOW", 3)


# -----------------------------------------------------------------------------
# Chat defaults
# -----------------------------------------------------------------------------
CHAT_DEFAULTS: Dict[str, Any] = {
    "temperature": _env_float("SHOP_CHAT_TEMPERATURE", 0.7),
    "max_tokens": _env_int("SHOP_CHAT_MAX_TOKENS", 1000),
}

# Rolling transcript: once it grows past MAX it is cut back to the last KEEP
CHAT_HISTORY_MAX = _env_int("SHOP_CHAT_HISTORY_MAX", 20)
CHAT_HISTORY_KEEP = _env_int("SHOP_CHAT_HISTORY_KEEP", 16)

# Transcripts kept in memory; the least recently used session is dropped first
CHAT_MAX_SESSIONS = _env_int("SHOP_CHAT_MAX_SESSIONS", 1000)


# -----------------------------------------------------------------------------
# Sanity checks (tunable)
# -----------------------------------------------------------------------------
if LOW_STOCK_THRESHOLD < 0:
    raise RuntimeError("LOW_STOCK_THRESHOLD must be >= 0")

if BULK_DEFAULTS["batch_size"] < 1:
    raise RuntimeError("SHOP_BULK_BATCH_SIZE must be >= 1")

if not 0.0 <= SEARCH_DEFAULTS["min_score"] <= 1.0:
    raise RuntimeError("SHOP_SEARCH_MIN_SCORE must be within [0, 1]")

if CHAT_HISTORY_KEEP > CHAT_HISTORY_MAX:
    raise RuntimeError("SHOP_CHAT_HISTORY_KEEP must not exceed SHOP_CHAT_HISTORY_MAX")

if CHAT_MAX_SESSIONS < 1:
    raise RuntimeError("SHOP_CHAT_MAX_SESSIONS must be >= 1")
