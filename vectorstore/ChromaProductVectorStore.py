# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-16
# Updated: 2026-01-27
# Description: ChromaProductVectorStore
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import chromadb
from chromadb import ClientAPI
from chromadb.api.models import Collection

from config.Config import Config
from utility.logging_utils import get_class_logger
from vectorstore.ProductVectorStore import (
    FILTER_OPERATORS,
    ProductVectorStore,
    VectorFilter,
    VectorHit,
)


def to_chroma_where(where: Optional[VectorFilter]) -> Optional[Dict[str, Any]]:
    """
    Chroma accepts a single operator per clause, so
      {"isActive": {"$eq": True}, "price": {"$gte": 10, "$lte": 50}}
    becomes
      {"$and": [{"isActive": {"$eq": True}}, {"price": {"$gte": 10}}, {"price": {"$lte": 50}}]}
    """
    if not where:
        return None

    clauses: List[Dict[str, Any]] = []
    for field_name, condition in where.items():
        if not isinstance(condition, dict):
            condition = {"$eq": condition}
        for op, value in condition.items():
            if op not in FILTER_OPERATORS:
                raise ValueError(f"Unsupported filter operator '{op}' on '{field_name}'")
            clauses.append({field_name: {op: value}})

    if len(clauses) == 1:
        return clauses[0]
    return {"$and": clauses}


def _clean_metadata(metadata: Dict[str, Any]) -> Dict[str, Any]:
    # Chroma metadata values must be str/int/float/bool
    out: Dict[str, Any] = {}
    for key, value in metadata.items():
        if value is None:
            out[key] = ""
        elif isinstance(value, (str, int, float, bool)):
            out[key] = value
        elif isinstance(value, (list, tuple, set)):
            out[key] = ", ".join(str(v) for v in value)
        else:
            out[key] = str(value)
    return out


@dataclass
class ChromaProductVectorStore(ProductVectorStore):
    cfg: Config
    collection_name: Optional[str] = None
    client: Any = None
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)
        self.collection_name = self.collection_name or self.cfg.chroma_collection

        if self.client is None:
            self.client = self._build_client()

        self.collection: Collection = self.client.get_or_create_collection(
            name=self.collection_name,
            metadata={"hnsw:space": "cosine"},
        )
        self.logger.info("Chroma collection ready: '%s'", self.collection_name)

    def _build_client(self) -> ClientAPI:
        mode = self.cfg.chroma_mode
        if mode == "cloud":
            self.logger.info(
                "Initialising Chroma Cloud client (tenant=%s, database=%s)",
                self.cfg.chroma_tenant,
                self.cfg.chroma_database,
            )
            return chromadb.CloudClient(
                tenant=self.cfg.chroma_tenant,
                database=self.cfg.chroma_database,
                api_key=self.cfg.chroma_api_key,
            )
        if mode == "http":
            self.logger.info("Initialising Chroma HTTP client (%s:%d)", self.cfg.chroma_host, self.cfg.chroma_port)
            return chromadb.HttpClient(host=self.cfg.chroma_host, port=self.cfg.chroma_port)

        self.logger.info("Initialising persistent Chroma client (path=%s)", self.cfg.chroma_path)
        return chromadb.PersistentClient(path=self.cfg.chroma_path)

    def test_connection(self) -> bool:
        """
        Simple health check: can we talk to Chroma and our collection?
        """
        try:
            _ = self.collection.count()
            return True
        except Exception as e:
            self.logger.error("Chroma connection failed: %s", e)
            return False

    def upsert(
            self,
            vector_id: str,
            vector: Sequence[float],
            metadata: Dict[str, Any],
            document: Optional[str] = None,
    ) -> None:
        if vector is None or len(vector) == 0:
            raise ValueError(f"Refusing to upsert empty vector for '{vector_id}'")

        vec = vector.tolist() if hasattr(vector, "tolist") else list(vector)
        kwargs: Dict[str, Any] = {
            "ids": [vector_id],
            "embeddings": [vec],
            "metadatas": [_clean_metadata(metadata)],
        }
        if document:
            kwargs["documents"] = [document]

        self.collection.upsert(**kwargs)
        self.logger.debug("Upserted vector '%s' into '%s'", vector_id, self.collection_name)

    def delete(self, vector_id: str) -> None:
        """Delete one vector. Missing ids are a no-op."""
        self.collection.delete(ids=[vector_id])
        self.logger.debug("Deleted vector '%s' from '%s'", vector_id, self.collection_name)

    def exists(self, vector_id: str) -> bool:
        res = self.collection.get(ids=[vector_id], include=[])
        return bool(res.get("ids"))

    def count(self) -> int:
        return self.collection.count()

    def query(
            self,
            vector: Sequence[float],
            top_k: int = 10,
            where: Optional[VectorFilter] = None,
    ) -> List[VectorHit]:
        chroma_where = to_chroma_where(where)
        self.logger.info(
            "Querying Chroma collection '%s' (top_k=%d, where=%s)",
            self.collection_name,
            top_k,
            chroma_where,
        )

        total = self.collection.count()
        if total == 0:
            self.logger.info("Collection '%s' is empty; nothing to query", self.collection_name)
            return []

        vec = vector.tolist() if hasattr(vector, "tolist") else list(vector)
        query_kwargs: Dict[str, Any] = {
            "query_embeddings": [vec],
            "n_results": min(top_k, total),
            "include": ["metadatas", "distances"],
        }
        if chroma_where is not None:
            query_kwargs["where"] = chroma_where

        try:
            res = self.collection.query(**query_kwargs)
        except Exception as e:
            self.logger.error("Chroma query failed: %s", e, exc_info=True)
            raise

        ids = (res.get("ids") or [[]])[0]
        distances = (res.get("distances") or [[]])[0]
        metadatas = (res.get("metadatas") or [[]])[0]

        hits: List[VectorHit] = []
        for i, vid in enumerate(ids):
            distance = distances[i] if i < len(distances) else 1.0
            meta = metadatas[i] if i < len(metadatas) and metadatas[i] else {}
            # cosine distance is in [0, 2]
            score = max(0.0, min(1.0, 1.0 - float(distance)))
            hits.append(VectorHit(id=vid, score=score, metadata=dict(meta)))

        self.logger.info("Chroma search complete: returned %d hit(s)", len(hits))
        return hits
